"""
pytest 全域 fixtures

提供：
- 命令列參數 (--platform, --mode, --run-e2e)
- capabilities / flow_config：每個測試模組建立一次
- app_session：每個測試自動建立/銷毀 Appium session（teardown 只做一次）
- login_flow：注入好設定的 LoginFlowRunner
- e2e 測試預設跳過，需 --run-e2e 或 RUN_E2E=1
- 測試失敗時附上頁面結構 (Allure)
"""

import os

import pytest

from config.config import MODES, PLATFORMS, Config
from core.capabilities import load_capability_set
from core.exceptions import EvidenceCaptureError
from core.flow_runner import FlowConfigBuilder, LoginFlowRunner
from core.session import SessionBootstrapper
from utils.allure_helper import attach_text
from utils.decorators import best_effort
from utils.logger import logger


# ── 命令列參數 ──

def pytest_addoption(parser):
    """新增自訂命令列參數"""
    parser.addoption(
        "--platform",
        action="store",
        default=Config.PLATFORM,
        choices=list(PLATFORMS),
        help="測試平台: android 或 ios",
    )
    parser.addoption(
        "--mode",
        action="store",
        default=Config.RUN_MODE,
        choices=list(MODES),
        help="執行模式: local (本機 Appium) 或 remote (雲端 grid)",
    )
    parser.addoption(
        "--run-e2e",
        action="store_true",
        default=False,
        help="執行需要真實裝置的 e2e 測試",
    )


def pytest_collection_modifyitems(config, items):
    """未指定 --run-e2e 時跳過 e2e 測試"""
    if config.getoption("--run-e2e") or os.getenv("RUN_E2E", "") == "1":
        return
    skip_e2e = pytest.mark.skip(reason="需要 --run-e2e 或 RUN_E2E=1")
    for item in items:
        if "e2e" in item.keywords:
            item.add_marker(skip_e2e)


# ── Session / Environment ──

@pytest.fixture(scope="session")
def platform(request) -> str:
    """取得測試平台"""
    return request.config.getoption("--platform")


@pytest.fixture(scope="session")
def mode(request) -> str:
    """取得執行模式"""
    return request.config.getoption("--mode")


@pytest.fixture(scope="module")
def capabilities(platform, mode):
    """每個測試模組建立一次的 CapabilitySet"""
    return load_capability_set(platform, mode)


@pytest.fixture(scope="module")
def flow_config(platform, mode, capabilities):
    """每個測試模組建立一次的 FlowConfig"""
    return (
        FlowConfigBuilder()
        .platform(platform)
        .mode(mode)
        .capabilities(capabilities)
        .build()
    )


# ── Session ──

@pytest.fixture(scope="function")
def app_session(mode, capabilities):
    """
    每個測試函式自動建立並銷毀 session。

    scope=function 確保每個測試獨佔 session，互不影響。
    """
    logger.info(f"===== 建立 {capabilities.platform_name} session ({mode}) =====")
    session = SessionBootstrapper.create_session(
        Config.server_url(mode), capabilities, mode=mode,
    )
    try:
        yield session
    finally:
        logger.info("===== 關閉 session =====")
        SessionBootstrapper.teardown(session)


@pytest.fixture
def login_flow(app_session, flow_config):
    """登入流程 runner"""
    return LoginFlowRunner(app_session, flow_config)


# ── 測試生命週期 Hook ──

@pytest.hookimpl(tryfirst=True, hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """測試失敗時附上頁面結構"""
    outcome = yield
    report = outcome.get_result()

    if report.when == "call" and report.failed:
        logger.error(f"測試失敗: {item.name}")
        session = item.funcargs.get("app_session")
        if session is not None and not session.closed:
            _attach_page_source(session.driver)


@best_effort(EvidenceCaptureError)
def _attach_page_source(driver) -> None:
    attach_text(driver.page_source, "頁面結構 (XML)")
