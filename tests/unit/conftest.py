"""
單元測試共用 fixtures

以 MagicMock 模擬 Appium driver：
driver.find_elements(by, value) 依「目前畫面」dict 回傳元素，
畫面 dict 的 key 為 XPath，value 為模擬元素。
"""

from unittest.mock import MagicMock

import pytest

from core.flow_runner import FlowConfigBuilder
from core.locators import locator_table_for
from core.session import Session


def _make_element(text: str = "", displayed: bool = True) -> MagicMock:
    element = MagicMock()
    element.text = text
    element.is_displayed.return_value = displayed
    return element


@pytest.fixture
def make_element():
    """建立模擬元素"""
    return _make_element


@pytest.fixture
def make_driver():
    """
    建立模擬 driver。

    用法：
        driver = make_driver({"//xpath": element})
        driver.screen["//other"] = other_element   # 畫面可以中途改變
    """
    def _factory(screen: dict | None = None) -> MagicMock:
        driver = MagicMock()
        driver.screen = dict(screen or {})
        driver.get_screenshot_as_png.return_value = b"\x89PNG fake"
        driver.find_elements.side_effect = (
            lambda by, value: [driver.screen[value]] if value in driver.screen else []
        )
        return driver
    return _factory


@pytest.fixture
def login_screen(make_element):
    """
    依平台產生登入畫面。

    用法：
        screen = login_screen("android", "success_indicator")
        screen = login_screen("ios", "error_indicator", error_text="Invalid password")
    """
    def _factory(platform: str, *names: str, error_text: str = "Invalid credentials",
                 candidate: int = 0) -> dict:
        table = locator_table_for(platform)
        wanted = ("username_field", "password_field", "login_button") + names
        screen = {}
        for name in wanted:
            _by, value = table.resolve(name).candidates[candidate]
            text = error_text if name == "error_indicator" else ""
            screen[value] = _make_element(text=text)
        return screen
    return _factory


@pytest.fixture
def fast_config(tmp_path):
    """不等待的 FlowConfig，截圖存到 tmp_path"""
    def _factory(platform: str = "android", mode: str = "local", **overrides):
        builder = (
            FlowConfigBuilder()
            .platform(platform)
            .mode(mode)
            .element_timeout(overrides.get("element_timeout", 0.2))
            .settle_delay(overrides.get("settle_delay", 0))
            .login_delay(overrides.get("login_delay", 0))
            .poll_interval(0.01)
            .screenshot_dir(tmp_path / "screenshots")
        )
        return builder.build()
    return _factory


@pytest.fixture
def make_session():
    """包一個模擬 Session"""
    def _factory(driver, config) -> Session:
        return Session(
            server_url="http://127.0.0.1:4723",
            capabilities=config.capabilities,
            driver=driver,
            mode=config.mode,
        )
    return _factory
