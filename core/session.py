"""
Session 生命週期管理

負責建立、關閉 Appium session，每個測試案例獨佔一個 session。

- 建立前對本機 Appium server 做健康檢查（失敗只警告，仍嘗試連線）
- 建立失敗一律拋出 SessionCreationError，不重試
- 關閉只做一次，失敗記 log 不往上拋，不影響下一個測試
"""

from __future__ import annotations

import urllib.error
import urllib.request
from dataclasses import dataclass

from appium import webdriver

from config.config import Config
from core.capabilities import CapabilitySet
from core.exceptions import CleanupError, SessionCreationError
from utils.decorators import best_effort
from utils.logger import logger


@dataclass
class Session:
    """一個測試案例的 Appium session"""

    server_url: str
    capabilities: CapabilitySet
    driver: webdriver.Remote
    mode: str = "local"
    closed: bool = False

    @property
    def is_remote(self) -> bool:
        return self.mode == "remote"


@best_effort(CleanupError)
def _quit(driver) -> None:
    driver.quit()


class SessionBootstrapper:
    """建立與銷毀 Appium session"""

    # ── Appium Server 健康檢查 ──

    @staticmethod
    def health_check(url: str | None = None, timeout: float = 5.0) -> bool:
        """
        檢查 Appium server 是否可連線。

        Args:
            url: Appium server URL，預設讀取 Config
            timeout: 連線逾時秒數

        Returns:
            True = server 可用, False = 不可用
        """
        url = url or Config.appium_server_url()
        status_url = f"{url.rstrip('/')}/status"
        try:
            req = urllib.request.Request(status_url, method="GET")
            with urllib.request.urlopen(req, timeout=timeout) as resp:
                return resp.status == 200
        except (urllib.error.URLError, OSError, TimeoutError):
            return False

    # ── Session 建立 ──

    @classmethod
    def create_session(
        cls,
        server_url: str,
        capabilities: CapabilitySet,
        mode: str = "local",
    ) -> Session:
        """
        建立 Appium session。

        Args:
            server_url: automation server URL
            capabilities: 不可變的 capability set
            mode: 'local' 或 'remote'

        Returns:
            Session

        Raises:
            SessionCreationError: server 無回應或拒絕 capabilities
        """
        if mode == "local" and not cls.health_check(server_url):
            logger.warning(f"Appium server 健康檢查失敗: {server_url}，仍嘗試連線...")

        try:
            options = capabilities.to_options()
            drv = webdriver.Remote(command_executor=server_url, options=options)
        except Exception as e:
            logger.error(f"Session 建立失敗: {server_url} ({e})")
            raise SessionCreationError(server_url, e) from e

        drv.implicitly_wait(Config.IMPLICIT_WAIT)
        logger.info(
            f"Session 已建立: {capabilities.platform_name} "
            f"{capabilities.device_name} ({mode}) -> {server_url}"
        )
        return Session(
            server_url=server_url,
            capabilities=capabilities,
            driver=drv,
            mode=mode,
        )

    # ── Session 關閉 ──

    @staticmethod
    def teardown(session: Session | None) -> None:
        """關閉 session；重複呼叫不會再 quit，quit 失敗只記 warning"""
        if session is None or session.closed:
            return
        session.closed = True
        _quit(session.driver)
        logger.info("Session 已關閉")
