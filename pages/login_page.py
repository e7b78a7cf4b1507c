"""
登入頁面 Page Object

同一份 Page Object 服務 Android 與 iOS，差異只在注入的 LocatorTable。
"""

from __future__ import annotations

from selenium.common.exceptions import WebDriverException
from selenium.webdriver.remote.webelement import WebElement

from core.base_page import BasePage
from core.locators import (
    ALERT_OK_BUTTON,
    ALTERNATE_SUCCESS_INDICATOR,
    ERROR_INDICATOR,
    LOGIN_BUTTON,
    PASSWORD_FIELD,
    PERMISSION_ALLOW_BUTTON,
    SUCCESS_INDICATOR,
    USERNAME_FIELD,
    LocatorTable,
)
from utils.logger import logger


class LoginPage(BasePage):
    """登入頁面"""

    def __init__(self, driver, locators: LocatorTable, **kwargs):
        super().__init__(driver, **kwargs)
        self.locators = locators

    # ── 權限彈窗 ──

    def dismiss_permission_prompt(self) -> bool:
        """
        若出現系統權限彈窗就點「允許」。

        彈窗不存在、或點擊失敗都不是錯誤，只回傳 False。
        """
        locator = self.locators.resolve(PERMISSION_ALLOW_BUTTON)
        try:
            button = self.probe(locator)
            if button is None or not self.is_visible(button):
                logger.info("沒有權限彈窗，繼續")
                return False
            button.click()
        except WebDriverException as e:
            logger.warning(f"權限彈窗處理失敗，視為不適用: {e}")
            return False
        logger.info("權限彈窗已允許")
        return True

    # ── 登入表單 ──

    def username_field(self) -> WebElement:
        return self.find_element(self.locators.resolve(USERNAME_FIELD))

    def password_field(self) -> WebElement:
        return self.find_element(self.locators.resolve(PASSWORD_FIELD))

    def login_button(self) -> WebElement:
        return self.find_element(self.locators.resolve(LOGIN_BUTTON))

    # ── 登入結果 ──

    def outcome_locators(self) -> list:
        """登入結果指標，依優先順序：成功 → 替代成功 → 錯誤 → 錯誤 alert"""
        names = [
            SUCCESS_INDICATOR,
            ALTERNATE_SUCCESS_INDICATOR,
            ERROR_INDICATOR,
            ALERT_OK_BUTTON,
        ]
        return [self.locators.resolve(n) for n in names if self.locators.has(n)]

    def wait_for_outcome(self, timeout: float | None = None) -> tuple[str, WebElement] | None:
        """
        等待成功或錯誤指標出現。

        Returns:
            (locator 語意名稱, 元素)；逾時都沒出現回傳 None
        """
        hit = self.wait_for_any_visible(self.outcome_locators(), timeout)
        if hit is None:
            return None
        locator, element = hit
        return locator.name, element

    def dismiss_alert(self, button: WebElement) -> bool:
        """點擊 alert 的 OK；點擊失敗只記 warning，回傳 False"""
        try:
            button.click()
        except WebDriverException as e:
            logger.warning(f"alert 關閉失敗: {e}")
            return False
        logger.info("alert 已關閉")
        return True
