"""
Page Object 基底類別

所有 Page Object 都繼承此類，提供通用的元素操作方法。
元素查找一律透過 Locator 的候選清單：
- 有上限的等待（逾時拋出 ElementNotFoundError）
- 每次輪詢依序嘗試候選條件，第一個找到的勝出
"""

from __future__ import annotations

from typing import Sequence

from selenium.common.exceptions import TimeoutException, WebDriverException
from selenium.webdriver.remote.webelement import WebElement
from selenium.webdriver.support.ui import WebDriverWait

from config.config import Config
from core.exceptions import ElementNotFoundError
from core.locators import Locator
from utils.logger import logger


class BasePage:
    """
    Page Object 基底類別

    提供：
    - 帶候選備援的元素等待與查找
    - 清除預填值後輸入文字
    - 多個 locator 擇一出現的等待（登入結果判斷用）
    """

    def __init__(
        self,
        driver,
        timeout: float | None = None,
        poll_interval: float | None = None,
    ):
        self.driver = driver
        self.timeout = Config.ELEMENT_TIMEOUT if timeout is None else timeout
        self.poll_interval = (
            Config.POLL_INTERVAL if poll_interval is None else poll_interval
        )

    def _wait(self, timeout: float | None) -> WebDriverWait:
        timeout = self.timeout if timeout is None else timeout
        return WebDriverWait(self.driver, timeout, poll_frequency=self.poll_interval)

    # ── 元素查找 ──

    def probe(self, locator: Locator) -> WebElement | None:
        """不等待，依序嘗試每個候選條件，回傳第一個找到的元素"""
        for by, value in locator:
            elements = self.driver.find_elements(by, value)
            if elements:
                logger.debug(f"[{locator.name}] 命中候選: {value}")
                return elements[0]
        return None

    def find_element(self, locator: Locator, timeout: float | None = None) -> WebElement:
        """等待任一候選條件出現並回傳元素"""
        timeout = self.timeout if timeout is None else timeout
        try:
            return self._wait(timeout).until(lambda _driver: self.probe(locator))
        except TimeoutException:
            raise ElementNotFoundError(locator.name, timeout) from None

    def wait_for_any_visible(
        self, locators: Sequence[Locator], timeout: float | None = None,
    ) -> tuple[Locator, WebElement] | None:
        """
        等待多個 locator 中任一個「找得到且可見」。

        每次輪詢按 locators 的順序檢查，排前面的優先。

        Returns:
            (命中的 locator, 元素)；逾時回傳 None
        """
        def _any_visible(_driver):
            for locator in locators:
                element = self.probe(locator)
                if element is not None and self.is_visible(element):
                    return locator, element
            return False

        try:
            return self._wait(timeout).until(_any_visible)
        except TimeoutException:
            return None

    @staticmethod
    def is_visible(element: WebElement) -> bool:
        """元素是否顯示中（元素失效時視為不可見）"""
        try:
            return bool(element.is_displayed())
        except WebDriverException:
            return False

    # ── 元素操作 ──

    def fill(self, element: WebElement, text: str, secret: bool = False) -> None:
        """清除預填值後輸入文字"""
        shown = "*" * len(text) if secret else text
        logger.info(f"輸入文字: '{shown}'")
        element.clear()
        element.send_keys(text)

