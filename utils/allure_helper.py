"""
Allure 報告整合輔助
封裝 Allure 常用的步驟標記、附件與測試標籤。
"""

import functools

import allure

from utils.logger import logger


def allure_step(title: str):
    """
    裝飾器：將函式標記為 Allure step。

    用法：
        @allure_step("輸入帳號")
        def _enter_username(self, username): ...
    """
    def decorator(func):
        @allure.step(title)
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            return func(*args, **kwargs)
        return wrapper
    return decorator


def attach_png(png: bytes, name: str = "截圖") -> None:
    """將 PNG bytes 附加到 Allure 報告"""
    allure.attach(png, name=name, attachment_type=allure.attachment_type.PNG)


def attach_text(text: str, name: str = "log") -> None:
    """將文字附加到 Allure 報告"""
    allure.attach(text, name=name, attachment_type=allure.attachment_type.TEXT)


def add_parameter(name: str, value) -> None:
    """在目前的測試加上一個 Allure 參數"""
    allure.dynamic.parameter(name, value)


def label_test(
    feature: str = "",
    story: str = "",
    severity: str = "",
    tag: str = "",
    description: str = "",
) -> None:
    """一次設定目前測試的 Allure 標籤，空值略過"""
    if feature:
        allure.dynamic.feature(feature)
    if story:
        allure.dynamic.story(story)
    if severity:
        allure.dynamic.severity(severity)
    if tag:
        allure.dynamic.tag(tag)
    if description:
        allure.dynamic.description(description)
    logger.debug(f"Allure 標籤: feature={feature} story={story} tag={tag}")
