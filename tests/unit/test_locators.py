"""
core/locators.py 單元測試
驗證候選順序、必要名稱檢查與平台對應。
"""

import pytest
from appium.webdriver.common.appiumby import AppiumBy

from core.exceptions import InvalidConfigError, LocatorNotDefinedError
from core.locators import (
    ALERT_OK_BUTTON,
    ALTERNATE_SUCCESS_INDICATOR,
    ANDROID_LOCATORS,
    IOS_LOCATORS,
    REQUIRED_NAMES,
    USERNAME_FIELD,
    Locator,
    LocatorTable,
    locator_table_for,
)


@pytest.mark.unit
class TestLocator:
    """Locator"""

    @pytest.mark.unit
    def test_xpath_builds_ordered_candidates(self):
        locator = Locator.xpath("x", "//a", "//b")
        assert list(locator) == [(AppiumBy.XPATH, "//a"), (AppiumBy.XPATH, "//b")]
        assert len(locator) == 2

    @pytest.mark.unit
    def test_empty_candidates_raises(self):
        with pytest.raises(InvalidConfigError):
            Locator("empty", ())


@pytest.mark.unit
class TestLocatorTable:
    """LocatorTable"""

    @pytest.mark.unit
    def test_missing_required_name_raises(self):
        with pytest.raises(LocatorNotDefinedError) as exc_info:
            LocatorTable("android", [Locator.xpath(USERNAME_FIELD, "//a")])
        assert "password_field" in str(exc_info.value)

    @pytest.mark.unit
    def test_resolve_unknown_name_raises(self):
        with pytest.raises(LocatorNotDefinedError):
            ANDROID_LOCATORS.resolve("logout_button")

    @pytest.mark.unit
    @pytest.mark.parametrize("table", [ANDROID_LOCATORS, IOS_LOCATORS])
    def test_tables_define_required_names(self, table):
        for name in REQUIRED_NAMES:
            assert table.has(name)

    @pytest.mark.unit
    def test_alternate_success_is_ios_only(self):
        assert IOS_LOCATORS.has(ALTERNATE_SUCCESS_INDICATOR)
        assert not ANDROID_LOCATORS.has(ALTERNATE_SUCCESS_INDICATOR)

    @pytest.mark.unit
    def test_alert_ok_button_is_ios_only(self):
        assert IOS_LOCATORS.has(ALERT_OK_BUTTON)
        assert not ANDROID_LOCATORS.has(ALERT_OK_BUTTON)

    @pytest.mark.unit
    def test_android_username_fallback_order(self):
        values = [value for _by, value in ANDROID_LOCATORS.resolve(USERNAME_FIELD)]
        assert values == [
            "//android.widget.EditText[@resource-id='actual_user_input_123-0']",
            "//android.widget.EditText[@hint='Username']",
            "//android.widget.EditText[@text='Username']",
            "//android.widget.EditText[contains(@resource-id,'username')]",
        ]

    @pytest.mark.unit
    def test_ios_uses_xcuitest_element_types(self):
        for name in IOS_LOCATORS.names:
            for _by, value in IOS_LOCATORS.resolve(name):
                assert value.startswith("//XCUIElementType")


@pytest.mark.unit
class TestLocatorTableFor:
    """locator_table_for"""

    @pytest.mark.unit
    def test_case_insensitive(self):
        assert locator_table_for("iOS") is IOS_LOCATORS
        assert locator_table_for("android") is ANDROID_LOCATORS

    @pytest.mark.unit
    def test_unknown_platform_raises(self):
        with pytest.raises(InvalidConfigError):
            locator_table_for("windows")
