"""
Locator Table — 語意名稱 → 平台專屬定位條件

每個 Locator 是一組「有順序」的候選定位條件，由前往後嘗試，第一個找到的勝出。
原本寫成單一 XPath OR 字串的備援條件，在這裡拆成明確的候選清單，
備援順序可讀、可測，不依賴查詢引擎對 OR 的解讀。

用法：
    from core.locators import locator_table_for, USERNAME_FIELD

    table = locator_table_for("android")
    locator = table.resolve(USERNAME_FIELD)
    for by, value in locator:
        ...
"""

from __future__ import annotations

from dataclasses import dataclass

from appium.webdriver.common.appiumby import AppiumBy

from core.exceptions import InvalidConfigError, LocatorNotDefinedError

# ── 語意名稱 ──

USERNAME_FIELD = "username_field"
PASSWORD_FIELD = "password_field"
LOGIN_BUTTON = "login_button"
SUCCESS_INDICATOR = "success_indicator"
ALTERNATE_SUCCESS_INDICATOR = "alternate_success_indicator"
ERROR_INDICATOR = "error_indicator"
PERMISSION_ALLOW_BUTTON = "permission_allow_button"
ALERT_OK_BUTTON = "alert_ok_button"

REQUIRED_NAMES = (
    USERNAME_FIELD,
    PASSWORD_FIELD,
    LOGIN_BUTTON,
    SUCCESS_INDICATOR,
    ERROR_INDICATOR,
    PERMISSION_ALLOW_BUTTON,
)


@dataclass(frozen=True)
class Locator:
    """一個語意元素的候選定位條件，依序嘗試"""

    name: str
    candidates: tuple[tuple[str, str], ...]

    def __post_init__(self):
        if not self.candidates:
            raise InvalidConfigError(self.name, "()", "至少需要一個候選條件")

    def __iter__(self):
        return iter(self.candidates)

    def __len__(self) -> int:
        return len(self.candidates)

    @classmethod
    def xpath(cls, name: str, *expressions: str) -> "Locator":
        return cls(name, tuple((AppiumBy.XPATH, expr) for expr in expressions))


class LocatorTable:
    """單一平台的 locator 表"""

    def __init__(self, platform: str, locators: list[Locator]):
        self.platform = platform
        self._locators = {loc.name: loc for loc in locators}
        missing = [n for n in REQUIRED_NAMES if n not in self._locators]
        if missing:
            raise LocatorNotDefinedError(", ".join(missing), platform)

    def resolve(self, name: str) -> Locator:
        try:
            return self._locators[name]
        except KeyError:
            raise LocatorNotDefinedError(name, self.platform) from None

    def has(self, name: str) -> bool:
        return name in self._locators

    @property
    def names(self) -> list[str]:
        return list(self._locators)

    def __repr__(self) -> str:
        return f"LocatorTable({self.platform!r}, {self.names})"


# ── Android (UiAutomator2) ──

_EDIT_TEXT = "//android.widget.EditText"
_BUTTON = "//android.widget.Button"
_TEXT_VIEW = "//android.widget.TextView"

ANDROID_LOCATORS = LocatorTable("android", [
    Locator.xpath(
        USERNAME_FIELD,
        f"{_EDIT_TEXT}[@resource-id='actual_user_input_123-0']",
        f"{_EDIT_TEXT}[@hint='Username']",
        f"{_EDIT_TEXT}[@text='Username']",
        f"{_EDIT_TEXT}[contains(@resource-id,'username')]",
    ),
    Locator.xpath(
        PASSWORD_FIELD,
        f"{_EDIT_TEXT}[@resource-id='noauto_pass-0']",
        f"{_EDIT_TEXT}[@hint='Password']",
        f"{_EDIT_TEXT}[@text='Password']",
        f"{_EDIT_TEXT}[contains(@resource-id,'password')]",
    ),
    Locator.xpath(
        LOGIN_BUTTON,
        f"{_BUTTON}[@text='Log In']",
        f"{_BUTTON}[@text='LOGIN' or @text='Login']",
        f"{_BUTTON}[contains(@resource-id,'login')]",
    ),
    Locator.xpath(
        SUCCESS_INDICATOR,
        f"{_TEXT_VIEW}[contains(@text,'Welcome')]",
        f"{_TEXT_VIEW}[contains(@text,'Dashboard')]",
        f"{_TEXT_VIEW}[contains(@text,'Home')]",
    ),
    Locator.xpath(
        ERROR_INDICATOR,
        f"{_TEXT_VIEW}[contains(@text,'Invalid')]",
        f"{_TEXT_VIEW}[contains(@text,'Error')]",
        f"{_TEXT_VIEW}[contains(@text,'incorrect')]",
    ),
    Locator.xpath(
        PERMISSION_ALLOW_BUTTON,
        f"{_BUTTON}[@text='ALLOW']",
        f"{_BUTTON}[@text='Allow']",
    ),
])


# ── iOS (XCUITest) ──

_IOS_TEXT_FIELD = "//XCUIElementTypeTextField"
_IOS_SECURE_FIELD = "//XCUIElementTypeSecureTextField"
_IOS_BUTTON = "//XCUIElementTypeButton"
_IOS_STATIC_TEXT = "//XCUIElementTypeStaticText"

IOS_LOCATORS = LocatorTable("ios", [
    Locator.xpath(
        USERNAME_FIELD,
        f"{_IOS_TEXT_FIELD}[@name='actual_user_input_123-0']",
        f"{_IOS_TEXT_FIELD}[@name='username']",
        f"{_IOS_TEXT_FIELD}[@placeholder='Username' or @value='Username']",
    ),
    Locator.xpath(
        PASSWORD_FIELD,
        f"{_IOS_SECURE_FIELD}[@name='noauto_pass-0']",
        f"{_IOS_SECURE_FIELD}[@name='password']",
        f"{_IOS_SECURE_FIELD}[@placeholder='Password']",
    ),
    Locator.xpath(
        LOGIN_BUTTON,
        f"{_IOS_BUTTON}[@name='Log In']",
        f"{_IOS_BUTTON}[@name='LOGIN' or @name='Login']",
        f"{_IOS_BUTTON}[@label='Login']",
    ),
    Locator.xpath(
        SUCCESS_INDICATOR,
        f"{_IOS_STATIC_TEXT}[contains(@name,'Welcome')]",
        f"{_IOS_STATIC_TEXT}[contains(@name,'Dashboard')]",
        f"{_IOS_STATIC_TEXT}[contains(@name,'Home')]",
    ),
    Locator.xpath(
        ALTERNATE_SUCCESS_INDICATOR,
        f"{_IOS_STATIC_TEXT}[contains(@name,'Balance')]",
        f"{_IOS_STATIC_TEXT}[contains(@name,'Account')]",
        f"{_IOS_STATIC_TEXT}[contains(@name,'Menu')]",
    ),
    Locator.xpath(
        ERROR_INDICATOR,
        f"{_IOS_STATIC_TEXT}[contains(@name,'Invalid')]",
        f"{_IOS_STATIC_TEXT}[contains(@name,'Error')]",
        f"{_IOS_STATIC_TEXT}[contains(@name,'incorrect')]",
    ),
    Locator.xpath(
        PERMISSION_ALLOW_BUTTON,
        f"{_IOS_BUTTON}[@name='Allow']",
        f"{_IOS_BUTTON}[@name='OK']",
    ),
    # 登入失敗時的系統 alert
    Locator.xpath(
        ALERT_OK_BUTTON,
        f"{_IOS_BUTTON}[@name='OK']",
    ),
])

_TABLES = {
    "android": ANDROID_LOCATORS,
    "ios": IOS_LOCATORS,
}


def locator_table_for(platform: str) -> LocatorTable:
    """依平台取得 locator 表"""
    try:
        return _TABLES[platform.lower()]
    except KeyError:
        raise InvalidConfigError("platform", platform, f"支援: {', '.join(_TABLES)}") from None
