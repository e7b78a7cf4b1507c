"""
自訂 Exception 體系

統一的錯誤處理階層，讓每種失敗都有明確的分類與訊息。
上層可以 catch 大類別 (如 AppiumFrameworkError)，
也可以精準 catch 子類別 (如 ElementNotFoundError)。

Exception 樹：
    AppiumFrameworkError
    ├── DriverError
    │   ├── SessionCreationError       致命，直接中止測試
    │   └── CleanupError               只記 log，不往上拋
    ├── PageError
    │   └── ElementNotFoundError
    ├── ConfigError
    │   ├── CapsFileNotFoundError
    │   ├── InvalidConfigError
    │   └── LocatorNotDefinedError
    ├── EvidenceCaptureError           只記 log，不往上拋
    ├── GridReportError                只記 log，不往上拋
    └── LoginFlowError (同時是 AssertionError)
        ├── LoginRejectedError
        ├── LoginOutcomeUnclearError
        └── UnexpectedLoginOutcomeError
"""


class AppiumFrameworkError(Exception):
    """框架所有例外的基底，catch 這個就能攔截一切框架錯誤"""

    def __init__(self, message: str = "", context: dict | None = None):
        self.context = context or {}
        super().__init__(message)


def _describe(original: Exception | None) -> str:
    if original is None:
        return ""
    return f" ({type(original).__name__}: {original})"


# ── Driver / Session 相關 ──

class DriverError(AppiumFrameworkError):
    """Driver 相關錯誤"""


class SessionCreationError(DriverError):
    """無法建立 Appium session（server 無回應或 capabilities 被拒絕）"""

    def __init__(self, url: str = "", original: Exception | None = None):
        self.original = original
        msg = f"無法建立 session: {url}{_describe(original)}"
        super().__init__(msg, context={"url": url})


class CleanupError(DriverError):
    """關閉 session 失敗"""

    def __init__(self, action: str = "", original: Exception | None = None):
        self.original = original
        super().__init__(
            f"清理失敗 [{action}]{_describe(original)}",
            context={"action": action},
        )


# ── Page / Element 相關 ──

class PageError(AppiumFrameworkError):
    """頁面操作相關錯誤"""


class ElementNotFoundError(PageError):
    """在等待時間內找不到指定元素（所有候選 locator 皆失敗）"""

    def __init__(self, locator: str = "", timeout: float = 0):
        msg = f"找不到元素: {locator}"
        if timeout:
            msg += f" (等待 {timeout}s)"
        super().__init__(msg, context={"locator": locator, "timeout": timeout})


# ── Config 相關 ──

class ConfigError(AppiumFrameworkError):
    """設定相關錯誤"""


class CapsFileNotFoundError(ConfigError):
    """找不到 capabilities 設定檔"""

    def __init__(self, path: str = ""):
        super().__init__(
            f"找不到 capabilities 檔案: {path}",
            context={"path": path},
        )


class InvalidConfigError(ConfigError):
    """設定值無效"""

    def __init__(self, key: str = "", value: str = "", reason: str = ""):
        msg = f"設定值無效: {key}={value}"
        if reason:
            msg += f" ({reason})"
        super().__init__(msg, context={"key": key, "value": value})


class LocatorNotDefinedError(ConfigError):
    """Locator 表中沒有這個語意名稱"""

    def __init__(self, name: str = "", platform: str = ""):
        super().__init__(
            f"{platform} locator 表未定義: {name}",
            context={"name": name, "platform": platform},
        )


# ── Best-effort 副作用 ──

class EvidenceCaptureError(AppiumFrameworkError):
    """截圖證據擷取失敗"""

    def __init__(self, action: str = "", original: Exception | None = None):
        self.original = original
        super().__init__(
            f"截圖失敗 [{action}]{_describe(original)}",
            context={"action": action},
        )


class GridReportError(AppiumFrameworkError):
    """回報雲端 grid session 狀態失敗"""

    def __init__(self, action: str = "", original: Exception | None = None):
        self.original = original
        super().__init__(
            f"Grid 狀態回報失敗 [{action}]{_describe(original)}",
            context={"action": action},
        )


# ── 登入流程結果 ──

class LoginFlowError(AppiumFrameworkError, AssertionError):
    """登入流程結果不符預期；同時是 AssertionError，pytest 會當成測試失敗"""


class LoginRejectedError(LoginFlowError):
    """預期登入成功，App 卻顯示錯誤訊息"""

    def __init__(self, reason: str = ""):
        self.reason = reason
        super().__init__(
            f"登入失敗，錯誤訊息: {reason}",
            context={"reason": reason},
        )


class LoginOutcomeUnclearError(LoginFlowError):
    """等待逾時，成功與錯誤指標都沒出現（多半是 locator 或時序問題）"""

    def __init__(self, label: str = "", timeout: float = 0):
        prefix = f"{label} " if label else ""
        super().__init__(
            f"{prefix}登入結果不明: 找不到歡迎訊息、儀表板元素或錯誤訊息"
            f" (等待 {timeout}s)",
            context={"label": label, "timeout": timeout},
        )


class UnexpectedLoginOutcomeError(LoginFlowError):
    """登入結果與情境預期相反"""

    def __init__(self, expected: str = "", actual: str = "", reason: str = ""):
        self.expected = expected
        self.actual = actual
        msg = f"預期登入結果為 {expected}，實際為 {actual}"
        if reason:
            msg += f": {reason}"
        super().__init__(
            msg, context={"expected": expected, "actual": actual},
        )
