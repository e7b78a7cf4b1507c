"""
設定管理模組
統一管理 Appium server、雲端 grid、裝置能力 (capabilities)、等待時間等設定。
支援透過環境變數覆蓋預設值，方便 CI/CD 整合。
支援 capabilities 結構驗證，提前發現設定錯誤。

capabilities 檔案命名：config/<platform>_<mode>_caps.json
    platform: android / ios
    mode:     local (本機 Appium server) / remote (雲端 grid)
"""

import json
import os
from pathlib import Path

from core.exceptions import CapsFileNotFoundError, InvalidConfigError

BASE_DIR = Path(__file__).resolve().parent.parent
CONFIG_DIR = Path(__file__).resolve().parent

PLATFORMS = ("android", "ios")
MODES = ("local", "remote")

# capabilities 必填欄位定義
_REQUIRED_CAPS = {
    "android": ["platformName", "appium:deviceName", "appium:automationName"],
    "ios": ["platformName", "appium:deviceName", "appium:automationName"],
}

# 至少要有其中一個（安裝檔或已安裝 App 的 bundle id）
_APP_CAPS = ("appium:app", "appium:bundleId")

# capabilities 建議欄位（缺少時發出警告）
_RECOMMENDED_CAPS = {
    "android": ["appium:platformVersion", "appium:newCommandTimeout"],
    "ios": ["appium:platformVersion", "appium:udid"],
}


class ConfigValidationError(Exception):
    """Capabilities 設定驗證失敗"""

    def __init__(self, errors: list[str]):
        self.errors = errors
        msg = "Capabilities 驗證失敗:\n" + "\n".join(f"  - {e}" for e in errors)
        super().__init__(msg)


class Config:
    """框架全域設定"""

    # 本機 Appium Server
    APPIUM_HOST = os.getenv("APPIUM_HOST", "127.0.0.1")
    APPIUM_PORT = int(os.getenv("APPIUM_PORT", "4723"))

    # 雲端 grid (BrowserStack)
    GRID_URL = os.getenv("GRID_URL", "https://hub-cloud.browserstack.com/wd/hub")
    GRID_USERNAME = os.getenv("GRID_USERNAME", "")
    GRID_ACCESS_KEY = os.getenv("GRID_ACCESS_KEY", "")
    GRID_APP = os.getenv("GRID_APP", "")

    # 超時設定 (秒)
    IMPLICIT_WAIT = float(os.getenv("IMPLICIT_WAIT", "0"))
    ELEMENT_TIMEOUT = float(os.getenv("ELEMENT_TIMEOUT", "30"))
    SETTLE_DELAY = float(os.getenv("SETTLE_DELAY", "5"))
    LOGIN_DELAY = float(os.getenv("LOGIN_DELAY", "10"))
    POLL_INTERVAL = float(os.getenv("POLL_INTERVAL", "0.5"))

    # 截圖與報告
    SCREENSHOT_DIR = BASE_DIR / "screenshots"
    REPORT_DIR = BASE_DIR / "reports"

    # 平台與執行模式
    PLATFORM = os.getenv("PLATFORM", "android").lower()
    RUN_MODE = os.getenv("RUN_MODE", "local").lower()

    @classmethod
    def appium_server_url(cls) -> str:
        return f"http://{cls.APPIUM_HOST}:{cls.APPIUM_PORT}"

    @classmethod
    def server_url(cls, mode: str | None = None) -> str:
        """依執行模式回傳 automation server URL"""
        mode = mode or cls.RUN_MODE
        if mode == "local":
            return cls.appium_server_url()
        if mode == "remote":
            return cls.GRID_URL
        raise InvalidConfigError("mode", mode, f"支援: {', '.join(MODES)}")

    @classmethod
    def load_caps(
        cls,
        platform: str | None = None,
        mode: str | None = None,
        validate: bool = True,
    ) -> dict:
        """
        從 JSON 檔載入 desired capabilities。

        Args:
            platform: 'android' 或 'ios'，預設讀取 Config.PLATFORM
            mode: 'local' 或 'remote'，預設讀取 Config.RUN_MODE
            validate: 是否驗證必填欄位（預設 True）

        Returns:
            capabilities dict

        Raises:
            CapsFileNotFoundError: 設定檔不存在
            ConfigValidationError: 必填欄位缺失
        """
        platform = platform or cls.PLATFORM
        mode = mode or cls.RUN_MODE
        caps_file = CONFIG_DIR / f"{platform}_{mode}_caps.json"
        if not caps_file.exists():
            raise CapsFileNotFoundError(str(caps_file))
        with open(caps_file, "r", encoding="utf-8") as f:
            caps = json.load(f)

        if mode == "remote":
            cls._apply_grid_settings(caps)
        else:
            app = caps.get("appium:app")
            if app and not Path(app).is_absolute():
                caps["appium:app"] = str(BASE_DIR / app)

        if validate:
            cls.validate_caps(caps, platform)

        return caps

    @classmethod
    def _apply_grid_settings(cls, caps: dict) -> None:
        """把環境變數中的 grid 帳號與 App id 注入 capabilities"""
        if cls.GRID_APP:
            caps["appium:app"] = cls.GRID_APP
        if cls.GRID_USERNAME and cls.GRID_ACCESS_KEY:
            options = caps.setdefault("bstack:options", {})
            options["userName"] = cls.GRID_USERNAME
            options["accessKey"] = cls.GRID_ACCESS_KEY

    @classmethod
    def validate_caps(cls, caps: dict, platform: str) -> list[str]:
        """
        驗證 capabilities 結構。

        Args:
            caps: capabilities dict
            platform: 'android' 或 'ios'

        Returns:
            警告訊息列表

        Raises:
            ConfigValidationError: 必填欄位缺失時拋出
        """
        errors: list[str] = []
        warnings: list[str] = []

        required = _REQUIRED_CAPS.get(platform, [])
        for key in required:
            if key not in caps:
                errors.append(f"缺少必填欄位: {key}")

        if not any(caps.get(key) for key in _APP_CAPS):
            errors.append(f"缺少必填欄位: {' 或 '.join(_APP_CAPS)}")

        recommended = _RECOMMENDED_CAPS.get(platform, [])
        for key in recommended:
            if key not in caps:
                warnings.append(f"建議填寫欄位: {key}")

        if errors:
            raise ConfigValidationError(errors)

        return warnings
