"""
config.config 單元測試
驗證 capabilities 載入、grid 設定注入、server URL 與結構驗證。
"""

from unittest.mock import patch

import pytest

from config.config import BASE_DIR, Config, ConfigValidationError
from core.exceptions import CapsFileNotFoundError, InvalidConfigError


@pytest.mark.unit
class TestConfigValidation:
    """Capabilities 驗證"""

    @pytest.mark.unit
    def test_valid_android_caps(self):
        caps = {
            "platformName": "Android",
            "appium:deviceName": "emulator",
            "appium:app": "/path/to/app.apk",
            "appium:automationName": "UiAutomator2",
            "appium:platformVersion": "13.0",
            "appium:newCommandTimeout": 300,
        }
        assert Config.validate_caps(caps, "android") == []

    @pytest.mark.unit
    def test_bundle_id_satisfies_app_requirement(self):
        """iOS 只給 bundleId 也算有 App"""
        caps = {
            "platformName": "iOS",
            "appium:deviceName": "iPhone 15",
            "appium:bundleId": "com.clarien.imobile",
            "appium:automationName": "XCUITest",
            "appium:platformVersion": "17.0",
            "appium:udid": "auto",
        }
        assert Config.validate_caps(caps, "ios") == []

    @pytest.mark.unit
    def test_missing_required_raises(self):
        caps = {"platformName": "Android"}
        with pytest.raises(ConfigValidationError) as exc_info:
            Config.validate_caps(caps, "android")
        assert "appium:deviceName" in str(exc_info.value)
        assert "appium:app" in str(exc_info.value)

    @pytest.mark.unit
    def test_missing_recommended_returns_warnings(self):
        caps = {
            "platformName": "iOS",
            "appium:deviceName": "iPhone 15",
            "appium:app": "/path/to/app.ipa",
            "appium:automationName": "XCUITest",
        }
        warnings = Config.validate_caps(caps, "ios")
        assert any("appium:udid" in w for w in warnings)

    @pytest.mark.unit
    def test_validation_error_has_error_list(self):
        with pytest.raises(ConfigValidationError) as exc_info:
            Config.validate_caps({}, "android")
        assert len(exc_info.value.errors) == 4


@pytest.mark.unit
class TestServerUrl:
    """server_url"""

    @pytest.mark.unit
    def test_local_url(self):
        with patch.object(Config, "APPIUM_HOST", "10.0.0.5"), \
                patch.object(Config, "APPIUM_PORT", 4725):
            assert Config.server_url("local") == "http://10.0.0.5:4725"

    @pytest.mark.unit
    def test_remote_url(self):
        with patch.object(Config, "GRID_URL", "https://grid.example/wd/hub"):
            assert Config.server_url("remote") == "https://grid.example/wd/hub"

    @pytest.mark.unit
    def test_unknown_mode_raises(self):
        with pytest.raises(InvalidConfigError):
            Config.server_url("cloud")


@pytest.mark.unit
class TestLoadCaps:
    """load_caps"""

    @pytest.mark.unit
    @pytest.mark.parametrize("platform,mode", [
        ("android", "local"),
        ("android", "remote"),
        ("ios", "local"),
        ("ios", "remote"),
    ])
    def test_bundled_caps_files_are_valid(self, platform, mode):
        """專案附帶的四個 caps 檔都通過驗證"""
        caps = Config.load_caps(platform, mode)
        assert caps["platformName"].lower() == platform

    @pytest.mark.unit
    def test_missing_file_raises(self):
        with pytest.raises(CapsFileNotFoundError) as exc_info:
            Config.load_caps("windows", "local")
        assert "windows_local_caps.json" in str(exc_info.value)

    @pytest.mark.unit
    def test_local_relative_app_is_resolved(self):
        """local 模式的相對 App 路徑以專案根目錄為準"""
        caps = Config.load_caps("android", "local")
        assert caps["appium:app"] == str(BASE_DIR / "apps" / "iMobile_21Oct.apk")

    @pytest.mark.unit
    def test_remote_injects_grid_credentials(self):
        with patch.object(Config, "GRID_USERNAME", "qa_user"), \
                patch.object(Config, "GRID_ACCESS_KEY", "secret"), \
                patch.object(Config, "GRID_APP", "bs://uploaded123"):
            caps = Config.load_caps("ios", "remote")

        assert caps["appium:app"] == "bs://uploaded123"
        assert caps["bstack:options"]["userName"] == "qa_user"
        assert caps["bstack:options"]["accessKey"] == "secret"

    @pytest.mark.unit
    def test_remote_without_credentials_keeps_file_values(self):
        with patch.object(Config, "GRID_USERNAME", ""), \
                patch.object(Config, "GRID_ACCESS_KEY", ""), \
                patch.object(Config, "GRID_APP", ""):
            caps = Config.load_caps("android", "remote")

        assert caps["appium:app"] == "bs://clarien-imobile-android"
        assert "accessKey" not in caps["bstack:options"]
