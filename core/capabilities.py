"""
Capability Set — 不可變的 session 能力設定

描述目標平台、裝置、App 安裝檔、自動化引擎與 session 逾時。
每個測試模組建立一次，之後只讀不改。

用法：
    from core.capabilities import CapabilitySet, load_capability_set

    caps = load_capability_set("android", "local")
    options = caps.to_options()   # UiAutomator2Options / XCUITestOptions
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping

from appium.options.android import UiAutomator2Options
from appium.options.ios import XCUITestOptions

from config.config import Config
from core.exceptions import InvalidConfigError

_PREFIX = "appium:"

# dataclass 欄位 → W3C capability 名稱（不含 appium: 前綴）
_FIELD_KEYS = {
    "platform_version": "platformVersion",
    "device_name": "deviceName",
    "app": "app",
    "bundle_id": "bundleId",
    "automation_name": "automationName",
    "new_command_timeout": "newCommandTimeout",
    "no_reset": "noReset",
    "udid": "udid",
}

_OPTIONS_BY_PLATFORM = {
    "android": UiAutomator2Options,
    "ios": XCUITestOptions,
}


def _strip_prefix(key: str) -> str:
    return key[len(_PREFIX):] if key.startswith(_PREFIX) else key


@dataclass(frozen=True)
class CapabilitySet:
    """一組 Appium capabilities"""

    platform_name: str
    device_name: str
    automation_name: str
    platform_version: str = ""
    app: str = ""
    bundle_id: str = ""
    udid: str = ""
    new_command_timeout: int = 300
    no_reset: bool = True
    extra: Mapping[str, Any] = field(default_factory=dict, compare=False)

    def __post_init__(self):
        if self.platform not in _OPTIONS_BY_PLATFORM:
            raise InvalidConfigError(
                "platformName", self.platform_name,
                f"支援: {', '.join(_OPTIONS_BY_PLATFORM)}",
            )
        # extra 改成唯讀，避免測試之間互相污染
        object.__setattr__(self, "extra", MappingProxyType(dict(self.extra)))

    @property
    def platform(self) -> str:
        """小寫平台代號: android / ios"""
        return self.platform_name.lower()

    @classmethod
    def from_dict(cls, caps: Mapping[str, Any]) -> "CapabilitySet":
        """從 capabilities dict 建立（接受有無 appium: 前綴的 key）"""
        normalized = {_strip_prefix(k): v for k, v in caps.items()}
        kwargs: dict[str, Any] = {"platform_name": normalized.pop("platformName", "")}
        for attr, key in _FIELD_KEYS.items():
            if key in normalized:
                kwargs[attr] = normalized.pop(key)
        if "platform_version" in kwargs:
            kwargs["platform_version"] = str(kwargs["platform_version"])
        # 其餘 (例如 bstack:options) 原樣保留
        extra = {k: v for k, v in caps.items() if _strip_prefix(k) in normalized}
        return cls(extra=extra, **kwargs)

    def to_dict(self) -> dict[str, Any]:
        """轉成 W3C capabilities dict，空值欄位不輸出"""
        caps: dict[str, Any] = {"platformName": self.platform_name}
        for attr, key in _FIELD_KEYS.items():
            value = getattr(self, attr)
            if value == "" or value is None:
                continue
            caps[f"{_PREFIX}{key}"] = value
        caps.update(self.extra)
        return caps

    def to_options(self):
        """轉成對應平台的 Appium options 物件"""
        options_cls = _OPTIONS_BY_PLATFORM[self.platform]
        return options_cls().load_capabilities(self.to_dict())


def load_capability_set(
    platform: str | None = None, mode: str | None = None
) -> CapabilitySet:
    """讀取 config/<platform>_<mode>_caps.json 並建立 CapabilitySet"""
    return CapabilitySet.from_dict(Config.load_caps(platform, mode))
