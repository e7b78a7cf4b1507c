"""
core — 框架核心

這裡只匯出不依賴 config 的元件（例外與 locator），避免循環 import。
Session、FlowRunner 等請從各自模組匯入：

用法：
    from core import ElementNotFoundError, Locator, LocatorTable
    from core.session import SessionBootstrapper
    from core.flow_runner import FlowConfigBuilder, LoginFlowRunner
"""

from core.exceptions import (
    AppiumFrameworkError,
    CapsFileNotFoundError,
    CleanupError,
    ConfigError,
    DriverError,
    ElementNotFoundError,
    EvidenceCaptureError,
    GridReportError,
    InvalidConfigError,
    LocatorNotDefinedError,
    LoginFlowError,
    LoginOutcomeUnclearError,
    LoginRejectedError,
    PageError,
    SessionCreationError,
    UnexpectedLoginOutcomeError,
)
from core.locators import Locator, LocatorTable

__all__ = [
    # Locators
    "Locator",
    "LocatorTable",
    # Exceptions
    "AppiumFrameworkError",
    "DriverError",
    "SessionCreationError",
    "CleanupError",
    "PageError",
    "ElementNotFoundError",
    "ConfigError",
    "CapsFileNotFoundError",
    "InvalidConfigError",
    "LocatorNotDefinedError",
    "EvidenceCaptureError",
    "GridReportError",
    "LoginFlowError",
    "LoginRejectedError",
    "LoginOutcomeUnclearError",
    "UnexpectedLoginOutcomeError",
]
