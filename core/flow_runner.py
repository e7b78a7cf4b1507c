"""
Login Flow Runner — 參數化的登入流程狀態機

同一份流程跑 Android / iOS × local / remote，差異全部來自注入的 FlowConfig
(locator 表 + capability set + 等待時間)。

狀態：
    LAUNCHING → PERMISSION_CHECK → ENTERING_USERNAME → ENTERING_PASSWORD
    → SUBMITTING → AWAITING_OUTCOME → {SUCCESS, FAILURE, UNCLEAR}

每個轉換前後都會截圖。轉換中出現非預期例外時：
截一張 "failure" 圖 → (remote) 回報 grid failed → 原樣往上拋。

用法：
    config = (
        FlowConfigBuilder()
        .platform("ios")
        .mode("remote")
        .element_timeout(30)
        .build()
    )
    runner = LoginFlowRunner(session, config)
    runner.verify_login_succeeds(Credentials("Clarientest", "Clarien@123"))
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from config.config import MODES, Config
from core.capabilities import CapabilitySet, load_capability_set
from core.evidence import EvidenceItem, EvidenceRecorder
from core.exceptions import (
    InvalidConfigError,
    LoginFlowError,
    LoginOutcomeUnclearError,
    LoginRejectedError,
    UnexpectedLoginOutcomeError,
)
from core.grid import report_session_status
from core.locators import (
    ALERT_OK_BUTTON,
    ERROR_INDICATOR,
    LocatorTable,
    locator_table_for,
)
from core.session import Session
from pages.login_page import LoginPage
from utils.allure_helper import add_parameter, allure_step
from utils.decorators import timer
from utils.logger import logger

ALERT_REJECTION_REASON = "alert dismissed"


class FlowState(str, Enum):
    """登入流程狀態"""

    LAUNCHING = "launching"
    PERMISSION_CHECK = "permission_check"
    ENTERING_USERNAME = "entering_username"
    ENTERING_PASSWORD = "entering_password"
    SUBMITTING = "submitting"
    AWAITING_OUTCOME = "awaiting_outcome"
    SUCCESS = "success"
    FAILURE = "failure"
    UNCLEAR = "unclear"

    @property
    def is_terminal(self) -> bool:
        return self in (FlowState.SUCCESS, FlowState.FAILURE, FlowState.UNCLEAR)


@dataclass(frozen=True)
class Credentials:
    """登入帳密（密碼不出現在 repr）"""
    username: str
    password: str = field(repr=False)


@dataclass
class FlowResult:
    """一次登入流程的結果"""
    state: FlowState
    history: list[FlowState]
    reason: str = ""
    evidence: list[EvidenceItem] = field(default_factory=list)
    duration: float = 0.0

    @property
    def visited(self) -> set[FlowState]:
        return set(self.history)


# ── 設定 ──

@dataclass(frozen=True)
class FlowConfig:
    """Flow runner 的注入設定，由 FlowConfigBuilder 產生"""
    locators: LocatorTable
    capabilities: CapabilitySet
    mode: str = "local"
    element_timeout: float = 30.0
    settle_delay: float = 5.0
    login_delay: float = 10.0
    poll_interval: float = 0.5
    screenshot_dir: Path | None = None
    persist_evidence: bool = True

    @property
    def platform(self) -> str:
        return self.capabilities.platform

    @property
    def report_to_grid(self) -> bool:
        return self.mode == "remote"

    @property
    def label_prefix(self) -> str:
        """截圖名稱前綴，例如 Local_Android / Remote_iOS"""
        return f"{self.mode.capitalize()}_{self.capabilities.platform_name}"


class FlowConfigBuilder:
    """
    FlowConfig 建構器，可鏈式設定，未設定的值取自 Config

    用法：
        config = FlowConfigBuilder().platform("android").mode("local").build()
    """

    def __init__(self):
        self._platform: str | None = None
        self._mode: str | None = None
        self._locators: LocatorTable | None = None
        self._capabilities: CapabilitySet | None = None
        self._element_timeout = Config.ELEMENT_TIMEOUT
        self._settle_delay = Config.SETTLE_DELAY
        self._login_delay = Config.LOGIN_DELAY
        self._poll_interval = Config.POLL_INTERVAL
        self._screenshot_dir: Path | None = None
        self._persist_evidence = True

    def platform(self, platform: str) -> "FlowConfigBuilder":
        self._platform = platform.lower()
        return self

    def mode(self, mode: str) -> "FlowConfigBuilder":
        self._mode = mode.lower()
        return self

    def locators(self, table: LocatorTable) -> "FlowConfigBuilder":
        self._locators = table
        return self

    def capabilities(self, caps: CapabilitySet) -> "FlowConfigBuilder":
        self._capabilities = caps
        return self

    def element_timeout(self, seconds: float) -> "FlowConfigBuilder":
        self._element_timeout = seconds
        return self

    def settle_delay(self, seconds: float) -> "FlowConfigBuilder":
        self._settle_delay = seconds
        return self

    def login_delay(self, seconds: float) -> "FlowConfigBuilder":
        self._login_delay = seconds
        return self

    def poll_interval(self, seconds: float) -> "FlowConfigBuilder":
        self._poll_interval = seconds
        return self

    def screenshot_dir(self, directory: Path, persist: bool = True) -> "FlowConfigBuilder":
        self._screenshot_dir = Path(directory)
        self._persist_evidence = persist
        return self

    def build(self) -> FlowConfig:
        mode = self._mode or Config.RUN_MODE
        if mode not in MODES:
            raise InvalidConfigError("mode", mode, f"支援: {', '.join(MODES)}")
        caps = self._capabilities
        if caps is None:
            caps = load_capability_set(self._platform or Config.PLATFORM, mode)
        platform = self._platform or caps.platform
        if platform != caps.platform:
            raise InvalidConfigError(
                "platform", platform, f"與 capabilities 的 {caps.platform_name} 不一致",
            )
        return FlowConfig(
            locators=self._locators or locator_table_for(platform),
            capabilities=caps,
            mode=mode,
            element_timeout=self._element_timeout,
            settle_delay=self._settle_delay,
            login_delay=self._login_delay,
            poll_interval=self._poll_interval,
            screenshot_dir=self._screenshot_dir,
            persist_evidence=self._persist_evidence,
        )


# ── Runner ──

class LoginFlowRunner:
    """驅動登入畫面的狀態機"""

    def __init__(
        self,
        session: Session,
        config: FlowConfig,
        recorder: EvidenceRecorder | None = None,
    ):
        self.session = session
        self.config = config
        self.driver = session.driver
        self.recorder = recorder or EvidenceRecorder(
            self.driver,
            prefix=config.label_prefix,
            directory=config.screenshot_dir,
            persist=config.persist_evidence,
        )
        self.page = LoginPage(
            self.driver,
            config.locators,
            timeout=config.element_timeout,
            poll_interval=config.poll_interval,
        )
        self.history: list[FlowState] = []

    @property
    def state(self) -> FlowState | None:
        return self.history[-1] if self.history else None

    def _enter(self, state: FlowState) -> None:
        logger.info(f"[{self.config.label_prefix}] → {state.value}")
        self.history.append(state)

    def _capture(self, label: str) -> None:
        self.recorder.capture(label)

    # ── 流程 ──

    @timer
    def run(self, credentials: Credentials) -> FlowResult:
        """
        跑一次完整登入流程。

        Returns:
            FlowResult，state 為 SUCCESS / FAILURE / UNCLEAR 之一

        Raises:
            轉換中的任何非預期例外（已先截 failure 圖並回報 grid）
        """
        self.history = []
        first_item = len(self.recorder.items)
        start = time.time()
        logger.info(f"開始登入流程: {self.config.label_prefix} user={credentials.username}")
        try:
            self._launch()
            self._check_permissions()
            self._enter_username(credentials.username)
            self._enter_password(credentials.password)
            self._submit()
            state, reason = self._await_outcome()
        except Exception as e:
            logger.error(f"登入流程中斷於 {self.state.value if self.state else '-'}: {e}")
            self._fail(f"Login flow aborted: {e}")
            raise
        return FlowResult(
            state=state,
            history=list(self.history),
            reason=reason,
            evidence=self.recorder.items[first_item:],
            duration=time.time() - start,
        )

    @allure_step("等待 App 載入")
    def _launch(self) -> None:
        self._enter(FlowState.LAUNCHING)
        time.sleep(self.config.settle_delay)
        self._capture("App launch screen")

    @allure_step("處理權限彈窗")
    def _check_permissions(self) -> None:
        self._enter(FlowState.PERMISSION_CHECK)
        if self.page.dismiss_permission_prompt():
            self._capture("After allowing permissions")
        time.sleep(self.config.settle_delay)
        self._capture("Ready for login")

    @allure_step("輸入帳號")
    def _enter_username(self, username: str) -> None:
        self._enter(FlowState.ENTERING_USERNAME)
        element = self.page.username_field()
        self._capture("Username field located")
        self.page.fill(element, username)
        self._capture("Username entered")
        add_parameter("Username", username)

    @allure_step("輸入密碼")
    def _enter_password(self, password: str) -> None:
        self._enter(FlowState.ENTERING_PASSWORD)
        element = self.page.password_field()
        self._capture("Password field located")
        self.page.fill(element, password, secret=True)
        self._capture("Password entered")

    @allure_step("送出登入")
    def _submit(self) -> None:
        self._enter(FlowState.SUBMITTING)
        button = self.page.login_button()
        self._capture("Before clicking login button")
        button.click()
        self._capture("After clicking login button")
        time.sleep(self.config.login_delay)
        self._capture("After login processing")

    @allure_step("判斷登入結果")
    def _await_outcome(self) -> tuple[FlowState, str]:
        self._enter(FlowState.AWAITING_OUTCOME)
        hit = self.page.wait_for_outcome(self.config.element_timeout)

        if hit is None:
            self._enter(FlowState.UNCLEAR)
            self._capture("Unknown login state")
            logger.warning("登入結果不明: 成功與錯誤指標都沒出現")
            return FlowState.UNCLEAR, "no success or error indicator found"

        name, element = hit
        if name == ERROR_INDICATOR:
            reason = element.text or ""
            self._enter(FlowState.FAILURE)
            self._capture("Login error message")
            add_parameter("Error Message", reason)
            logger.info(f"登入被拒，錯誤訊息: {reason}")
            return FlowState.FAILURE, reason

        if name == ALERT_OK_BUTTON:
            self._enter(FlowState.FAILURE)
            self._capture("Alert for invalid login")
            self.page.dismiss_alert(element)
            add_parameter("Error Message", ALERT_REJECTION_REASON)
            logger.info("登入被拒，App 顯示錯誤 alert")
            return FlowState.FAILURE, ALERT_REJECTION_REASON

        self._enter(FlowState.SUCCESS)
        self._capture("Login successful")
        add_parameter("Login Status", "Success")
        logger.info(f"登入成功 ({name})")
        return FlowState.SUCCESS, ""

    # ── 情境驗證 ──

    def verify_login_succeeds(self, credentials: Credentials) -> FlowResult:
        """
        正確帳密情境：必須到達 SUCCESS。

        Raises:
            LoginRejectedError: App 顯示錯誤訊息
            LoginOutcomeUnclearError: 逾時都沒看到結果
        """
        result = self.run(credentials)
        if result.state is FlowState.SUCCESS:
            self._pass("Clarien mobile banking login successful")
            return result
        if result.state is FlowState.FAILURE:
            raise self._failed(LoginRejectedError(result.reason))
        raise self._failed(self._unclear_error())

    def verify_login_rejected(self, credentials: Credentials) -> FlowResult:
        """
        錯誤帳密情境：必須到達 FAILURE 且有錯誤訊息。

        Raises:
            UnexpectedLoginOutcomeError: 竟然登入成功，或錯誤訊息為空
            LoginOutcomeUnclearError: 逾時都沒看到錯誤訊息
        """
        result = self.run(credentials)
        if result.state is FlowState.FAILURE and result.reason.strip():
            self._pass("Invalid login error handling verified")
            return result
        if result.state is FlowState.UNCLEAR:
            raise self._failed(self._unclear_error())
        raise self._failed(UnexpectedLoginOutcomeError(
            FlowState.FAILURE.value, result.state.value,
            result.reason or "error indicator text is empty",
        ))

    def _pass(self, reason: str) -> None:
        logger.info(f"情境通過: {reason}")
        if self.config.report_to_grid:
            report_session_status(self.driver, True, reason)

    def _fail(self, reason: str) -> None:
        self._capture("failure")
        if self.config.report_to_grid:
            report_session_status(self.driver, False, reason)

    def _unclear_error(self) -> LoginOutcomeUnclearError:
        return LoginOutcomeUnclearError(self.config.label_prefix, self.config.element_timeout)

    def _failed(self, error: LoginFlowError) -> LoginFlowError:
        """截 failure 圖、回報 grid，回傳 error 給呼叫端 raise"""
        logger.error(f"情境失敗: {error}")
        self._fail(str(error))
        return error
