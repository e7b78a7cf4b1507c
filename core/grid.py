"""
雲端 grid (BrowserStack) session 狀態回報

測試結束時把 passed / failed 與原因寫回 grid dashboard。
只在 remote 模式使用；回報失敗不影響測試結果。
"""

import json

from core.exceptions import GridReportError
from utils.decorators import best_effort
from utils.logger import logger

_EXECUTOR_PREFIX = "browserstack_executor: "


def build_status_script(passed: bool, reason: str) -> str:
    """產生 setSessionStatus 的 executor 指令"""
    payload = {
        "action": "setSessionStatus",
        "arguments": {
            "status": "passed" if passed else "failed",
            "reason": reason,
        },
    }
    return _EXECUTOR_PREFIX + json.dumps(payload, ensure_ascii=False)


@best_effort(GridReportError)
def report_session_status(driver, passed: bool, reason: str) -> None:
    """回報 session 狀態到 grid"""
    driver.execute_script(build_status_script(passed, reason))
    logger.info(f"Grid 狀態已回報: {'passed' if passed else 'failed'} - {reason}")
