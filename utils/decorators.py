"""
自訂 Decorators
提供 best-effort 副作用包裝（截圖、清理、grid 回報）與效能計時。
"""

import functools
import time

from core.exceptions import AppiumFrameworkError
from utils.logger import logger


def best_effort(error_cls: type[AppiumFrameworkError], default=None):
    """
    Best-effort 呼叫：任何例外都包成 error_cls 記錄 warning，然後回傳 default。

    error_cls 的建構子簽名需為 (action: str, original: Exception)。

    用法：
        @best_effort(CleanupError)
        def _quit(driver):
            driver.quit()
    """
    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except Exception as e:
                error = e if isinstance(e, error_cls) else error_cls(func.__qualname__, e)
                logger.warning(f"[略過] {type(error).__name__}: {error}")
                return default
        return wrapper
    return decorator


def timer(func):
    """
    計算執行時間。

    用法：
        @timer
        def run(self, credentials):
            ...
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        start = time.time()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed = time.time() - start
            logger.info(f"[計時] {func.__name__} 耗時 {elapsed:.2f} 秒")
    return wrapper
