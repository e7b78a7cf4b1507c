"""
截圖工具
把截圖存到 screenshots 目錄，檔名 = 清理過的步驟名稱 + 毫秒時間戳記。
"""

import re
import time
from pathlib import Path

from config.config import Config
from utils.logger import logger

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9]")


def sanitize_name(name: str) -> str:
    """把英數字以外的字元都換成底線，確保可以當檔名"""
    return _UNSAFE_CHARS.sub("_", name)


def screenshot_path(name: str, directory: Path | None = None) -> Path:
    """產生不重複的截圖檔案路徑（不建立檔案）"""
    directory = Path(directory) if directory else Config.SCREENSHOT_DIR
    timestamp = int(time.time() * 1000)
    return directory / f"{sanitize_name(name)}_{timestamp}.png"


def save_png(png: bytes, name: str, directory: Path | None = None) -> str:
    """
    把 PNG bytes 寫入 screenshots 目錄。

    Args:
        png: 截圖內容
        name: 步驟名稱（會經過 sanitize_name）
        directory: 存放目錄，預設 Config.SCREENSHOT_DIR

    Returns:
        截圖檔案的完整路徑
    """
    filepath = screenshot_path(name, directory)
    filepath.parent.mkdir(parents=True, exist_ok=True)
    filepath.write_bytes(png)
    logger.info(f"截圖已儲存: {filepath}")
    return str(filepath)

