"""
Evidence Recorder — 每個步驟的截圖證據

每次 capture 會：
1. 透過 driver 取得 PNG
2. (可選) 存到 screenshots 目錄：<清理過的名稱>_<毫秒時間戳>.png
3. (可選) 附加到 Allure 報告

擷取失敗只記 warning，不影響登入流程。
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from pathlib import Path

from core.exceptions import EvidenceCaptureError
from utils.allure_helper import attach_png
from utils.decorators import best_effort
from utils.logger import logger
from utils.screenshot import save_png


@dataclass(frozen=True)
class EvidenceItem:
    """一張步驟截圖"""
    label: str
    png: bytes = field(repr=False)
    path: str | None = None
    timestamp: float = field(default_factory=time.time)


class EvidenceRecorder:
    """依序記錄一個測試案例的步驟截圖"""

    def __init__(
        self,
        driver,
        prefix: str = "",
        directory: Path | None = None,
        persist: bool = True,
        attach: bool = True,
    ):
        self.driver = driver
        self.prefix = prefix
        self.directory = directory
        self.persist = persist
        self.attach = attach
        self.items: list[EvidenceItem] = []

    def _full_label(self, label: str) -> str:
        return f"{self.prefix}_{label}" if self.prefix else label

    @best_effort(EvidenceCaptureError)
    def capture(self, label: str) -> EvidenceItem | None:
        """擷取一張截圖；失敗時回傳 None"""
        name = self._full_label(label)
        png = self.driver.get_screenshot_as_png()
        path = save_png(png, name, self.directory) if self.persist else None
        if self.attach:
            attach_png(png, name)
        item = EvidenceItem(label=name, png=png, path=path)
        self.items.append(item)
        logger.info(f"截圖: {name}")
        return item

    @property
    def labels(self) -> list[str]:
        return [item.label for item in self.items]
