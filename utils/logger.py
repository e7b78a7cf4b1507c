"""
日誌模組
整個測試專案共用一個 logger，同時輸出到 console 與 reports/ 底下的檔案。

環境變數：
    LOG_LEVEL: console 日誌等級 (預設 INFO)
    LOG_FILE:  純文字日誌檔名 (預設 login_e2e.log)
    LOG_JSON:  設為 "1" 另外輸出 JSON 結構化日誌 (<LOG_FILE>.json)
"""

import json
import logging
import os
import sys
from datetime import datetime, timezone

from config.config import Config

LOGGER_NAME = "clarien_login"
LOG_DIR = Config.REPORT_DIR
LOG_FILE = os.getenv("LOG_FILE", "login_e2e.log")

_TEXT_FORMAT = logging.Formatter(
    "[%(asctime)s] %(levelname)-7s %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)


class JsonFormatter(logging.Formatter):
    """JSON 結構化日誌格式器，一行一筆，方便 CI 收集"""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }
        if record.exc_info and record.exc_info[1]:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False)


def _file_handler(filename: str, formatter: logging.Formatter) -> logging.Handler:
    handler = logging.FileHandler(LOG_DIR / filename, encoding="utf-8")
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(formatter)
    return handler


def _create_logger() -> logging.Logger:
    LOG_DIR.mkdir(parents=True, exist_ok=True)
    _logger = logging.Logger(LOGGER_NAME)
    _logger.setLevel(logging.DEBUG)

    console = logging.StreamHandler(sys.stdout)
    console.setLevel(
        getattr(logging, os.getenv("LOG_LEVEL", "INFO").upper(), logging.INFO)
    )
    console.setFormatter(_TEXT_FORMAT)
    _logger.addHandler(console)

    _logger.addHandler(_file_handler(LOG_FILE, _TEXT_FORMAT))
    if os.getenv("LOG_JSON", "").strip() == "1":
        _logger.addHandler(_file_handler(f"{LOG_FILE}.json", JsonFormatter()))

    return _logger


logger = _create_logger()
