"""
日誌模組
內部追蹤用的 logging 設定。使用者看到的訊息走 utils.console，
這裡的紀錄預設只寫進日誌檔，終端機上只出現 WARNING 以上。

輸出：
- 終端機：rich 格式，寫到 stderr，不干擾 CLI 的 stdout
- 檔案：forcecli.log（純文字）+ 可選的 forcecli.json.log（JSON）

環境變數：
    FORCE_VERBOSE: 設為 "1" 時終端機顯示 DEBUG 以上
    LOG_LEVEL: 終端機日誌等級 (預設 WARNING)
    LOG_JSON: 設為 "1" 啟用 JSON 結構化日誌檔
    FORCE_LOG_DIR: 日誌檔目錄 (預設系統暫存目錄下的 forcecli/logs)
"""

import json
import logging
import os
import tempfile
from datetime import datetime, timezone
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "forcecli"

LOG_DIR = Path(
    os.getenv("FORCE_LOG_DIR", Path(tempfile.gettempdir()) / "forcecli" / "logs")
)
LOG_DIR.mkdir(parents=True, exist_ok=True)


class JsonFormatter(logging.Formatter):
    """一行一筆 JSON；例外的 context（指令、路徑等）一併輸出"""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "line": record.lineno,
        }
        context = getattr(record, "context", None)
        if context:
            entry["context"] = context
        if record.exc_info and record.exc_info[1]:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False, default=str)


def console_level() -> int:
    if os.getenv("FORCE_VERBOSE", "").strip() == "1":
        return logging.DEBUG
    return getattr(logging, os.getenv("LOG_LEVEL", "WARNING").upper(), logging.WARNING)


def _create_logger() -> logging.Logger:
    _logger = logging.Logger(LOGGER_NAME)
    _logger.setLevel(logging.DEBUG)

    terminal = RichHandler(
        console=Console(stderr=True),
        show_time=False,
        show_path=False,
        markup=False,
    )
    terminal.setLevel(console_level())
    _logger.addHandler(terminal)

    file_handler = logging.FileHandler(LOG_DIR / f"{LOGGER_NAME}.log", encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(
        "[%(asctime)s] %(levelname)-7s %(module)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    ))
    _logger.addHandler(file_handler)

    if os.getenv("LOG_JSON", "").strip() == "1":
        json_handler = logging.FileHandler(LOG_DIR / f"{LOGGER_NAME}.json.log", encoding="utf-8")
        json_handler.setLevel(logging.DEBUG)
        json_handler.setFormatter(JsonFormatter())
        _logger.addHandler(json_handler)

    return _logger


logger = _create_logger()
