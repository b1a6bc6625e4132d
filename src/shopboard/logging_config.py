"""Logging for ShopBoard: a readable console stream and a JSON lines file.

Everything logs below the ``shopboard`` logger. The file handler writes one
JSON object per line to ``<DATA_DIR>/logs/shopboard.log`` so imports, exports
and target changes can be audited later; values passed through ``extra=``
(row counts, months, target amounts) land under the ``extra`` key.
"""

from __future__ import annotations

import json
import logging
import logging.handlers
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from .config import BaseConfig

ROOT_LOGGER_NAME = "shopboard"
LOG_FILE_NAME = "shopboard.log"
LOG_MAX_BYTES = 10 * 1024 * 1024
LOG_BACKUP_COUNT = 5

_DEV_CONSOLE_FORMAT = "[%(asctime)s] %(levelname)-8s [%(name)s.%(funcName)s:%(lineno)d] %(message)s"
_CONSOLE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

# Attributes every LogRecord carries; anything else came in through ``extra=``.
_RECORD_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None))
) | {"message", "asctime", "taskName"}


class JSONFormatter(logging.Formatter):
    """Render a record as a single JSON line; Japanese text stays readable."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }
        if record.exc_info:
            entry["exception"] = self._exception(record)

        extra = {key: value for key, value in vars(record).items() if key not in _RECORD_ATTRS}
        if extra:
            entry["extra"] = extra
        return json.dumps(entry, default=str, ensure_ascii=False)

    def _exception(self, record: logging.LogRecord) -> dict[str, Any]:
        exc_type, exc_value, _ = record.exc_info
        return {
            "type": exc_type.__name__ if exc_type else None,
            "message": str(exc_value) if exc_value else None,
            "traceback": self.formatException(record.exc_info),
        }


def _console_handler(dev_mode: bool) -> logging.Handler:
    handler = logging.StreamHandler()
    if dev_mode:
        handler.setLevel(logging.INFO)
        handler.setFormatter(logging.Formatter(_DEV_CONSOLE_FORMAT, datefmt="%H:%M:%S"))
    else:
        handler.setLevel(logging.WARNING)
        handler.setFormatter(logging.Formatter(_CONSOLE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    return handler


def _file_handler(path: Path) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        filename=path,
        maxBytes=LOG_MAX_BYTES,
        backupCount=LOG_BACKUP_COUNT,
        encoding="utf-8",
    )
    handler.setLevel(logging.INFO)
    handler.setFormatter(JSONFormatter())
    return handler


def setup_logging(config: BaseConfig) -> logging.Logger:
    """Attach the console and rotating JSON file handlers to ``shopboard``.

    Calling it again (one app per test, for instance) replaces the handlers
    rather than stacking new ones.
    """

    logs_dir = Path(config.DATA_DIR) / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    log_file = logs_dir / LOG_FILE_NAME

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(logging.INFO)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    logger.addHandler(_console_handler(config.DEV_MODE))
    logger.addHandler(_file_handler(log_file))

    logger.info(
        "Logging initialized",
        extra={"dev_mode": config.DEV_MODE, "log_file": str(log_file), "data_dir": config.DATA_DIR},
    )
    return logger


def get_logger(name: str) -> logging.Logger:
    """Return the ``shopboard`` logger for ``name``.

    Module paths inside the package (``__name__``) and the package name
    itself are used as is; short names are placed below ``shopboard``.
    """

    if name == ROOT_LOGGER_NAME or name.startswith(f"{ROOT_LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
