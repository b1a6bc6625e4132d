"""Application configuration objects and helpers."""

from __future__ import annotations

import calendar
import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

load_dotenv()


_WEEK_STARTS = {"sunday": calendar.SUNDAY, "monday": calendar.MONDAY}


def _env_bool(name: str, default: bool = False) -> bool:
    """Interpret environment variable values as booleans."""

    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {value!r}") from exc


class BaseConfig:
    """Base configuration shared across environments."""

    APP_NAME = "ShopBoard"
    DB_FILENAME = "shopboard.db"
    SQLITE_PRAGMAS = {"journal_mode": "wal", "foreign_keys": "on"}
    TESTING = False

    def __init__(self) -> None:
        self.SECRET_KEY = os.getenv("SHOPBOARD_SECRET_KEY", "replace-me")
        self.DATA_DIR = self._resolve_data_dir()
        self.DEV_MODE = _env_bool("SHOPBOARD_DEV_MODE", default=True)
        self.DATABASE_URL = os.getenv("SHOPBOARD_DATABASE_URL", self._build_sqlite_url())
        self.WEEK_START = self._resolve_week_start()
        self.DEFAULT_SALES_TARGETS = {
            "daily": _env_int("SHOPBOARD_TARGET_DAILY", 30000),
            "weekly": _env_int("SHOPBOARD_TARGET_WEEKLY", 150000),
            "monthly": _env_int("SHOPBOARD_TARGET_MONTHLY", 700000),
            "yearly": _env_int("SHOPBOARD_TARGET_YEARLY", 8400000),
        }
        if not self.DEV_MODE and self.SECRET_KEY == "replace-me":
            raise ValueError("SHOPBOARD_SECRET_KEY must be set in non-dev mode.")

    def _resolve_data_dir(self) -> Path:
        """Return the directory holding the SQLite file and logs."""

        data_root = os.getenv("SHOPBOARD_DATA_DIR", "instance")
        path = Path(data_root).expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path

    def _resolve_week_start(self) -> int:
        raw = os.getenv("SHOPBOARD_WEEK_START", "sunday").strip().lower()
        if raw not in _WEEK_STARTS:
            raise ValueError(
                f"SHOPBOARD_WEEK_START must be one of {sorted(_WEEK_STARTS)}, got {raw!r}"
            )
        return _WEEK_STARTS[raw]

    def _build_sqlite_url(self) -> str:
        return f"sqlite:///{self.DATA_DIR / self.DB_FILENAME}"

    def sqlalchemy_engine_options(self) -> dict[str, Any]:
        """Expose engine kwargs for SQLModel to consume."""

        if self.DATABASE_URL.startswith("sqlite"):
            return {"connect_args": {"check_same_thread": False}}
        return {"pool_pre_ping": True}


class DevConfig(BaseConfig):
    """Development configuration using local SQLite."""

    DEBUG = True


class TestConfig(BaseConfig):
    """Configuration used by the test-suite."""

    TESTING = True

    def __init__(self) -> None:
        super().__init__()
        self.DEV_MODE = True
