"""Application-level settings stored in the database."""

from __future__ import annotations

from datetime import datetime
from typing import ClassVar, Optional

from sqlmodel import Field, SQLModel


class AppSetting(SQLModel, table=True):
    """Key-value storage for runtime configurable options.

    ``value`` holds JSON text so structured settings such as sales targets fit
    in a single row.
    """

    __tablename__: ClassVar[str] = "app_setting"

    key: str = Field(primary_key=True, max_length=64)
    value: str = Field(nullable=False, max_length=1024)
    description: Optional[str] = Field(default=None, max_length=255)
    updated_at: datetime = Field(default_factory=datetime.now, nullable=False)
