"""SQLModel definition for stock purchases."""

from __future__ import annotations

from datetime import datetime
from typing import ClassVar, Optional

from sqlmodel import Field, SQLModel


class Purchase(SQLModel, table=True):
    """Stock bought from a supplier; the cost side of profit."""

    __tablename__: ClassVar[str] = "purchase"

    id: Optional[int] = Field(default=None, primary_key=True)
    date: datetime = Field(nullable=False, index=True)
    product_name: str = Field(nullable=False, max_length=128)
    amount: int = Field(nullable=False, description="Purchase cost in yen, never negative")
    created_at: datetime = Field(default_factory=datetime.now, nullable=False)
    updated_at: datetime = Field(default_factory=datetime.now, nullable=False)
