"""Product catalogue definitions."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import ClassVar, Optional

from sqlmodel import Field, SQLModel


class StockStatus(str, Enum):
    IN_STOCK = "in-stock"
    LOW_STOCK = "low-stock"
    OUT_OF_STOCK = "out-of-stock"


class Product(SQLModel, table=True):
    """A product offered by the shop."""

    __tablename__: ClassVar[str] = "product"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(nullable=False, max_length=128, index=True)
    category: str = Field(nullable=False, max_length=64)
    price: int = Field(nullable=False, description="Unit price in yen")
    stock: str = Field(default=StockStatus.IN_STOCK.value, nullable=False, max_length=16)
    created_at: datetime = Field(default_factory=datetime.now, nullable=False)
    updated_at: datetime = Field(default_factory=datetime.now, nullable=False)
