"""SQLModel definition for recorded sales."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, ClassVar, Optional

from sqlalchemy.orm import relationship
from sqlmodel import Field, Relationship, SQLModel

if TYPE_CHECKING:  # pragma: no cover - import guard for circular dependency
    from .salesperson import Salesperson

UNKNOWN_SALESPERSON = "不明"


class Sale(SQLModel, table=True):
    """A single sale entered by hand or imported from CSV."""

    __tablename__: ClassVar[str] = "sale"

    id: Optional[int] = Field(default=None, primary_key=True)
    date: datetime = Field(nullable=False, index=True)
    product_name: str = Field(nullable=False, max_length=128, index=True)
    category: str = Field(default="", max_length=64)
    quantity: int = Field(default=1, nullable=False)
    amount: int = Field(nullable=False, description="Sale amount in yen, never negative")
    salesperson_id: Optional[int] = Field(default=None, foreign_key="salesperson.id", index=True)
    created_at: datetime = Field(default_factory=datetime.now, nullable=False)
    updated_at: datetime = Field(default_factory=datetime.now, nullable=False)

    # Joined eagerly so detached rows can still report who made the sale.
    salesperson: "Salesperson | None" = Relationship(
        sa_relationship=relationship("Salesperson", lazy="joined")
    )

    @property
    def salesperson_name(self) -> str:
        person = self.salesperson
        return person.name if person is not None else UNKNOWN_SALESPERSON
