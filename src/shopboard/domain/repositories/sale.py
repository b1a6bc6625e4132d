"""Sale repository protocol."""

from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol

from ...models.sale import Sale


class SaleRepository(Protocol):
    """Repository for managing sale entities."""

    def get_by_id(self, sale_id: int) -> Optional[Sale]:
        """Retrieve a sale by ID."""
        ...

    def list_all(self) -> list[Sale]:
        """List every sale, newest first."""
        ...

    def filter_by_date_range(self, start_date: datetime, end_date: datetime) -> list[Sale]:
        """Get sales within ``[start_date, end_date)``."""
        ...

    def list_for_month(self, year: int, month: int) -> list[Sale]:
        """Get the sales of one calendar month."""
        ...

    def create(self, sale: Sale) -> Sale:
        """Create a new sale."""
        ...

    def update(self, sale: Sale) -> Sale:
        """Update an existing sale."""
        ...

    def delete(self, sale_id: int) -> bool:
        """Delete a sale by ID."""
        ...
