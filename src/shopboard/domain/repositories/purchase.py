"""Purchase repository protocol."""

from __future__ import annotations

from typing import Optional, Protocol

from ...models.purchase import Purchase


class PurchaseRepository(Protocol):
    """Repository for managing purchase entities."""

    def get_by_id(self, purchase_id: int) -> Optional[Purchase]:
        ...

    def list_all(self) -> list[Purchase]:
        ...

    def list_for_month(self, year: int, month: int) -> list[Purchase]:
        ...

    def create(self, purchase: Purchase) -> Purchase:
        ...

    def delete(self, purchase_id: int) -> bool:
        ...
