"""Salesperson repository protocol."""

from __future__ import annotations

from typing import Optional, Protocol

from ...models.salesperson import Salesperson


class SalespersonRepository(Protocol):
    """Lookup used when resolving salesperson names from imported rows."""

    def get_by_name(self, name: str) -> Optional[Salesperson]:
        ...

    def list_all(self, *, active_only: bool = False) -> list[Salesperson]:
        ...
