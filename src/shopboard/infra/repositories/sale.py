"""SQLModel implementation of the Sale repository."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlmodel import Session, select

from ...models.sale import Sale
from ..database import SessionFactory
from ._dates import month_range

_EDITABLE_COLUMNS = ("date", "product_name", "category", "quantity", "amount", "salesperson_id")


class SQLModelSaleRepository:
    """SQLModel-based sale repository implementation."""

    def __init__(self, session_factory: SessionFactory):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    @staticmethod
    def _detach(session: Session, sale: Sale) -> Sale:
        # Load the salesperson before the row leaves the session.
        _ = sale.salesperson
        session.expunge(sale)
        return sale

    def get_by_id(self, sale_id: int) -> Optional[Sale]:
        """Retrieve a sale by ID."""
        with self.session_factory() as session:
            obj = session.get(Sale, sale_id)
            if obj:
                self._detach(session, obj)
            return obj

    def list_all(self) -> list[Sale]:
        """List every sale, newest first."""
        with self.session_factory() as session:
            statement = select(Sale).order_by(Sale.date.desc())  # type: ignore
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def recent(self, limit: int = 5) -> list[Sale]:
        """Return the latest ``limit`` sales."""
        with self.session_factory() as session:
            statement = select(Sale).order_by(Sale.date.desc()).limit(limit)  # type: ignore
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def filter_by_date_range(self, start_date: datetime, end_date: datetime) -> list[Sale]:
        """Get sales with ``start_date <= date < end_date``."""
        with self.session_factory() as session:
            statement = (
                select(Sale)
                .where(Sale.date >= start_date)
                .where(Sale.date < end_date)
                .order_by(Sale.date.desc())  # type: ignore
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def list_for_month(self, year: int, month: int) -> list[Sale]:
        """Get the sales of one calendar month, newest first."""
        return self.filter_by_date_range(*month_range(year, month))

    def search(self, year: int, month: int, text: Optional[str] = None) -> list[Sale]:
        """Month listing narrowed by product, category or salesperson name."""
        rows = self.list_for_month(year, month)
        needle = (text or "").strip().lower()
        if not needle:
            return rows
        return [
            sale
            for sale in rows
            if needle in sale.product_name.lower()
            or needle in (sale.category or "").lower()
            or needle in sale.salesperson_name.lower()
        ]

    def create(self, sale: Sale) -> Sale:
        """Create a new sale."""
        with self.session_factory() as session:
            session.add(sale)
            session.commit()
            session.refresh(sale)
            return self._detach(session, sale)

    def update(self, sale: Sale) -> Sale:
        """Update an existing sale.

        Column values are copied onto the stored row so a stale ``salesperson``
        relationship on a detached instance never overrides ``salesperson_id``.
        """
        with self.session_factory() as session:
            stored = session.get(Sale, sale.id)
            if stored is None:
                raise LookupError(f"Sale {sale.id} does not exist")
            for name in _EDITABLE_COLUMNS:
                setattr(stored, name, getattr(sale, name))
            stored.updated_at = datetime.now()
            session.commit()
            session.refresh(stored)
            return self._detach(session, stored)

    def delete(self, sale_id: int) -> bool:
        """Delete a sale by ID; returns whether a row was removed."""
        with self.session_factory() as session:
            sale = session.get(Sale, sale_id)
            if sale is None:
                return False
            session.delete(sale)
            session.commit()
            return True
