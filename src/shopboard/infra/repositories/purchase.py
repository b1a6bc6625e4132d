"""SQLModel implementation of the Purchase repository."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlmodel import select

from ...models.purchase import Purchase
from ..database import SessionFactory
from ._dates import month_range


class SQLModelPurchaseRepository:
    """SQLModel-based purchase repository implementation."""

    def __init__(self, session_factory: SessionFactory):
        self.session_factory = session_factory

    def get_by_id(self, purchase_id: int) -> Optional[Purchase]:
        with self.session_factory() as session:
            obj = session.get(Purchase, purchase_id)
            if obj:
                session.expunge(obj)
            return obj

    def list_all(self) -> list[Purchase]:
        with self.session_factory() as session:
            statement = select(Purchase).order_by(Purchase.date.desc())  # type: ignore
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def list_for_month(self, year: int, month: int) -> list[Purchase]:
        start_date, end_date = month_range(year, month)
        with self.session_factory() as session:
            statement = (
                select(Purchase)
                .where(Purchase.date >= start_date)
                .where(Purchase.date < end_date)
                .order_by(Purchase.date.desc())  # type: ignore
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def create(self, purchase: Purchase) -> Purchase:
        with self.session_factory() as session:
            session.add(purchase)
            session.commit()
            session.refresh(purchase)
            session.expunge(purchase)
            return purchase

    def update(self, purchase: Purchase) -> Purchase:
        with self.session_factory() as session:
            purchase.updated_at = datetime.now()
            merged = session.merge(purchase)
            session.commit()
            session.refresh(merged)
            session.expunge(merged)
            return merged

    def delete(self, purchase_id: int) -> bool:
        with self.session_factory() as session:
            purchase = session.get(Purchase, purchase_id)
            if purchase is None:
                return False
            session.delete(purchase)
            session.commit()
            return True
