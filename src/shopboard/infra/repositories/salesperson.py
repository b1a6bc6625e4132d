"""SQLModel implementation of the Salesperson repository."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlmodel import select

from ...models.sale import Sale
from ...models.salesperson import Salesperson
from ..database import SessionFactory


class SQLModelSalespersonRepository:
    """SQLModel-based salesperson repository implementation."""

    def __init__(self, session_factory: SessionFactory):
        self.session_factory = session_factory

    def get_by_id(self, salesperson_id: int) -> Optional[Salesperson]:
        with self.session_factory() as session:
            obj = session.get(Salesperson, salesperson_id)
            if obj:
                session.expunge(obj)
            return obj

    def get_by_name(self, name: str) -> Optional[Salesperson]:
        """Return the first salesperson with exactly this name."""
        with self.session_factory() as session:
            obj = session.exec(select(Salesperson).where(Salesperson.name == name)).first()
            if obj:
                session.expunge(obj)
            return obj

    def list_all(self, *, active_only: bool = False) -> list[Salesperson]:
        with self.session_factory() as session:
            statement = select(Salesperson)
            if active_only:
                statement = statement.where(Salesperson.is_active == True)  # noqa: E712
            rows = list(session.exec(statement.order_by(Salesperson.name)).all())
            session.expunge_all()
            return rows

    def create(self, salesperson: Salesperson) -> Salesperson:
        with self.session_factory() as session:
            session.add(salesperson)
            session.commit()
            session.refresh(salesperson)
            session.expunge(salesperson)
            return salesperson

    def update(self, salesperson: Salesperson) -> Salesperson:
        with self.session_factory() as session:
            salesperson.updated_at = datetime.now()
            merged = session.merge(salesperson)
            session.commit()
            session.refresh(merged)
            session.expunge(merged)
            return merged

    def delete(self, salesperson_id: int) -> bool:
        """Delete a salesperson, keeping their sales with no salesperson set."""
        with self.session_factory() as session:
            salesperson = session.get(Salesperson, salesperson_id)
            if salesperson is None:
                return False
            sales = session.exec(select(Sale).where(Sale.salesperson_id == salesperson_id)).all()
            for sale in sales:
                sale.salesperson_id = None
                sale.salesperson = None
                session.add(sale)
            session.flush()
            session.delete(salesperson)
            session.commit()
            return True
