"""SQLModel implementation of the Product repository."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlmodel import select

from ...models.product import Product
from ..database import SessionFactory


class SQLModelProductRepository:
    """SQLModel-based product repository implementation."""

    def __init__(self, session_factory: SessionFactory):
        self.session_factory = session_factory

    def get_by_id(self, product_id: int) -> Optional[Product]:
        with self.session_factory() as session:
            obj = session.get(Product, product_id)
            if obj:
                session.expunge(obj)
            return obj

    def list_all(self) -> list[Product]:
        """List products ordered by name."""
        with self.session_factory() as session:
            rows = list(session.exec(select(Product).order_by(Product.name)).all())
            session.expunge_all()
            return rows

    def create(self, product: Product) -> Product:
        with self.session_factory() as session:
            session.add(product)
            session.commit()
            session.refresh(product)
            session.expunge(product)
            return product

    def update(self, product: Product) -> Product:
        with self.session_factory() as session:
            product.updated_at = datetime.now()
            merged = session.merge(product)
            session.commit()
            session.refresh(merged)
            session.expunge(merged)
            return merged

    def delete(self, product_id: int) -> bool:
        with self.session_factory() as session:
            product = session.get(Product, product_id)
            if product is None:
                return False
            session.delete(product)
            session.commit()
            return True
