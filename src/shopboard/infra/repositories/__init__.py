"""Concrete repository implementations using SQLModel."""

from .product import SQLModelProductRepository
from .purchase import SQLModelPurchaseRepository
from .sale import SQLModelSaleRepository
from .salesperson import SQLModelSalespersonRepository
from .settings import SQLModelSettingsRepository

__all__ = [
    "SQLModelProductRepository",
    "SQLModelPurchaseRepository",
    "SQLModelSaleRepository",
    "SQLModelSalespersonRepository",
    "SQLModelSettingsRepository",
]
