"""Repository protocol definitions for domain layer."""

from .purchase import PurchaseRepository
from .sale import SaleRepository
from .salesperson import SalespersonRepository
from .settings import SettingsRepository

__all__ = [
    "PurchaseRepository",
    "SaleRepository",
    "SalespersonRepository",
    "SettingsRepository",
]
