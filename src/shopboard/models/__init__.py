"""SQLModel table exports."""

from .product import Product, StockStatus
from .purchase import Purchase
from .sale import Sale
from .salesperson import Salesperson
from .settings import AppSetting

__all__ = [
    "AppSetting",
    "Product",
    "Purchase",
    "Sale",
    "Salesperson",
    "StockStatus",
]
