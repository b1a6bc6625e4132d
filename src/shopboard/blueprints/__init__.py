"""Blueprint exports."""

from . import dashboard, products, purchases, sales, salespersons, settings

__all__ = [
    "dashboard",
    "products",
    "purchases",
    "sales",
    "salespersons",
    "settings",
]
