"""Service module exports."""

from . import (
    dashboard,
    export_csv,
    import_csv,
    periods,
    profit_calculator,
    reports,
    sales_calculator,
    targets,
)

__all__ = [
    "dashboard",
    "export_csv",
    "import_csv",
    "periods",
    "profit_calculator",
    "reports",
    "sales_calculator",
    "targets",
]
