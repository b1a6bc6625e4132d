"""Profit analysis over matching sales and purchase windows."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import date, datetime
from typing import Any, Iterable

from .periods import SUNDAY, Period, filter_in_window, period_window
from .sales_calculator import total_amount


@dataclass(frozen=True, slots=True)
class ProfitSummary:
    total_sales: int
    total_purchases: int
    profit: int
    profit_rate: float

    def as_dict(self) -> dict[str, Any]:
        return asdict(self)


def summarize_profit(sales: Iterable[Any], purchases: Iterable[Any]) -> ProfitSummary:
    """Compute profit for sales and purchases already filtered to one window.

    ``profit_rate`` is 0 when there were no sales, even if purchases produced
    a loss.
    """

    total_sales = total_amount(sales)
    total_purchases = total_amount(purchases)
    profit = total_sales - total_purchases
    profit_rate = (profit / total_sales) * 100 if total_sales > 0 else 0

    return ProfitSummary(
        total_sales=total_sales,
        total_purchases=total_purchases,
        profit=profit,
        profit_rate=profit_rate,
    )


def calculate_profit_summary(
    sales: Iterable[Any],
    purchases: Iterable[Any],
    reference_month: date | datetime,
    period: Period | str,
    *,
    now: date | datetime,
    week_start: int = SUNDAY,
) -> ProfitSummary:
    """Filter both record lists with the same period window and summarize them."""

    window = period_window(reference_month, period, now=now, week_start=week_start)
    return summarize_profit(filter_in_window(sales, window), filter_in_window(purchases, window))
