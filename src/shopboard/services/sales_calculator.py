"""Sales summaries for the dashboard and report cards."""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass, field, fields, replace
from datetime import date, datetime
from typing import Any, Iterable, Mapping

from ..constants.labels import NO_TOP_PRODUCT
from .periods import (
    SUNDAY,
    Period,
    comparison_label,
    filter_by_period,
    filter_in_window,
    period_label,
    previous_period_window,
    record_value,
)


@dataclass(frozen=True, slots=True)
class SalesTargets:
    """Sales goals in yen for each period."""

    daily: float = 30000
    weekly: float = 150000
    monthly: float = 700000
    yearly: float = 8400000

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> SalesTargets:
        """Build targets from a mapping, falling back to defaults for missing keys."""

        known = {f.name for f in fields(cls)}
        values = {key: _target_number(key, data[key]) for key in known if key in data}
        return cls(**values)

    def for_period(self, period: Period | str) -> float:
        return getattr(self, Period.parse(period).value)

    def merged(self, **changes: Any) -> SalesTargets:
        """Return a copy with ``changes`` applied; unknown keys raise ``KeyError``."""

        known = {f.name for f in fields(self)}
        unknown = set(changes) - known
        if unknown:
            raise KeyError(f"Unknown sales target(s): {', '.join(sorted(unknown))}")
        cleaned = {key: _target_number(key, value) for key, value in changes.items()}
        return replace(self, **cleaned)

    def as_dict(self) -> dict[str, float]:
        return asdict(self)


def _target_number(name: str, value: Any) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Sales target '{name}' must be a number, got {value!r}") from exc
    if number < 0 or math.isnan(number):
        raise ValueError(f"Sales target '{name}' must not be negative.")
    return int(number) if number.is_integer() else number


@dataclass(slots=True)
class SalesSummary:
    """Aggregated sales figures for one period window."""

    total_amount: int
    sales_count: int
    average_purchase: float
    target_amount: float
    achievement_rate: float
    period_label: str
    comparison_label: str
    comparison_rate: float | None = None
    filtered_sales: list = field(default_factory=list)

    def as_dict(self) -> dict[str, Any]:
        """Return the summary figures without the underlying rows."""

        return {
            "total_amount": self.total_amount,
            "sales_count": self.sales_count,
            "average_purchase": self.average_purchase,
            "target_amount": self.target_amount,
            "achievement_rate": self.achievement_rate,
            "period_label": self.period_label,
            "comparison_label": self.comparison_label,
            "comparison_rate": self.comparison_rate,
        }


def total_amount(records: Iterable[Any]) -> int:
    """Sum the ``amount`` of every record; an empty input sums to 0."""

    return sum(record_value(record, "amount", 0) or 0 for record in records)


def achievement_rate(total: float, target: float) -> float:
    """Percentage of ``target`` reached.

    A zero target is not guarded: it yields ``inf`` for a positive total and
    ``nan`` for a zero total, and display code decides how to show that.
    """

    if target == 0:
        if total == 0:
            return math.nan
        return math.copysign(math.inf, total)
    return (total / target) * 100


def period_over_period_rate(current_total: float, previous_total: float) -> float | None:
    """Percentage change against the previous period; ``None`` without a baseline."""

    if previous_total == 0:
        return None
    return ((current_total - previous_total) / previous_total) * 100


def summarize_sales(
    filtered_sales: Iterable[Any],
    period: Period | str,
    targets: SalesTargets,
    *,
    comparison_rate: float | None = None,
) -> SalesSummary:
    """Compute the summary for sales already filtered to the period window."""

    period = Period.parse(period)
    rows = list(filtered_sales)
    total = total_amount(rows)
    count = len(rows)
    target = targets.for_period(period)

    return SalesSummary(
        total_amount=total,
        sales_count=count,
        average_purchase=total / count if count > 0 else 0,
        target_amount=target,
        achievement_rate=achievement_rate(total, target),
        period_label=period_label(period),
        comparison_label=comparison_label(period),
        comparison_rate=comparison_rate,
        filtered_sales=rows,
    )


def calculate_sales_summary(
    sales: Iterable[Any],
    reference_month: date | datetime,
    period: Period | str,
    targets: SalesTargets,
    *,
    now: date | datetime,
    week_start: int = SUNDAY,
) -> SalesSummary:
    """Filter ``sales`` to the period window and summarize them.

    ``comparison_rate`` compares the window's total with the immediately
    preceding window of the same kind taken from the same ``sales`` snapshot.
    """

    rows = list(sales)
    filtered = filter_by_period(rows, reference_month, period, now=now, week_start=week_start)
    previous = filter_in_window(
        rows,
        previous_period_window(reference_month, period, now=now, week_start=week_start),
    )
    rate = period_over_period_rate(total_amount(filtered), total_amount(previous))
    return summarize_sales(filtered, period, targets, comparison_rate=rate)


def product_totals(sales: Iterable[Any]) -> dict[str, int]:
    """Sum sale amounts per product name, in first-seen order."""

    totals: dict[str, int] = {}
    for sale in sales:
        name = record_value(sale, "product_name")
        totals[name] = totals.get(name, 0) + (record_value(sale, "amount", 0) or 0)
    return totals


def top_selling_product(sales: Iterable[Any]) -> str:
    """Return the product with the highest summed amount.

    Ties go to the product seen first; ``なし`` when nothing sold.
    """

    top_name, top_amount = NO_TOP_PRODUCT, 0
    for name, amount in product_totals(sales).items():
        if amount > top_amount:
            top_name, top_amount = name, amount
    return top_name
