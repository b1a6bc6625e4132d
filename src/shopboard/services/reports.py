"""Report series and matplotlib charts for the dashboard."""

from __future__ import annotations

import calendar
import io
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Iterable

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt  # noqa: E402
from matplotlib.figure import Figure  # noqa: E402

from ..constants.labels import LAST_YEAR_LABEL, PRODUCT_NAME_MAX_LENGTH, THIS_YEAR_LABEL
from .periods import as_local_datetime, filter_by_month, record_value
from .sales_calculator import product_totals


@dataclass(frozen=True, slots=True)
class SeriesPoint:
    label: str
    total: int


@dataclass(frozen=True, slots=True)
class CategoryShare:
    name: str
    value: int
    percentage: int


@dataclass(frozen=True, slots=True)
class YearComparison:
    month: int
    label: str
    this_year: int
    last_year: int


def truncate_product_name(name: str, max_length: int = PRODUCT_NAME_MAX_LENGTH) -> str:
    """Shorten long product names for chart labels."""

    if len(name) <= max_length:
        return name
    return name[:max_length] + "..."


def daily_sales_series(sales: Iterable[Any], month: date | datetime) -> list[SeriesPoint]:
    """Return one zero-filled point per calendar day of ``month`` (``M/D`` labels)."""

    days_in_month = calendar.monthrange(month.year, month.month)[1]
    totals = [0] * days_in_month
    for sale in filter_by_month(sales, month):
        moment = as_local_datetime(record_value(sale, "date"))
        totals[moment.day - 1] += record_value(sale, "amount", 0) or 0
    return [
        SeriesPoint(label=f"{month.month}/{day}", total=totals[day - 1])
        for day in range(1, days_in_month + 1)
    ]


def category_breakdown(sales: Iterable[Any]) -> list[CategoryShare]:
    """Sales totals per category with rounded percentages, largest first."""

    totals: dict[str, int] = {}
    for sale in sales:
        category = record_value(sale, "category") or ""
        totals[category] = totals.get(category, 0) + (record_value(sale, "amount", 0) or 0)

    grand_total = sum(totals.values())
    shares = [
        CategoryShare(
            name=name,
            value=value,
            percentage=round(value / grand_total * 100) if grand_total > 0 else 0,
        )
        for name, value in totals.items()
    ]
    shares.sort(key=lambda share: share.value, reverse=True)
    return shares


def year_over_year(
    sales: Iterable[Any], *, today: date | datetime, months: int = 3
) -> list[YearComparison]:
    """This year vs last year for the last ``months`` months, in month order.

    ``months`` is 3 for the monthly view and 12 for the yearly view.
    """

    if not 1 <= months <= 12:
        raise ValueError("months must be between 1 and 12")

    wanted: list[int] = []
    for offset in range(months):
        wanted.append((today.month - offset - 1) % 12 + 1)

    buckets = {month: [0, 0] for month in wanted}
    for sale in sales:
        moment = as_local_datetime(record_value(sale, "date"))
        if moment.month not in buckets:
            continue
        amount = record_value(sale, "amount", 0) or 0
        if moment.year == today.year:
            buckets[moment.month][0] += amount
        elif moment.year == today.year - 1:
            buckets[moment.month][1] += amount

    return [
        YearComparison(month=month, label=f"{month}月", this_year=values[0], last_year=values[1])
        for month, values in sorted(buckets.items())
    ]


def has_comparison_data(rows: Iterable[YearComparison]) -> bool:
    return any(row.this_year or row.last_year for row in rows)


def _empty_figure(message: str, *, figsize=(8, 5)) -> Figure:
    fig, ax = plt.subplots(figsize=figsize)
    ax.text(0.5, 0.5, message, ha="center", va="center", fontsize=14, color="#666")
    ax.axis("off")
    return fig


def build_daily_sales_chart(points: list[SeriesPoint]) -> Figure:
    """Area chart of daily sales across a month."""

    if not any(point.total for point in points):
        return _empty_figure("No sales data")

    labels = [point.label for point in points]
    totals = [point.total for point in points]

    fig, ax = plt.subplots(figsize=(10, 4))
    ax.fill_between(range(len(totals)), totals, color="#16A34A", alpha=0.25)
    ax.plot(range(len(totals)), totals, color="#16A34A", linewidth=2)
    step = max(1, len(labels) // 10)
    ax.set_xticks(range(0, len(labels), step))
    ax.set_xticklabels(labels[::step])
    ax.yaxis.set_major_formatter(plt.FuncFormatter(lambda value, _pos: f"¥{value:,.0f}"))
    ax.grid(axis="y", linestyle="--", alpha=0.4)
    ax.set_title("Daily Sales", fontsize=14, fontweight="bold")
    plt.tight_layout()
    return fig


def build_category_chart(shares: list[CategoryShare]) -> Figure:
    """Donut chart of sales by product category."""

    if not shares:
        return _empty_figure("No sales data", figsize=(7, 5))

    sizes = [share.value for share in shares]
    grand_total = sum(sizes)
    cmap = plt.get_cmap("tab20c")
    colors = [cmap(i / max(len(sizes), 1)) for i in range(len(sizes))]

    fig, ax = plt.subplots(figsize=(9, 6))
    wedges, _texts, autotexts = ax.pie(
        sizes,
        labels=None,
        autopct=lambda pct: f"{pct:.0f}%" if pct >= 10 else "",
        wedgeprops=dict(width=0.45, edgecolor="white", linewidth=1.5),
        startangle=90,
        colors=colors,
        pctdistance=0.78,
    )
    for autotext in autotexts:
        autotext.set_fontsize(9)
        autotext.set_fontweight("bold")
        autotext.set_color("white")

    ax.text(0, 0.08, "Total Sales", ha="center", va="center", fontsize=11, color="#666")
    ax.text(0, -0.08, f"¥{grand_total:,.0f}", ha="center", va="center",
            fontsize=16, fontweight="bold", color="#1F2937")
    ax.legend(
        wedges,
        [f"{truncate_product_name(s.name)}: ¥{s.value:,.0f} ({s.percentage}%)" for s in shares],
        title="Categories",
        loc="center left",
        bbox_to_anchor=(1.02, 0.5),
        fontsize=9,
    )
    ax.axis("equal")
    plt.tight_layout()
    return fig


def build_product_chart(sales: Iterable[Any], *, limit: int = 10) -> Figure:
    """Horizontal bars of the best selling products."""

    ranked = sorted(product_totals(sales).items(), key=lambda item: item[1], reverse=True)[:limit]
    if not ranked:
        return _empty_figure("No sales data")

    names = [truncate_product_name(name) for name, _ in reversed(ranked)]
    totals = [total for _, total in reversed(ranked)]
    fig, ax = plt.subplots(figsize=(9, max(3, len(ranked) * 0.5)))
    ax.barh(names, totals, color="#2563EB")
    ax.xaxis.set_major_formatter(plt.FuncFormatter(lambda value, _pos: f"¥{value:,.0f}"))
    ax.set_title("Sales by Product", fontsize=14, fontweight="bold")
    plt.tight_layout()
    return fig


def build_year_over_year_chart(rows: list[YearComparison]) -> Figure:
    """Grouped bars comparing this year with last year per month."""

    if not has_comparison_data(rows):
        return _empty_figure("No sales data")

    positions = range(len(rows))
    width = 0.4
    fig, ax = plt.subplots(figsize=(10, 4))
    ax.bar([p - width / 2 for p in positions], [r.this_year for r in rows], width,
           label=THIS_YEAR_LABEL, color="#16A34A")
    ax.bar([p + width / 2 for p in positions], [r.last_year for r in rows], width,
           label=LAST_YEAR_LABEL, color="#9CA3AF")
    ax.set_xticks(list(positions))
    ax.set_xticklabels([f"{r.month}" for r in rows])
    ax.set_xlabel("Month")
    ax.yaxis.set_major_formatter(plt.FuncFormatter(lambda value, _pos: f"¥{value:,.0f}"))
    ax.legend()
    ax.set_title("Sales vs Previous Year", fontsize=14, fontweight="bold")
    plt.tight_layout()
    return fig


def render_png(fig: Figure, *, dpi: int = 120) -> bytes:
    """Render ``fig`` to PNG bytes and release it."""

    buffer = io.BytesIO()
    try:
        fig.savefig(buffer, format="png", bbox_inches="tight", dpi=dpi)
    finally:
        plt.close(fig)
    return buffer.getvalue()
