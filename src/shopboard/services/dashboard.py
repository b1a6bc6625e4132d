"""Data loader behind the dashboard and report tabs."""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date, datetime
from typing import Any, Sequence

from ..constants.labels import OVERVIEW_COMPARISON_LABEL, OVERVIEW_LABEL_SUFFIX
from .periods import SUNDAY, Period, filter_by_period, month_label, report_caption
from .profit_calculator import ProfitSummary, calculate_profit_summary
from .sales_calculator import (
    SalesSummary,
    SalesTargets,
    calculate_sales_summary,
    top_selling_product,
)

OVERVIEW_TAB = "overview"
DASHBOARD_TABS = (OVERVIEW_TAB, *(p.value for p in Period))


def resolve_tab_period(tab: str) -> Period:
    """Map a dashboard tab to its engine period; the overview tab is monthly."""

    if tab == OVERVIEW_TAB:
        return Period.MONTHLY
    return Period.parse(tab)


@dataclass(slots=True)
class DashboardData:
    """Everything one dashboard tab shows."""

    tab: str
    period: Period
    reference_month: datetime
    sales: SalesSummary | None
    profit: ProfitSummary | None
    top_product: str

    def as_dict(self) -> dict[str, Any]:
        return {
            "tab": self.tab,
            "period": self.period.value,
            "month": self.reference_month.strftime("%Y-%m"),
            "sales": self.sales.as_dict() if self.sales else None,
            "profit": self.profit.as_dict() if self.profit else None,
            "top_product": self.top_product,
        }


def load_dashboard(
    *,
    sales: Sequence[Any],
    purchases: Sequence[Any],
    targets: SalesTargets,
    reference_month: date | datetime,
    tab: str,
    now: date | datetime,
    week_start: int = SUNDAY,
) -> DashboardData:
    """Compute the sales card, profit grid and top product for a tab.

    The sales card is ``None`` while no sales exist at all, and the profit grid
    is ``None`` unless both sales and purchases exist.
    """

    period = resolve_tab_period(tab)
    reference = datetime(reference_month.year, reference_month.month, 1)

    summary: SalesSummary | None = None
    if sales:
        summary = calculate_sales_summary(
            sales, reference, period, targets, now=now, week_start=week_start
        )
        if tab == OVERVIEW_TAB:
            summary = replace(
                summary,
                period_label=month_label(reference) + OVERVIEW_LABEL_SUFFIX,
                comparison_label=OVERVIEW_COMPARISON_LABEL,
            )

    profit: ProfitSummary | None = None
    if sales and purchases:
        profit = calculate_profit_summary(
            sales, purchases, reference, period, now=now, week_start=week_start
        )

    filtered = (
        summary.filtered_sales
        if summary is not None
        else filter_by_period(sales, reference, period, now=now, week_start=week_start)
    )

    return DashboardData(
        tab=tab,
        period=period,
        reference_month=reference,
        sales=summary,
        profit=profit,
        top_product=top_selling_product(filtered),
    )


def load_report_summary(
    *,
    sales: Sequence[Any],
    purchases: Sequence[Any],
    targets: SalesTargets,
    reference_month: date | datetime,
    tab: str,
    now: date | datetime,
    week_start: int = SUNDAY,
) -> DashboardData:
    """Like :func:`load_dashboard`, with the sales card titled by its dates."""

    data = load_dashboard(
        sales=sales,
        purchases=purchases,
        targets=targets,
        reference_month=reference_month,
        tab=tab,
        now=now,
        week_start=week_start,
    )
    if data.sales is not None:
        data.sales = replace(
            data.sales, period_label=report_caption(data.reference_month, data.period, now=now)
        )
    return data
