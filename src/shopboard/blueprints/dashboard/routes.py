"""Dashboard, report series and chart routes."""

from __future__ import annotations

from dataclasses import asdict
from datetime import datetime

from flask import Response, jsonify, request
from werkzeug.exceptions import BadRequest

from ...services import reports
from ...services.dashboard import (
    DASHBOARD_TABS,
    OVERVIEW_TAB,
    load_dashboard,
    load_report_summary,
)
from ...services.periods import filter_by_month
from ...services.sales_calculator import product_totals
from .._helpers import get_context, json_safe, reference_month_arg
from . import bp

_CHART_KINDS = ("daily", "categories", "products", "yoy")


def _tab_arg() -> str:
    tab = request.args.get("tab", OVERVIEW_TAB).strip().lower()
    if tab not in DASHBOARD_TABS:
        raise BadRequest(f"tab must be one of {', '.join(DASHBOARD_TABS)}")
    return tab


def _months_arg() -> int:
    raw = request.args.get("months", "3")
    try:
        months = int(raw)
    except ValueError as exc:
        raise BadRequest("months must be an integer") from exc
    if not 1 <= months <= 12:
        raise BadRequest("months must be between 1 and 12")
    return months


@bp.get("/")
def summary():
    """Sales card, profit grid and top product for one tab."""

    ctx = get_context()
    data = load_dashboard(
        sales=ctx.sale_repo.list_all(),
        purchases=ctx.purchase_repo.list_all(),
        targets=ctx.sales_targets(),
        reference_month=reference_month_arg(),
        tab=_tab_arg(),
        now=ctx.now(),
        week_start=ctx.config.WEEK_START,
    )
    return jsonify(json_safe(data.as_dict()))


@bp.get("/reports")
def report_series():
    """Captioned tab summary and chart data for the reports page."""

    ctx = get_context()
    month = reference_month_arg()
    all_sales = ctx.sale_repo.list_all()
    summary = load_report_summary(
        sales=all_sales,
        purchases=ctx.purchase_repo.list_all(),
        targets=ctx.sales_targets(),
        reference_month=month,
        tab=_tab_arg(),
        now=ctx.now(),
        week_start=ctx.config.WEEK_START,
    )
    month_sales = filter_by_month(all_sales, month)
    ranked = sorted(
        product_totals(month_sales).items(), key=lambda item: item[1], reverse=True
    )
    comparison = reports.year_over_year(all_sales, today=ctx.now(), months=_months_arg())
    return jsonify(
        {
            "month": month.strftime("%Y-%m"),
            "summary": json_safe(summary.as_dict()),
            "daily": [asdict(point) for point in reports.daily_sales_series(all_sales, month)],
            "categories": [asdict(share) for share in reports.category_breakdown(month_sales)],
            "products": [{"name": name, "total": total} for name, total in ranked],
            "year_over_year": [asdict(row) for row in comparison],
            "has_year_over_year": reports.has_comparison_data(comparison),
        }
    )


def _build_chart(kind: str, month: datetime):
    ctx = get_context()
    all_sales = ctx.sale_repo.list_all()
    if kind == "daily":
        return reports.build_daily_sales_chart(reports.daily_sales_series(all_sales, month))
    if kind == "categories":
        return reports.build_category_chart(
            reports.category_breakdown(filter_by_month(all_sales, month))
        )
    if kind == "products":
        return reports.build_product_chart(filter_by_month(all_sales, month))
    return reports.build_year_over_year_chart(
        reports.year_over_year(all_sales, today=ctx.now(), months=_months_arg())
    )


@bp.get("/charts/<kind>.png")
def chart(kind: str):
    if kind not in _CHART_KINDS:
        raise BadRequest(f"chart must be one of {', '.join(_CHART_KINDS)}")
    figure = _build_chart(kind, reference_month_arg())
    return Response(reports.render_png(figure), mimetype="image/png")
