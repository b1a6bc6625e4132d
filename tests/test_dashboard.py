"""Tests for the dashboard data loader."""

from __future__ import annotations

from datetime import datetime

import pytest

from shopboard.services.dashboard import load_dashboard, load_report_summary, resolve_tab_period
from shopboard.services.periods import InvalidPeriodError, Period
from shopboard.services.sales_calculator import SalesTargets

NOW = datetime(2024, 3, 15, 15, 0)
MARCH_2024 = datetime(2024, 3, 1)


def _sale(amount, moment, product="CBDオイル"):
    return {"date": moment, "amount": amount, "product_name": product}


def _load(sales, purchases=(), tab="overview", month=MARCH_2024):
    return load_dashboard(
        sales=list(sales),
        purchases=list(purchases),
        targets=SalesTargets(),
        reference_month=month,
        tab=tab,
        now=NOW,
    )


def test_overview_tab_is_monthly():
    assert resolve_tab_period("overview") is Period.MONTHLY
    assert resolve_tab_period("weekly") is Period.WEEKLY


def test_unknown_tab_is_rejected():
    with pytest.raises(InvalidPeriodError):
        resolve_tab_period("reports")


def test_without_sales_only_the_top_product_sentinel_is_shown():
    data = _load([], [{"date": NOW, "amount": 100}])

    assert data.sales is None
    assert data.profit is None
    assert data.top_product == "なし"


def test_overview_uses_month_caption():
    sales = [
        _sale(1000, datetime(2024, 3, 5), "CBDグミ"),
        _sale(2500, datetime(2024, 3, 6), "CBNオイル"),
        _sale(9000, datetime(2024, 2, 6), "CBGバーム"),
    ]

    data = _load(sales)

    assert data.period is Period.MONTHLY
    assert data.sales.period_label == "2024年3月の売上"
    assert data.sales.comparison_label == "前月比"
    assert data.sales.total_amount == 3500
    assert data.top_product == "CBNオイル"


def test_period_tab_keeps_engine_labels():
    data = _load([_sale(1000, datetime(2024, 3, 15, 10))], tab="daily")

    assert data.sales.period_label == "日次売上"
    assert data.sales.comparison_label == "前日比"
    assert data.sales.total_amount == 1000


def test_profit_requires_sales_and_purchases():
    sales = [_sale(1000, datetime(2024, 3, 5))]

    assert _load(sales).profit is None

    data = _load(sales, [{"date": datetime(2024, 3, 7), "amount": 400}])

    assert data.profit.profit == 600


def test_top_product_follows_the_period_window():
    sales = [
        _sale(5000, datetime(2024, 3, 1), "月初の商品"),
        _sale(100, datetime(2024, 3, 15, 9), "今日の商品"),
    ]

    assert _load(sales, tab="daily").top_product == "今日の商品"
    assert _load(sales, tab="monthly").top_product == "月初の商品"


def test_as_dict():
    data = _load([_sale(1000, datetime(2024, 3, 5))])

    payload = data.as_dict()

    assert payload["tab"] == "overview"
    assert payload["period"] == "monthly"
    assert payload["month"] == "2024-03"
    assert payload["sales"]["total_amount"] == 1000
    assert payload["profit"] is None


@pytest.mark.parametrize(
    "tab, month, caption",
    [
        ("daily", MARCH_2024, "本日の売上"),
        ("daily", datetime(2024, 2, 1), "2月29日の売上"),
        ("weekly", MARCH_2024, "2024年3月の週次売上"),
        ("monthly", MARCH_2024, "2024年3月の売上"),
        ("yearly", MARCH_2024, "2024年の売上"),
    ],
)
def test_report_summary_is_titled_by_its_dates(tab, month, caption):
    data = load_report_summary(
        sales=[_sale(1000, datetime(2024, 3, 15, 9))],
        purchases=[],
        targets=SalesTargets(),
        reference_month=month,
        tab=tab,
        now=NOW,
    )

    assert data.sales.period_label == caption


def test_report_summary_without_sales():
    data = load_report_summary(
        sales=[], purchases=[], targets=SalesTargets(), reference_month=MARCH_2024, tab="daily", now=NOW
    )

    assert data.sales is None
