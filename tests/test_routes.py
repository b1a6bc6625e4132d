"""Blueprint tests through the Flask test client."""

from __future__ import annotations

import io
from datetime import datetime

from shopboard.models import Purchase, Sale


def _add_sale(ctx, amount, moment, product="CBDオイル", category="CBD"):
    return ctx.sale_repo.create(
        Sale(date=moment, product_name=product, category=category, amount=amount)
    )


def test_dashboard_without_data(client):
    response = client.get("/dashboard/")

    assert response.status_code == 200
    payload = response.get_json()
    assert payload["month"] == "2024-03"
    assert payload["tab"] == "overview"
    assert payload["sales"] is None
    assert payload["profit"] is None
    assert payload["top_product"] == "なし"


def test_dashboard_overview(client, ctx):
    _add_sale(ctx, 1000, datetime(2024, 3, 5))
    _add_sale(ctx, 2000, datetime(2024, 3, 20), product="CBDグミ")
    _add_sale(ctx, 5000, datetime(2024, 4, 1))
    ctx.purchase_repo.create(Purchase(date=datetime(2024, 3, 2), product_name="CBDオイル", amount=1200))

    payload = client.get("/dashboard/?month=2024-03").get_json()

    assert payload["sales"]["total_amount"] == 3000
    assert payload["sales"]["sales_count"] == 2
    assert payload["sales"]["period_label"] == "2024年3月の売上"
    assert payload["sales"]["comparison_rate"] is None
    assert payload["profit"]["profit"] == 1800
    assert payload["top_product"] == "CBDグミ"


def test_dashboard_zero_target_is_sent_as_null(client, ctx):
    _add_sale(ctx, 500, datetime(2024, 3, 15, 9))
    client.put("/settings/targets", json={"daily": 0})

    payload = client.get("/dashboard/?tab=daily").get_json()

    assert payload["sales"]["target_amount"] == 0
    assert payload["sales"]["achievement_rate"] is None


def test_dashboard_rejects_bad_tab_and_month(client):
    assert client.get("/dashboard/?tab=hourly").status_code == 400
    assert client.get("/dashboard/?month=March").status_code == 400


def test_dashboard_reports(client, ctx):
    _add_sale(ctx, 1000, datetime(2024, 3, 5), category="CBD")
    _add_sale(ctx, 3000, datetime(2024, 3, 6), product="CBNオイル", category="CBN")

    payload = client.get("/dashboard/reports?month=2024-03&months=12").get_json()

    assert payload["summary"]["sales"]["period_label"] == "2024年3月の売上"
    assert len(payload["daily"]) == 31
    assert payload["daily"][4] == {"label": "3/5", "total": 1000}
    assert payload["categories"][0]["name"] == "CBN"
    assert payload["products"][0] == {"name": "CBNオイル", "total": 3000}
    assert len(payload["year_over_year"]) == 12
    assert payload["has_year_over_year"] is True


def test_dashboard_chart_png(client, ctx):
    _add_sale(ctx, 1000, datetime(2024, 3, 5))

    response = client.get("/dashboard/charts/daily.png?month=2024-03")

    assert response.status_code == 200
    assert response.mimetype == "image/png"
    assert response.data.startswith(b"\x89PNG")
    assert client.get("/dashboard/charts/pie.png").status_code == 400


def test_recent_sales(client, ctx):
    for day in range(1, 8):
        _add_sale(ctx, day * 100, datetime(2024, 3, day))

    payload = client.get("/sales/recent").get_json()

    assert [sale["amount"] for sale in payload["sales"]] == [700, 600, 500, 400, 300]


def test_sale_lifecycle(client, ctx):
    person = client.post("/salespersons/", json={"name": "佐藤"}).get_json()

    created = client.post(
        "/sales/",
        json={
            "date": "2024-03-10",
            "product_name": "CBDオイル",
            "category": "CBD",
            "quantity": 2,
            "amount": 17600,
            "salesperson_id": person["id"],
        },
    )
    assert created.status_code == 201
    sale = created.get_json()
    assert sale["salesperson_name"] == "佐藤"

    listing = client.get("/sales/?month=2024-03").get_json()
    assert listing["count"] == 1
    assert listing["total_amount"] == 17600

    updated = client.put(
        f"/sales/{sale['id']}",
        json={"date": "2024/03/11", "product_name": "CBDオイル", "amount": 8800, "category": "CBD"},
    )
    assert updated.status_code == 200
    assert updated.get_json()["amount"] == 8800
    assert updated.get_json()["salesperson_name"] == "不明"

    assert client.delete(f"/sales/{sale['id']}").status_code == 204
    assert client.delete(f"/sales/{sale['id']}").status_code == 404


def test_sale_validation_errors(client):
    response = client.post("/sales/", json={"product_name": "", "amount": -5})

    assert response.status_code == 400
    errors = response.get_json()["errors"]
    assert {"date", "product_name", "amount"} <= errors.keys()


def test_sale_with_unknown_salesperson_is_rejected(client):
    response = client.post(
        "/sales/",
        json={
            "date": "2024-03-10",
            "product_name": "A",
            "category": "CBD",
            "amount": 1,
            "salesperson_id": 999,
        },
    )

    assert response.status_code == 400
    assert "salesperson_id" in response.get_json()["errors"]


def test_sales_import_and_export(client):
    csv_bytes = "日付,製品名,金額\n2024/03/01,CBDグミ,3300\n2024/04/01,X,1\n".encode("utf-8-sig")

    imported = client.post(
        "/sales/import?month=2024-03",
        data={"file": (io.BytesIO(csv_bytes), "sales.csv")},
        content_type="multipart/form-data",
    ).get_json()

    assert imported["added"] == 1
    assert imported["skipped"] == 1
    assert imported["message"] == "1件のデータをインポートしました。"

    exported = client.get("/sales/export?month=2024-03")
    assert exported.status_code == 200
    assert "sales_2024_03.csv" in exported.headers["Content-Disposition"]
    assert exported.data.startswith(b"\xef\xbb\xbf")
    assert "CBDグミ" in exported.data.decode("utf-8-sig")

    assert client.get("/sales/export?month=2024-05").status_code == 404


def test_import_requires_file_and_headers(client):
    assert client.post("/sales/import").status_code == 400

    bad = client.post(
        "/purchases/import?month=2024-03",
        data={"file": (io.BytesIO("日付,製品名\n".encode()), "p.csv")},
        content_type="multipart/form-data",
    )
    assert bad.status_code == 400
    assert "必要なヘッダーがありません" in bad.get_json()["error"]


def test_purchase_routes(client):
    created = client.post(
        "/purchases/", json={"date": "2024-03-02", "product_name": "CBDオイル", "amount": 4000}
    )
    assert created.status_code == 201

    listing = client.get("/purchases/?month=2024-03").get_json()
    assert listing["total_amount"] == 4000

    exported = client.get("/purchases/export?month=2024-03")
    assert "purchases_2024_03.csv" in exported.headers["Content-Disposition"]

    assert client.delete(f"/purchases/{created.get_json()['id']}").status_code == 204


def test_product_routes(client):
    created = client.post(
        "/products/", json={"name": "CBGバーム", "category": "CBG", "price": 4400}
    ).get_json()
    assert created["stock"] == "in-stock"

    updated = client.put(
        f"/products/{created['id']}",
        json={"name": "CBGバーム", "category": "CBG", "price": 4000, "stock": "low-stock"},
    ).get_json()
    assert (updated["price"], updated["stock"]) == (4000, "low-stock")

    bad = client.post("/products/", json={"name": "X", "category": "CBD", "price": 1, "stock": "lots"})
    assert bad.status_code == 400

    assert len(client.get("/products/").get_json()["products"]) == 1
    assert client.delete(f"/products/{created['id']}").status_code == 204
    assert client.get(f"/products/{created['id']}").status_code == 404


def test_salesperson_routes(client):
    client.post("/salespersons/", json={"name": "佐藤"})
    retired = client.post("/salespersons/", json={"name": "鈴木", "is_active": False}).get_json()

    assert retired["is_active"] is False
    active = client.get("/salespersons/?active=true").get_json()["salespersons"]
    assert [person["name"] for person in active] == ["佐藤"]

    bad_email = client.post("/salespersons/", json={"name": "高橋", "email": "nope"})
    assert bad_email.status_code == 400

    assert client.delete(f"/salespersons/{retired['id']}").status_code == 204


def test_targets_routes(client):
    assert client.get("/settings/targets").get_json()["monthly"] == 700000

    updated = client.put("/settings/targets", json={"monthly": 900000})
    assert updated.status_code == 200
    assert updated.get_json()["monthly"] == 900000
    assert updated.get_json()["daily"] == 30000

    assert client.put("/settings/targets", json={"hourly": 1}).status_code == 400
    assert client.put("/settings/targets", json={"daily": -1}).status_code == 400
    assert client.put("/settings/targets", json={}).status_code == 400


def test_dashboard_reports_daily_caption(client, ctx):
    _add_sale(ctx, 1000, datetime(2024, 2, 29, 12))

    payload = client.get("/dashboard/reports?month=2024-02&tab=daily").get_json()

    assert payload["summary"]["sales"]["period_label"] == "2月29日の売上"
    assert payload["summary"]["sales"]["total_amount"] == 1000
    assert client.get("/dashboard/reports?tab=hourly").status_code == 400
