"""CSV import tests for sales and purchases."""

from __future__ import annotations

from datetime import datetime

import pytest

from shopboard.services.import_csv import (
    CsvImportError,
    ImportResult,
    import_purchases,
    import_sales,
    parse_amount,
    parse_purchases_csv,
    parse_sales_csv,
)

MARCH_2024 = datetime(2024, 3, 1)

SALES_CSV = (
    "日付,製品名,カテゴリ,数量,金額,販売者\n"
    "2024/03/05,CBDオイル,CBD,2,17600,佐藤\n"
    "2024/03/06,CBDグミ,,,3300,不明\n"
    "2024/02/28,CBNオイル,CBN,1,9900,鈴木\n"
    "2024/03/07,CBGバーム,CBG,1,abc,佐藤\n"
)


def _bom(text: str) -> bytes:
    return text.encode("utf-8-sig")


def test_parse_sales_filters_to_reference_month():
    result = parse_sales_csv(_bom(SALES_CSV), MARCH_2024, salesperson_lookup={"佐藤": 7}.get)

    assert result.added == 2
    assert result.skipped == 1
    assert result.error_count == 1
    assert result.errors[0].startswith("5行目")

    oil, gummy = result.records
    assert (oil.product_name, oil.quantity, oil.amount, oil.salesperson_id) == ("CBDオイル", 2, 17600, 7)
    assert oil.date == datetime(2024, 3, 5)
    # Optional columns fall back to defaults.
    assert (gummy.category, gummy.quantity, gummy.salesperson_id) == ("その他", 1, None)


def test_parse_sales_without_bom_or_optional_columns():
    text = "日付,製品名,金額\n2024/03/01,ヘンプティー,1650\n"

    result = parse_sales_csv(text.encode("utf-8"), MARCH_2024)

    assert result.added == 1
    assert result.records[0].amount == 1650


def test_parse_purchases():
    text = "日付,製品名,金額\n2024/03/01,CBDオイル,\"44,000\"\n2024/03/02,,100\n"

    result = parse_purchases_csv(_bom(text), MARCH_2024)

    assert result.added == 1
    assert result.records[0].amount == 44000
    assert result.errors == ["3行目: 製品名がありません。"]


def test_missing_required_headers():
    with pytest.raises(CsvImportError, match="金額"):
        parse_purchases_csv(_bom("日付,製品名\n2024/03/01,A\n"), MARCH_2024)


@pytest.mark.parametrize("payload", [b"", _bom("日付,製品名,金額\n")])
def test_empty_file_is_rejected(payload):
    with pytest.raises(CsvImportError):
        parse_sales_csv(payload, MARCH_2024)


def test_bad_date_is_counted_as_error():
    result = parse_purchases_csv(_bom("日付,製品名,金額\n2024-03-01,A,100\n"), MARCH_2024)

    assert result.added == 0
    assert result.error_count == 1


@pytest.mark.parametrize("raw, expected", [("1000", 1000), ("¥1,000", 1000), (" 50 ", 50)])
def test_parse_amount(raw, expected):
    assert parse_amount(raw) == expected


@pytest.mark.parametrize("raw", ["-1", "1.5", ""])
def test_parse_amount_rejects(raw):
    with pytest.raises(ValueError):
        parse_amount(raw)


def test_import_result_messages():
    assert ImportResult().message() == "選択した月に該当するデータがありませんでした。"
    assert ImportResult(records=[1, 2]).message() == "2件のデータをインポートしました。"
    assert (
        ImportResult(records=[1], errors=["x"]).message()
        == "1件のデータをインポートしました。1件のエラーがありました。"
    )


def test_import_sales_persists_and_resolves_salespersons(
    sale_repo, salesperson_repo, salesperson_factory
):
    person = salesperson_factory("佐藤")

    result = import_sales(
        _bom(SALES_CSV), MARCH_2024, repository=sale_repo, salespersons=salesperson_repo
    )

    assert result.added == 2
    stored = sale_repo.list_for_month(2024, 3)
    assert len(stored) == 2
    assert {sale.salesperson_id for sale in stored} == {person.id, None}
    assert all(sale.id is not None for sale in result.records)


def test_import_purchases_from_path(tmp_path, purchase_repo):
    path = tmp_path / "purchases.csv"
    path.write_bytes(_bom("日付,製品名,金額\n2024/03/09,CBDオイル,5000\n2024/04/01,X,1\n"))

    result = import_purchases(path, MARCH_2024, repository=purchase_repo)

    assert (result.added, result.skipped) == (1, 1)
    assert purchase_repo.list_for_month(2024, 3)[0].amount == 5000
