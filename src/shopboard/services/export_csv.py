"""CSV export helpers for sales and purchases."""

from __future__ import annotations

import csv
import io
from datetime import date, datetime
from pathlib import Path
from typing import Iterable, Sequence

from ..constants.labels import CSV_DATE_FORMAT, PURCHASES_CSV_HEADERS, SALES_CSV_HEADERS
from ..logging_config import get_logger
from ..models.purchase import Purchase
from ..models.sale import Sale
from .periods import filter_by_month

logger = get_logger(__name__)

# UTF-8 with BOM so spreadsheet software picks the right encoding.
CSV_ENCODING = "utf-8-sig"


def _serialize_value(value) -> str:
    if value is None:
        return ""
    if isinstance(value, (date, datetime)):
        return value.strftime(CSV_DATE_FORMAT)
    return str(value)


def export_filename(kind: str, reference_month: date | datetime) -> str:
    """Return e.g. ``sales_2024_03.csv``."""

    return f"{kind}_{reference_month.year:04d}_{reference_month.month:02d}.csv"


def _render(headers: Sequence[str], rows: Iterable[Sequence[object]]) -> str:
    buffer = io.StringIO(newline="")
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(headers)
    for row in rows:
        writer.writerow([_serialize_value(value) for value in row])
    return buffer.getvalue()


def sales_csv_text(sales: Iterable[Sale], reference_month: date | datetime) -> str:
    """Render the sales of ``reference_month`` as CSV text.

    Raises ``ValueError`` when the month has nothing to export.
    """

    rows = filter_by_month(sales, reference_month)
    if not rows:
        raise ValueError("エクスポートするデータがありません。")
    return _render(
        SALES_CSV_HEADERS,
        (
            [
                sale.date,
                sale.product_name,
                sale.category,
                sale.quantity,
                sale.amount,
                sale.salesperson_name,
            ]
            for sale in rows
        ),
    )


def purchases_csv_text(purchases: Iterable[Purchase], reference_month: date | datetime) -> str:
    """Render the purchases of ``reference_month`` as CSV text."""

    rows = filter_by_month(purchases, reference_month)
    if not rows:
        raise ValueError("エクスポートするデータがありません。")
    return _render(
        PURCHASES_CSV_HEADERS,
        ([purchase.date, purchase.product_name, purchase.amount] for purchase in rows),
    )


def encode_csv(text: str) -> bytes:
    """Encode CSV text as UTF-8 with a leading BOM."""

    return text.encode(CSV_ENCODING)


def _write(text: str, output_path: Path) -> Path:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_bytes(encode_csv(text))
    return output_path


def export_sales_csv(
    *, sales: Iterable[Sale], reference_month: date | datetime, output_dir: Path
) -> Path:
    """Write ``sales_YYYY_MM.csv`` into ``output_dir`` and return its path."""

    path = _write(
        sales_csv_text(sales, reference_month),
        output_dir / export_filename("sales", reference_month),
    )
    logger.info("Sales exported", extra={"path": str(path)})
    return path


def export_purchases_csv(
    *, purchases: Iterable[Purchase], reference_month: date | datetime, output_dir: Path
) -> Path:
    """Write ``purchases_YYYY_MM.csv`` into ``output_dir`` and return its path."""

    path = _write(
        purchases_csv_text(purchases, reference_month),
        output_dir / export_filename("purchases", reference_month),
    )
    logger.info("Purchases exported", extra={"path": str(path)})
    return path
