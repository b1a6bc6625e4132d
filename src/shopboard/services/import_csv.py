"""CSV ingestion for sales and purchases."""

from __future__ import annotations

import io
from dataclasses import dataclass, field
from datetime import date, datetime
from pathlib import Path
from typing import IO, Callable, Iterable, Mapping, Optional, Union

import pandas as pd

from ..constants.labels import (
    CSV_AMOUNT,
    CSV_CATEGORY,
    CSV_DATE,
    CSV_DATE_FORMAT,
    CSV_PRODUCT,
    CSV_QUANTITY,
    CSV_SALESPERSON,
    REQUIRED_IMPORT_HEADERS,
)
from ..domain.repositories import PurchaseRepository, SaleRepository, SalespersonRepository
from ..logging_config import get_logger
from ..models.purchase import Purchase
from ..models.sale import UNKNOWN_SALESPERSON, Sale

CsvSource = Union[Path, bytes, IO[bytes], IO[str]]
SalespersonLookup = Callable[[str], Optional[int]]

DEFAULT_CATEGORY = "その他"

logger = get_logger(__name__)


class CsvImportError(ValueError):
    """The file as a whole cannot be imported."""


@dataclass(slots=True)
class ImportResult:
    """Outcome of parsing (and optionally saving) one CSV file."""

    records: list = field(default_factory=list)
    skipped: int = 0
    errors: list[str] = field(default_factory=list)

    @property
    def added(self) -> int:
        return len(self.records)

    @property
    def error_count(self) -> int:
        return len(self.errors)

    def message(self) -> str:
        """Human readable summary shown after an import."""

        if not self.added:
            return "選択した月に該当するデータがありませんでした。"
        text = f"{self.added}件のデータをインポートしました。"
        if self.errors:
            text += f"{self.error_count}件のエラーがありました。"
        return text


def read_csv_frame(source: CsvSource) -> pd.DataFrame:
    """Load CSV text (UTF-8, optional BOM) with every cell as a string."""

    if isinstance(source, bytes):
        source = io.BytesIO(source)
    try:
        frame = pd.read_csv(
            source,
            encoding="utf-8-sig",
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
        )
    except pd.errors.EmptyDataError as exc:
        raise CsvImportError("インポートするデータがありません。") from exc
    except (pd.errors.ParserError, UnicodeDecodeError) as exc:
        raise CsvImportError(f"CSVの解析に失敗しました: {exc}") from exc

    frame.columns = [str(column).strip().lstrip("\ufeff") for column in frame.columns]
    missing = [header for header in REQUIRED_IMPORT_HEADERS if header not in frame.columns]
    if missing:
        raise CsvImportError(f"必要なヘッダーがありません: {', '.join(missing)}")
    if frame.empty:
        raise CsvImportError("インポートするデータがありません。")
    return frame


def _rows(frame: pd.DataFrame) -> Iterable[tuple[int, dict[str, str]]]:
    # Line 1 is the header row.
    for offset, row in enumerate(frame.to_dict(orient="records")):
        yield offset + 2, {key: (value or "").strip() for key, value in row.items()}


def parse_date(raw: str) -> datetime:
    try:
        return datetime.strptime(raw.strip(), CSV_DATE_FORMAT)
    except ValueError as exc:
        raise ValueError(f"無効な日付形式です: {raw}") from exc


def parse_amount(raw: str) -> int:
    cleaned = raw.replace(",", "").replace("¥", "").strip()
    try:
        amount = int(cleaned)
    except ValueError as exc:
        raise ValueError(f"金額が無効です: {raw}") from exc
    if amount < 0:
        raise ValueError(f"金額が無効です: {raw}")
    return amount


def _parse_quantity(raw: str) -> int:
    if not raw:
        return 1
    try:
        quantity = int(raw)
    except ValueError as exc:
        raise ValueError(f"数量が無効です: {raw}") from exc
    if quantity <= 0:
        raise ValueError(f"数量が無効です: {raw}")
    return quantity


def _in_month(value: datetime, reference_month: date | datetime) -> bool:
    return (value.year, value.month) == (reference_month.year, reference_month.month)


def _parse_rows(
    frame: pd.DataFrame,
    reference_month: date | datetime,
    build: Callable[[datetime, Mapping[str, str]], object],
) -> ImportResult:
    result = ImportResult()
    for line_no, row in _rows(frame):
        try:
            occurred = parse_date(row.get(CSV_DATE, ""))
            if not _in_month(occurred, reference_month):
                result.skipped += 1
                continue
            result.records.append(build(occurred, row))
        except ValueError as exc:
            result.errors.append(f"{line_no}行目: {exc}")
    return result


def parse_purchases_csv(source: CsvSource, reference_month: date | datetime) -> ImportResult:
    """Parse purchase rows of the reference month into unsaved ``Purchase`` rows."""

    frame = read_csv_frame(source)

    def build(occurred: datetime, row: Mapping[str, str]) -> Purchase:
        product = row.get(CSV_PRODUCT, "")
        if not product:
            raise ValueError("製品名がありません。")
        return Purchase(date=occurred, product_name=product, amount=parse_amount(row[CSV_AMOUNT]))

    return _parse_rows(frame, reference_month, build)


def parse_sales_csv(
    source: CsvSource,
    reference_month: date | datetime,
    *,
    salesperson_lookup: SalespersonLookup | None = None,
) -> ImportResult:
    """Parse sale rows of the reference month into unsaved ``Sale`` rows.

    ``カテゴリ``, ``数量`` and ``販売者`` columns are optional; an unknown
    salesperson name leaves the sale unassigned.
    """

    frame = read_csv_frame(source)

    def build(occurred: datetime, row: Mapping[str, str]) -> Sale:
        product = row.get(CSV_PRODUCT, "")
        if not product:
            raise ValueError("製品名がありません。")
        salesperson_id = None
        name = row.get(CSV_SALESPERSON, "")
        if name and name != UNKNOWN_SALESPERSON and salesperson_lookup is not None:
            salesperson_id = salesperson_lookup(name)
        return Sale(
            date=occurred,
            product_name=product,
            category=row.get(CSV_CATEGORY, "") or DEFAULT_CATEGORY,
            quantity=_parse_quantity(row.get(CSV_QUANTITY, "")),
            amount=parse_amount(row[CSV_AMOUNT]),
            salesperson_id=salesperson_id,
        )

    return _parse_rows(frame, reference_month, build)


def import_purchases(
    source: CsvSource, reference_month: date | datetime, *, repository: PurchaseRepository
) -> ImportResult:
    """Parse and persist purchases; ``records`` holds the saved rows."""

    result = parse_purchases_csv(source, reference_month)
    result.records = [repository.create(purchase) for purchase in result.records]
    logger.info(
        "Purchases imported",
        extra={"added": result.added, "skipped": result.skipped, "errors": result.error_count},
    )
    return result


def import_sales(
    source: CsvSource,
    reference_month: date | datetime,
    *,
    repository: SaleRepository,
    salespersons: SalespersonRepository | None = None,
) -> ImportResult:
    """Parse and persist sales, resolving salesperson names when possible."""

    lookup: SalespersonLookup | None = None
    if salespersons is not None:
        known = {person.name: person.id for person in salespersons.list_all()}
        lookup = known.get

    result = parse_sales_csv(source, reference_month, salesperson_lookup=lookup)
    result.records = [repository.create(sale) for sale in result.records]
    logger.info(
        "Sales imported",
        extra={"added": result.added, "skipped": result.skipped, "errors": result.error_count},
    )
    return result
