"""Period windows and period-based record filtering.

Every function here is pure: callers pass the reference month, the period and
the current time explicitly, and receive fresh lists back. Records only need a
``date`` (attribute or mapping key); datetimes are treated as local wall-clock
time.
"""

from __future__ import annotations

import calendar
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from enum import Enum
from typing import Any, Iterable, TypeVar

from ..constants.labels import (
    COMPARISON_LABELS,
    OVERVIEW_LABEL_SUFFIX,
    PERIOD_LABELS,
    TODAY_SALES_LABEL,
    WEEKLY_LABEL_SUFFIX,
)

T = TypeVar("T")

SUNDAY = calendar.SUNDAY
MONDAY = calendar.MONDAY

_ONE_DAY = timedelta(days=1)
_ONE_WEEK = timedelta(days=7)


class InvalidPeriodError(ValueError):
    """Raised when a period value is not one of daily/weekly/monthly/yearly."""


class Period(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"

    @classmethod
    def parse(cls, value: Period | str) -> Period:
        """Return the matching period or raise :class:`InvalidPeriodError`."""

        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError as exc:
            raise InvalidPeriodError(f"Unknown period: {value!r}") from exc


@dataclass(frozen=True, slots=True)
class PeriodWindow:
    """Half-open ``[start, end)`` range of local datetimes."""

    start: datetime
    end: datetime

    @property
    def is_empty(self) -> bool:
        return self.end <= self.start

    def contains(self, moment: date | datetime) -> bool:
        value = as_local_datetime(moment)
        return self.start <= value < self.end


def as_local_datetime(value: date | datetime) -> datetime:
    """Normalize dates and aware datetimes to naive local datetimes."""

    if isinstance(value, datetime):
        if value.tzinfo is not None:
            return value.astimezone().replace(tzinfo=None)
        return value
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    raise TypeError(f"Expected date or datetime, got {type(value).__name__}")


def record_value(record: Any, name: str, default: Any = None) -> Any:
    """Read ``name`` from an ORM row, dataclass or plain mapping."""

    if isinstance(record, Mapping):
        return record.get(name, default)
    return getattr(record, name, default)


def _start_of_day(value: datetime) -> datetime:
    return datetime(value.year, value.month, value.day)


def _month_bounds(year: int, month: int) -> tuple[datetime, datetime]:
    start = datetime(year, month, 1)
    if month == 12:
        return start, datetime(year + 1, 1, 1)
    return start, datetime(year, month + 1, 1)


def _previous_month(year: int, month: int) -> tuple[int, int]:
    if month == 1:
        return year - 1, 12
    return year, month - 1


def parse_month(value: str) -> datetime:
    """Parse ``YYYY-MM`` (or ``YYYY/MM``) into the first instant of that month."""

    cleaned = value.strip().replace("/", "-")
    try:
        parsed = datetime.strptime(cleaned, "%Y-%m")
    except ValueError as exc:
        raise ValueError(f"Enter a month as YYYY-MM, got {value!r}") from exc
    return parsed


def month_label(reference_month: date | datetime) -> str:
    """Return the ``YYYY年M月`` caption used by month pickers."""

    return f"{reference_month.year}年{reference_month.month}月"


def week_bounds(day: date | datetime, *, week_start: int = SUNDAY) -> tuple[datetime, datetime]:
    """Return the half-open range of the calendar week containing ``day``.

    ``week_start`` uses :mod:`calendar` weekday numbers (``calendar.SUNDAY``
    or ``calendar.MONDAY``).
    """

    if not 0 <= week_start <= 6:
        raise ValueError(f"week_start must be a weekday number 0-6, got {week_start}")
    moment = as_local_datetime(day)
    offset = (moment.weekday() - week_start) % 7
    start = _start_of_day(moment) - timedelta(days=offset)
    return start, start + _ONE_WEEK


def period_window(
    reference_month: date | datetime,
    period: Period | str,
    *,
    now: date | datetime,
    week_start: int = SUNDAY,
) -> PeriodWindow:
    """Compute the window a period covers for the selected month.

    * daily: today when the reference month is the current month, otherwise
      the last calendar day of the reference month.
    * weekly: the part of the reference month inside the week containing
      ``now``; empty when the two do not overlap.
    * monthly: the reference month.
    * yearly: the reference month's calendar year.
    """

    period = Period.parse(period)
    reference = as_local_datetime(reference_month)
    current = as_local_datetime(now)
    month_start, month_end = _month_bounds(reference.year, reference.month)

    if period is Period.DAILY:
        if (reference.year, reference.month) == (current.year, current.month):
            start = _start_of_day(current)
        else:
            start = month_end - _ONE_DAY
        return PeriodWindow(start, start + _ONE_DAY)

    if period is Period.WEEKLY:
        week_start_at, week_end_at = week_bounds(current, week_start=week_start)
        start = max(week_start_at, month_start)
        end = min(week_end_at, month_end)
        if end < start:
            end = start
        return PeriodWindow(start, end)

    if period is Period.MONTHLY:
        return PeriodWindow(month_start, month_end)

    return PeriodWindow(datetime(reference.year, 1, 1), datetime(reference.year + 1, 1, 1))


def previous_period_window(
    reference_month: date | datetime,
    period: Period | str,
    *,
    now: date | datetime,
    week_start: int = SUNDAY,
) -> PeriodWindow:
    """Return the window immediately preceding :func:`period_window`.

    Previous day, the previous calendar month or the previous calendar year.
    The weekly baseline has the same length as the current weekly window and
    ends where it starts, so a week clipped to the month is compared with an
    equally short span; an empty weekly window has an empty baseline.
    """

    period = Period.parse(period)
    reference = as_local_datetime(reference_month)

    if period is Period.DAILY:
        current = period_window(reference, period, now=now, week_start=week_start)
        return PeriodWindow(current.start - _ONE_DAY, current.start)

    if period is Period.WEEKLY:
        current = period_window(reference, period, now=now, week_start=week_start)
        if current.is_empty:
            return PeriodWindow(current.start, current.start)
        return PeriodWindow(current.start - (current.end - current.start), current.start)

    if period is Period.MONTHLY:
        year, month = _previous_month(reference.year, reference.month)
        return PeriodWindow(*_month_bounds(year, month))

    return PeriodWindow(datetime(reference.year - 1, 1, 1), datetime(reference.year, 1, 1))


def filter_in_window(records: Iterable[T], window: PeriodWindow) -> list[T]:
    """Return records whose ``date`` lies in ``window``, keeping input order."""

    return [record for record in records if window.contains(record_value(record, "date"))]


def filter_by_period(
    records: Iterable[T],
    reference_month: date | datetime,
    period: Period | str,
    *,
    now: date | datetime,
    week_start: int = SUNDAY,
) -> list[T]:
    """Return the records falling inside the period window of ``reference_month``."""

    window = period_window(reference_month, period, now=now, week_start=week_start)
    return filter_in_window(records, window)


def filter_by_month(records: Iterable[T], reference_month: date | datetime) -> list[T]:
    """Return the records dated in the calendar month of ``reference_month``."""

    return filter_in_window(
        records, PeriodWindow(*_month_bounds(reference_month.year, reference_month.month))
    )


def period_label(period: Period | str) -> str:
    return PERIOD_LABELS[Period.parse(period).value]


def comparison_label(period: Period | str) -> str:
    return COMPARISON_LABELS[Period.parse(period).value]


def report_caption(
    reference_month: date | datetime, period: Period | str, *, now: date | datetime
) -> str:
    """Caption naming the dates a reports page summary covers.

    ``本日の売上`` for today, ``M月d日の売上`` for the last day of a past month,
    then ``YYYY年M月の週次売上``, ``YYYY年M月の売上`` and ``YYYY年の売上``.
    """

    period = Period.parse(period)
    reference = as_local_datetime(reference_month)

    if period is Period.DAILY:
        current = as_local_datetime(now)
        if (reference.year, reference.month) == (current.year, current.month):
            return TODAY_SALES_LABEL
        last_day = _month_bounds(reference.year, reference.month)[1] - _ONE_DAY
        return f"{last_day.month}月{last_day.day}日{OVERVIEW_LABEL_SUFFIX}"
    if period is Period.WEEKLY:
        return month_label(reference) + WEEKLY_LABEL_SUFFIX
    if period is Period.MONTHLY:
        return month_label(reference) + OVERVIEW_LABEL_SUFFIX
    return f"{reference.year}年{OVERVIEW_LABEL_SUFFIX}"
