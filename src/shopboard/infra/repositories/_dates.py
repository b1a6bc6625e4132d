"""Date range helpers shared by repositories."""

from __future__ import annotations

from datetime import datetime


def month_range(year: int, month: int) -> tuple[datetime, datetime]:
    """Return ``[start, end)`` for the given calendar month."""

    start = datetime(year, month, 1)
    if month == 12:
        return start, datetime(year + 1, 1, 1)
    return start, datetime(year, month + 1, 1)
