from __future__ import annotations

import calendar
from datetime import date, datetime, timezone


def utc_today() -> date:
    return datetime.now(timezone.utc).date()


def iso_date(d: date) -> str:
    return d.isoformat()


def months_before(d: date, months: int) -> date:
    """Calendar-month subtraction; the day is clamped to the target month's length.

    2024-05-31 minus 3 months is 2024-02-29.
    """
    total = d.year * 12 + (d.month - 1) - int(months)
    year, month0 = divmod(total, 12)
    month = month0 + 1
    day = min(d.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)
