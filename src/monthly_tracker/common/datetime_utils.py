from __future__ import annotations

import calendar
from datetime import date, datetime
from typing import List

from ..core.constants import TRAINING_WEEKDAY
from ..core.exceptions import ValidationError

def parse_month(value: str) -> date:
    """Parse a month cursor from ``YYYY-MM`` or ``YYYY-MM-DD``.

    The result is always the first day of that month.
    """

    v = (value or "").strip()
    for fmt in ("%Y-%m", "%Y-%m-%d"):
        try:
            return first_day_of_month(datetime.strptime(v, fmt).date())
        except ValueError:
            continue
    raise ValidationError(f"Invalid month: {value!r}")

def today_local() -> date:
    """Current local date.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return date.today()

def date_key(d: date) -> str:
    return d.strftime("%Y-%m-%d")

def month_key(d: date) -> str:
    return d.strftime("%Y-%m-01")

def first_day_of_month(d: date) -> date:
    return d.replace(day=1)

def last_day_of_month(d: date) -> date:
    return d.replace(day=calendar.monthrange(d.year, d.month)[1])

def add_months(d: date, offset: int) -> date:
    """Move a month cursor by ``offset`` calendar months (result is day 1)."""
    index = d.year * 12 + (d.month - 1) + int(offset)
    return date(index // 12, index % 12 + 1, 1)

def weekdays_in_month(d: date, weekday: int) -> List[date]:
    days_in_month = calendar.monthrange(d.year, d.month)[1]
    return [
        date(d.year, d.month, day)
        for day in range(1, days_in_month + 1)
        if date(d.year, d.month, day).weekday() == weekday
    ]

def thursdays_in_month(d: date) -> List[date]:
    return weekdays_in_month(d, TRAINING_WEEKDAY)
