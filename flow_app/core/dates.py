"""Export date parsing and whole-day interval arithmetic."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta

from .config import CENTURY_BASE, MONTH_ABBREVIATIONS

logger = logging.getLogger(__name__)

ONE_DAY = timedelta(days=1)


def parse_date(text: str | None) -> datetime | None:
    """Parse an export timestamp such as ``"15/mar/24 02:30 PM"``.

    Returns a naive (local wall clock) datetime, or None when the value is
    empty or any component fails to parse. Failures are never raised.

    Examples
    --------
    >>> parse_date("15/mar/24 02:30 PM")
    datetime.datetime(2024, 3, 15, 14, 30)
    >>> parse_date("31/xyz/24 10:00 AM") is None
    True
    """
    if text is None or not str(text).strip():
        return None
    try:
        return _parse_parts(str(text))
    except (ValueError, IndexError, KeyError, OverflowError) as exc:
        logger.debug("Unparseable date %r: %s", text, exc)
        return None


def _parse_parts(text: str) -> datetime:
    tokens = text.strip().split()
    date_part, time_part = tokens[0], tokens[1]
    period = tokens[2].upper() if len(tokens) > 2 else None

    day, month_abbr, year = date_part.split("/")
    month = MONTH_ABBREVIATIONS[month_abbr.lower()]
    hours, minutes = time_part.split(":")

    hour = int(hours)
    if period == "PM" and hour != 12:
        hour += 12
    elif period == "AM" and hour == 12:
        hour = 0
    return datetime(CENTURY_BASE + int(year), month, int(day), hour, int(minutes))


def ceil_days(delta: timedelta) -> int:
    """Whole days in ``delta``, rounding any partial day up (towards +inf)."""
    whole, remainder = divmod(delta, ONE_DAY)
    return whole + 1 if remainder else whole


def days_between(start_text: str | None, end_text: str | None) -> int | None:
    """Ceiling of the day span between two export timestamps.

    None when either endpoint is missing or unparseable. An end before the
    start yields a negative count; no clamping is applied.
    """
    start = parse_date(start_text)
    end = parse_date(end_text)
    if start is None or end is None:
        return None
    return ceil_days(end - start)
