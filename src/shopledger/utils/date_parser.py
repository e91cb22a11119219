"""Due-date parsing utilities."""

import re
from datetime import date, datetime, timedelta, UTC
from typing import Any

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

_RELATIVE_OFFSET = re.compile(r"^in (\d+) (day|week|month)s?$")

# Values at or above this are epoch milliseconds rather than epoch seconds
_EPOCH_MILLIS_THRESHOLD = 10**11


def parse_date(value: Any) -> date:
    """Parse a due date into a date object.

    Supports:
    - date and datetime objects
    - Epoch timestamps in seconds or milliseconds (int, float or digit string)
    - Absolute dates: "2024-01-15", "January 15, 2024", etc.
    - Relative dates: "today", "tomorrow", "next week", "next month", "in 10 days"

    Args:
        value: Date value in one of the supported forms

    Returns:
        Date object

    Raises:
        ValueError: If the value cannot be parsed
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, bool) or value is None:
        raise ValueError(f"Could not parse date {value!r}")
    if isinstance(value, (int, float)):
        return _from_epoch(value)
    if not isinstance(value, str):
        raise ValueError(f"Could not parse date {value!r}")

    date_str = value.strip().lower()
    if not date_str:
        raise ValueError("Empty date string")
    if date_str.isdigit() and len(date_str) > 8:
        return _from_epoch(int(date_str))

    today = date.today()
    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
        "next week": today + timedelta(weeks=1),
        "next month": today + relativedelta(months=1),
    }
    if date_str in relative_dates:
        return relative_dates[date_str]

    match = _RELATIVE_OFFSET.match(date_str)
    if match:
        count, unit = int(match.group(1)), match.group(2)
        if unit == "day":
            return today + timedelta(days=count)
        if unit == "week":
            return today + timedelta(weeks=count)
        return today + relativedelta(months=count)

    try:
        return date_parser.parse(date_str).date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{value}': {e}") from e


def _from_epoch(timestamp: float) -> date:
    seconds = timestamp / 1000 if timestamp >= _EPOCH_MILLIS_THRESHOLD else timestamp
    try:
        return datetime.fromtimestamp(seconds, UTC).date()
    except (OverflowError, OSError, ValueError) as e:
        raise ValueError(f"Could not parse timestamp {timestamp!r}: {e}") from e
