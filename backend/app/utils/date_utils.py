"""
Calendar helpers. All day arithmetic happens on UTC calendar dates.
"""

from datetime import date, datetime, time, timedelta, timezone
from typing import List, Optional, Union

DateLike = Union[date, datetime, str, int, float]

# Currency codes shared by several countries have no single flag
_NO_FLAG_CODES = {"XCD", "XOF", "XAF", "ANG", "XPF"}
_REGIONAL_INDICATOR_OFFSET = 127397


def to_utc_datetime(value: DateLike) -> datetime:
    """
    Interpret a date-like value as an aware UTC datetime.

    Naive datetimes are taken to be UTC, plain dates mean midnight UTC,
    strings are ISO 8601 and numbers are POSIX timestamps in seconds.
    """
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)
    if isinstance(value, date):
        return datetime.combine(value, time.min, tzinfo=timezone.utc)
    if isinstance(value, bool):
        raise TypeError(f"Not a date-like value: {value!r}")
    if isinstance(value, (int, float)):
        return datetime.fromtimestamp(value, tz=timezone.utc)
    if isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        return to_utc_datetime(datetime.fromisoformat(text))
    raise TypeError(f"Not a date-like value: {value!r}")


def datetime_to_date(value: DateLike) -> date:
    """Strip the time of day, keeping the UTC calendar date."""
    if isinstance(value, date) and not isinstance(value, datetime):
        return value
    return to_utc_datetime(value).date()


def get_diff_in_days(start: DateLike, end: DateLike) -> int:
    """Whole calendar days from start to end (negative if end is earlier)."""
    return (datetime_to_date(end) - datetime_to_date(start)).days


def get_day_list(start: DateLike, end: DateLike) -> List[date]:
    """Every calendar day from start to end, both inclusive."""
    first = datetime_to_date(start)
    return [first + timedelta(days=i) for i in range(get_diff_in_days(start, end) + 1)]


def get_flag_emoji(country_code: str) -> Optional[str]:
    """
    Flag emoji for the first two letters of a country or currency code.

    Returns None for currencies used by a group of countries.
    """
    if country_code in _NO_FLAG_CODES:
        return None
    return "".join(chr(_REGIONAL_INDICATOR_OFFSET + ord(char)) for char in country_code[:2].upper())
