"""
Derives the per-day catering flags of a travel from its records.

The flag list always spans every calendar day from the first record's start
to the last record's end. Flags set on a date survive a recomputation as long
as that date is still spanned.
"""

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterable, List, Protocol, Sequence

from app.utils.date_utils import DateLike, datetime_to_date, get_diff_in_days, to_utc_datetime


class DatedRecord(Protocol):
    start_date: DateLike
    end_date: DateLike


class CateringFlags(Protocol):
    date: DateLike
    breakfast: bool
    lunch: bool
    dinner: bool


@dataclass(frozen=True)
class CateringDayFlags:
    """Meals provided on one calendar day."""
    date: date
    breakfast: bool = False
    lunch: bool = False
    dinner: bool = False


def validate_record_order(records: Sequence[DatedRecord]) -> None:
    """
    Records must each end on or after the day they start, and be ordered by
    their start time.

    Raises:
        ValueError: naming the first offending record position
    """
    previous_start = None
    for index, record in enumerate(records):
        start = to_utc_datetime(record.start_date)
        if get_diff_in_days(record.start_date, record.end_date) < 0:
            raise ValueError(f"Record {index} ends before it starts")
        if previous_start is not None and start < previous_start:
            raise ValueError(f"Record {index} starts before the previous record")
        previous_start = start


def reconcile_catering_days(
    records: Sequence[DatedRecord],
    existing: Iterable[CateringFlags],
) -> List[CateringDayFlags]:
    """
    Build the catering flag list for the given records.

    Args:
        records: Chronologically ordered travel records
        existing: The flag list currently stored for the travel

    Returns:
        One entry per spanned day in ascending order; flags are copied from
        an existing entry with the same date (the last one if a date
        repeats), otherwise all false.
    """
    if not records:
        return []

    validate_record_order(records)

    first_day = datetime_to_date(records[0].start_date)
    day_count = get_diff_in_days(records[0].start_date, records[-1].end_date) + 1
    if day_count < 1:
        raise ValueError("Last record ends before the first record starts")

    previous = {}
    for flags in existing:
        previous[datetime_to_date(flags.date)] = flags

    days: List[CateringDayFlags] = []
    for offset in range(day_count):
        day = first_day + timedelta(days=offset)
        old = previous.get(day)
        if old is None:
            days.append(CateringDayFlags(date=day))
        else:
            days.append(
                CateringDayFlags(
                    date=day,
                    breakfast=bool(old.breakfast),
                    lunch=bool(old.lunch),
                    dinner=bool(old.dinner),
                )
            )
    return days
