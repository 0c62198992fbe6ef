"""
Date helper tests.
"""

from datetime import date, datetime, timedelta, timezone

import pytest

from app.utils.date_utils import (
    datetime_to_date,
    get_day_list,
    get_diff_in_days,
    get_flag_emoji,
    to_utc_datetime,
)


def test_naive_datetime_is_taken_as_utc():
    assert to_utc_datetime(datetime(2024, 1, 1, 10)) == datetime(2024, 1, 1, 10, tzinfo=timezone.utc)


def test_offset_datetime_is_converted():
    value = datetime(2024, 1, 1, 1, 0, tzinfo=timezone(timedelta(hours=2)))

    assert to_utc_datetime(value) == datetime(2023, 12, 31, 23, 0, tzinfo=timezone.utc)
    assert datetime_to_date(value) == date(2023, 12, 31)


def test_iso_string_with_z_suffix():
    assert to_utc_datetime("2024-02-29T12:00:00Z") == datetime(2024, 2, 29, 12, tzinfo=timezone.utc)


def test_timestamp_in_seconds():
    assert to_utc_datetime(0) == datetime(1970, 1, 1, tzinfo=timezone.utc)


def test_unsupported_value_raises():
    with pytest.raises(TypeError):
        to_utc_datetime(True)


def test_diff_in_days_ignores_time_of_day():
    start = datetime(2024, 3, 1, 23, 59, tzinfo=timezone.utc)
    end = datetime(2024, 3, 2, 0, 1, tzinfo=timezone.utc)

    assert get_diff_in_days(start, end) == 1
    assert get_diff_in_days(end, start) == -1
    assert get_diff_in_days(date(2024, 3, 1), date(2024, 3, 1)) == 0


def test_day_list_is_inclusive():
    assert get_day_list(date(2024, 2, 28), date(2024, 3, 1)) == [
        date(2024, 2, 28),
        date(2024, 2, 29),
        date(2024, 3, 1),
    ]
    assert get_day_list(date(2024, 3, 2), date(2024, 3, 1)) == []


@pytest.mark.parametrize(
    "code,expected",
    [
        ("USD", "\U0001F1FA\U0001F1F8"),
        ("eur", "\U0001F1EA\U0001F1FA"),
        ("GB", "\U0001F1EC\U0001F1E7"),
        ("XOF", None),
        ("XPF", None),
    ],
)
def test_flag_emoji(code, expected):
    assert get_flag_emoji(code) == expected
