"""
Currency arithmetic tests.
"""

import pytest

from app.utils.currency_converter import convert_to_base, round_to_cents


@pytest.mark.parametrize(
    "value,expected",
    [
        (0.125, 0.13),
        (33.333333, 33.33),
        (66.666666, 66.67),
        (0.004, 0.0),
        # 1.005 * 100 is 100.49999999999999 as a float
        (1.005, 1.0),
        (1.015, 1.01),
        (2.675, 2.67),
        (-0.125, -0.12),
    ],
)
def test_round_to_cents_rounds_scaled_value_half_up(value, expected):
    assert round_to_cents(value) == expected


def test_convert_divides_by_rate():
    assert convert_to_base(125, 1.25) == 100.0
    assert convert_to_base(100, 3) == 33.33
    assert convert_to_base(1.005, 1.0) == 1.0


def test_convert_rejects_non_positive_rate():
    with pytest.raises(ValueError):
        convert_to_base(10, 0)
