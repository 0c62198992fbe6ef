"""
Currency conversion arithmetic.
Rates are expressed as units of foreign currency per 1 unit of the base
currency, so dividing by the rate converts foreign -> base.
"""

import math


def round_to_cents(value: float) -> float:
    """
    Round to 2 decimal places with halves rounded up, on the float value
    scaled to cents: floor(value * 100 + 0.5) / 100.

    Args:
        value: Amount to round

    Returns:
        Rounded amount
    """
    return math.floor(value * 100 + 0.5) / 100


def convert_to_base(amount: float, rate: float) -> float:
    """
    Convert an amount in a foreign currency to the base currency.

    Args:
        amount: Amount in the foreign currency
        rate: Units of the foreign currency per 1 unit of the base currency

    Returns:
        Amount in the base currency, rounded to cents
    """
    if rate <= 0:
        raise ValueError("rate must be positive")
    return round_to_cents(amount / rate)
