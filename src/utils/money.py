"""
Money Helpers
Amounts are persisted as integer minor units (pence, cents)
"""

from decimal import Decimal, ROUND_HALF_UP, InvalidOperation
from typing import Union

Number = Union[Decimal, int, float, str]

MINOR_UNITS_PER_MAJOR = 100
_TWO_PLACES = Decimal("0.01")

CURRENCY_SYMBOLS = {
    "GBP": "£",
    "USD": "$",
    "EUR": "€",
    "INR": "₹",
}


def _to_decimal(amount: Number) -> Decimal:
    if isinstance(amount, Decimal):
        return amount
    if isinstance(amount, bool):
        raise ValueError("Amount must be numeric")
    if isinstance(amount, float):
        # repr gives the shortest round-tripping form, so 12.505 stays 12.505
        return Decimal(repr(amount))
    try:
        return Decimal(str(amount))
    except InvalidOperation:
        raise ValueError(f"Invalid amount: {amount!r}")


def to_minor_units(amount: Number) -> int:
    """
    Convert a major-unit amount to integer minor units

    Rounds half away from zero to the nearest minor unit.

    Args:
        amount: Amount in major units (e.g. 12.50)

    Returns:
        int: Amount in minor units (e.g. 1250)
    """
    value = _to_decimal(amount)
    if not value.is_finite():
        raise ValueError(f"Invalid amount: {amount!r}")
    if value < 0:
        raise ValueError("Amount must not be negative")
    minor = (value * MINOR_UNITS_PER_MAJOR).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    return int(minor)


def from_minor_units(amount_minor: int) -> Decimal:
    """Convert integer minor units back to a two-place major-unit Decimal"""
    return (Decimal(amount_minor) / MINOR_UNITS_PER_MAJOR).quantize(_TWO_PLACES)


def format_currency(amount_minor: int, currency: str = "GBP") -> str:
    """
    Format minor units as a currency string

    Args:
        amount_minor: Amount in minor units
        currency: ISO currency code

    Returns:
        str: e.g. "£1,234.50"; unknown currencies are prefixed by their code
    """
    amount = from_minor_units(amount_minor)
    symbol = CURRENCY_SYMBOLS.get((currency or "").upper())
    if symbol:
        return f"{symbol}{amount:,.2f}"
    return f"{currency} {amount:,.2f}"
