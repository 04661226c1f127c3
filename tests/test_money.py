"""
Money Tests
Minor-unit conversion and currency formatting
"""

from decimal import Decimal

import pytest

from src.utils.money import format_currency, from_minor_units, to_minor_units


class TestMinorUnits:
    """Major/minor unit conversion"""

    @pytest.mark.parametrize("amount, expected", [
        (Decimal("12.50"), 1250),
        (Decimal("0.01"), 1),
        (Decimal("0"), 0),
        (Decimal("1234.99"), 123499),
        (7, 700),
    ])
    def test_two_decimal_amounts_are_exact(self, amount, expected):
        """Amounts with at most two decimals convert without loss"""
        assert to_minor_units(amount) == expected
        assert from_minor_units(expected) == Decimal(amount).quantize(Decimal("0.01"))

    def test_third_decimal_rounds_half_away_from_zero(self):
        """12.505 is stored as 1251"""
        assert to_minor_units(Decimal("12.505")) == 1251
        assert to_minor_units(Decimal("12.504")) == 1250
        assert to_minor_units(Decimal("0.005")) == 1

    def test_float_input_uses_decimal_repr(self):
        """Binary float error does not leak into rounding"""
        assert to_minor_units(12.505) == 1251
        assert to_minor_units(0.1 + 0.2) == 30

    def test_string_input(self):
        assert to_minor_units("45.10") == 4510

    def test_negative_amount_rejected(self):
        with pytest.raises(ValueError):
            to_minor_units(Decimal("-1.00"))

    def test_garbage_rejected(self):
        with pytest.raises(ValueError):
            to_minor_units("twelve pounds")


class TestFormatCurrency:

    def test_gbp_symbol_two_decimals(self):
        assert format_currency(1250, "GBP") == "£12.50"
        assert format_currency(5, "GBP") == "£0.05"

    def test_thousands_separator(self):
        assert format_currency(123456789, "GBP") == "£1,234,567.89"

    def test_unknown_currency_uses_code(self):
        assert format_currency(1000, "CHF") == "CHF 10.00"
