"""
test_amount.py - Unit tests for the fixed-point Amount

Tests:
- Parsing: fractional alignment, truncation, malformed input
- Arithmetic: carry, borrow, negative results
- Comparison and hashing
- Textual form
"""

import pytest
from decimal import Decimal

from batchledger import Amount, AMOUNT_SCALE


class TestAmountParse:
    """Tests for Amount.parse."""

    def test_whole_number(self):
        amount = Amount.parse("12")
        assert amount.whole == 12
        assert amount.fraction == 0

    def test_fraction_aligned_to_four_places(self):
        assert Amount.parse("1.5").fraction == 5000
        assert Amount.parse("1.05").fraction == 500
        assert Amount.parse("1.0001").fraction == 1

    def test_equal_values_with_different_widths_are_equal(self):
        assert Amount.parse("1.5") == Amount.parse("1.50")
        assert Amount.parse("1.5") == Amount.parse("1.5000")

    def test_extra_fraction_digits_truncated(self):
        assert Amount.parse("1.12345") == Amount.parse("1.1234")
        assert Amount.parse("0.99999") == Amount.parse("0.9999")

    def test_negative(self):
        amount = Amount.parse("-2.25")
        assert amount.whole == -2
        assert amount.fraction == 2500
        assert amount.is_negative()

    def test_negative_below_one(self):
        amount = Amount.parse("-0.5")
        assert amount.whole == 0
        assert amount.is_negative()
        assert amount == Amount.zero() - Amount.parse("0.5")

    def test_explicit_plus_sign(self):
        assert Amount.parse("+3.5") == Amount.parse("3.5")

    def test_surrounding_whitespace_ignored(self):
        assert Amount.parse("  7.25 ") == Amount.parse("7.25")

    def test_leading_decimal_point(self):
        assert Amount.parse(".5") == Amount.parse("0.5")

    def test_malformed_whole_is_zero(self):
        assert Amount.parse("abc") == Amount.zero()
        assert Amount.parse("") == Amount.zero()
        assert Amount.parse("1_000") == Amount.zero()

    def test_malformed_fraction_is_zero(self):
        assert Amount.parse("4.x") == Amount.parse("4")

    def test_malformed_whole_keeps_fraction(self):
        assert Amount.parse("x.5") == Amount.parse("0.5")

    def test_whole_outside_64_bit_is_zero(self):
        assert Amount.parse("99999999999999999999.5") == Amount.parse("0.5")

    def test_second_decimal_point_ignored(self):
        assert Amount.parse("1.2.3") == Amount.parse("1.2")


class TestAmountArithmetic:
    """Tests for addition and subtraction."""

    def test_add(self):
        assert Amount.parse("5.0") + Amount.parse("3.25") == Amount.parse("8.25")

    def test_add_carries_into_whole(self):
        total = Amount.parse("0.75") + Amount.parse("0.5")
        assert total.whole == 1
        assert total.fraction == 2500

    def test_subtract(self):
        assert Amount.parse("8.0") - Amount.parse("4.0") == Amount.parse("4.0")

    def test_subtract_borrows_from_whole(self):
        diff = Amount.parse("2.25") - Amount.parse("0.5")
        assert diff.whole == 1
        assert diff.fraction == 7500

    def test_subtract_below_zero(self):
        diff = Amount.parse("1.0") - Amount.parse("2.5")
        assert diff.is_negative()
        assert diff == Amount.parse("-1.5")

    def test_negate(self):
        assert -Amount.parse("1.5") == Amount.parse("-1.5")

    def test_add_non_amount_raises(self):
        with pytest.raises(TypeError):
            Amount.parse("1") + 1

    def test_from_whole(self):
        assert Amount.from_whole(3) == Amount.parse("3")
        assert Amount.from_whole(3).units == 3 * AMOUNT_SCALE

    def test_to_decimal(self):
        assert Amount.parse("1.5").to_decimal() == Decimal("1.5")
        assert Amount.parse("-0.0001").to_decimal() == Decimal("-0.0001")


class TestAmountComparison:
    """Tests for ordering, equality and hashing."""

    def test_ordering_by_whole_then_fraction(self):
        assert Amount.parse("1.9") < Amount.parse("2.0")
        assert Amount.parse("2.1") > Amount.parse("2.05")
        assert Amount.parse("2.5") >= Amount.parse("2.50")
        assert Amount.parse("2.5") <= Amount.parse("2.5")

    def test_negative_below_zero(self):
        assert Amount.parse("-0.5") < Amount.zero()
        assert Amount.parse("-1.5") < Amount.parse("-1.25")

    def test_hashable(self):
        assert len({Amount.parse("1.5"), Amount.parse("1.50")}) == 1

    def test_frozen(self):
        amount = Amount.parse("1.5")
        with pytest.raises(AttributeError):
            amount.units = 0

    def test_units_must_be_int(self):
        with pytest.raises(ValueError):
            Amount(1.5)
        with pytest.raises(ValueError):
            Amount(True)


class TestAmountText:
    """Tests for the textual form."""

    def test_default_is_zero(self):
        assert str(Amount.zero()) == "0.0000"
        assert str(Amount()) == "0.0000"

    def test_four_fraction_digits(self):
        assert str(Amount.parse("1.5")) == "1.5000"
        assert str(Amount.parse("1.05")) == "1.0500"
        assert str(Amount.parse("42")) == "42.0000"

    def test_negative(self):
        assert str(Amount.parse("-10")) == "-10.0000"
        assert str(Amount(-5)) == "-0.0005"

    def test_repr(self):
        assert repr(Amount.parse("2.5")) == "Amount(2.5000)"

    def test_large_value(self):
        amount = Amount.from_whole(2**63 - 1) + Amount.from_whole(2**63 - 1)
        assert str(amount) == f"{2 * (2**63 - 1)}.0000"
