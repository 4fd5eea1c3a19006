import pytest
from decimal import Decimal
from fractions import Fraction

# Target module
import metrica.core.utils as utils

from metrica.errors import ConversionOverflowError, UnlimitedPrecisionError


PI_50 = "3.14159265358979323846264338327950288419716939937510"


# -------------------------------
# machin_pi
# -------------------------------

def test_machin_pi_digits():
    assert str(utils.machin_pi(50)) == PI_50

@pytest.mark.parametrize("digits", [0, 1, 5, 15, 30])
def test_machin_pi_is_truncated_prefix(digits):
    expected = PI_50[: digits + 2] if digits else "3"
    assert str(utils.machin_pi(digits)) == expected

def test_machin_pi_beyond_default_context_precision():
    # The default decimal context keeps 28 digits; the result must not be rounded to it.
    assert len(str(utils.machin_pi(40))) == 42

def test_machin_pi_rejects_negative_digits():
    with pytest.raises(ValueError):
        utils.machin_pi(-1)

# -------------------------------
# decimal helpers
# -------------------------------

def test_decimal_context_precision():
    assert utils.decimal_context(7).prec == 7
    assert utils.decimal_context(0).prec > 10 ** 6
    with pytest.raises(ValueError):
        utils.decimal_context(-1)

def test_float_to_decimal_uses_shortest_repr():
    assert utils.float_to_decimal(0.1) == Decimal("0.1")

@pytest.mark.parametrize("value, expected", [
    (Fraction(1, 8), "0.125"),
    (Fraction(3, 1), "3"),
    (Fraction(-7, 20), "-0.35"),
    (Fraction(1, 10 ** 40), "1E-40"),
])
def test_exact_decimal(value, expected):
    assert utils.exact_decimal(value) == Decimal(expected)

def test_exact_decimal_non_terminating():
    with pytest.raises(UnlimitedPrecisionError):
        utils.exact_decimal(Fraction(1, 3))

# -------------------------------
# overflow guards
# -------------------------------

def test_decimal_overflow_guard():
    with utils.decimal_overflow_guard("Squaring"):
        assert utils.decimal_context(10).multiply(Decimal(2), Decimal(2)) == Decimal(4)
    with pytest.raises(ConversionOverflowError, match="Squaring"):
        with utils.decimal_overflow_guard("Squaring"):
            ctx = utils.decimal_context(10)
            ctx.multiply(Decimal("1E999999"), Decimal("1E999999"))

def test_checked():
    assert utils.checked(1.0, 2.0) == 2.0
    assert utils.checked(float("inf"), float("inf")) == float("inf")
    with pytest.raises(ConversionOverflowError):
        utils.checked(1.0, float("inf"))
