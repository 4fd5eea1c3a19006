"""
metrica.core.utils
==================

Numeric helpers for the converter algebra:
arbitrary-precision Pi, exact decimal conversion of rationals
and float and decimal overflow guards.
"""

from __future__ import annotations

from contextlib import contextmanager
from decimal import MAX_PREC, Context, Decimal, Overflow
from fractions import Fraction
from functools import lru_cache
from math import isinf
from typing import Iterator

from metrica.errors import ConversionOverflowError, UnlimitedPrecisionError

# Extra digits carried through the arctangent series before truncating.
PI_GUARD_DIGITS = 10


# --- Pi (Machin's formula) ---------------------------------------------------

def _arccot(x: int, unity: int) -> int:
    """arccot(x) scaled by `unity`, every term truncated toward zero."""
    total = xpower = unity // x
    x_squared = x * x
    n = 3
    sign = -1
    while True:
        xpower //= x_squared
        term = xpower // n
        if term == 0:
            break
        total += sign * term
        sign = -sign
        n += 2
    return total


@lru_cache(maxsize=64)
def machin_pi(digits: int) -> Decimal:
    """Pi with `digits` decimal places: pi = 4 * (4 * arccot(5) - arccot(239)).

    The series runs with `digits + PI_GUARD_DIGITS` places and the result is
    truncated (not rounded) to `digits` places, so the last digit may be one
    lower than the correctly rounded value.
    """
    if digits < 0:
        raise ValueError("digits must be non-negative")
    unity = 10 ** (digits + PI_GUARD_DIGITS)
    pi_scaled = 4 * (4 * _arccot(5, unity) - _arccot(239, unity))
    truncated = pi_scaled // 10 ** PI_GUARD_DIGITS
    return Decimal(f"{truncated}E-{digits}")


# --- Decimal helpers ---------------------------------------------------------

def decimal_context(precision: int) -> Context:
    """A decimal context with `precision` significant digits (0 is unlimited)."""
    if precision < 0:
        raise ValueError("precision must be non-negative")
    if precision == 0:
        return Context(prec=MAX_PREC)
    return Context(prec=precision)


def float_to_decimal(value: float) -> Decimal:
    """Shortest decimal spelling of a float (``repr`` based, not binary-exact)."""
    return Decimal(repr(float(value)))


def exact_decimal(value: Fraction) -> Decimal:
    """Convert a fraction to a Decimal without rounding.

    Raises `UnlimitedPrecisionError` when the decimal expansion does not
    terminate (the reduced denominator has a prime factor other than 2 or 5).
    """
    den = value.denominator
    twos = fives = 0
    while den % 2 == 0:
        den //= 2
        twos += 1
    while den % 5 == 0:
        den //= 5
        fives += 1
    if den != 1:
        raise UnlimitedPrecisionError(
            f"Non-terminating decimal expansion of {value}; a finite precision is required"
        )
    places = max(twos, fives)
    scaled = value * 10 ** places
    # string construction is exact whatever the active context precision
    return Decimal(f"{scaled.numerator}E-{places}")


# --- Overflow guards ---------------------------------------------------------

@contextmanager
def decimal_overflow_guard(operation: str) -> Iterator[None]:
    """Report a context `Overflow` trap as `ConversionOverflowError`."""
    try:
        yield
    except Overflow:
        raise ConversionOverflowError(f"{operation} overflowed the decimal exponent range") from None


def checked(x: float, result: float) -> float:
    """Reject results that overflowed from a finite input."""
    if isinf(result) and not isinf(x):
        raise ConversionOverflowError(f"Conversion of {x!r} overflowed")
    return result


__all__ = [
    "PI_GUARD_DIGITS",
    "machin_pi",
    "decimal_context",
    "float_to_decimal",
    "exact_decimal",
    "decimal_overflow_guard",
    "checked",
]
