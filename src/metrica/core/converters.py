"""
metrica.core.converters
=======================

Immutable numeric transforms between unit scales.

The family is closed: `Identity`, `Affine`, `Scale`, `Rational`,
`Logarithmic`, `Exponential`, `PiMultiply`, `PiDivide` and `Compound`.
Composition and inversion are each implemented once, as a single ``match``
over that family, so every simplification rule is listed in one place:

- ``Affine(a) @ Affine(b)``      -> ``Affine(a + b)``   (Identity if 0)
- ``Scale(a) @ Scale(b)``        -> ``Scale(a * b)``    (Identity if 1.0)
- ``Rational(a, b) @ Rational(c, d)`` -> ``(a*c)/(b*d)`` reduced (Identity if 1/1)
- ``Logarithmic(b) @ Exponential(b)`` -> ``Identity`` (the reverse order only holds for x > 0)
- anything else                  -> ``Compound(left, right)``

``left @ right`` (or ``left.concatenate(right)``) applies `right` first.

Every converter offers two numeric paths: `apply` on floats and
`apply_decimal` on `decimal.Decimal` with an explicit number of significant
digits (`UNLIMITED` asks for an exact result).
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from fractions import Fraction
from math import gcd, isfinite
from typing import List

from metrica.core.utils import (
    checked,
    decimal_context,
    exact_decimal,
    float_to_decimal,
    decimal_overflow_guard,
    machin_pi,
)
from metrica.errors import (
    ConfigError,
    ConversionOverflowError,
    DegenerateConverterError,
    UnitArithmeticError,
    UnlimitedPrecisionError,
)

# Precision value meaning "no rounding at all".
UNLIMITED = 0


class Converter:
    """Base class of the converter family. Instances are immutable values."""

    __slots__ = ()

    # --- numeric interface ---
    def apply(self, x: float) -> float:
        raise NotImplementedError

    def apply_decimal(self, x: Decimal, precision: int = UNLIMITED) -> Decimal:
        raise NotImplementedError

    def __call__(self, x: float) -> float:
        return self.apply(x)

    @property
    def is_linear(self) -> bool:
        """True when ``f(a*x + b*y) == a*f(x) + b*f(y)`` (no offset, no log/exp)."""
        raise NotImplementedError

    @property
    def is_identity(self) -> bool:
        return False

    @property
    def converters(self) -> List["Converter"]:
        """The non-compound steps of this converter, left-most (last applied) first."""
        return [self]

    # --- algebra ---
    def concatenate(self, other: "Converter") -> "Converter":
        """Return the converter applying `other` first, then `self`."""
        match (self, other):
            case (Identity(), _):
                return other
            case (_, Identity()):
                return self
            case (Affine(offset=a), Affine(offset=b)):
                return affine(a + b)
            case (Scale(factor=a), Scale(factor=b)):
                return scale(a * b)
            case (Rational(numerator=n1, denominator=d1), Rational(numerator=n2, denominator=d2)):
                return rational(n1 * n2, d1 * d2)
            case (Logarithmic(base=a), Exponential(base=b)) if a == b:
                return IDENTITY
            case _:
                return Compound(self, other)

    def __matmul__(self, other: "Converter") -> "Converter":
        if not isinstance(other, Converter):
            return NotImplemented
        return self.concatenate(other)

    def inverse(self) -> "Converter":
        match self:
            case Identity():
                return self
            case Affine(offset=o):
                return Affine(-o)
            case Scale(factor=f):
                return Scale(1.0 / f)
            case Rational(numerator=n, denominator=d):
                # keep the sign on the numerator
                return Rational(-d, -n) if n < 0 else Rational(d, n)
            case Logarithmic(base=b):
                return Exponential(b)
            case Exponential(base=b):
                return Logarithmic(b)
            case PiMultiply():
                return PiDivide()
            case PiDivide():
                return PiMultiply()
            case Compound(left=left, right=right):
                return Compound(right.inverse(), left.inverse())
            case _:
                raise TypeError(f"Unsupported converter type {type(self).__name__}")


# --- The family ----------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Identity(Converter):
    def apply(self, x: float) -> float:
        return x

    def apply_decimal(self, x: Decimal, precision: int = UNLIMITED) -> Decimal:
        return x

    @property
    def is_linear(self) -> bool:
        return True

    @property
    def is_identity(self) -> bool:
        return True

    @property
    def converters(self) -> List[Converter]:
        return []


IDENTITY: Converter = Identity()


@dataclass(frozen=True, slots=True)
class Affine(Converter):
    """``x + offset``."""

    offset: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "offset", float(self.offset))
        if not isfinite(self.offset):
            raise ConfigError(f"Affine offset must be finite, got {self.offset!r}")
        if self.offset == 0.0:
            raise DegenerateConverterError("Affine(0) would be an identity converter")

    def apply(self, x: float) -> float:
        return checked(x, x + self.offset)

    def apply_decimal(self, x: Decimal, precision: int = UNLIMITED) -> Decimal:
        with decimal_overflow_guard("Offset"):
            return decimal_context(precision).add(x, float_to_decimal(self.offset))

    @property
    def is_linear(self) -> bool:
        return False


@dataclass(frozen=True, slots=True)
class Scale(Converter):
    """``x * factor`` with a floating-point factor."""

    factor: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "factor", float(self.factor))
        if not isfinite(self.factor):
            raise ConfigError(f"Scale factor must be finite, got {self.factor!r}")
        if self.factor == 1.0:
            raise DegenerateConverterError("Scale(1.0) would be an identity converter")
        if self.factor == 0.0:
            raise DegenerateConverterError("Scale(0.0) is not invertible")

    def apply(self, x: float) -> float:
        return checked(x, x * self.factor)

    def apply_decimal(self, x: Decimal, precision: int = UNLIMITED) -> Decimal:
        with decimal_overflow_guard("Scaling"):
            return decimal_context(precision).multiply(x, float_to_decimal(self.factor))

    @property
    def is_linear(self) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class Rational(Converter):
    """``x * numerator / denominator`` with exact integers.

    The ratio is stored reduced, with the sign on the numerator, so equal
    ratios compare (and hash) equal.
    """

    numerator: int
    denominator: int

    def __post_init__(self) -> None:
        num, den = int(self.numerator), int(self.denominator)
        if den <= 0:
            raise DegenerateConverterError(f"Rational denominator must be positive, got {den}")
        if num == 0:
            raise DegenerateConverterError("Rational(0, n) is not invertible")
        g = gcd(num, den)
        num, den = num // g, den // g
        if num == den:
            raise DegenerateConverterError("Rational(n, n) would be an identity converter")
        object.__setattr__(self, "numerator", num)
        object.__setattr__(self, "denominator", den)

    @property
    def value(self) -> Fraction:
        return Fraction(self.numerator, self.denominator)

    def apply(self, x: float) -> float:
        try:
            ratio = self.numerator / self.denominator
        except OverflowError:
            raise ConversionOverflowError("Rational ratio does not fit in a float") from None
        return checked(x, x * ratio)

    def apply_decimal(self, x: Decimal, precision: int = UNLIMITED) -> Decimal:
        if precision == UNLIMITED:
            return exact_decimal(Fraction(x) * self.value)
        ctx = decimal_context(precision)
        with decimal_overflow_guard("Rational scaling"):
            return ctx.divide(ctx.multiply(x, Decimal(self.numerator)), Decimal(self.denominator))

    @property
    def is_linear(self) -> bool:
        return True


def _check_base(base: float) -> float:
    base = float(base)
    if not (isfinite(base) and base > 0.0 and base != 1.0):
        raise ConfigError(f"Logarithm base must be positive, finite and not 1, got {base!r}")
    return base


@dataclass(frozen=True, slots=True)
class Logarithmic(Converter):
    """``log_base(x)``; inverse of `Exponential` with the same base."""

    base: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "base", _check_base(self.base))

    def apply(self, x: float) -> float:
        if x <= 0.0:
            raise UnitArithmeticError(f"Logarithm undefined for {x!r}")
        if self.base == 10.0:
            return math.log10(x)
        return math.log(x) / math.log(self.base)

    def apply_decimal(self, x: Decimal, precision: int = UNLIMITED) -> Decimal:
        if precision == UNLIMITED:
            raise UnlimitedPrecisionError("Logarithm with unlimited precision")
        ctx = decimal_context(precision)
        try:
            with decimal_overflow_guard("Logarithm"):
                if self.base == 10.0:
                    return ctx.log10(x)
                return ctx.divide(ctx.ln(x), ctx.ln(float_to_decimal(self.base)))
        except InvalidOperation:
            raise UnitArithmeticError(f"Logarithm undefined for {x}") from None

    @property
    def is_linear(self) -> bool:
        return False


@dataclass(frozen=True, slots=True)
class Exponential(Converter):
    """``base ** x``; inverse of `Logarithmic` with the same base."""

    base: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "base", _check_base(self.base))

    def apply(self, x: float) -> float:
        try:
            return checked(x, self.base ** x)
        except OverflowError:
            raise ConversionOverflowError(f"{self.base!r} ** {x!r} overflowed") from None

    def apply_decimal(self, x: Decimal, precision: int = UNLIMITED) -> Decimal:
        if precision == UNLIMITED:
            raise UnlimitedPrecisionError("Exponentiation with unlimited precision")
        with decimal_overflow_guard(f"{self.base!r} ** {x}"):
            return decimal_context(precision).power(float_to_decimal(self.base), x)

    @property
    def is_linear(self) -> bool:
        return False


@dataclass(frozen=True, slots=True)
class PiMultiply(Converter):
    """``x * π``."""

    def apply(self, x: float) -> float:
        return checked(x, x * math.pi)

    def apply_decimal(self, x: Decimal, precision: int = UNLIMITED) -> Decimal:
        if precision == UNLIMITED:
            raise UnlimitedPrecisionError("Pi multiplication with unlimited precision")
        with decimal_overflow_guard("Pi multiplication"):
            return decimal_context(precision).multiply(x, machin_pi(precision))

    @property
    def is_linear(self) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class PiDivide(Converter):
    """``x / π``."""

    def apply(self, x: float) -> float:
        return x / math.pi

    def apply_decimal(self, x: Decimal, precision: int = UNLIMITED) -> Decimal:
        if precision == UNLIMITED:
            raise UnlimitedPrecisionError("Pi division with unlimited precision")
        with decimal_overflow_guard("Pi division"):
            return decimal_context(precision).divide(x, machin_pi(precision))

    @property
    def is_linear(self) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class Compound(Converter):
    """Apply `right`, then `left`."""

    left: Converter
    right: Converter

    def apply(self, x: float) -> float:
        return self.left.apply(self.right.apply(x))

    def apply_decimal(self, x: Decimal, precision: int = UNLIMITED) -> Decimal:
        return self.left.apply_decimal(self.right.apply_decimal(x, precision), precision)

    @property
    def is_linear(self) -> bool:
        return self.left.is_linear and self.right.is_linear

    @property
    def converters(self) -> List[Converter]:
        return self.left.converters + self.right.converters


# --- Normalising factories -------------------------------------------------------

def affine(offset: float) -> Converter:
    """`Affine(offset)`, or `IDENTITY` when the offset is zero."""
    return IDENTITY if offset == 0 else Affine(offset)


def scale(factor: float) -> Converter:
    """`Scale(factor)`, or `IDENTITY` when the factor is one."""
    return IDENTITY if factor == 1 else Scale(factor)


def rational(numerator: int, denominator: int = 1) -> Converter:
    """Reduced `Rational`, or `IDENTITY` when the ratio is one.

    A negative denominator moves its sign onto the numerator.
    """
    if denominator == 0:
        raise DegenerateConverterError("Rational denominator must not be zero")
    if denominator < 0:
        numerator, denominator = -numerator, -denominator
    g = gcd(numerator, denominator)
    if g:
        numerator, denominator = numerator // g, denominator // g
    if numerator == denominator:
        return IDENTITY
    return Rational(numerator, denominator)


def factor(value: int | float | Fraction) -> Converter:
    """Multiplicative converter for a number: exact for integers and fractions."""
    if isinstance(value, Fraction):
        return rational(value.numerator, value.denominator)
    if isinstance(value, int) or (isinstance(value, float) and value.is_integer()):
        return rational(int(value))
    return scale(value)


__all__ = [
    "UNLIMITED",
    "Converter",
    "Identity",
    "IDENTITY",
    "Affine",
    "Scale",
    "Rational",
    "Logarithmic",
    "Exponential",
    "PiMultiply",
    "PiDivide",
    "Compound",
    "affine",
    "scale",
    "rational",
    "factor",
]
