"""
metrica.errors
==============

Exception hierarchy for metrica.

Every error derives from `MetricaError`. Input problems additionally derive
from the builtin `ValueError` and numeric problems from `ArithmeticError`, so
callers that only know the builtins keep working.
"""

from __future__ import annotations

from typing import FrozenSet, Optional


class MetricaError(Exception):
    """Base class for every error raised by metrica."""


# --- Parsing -----------------------------------------------------------------

class ParseError(MetricaError, ValueError):
    """A unit expression could not be parsed."""

    def __init__(self, message: str, token: Optional[str] = None, position: Optional[int] = None) -> None:
        super().__init__(message)
        self.token = token
        self.position = position


class UnknownSymbolError(ParseError):
    """An atom resolved neither to a unit nor to a prefixed unit."""

    def __init__(self, token: str, position: Optional[int] = None) -> None:
        where = "" if position is None else f" at {position}"
        super().__init__(f"Unknown unit symbol {token!r}{where}", token, position)


class InvalidExponentError(ParseError):
    """An integer literal was malformed or out of range."""


class UnitSyntaxError(ParseError):
    """Any other grammar violation.

    `found` is the text of the offending token ("" at end of input) and
    `expected` the set of token kinds that would have been accepted.
    """

    def __init__(
        self,
        found: str,
        expected: FrozenSet[str] = frozenset(),
        position: Optional[int] = None,
        message: Optional[str] = None,
    ) -> None:
        if message is None:
            shown = repr(found) if found else "end of input"
            message = f"Unexpected {shown}"
            if position is not None:
                message += f" at {position}"
            if expected:
                message += f"; expected one of {', '.join(sorted(expected))}"
        super().__init__(message, found, position)
        self.found = found
        self.expected = frozenset(expected)


# --- Arithmetic --------------------------------------------------------------

class UnitArithmeticError(MetricaError, ArithmeticError):
    """Numeric conversion failed."""


class UnlimitedPrecisionError(UnitArithmeticError):
    """Unlimited decimal precision was requested from an inexact converter."""


class ConversionOverflowError(UnitArithmeticError, OverflowError):
    """A conversion result does not fit in a float or the decimal exponent range."""


# --- Dimensional models ------------------------------------------------------

class ModelError(MetricaError):
    """A dimensional model cannot produce the requested transform."""


class NonlinearTransformError(ModelError):
    """A dimensional transform would require a non-linear converter."""


# --- Configuration -----------------------------------------------------------

class ConfigError(MetricaError, ValueError):
    """Invalid construction or configuration of a metrica object."""


class DegenerateConverterError(ConfigError):
    """A converter was constructed with identity (or invalid) parameters."""


# --- Units -------------------------------------------------------------------

class UnitConversionError(MetricaError, ValueError):
    """No converter exists between two units."""


class IncommensurableError(UnitConversionError):
    """The units have incompatible dimensions."""


class UnitFormatError(MetricaError, ValueError):
    """A unit cannot be rendered in the requested format."""


__all__ = [
    "MetricaError",
    "ParseError",
    "UnknownSymbolError",
    "InvalidExponentError",
    "UnitSyntaxError",
    "UnitArithmeticError",
    "UnlimitedPrecisionError",
    "ConversionOverflowError",
    "ModelError",
    "NonlinearTransformError",
    "ConfigError",
    "DegenerateConverterError",
    "UnitConversionError",
    "IncommensurableError",
    "UnitFormatError",
]
