"""
metrica.units.registry
======================

Bootstrap of the default UCUM symbol table.

`build_symbol_map()` assembles a fresh, frozen `SymbolMap` from ordered
``(symbol, unit_or_prefix, is_alias)`` entries; `DEFAULT_SYMBOLS` is the
instance built once at import and shared by `Unit.of`, `str(unit)` and the
package level `parse` / `format_unit` helpers.
"""

from __future__ import annotations

from typing import Iterator, List

from metrica.core.dimensions import (
    AMOUNT,
    CURRENT,
    LENGTH,
    LUMINOUS,
    MASS,
    TEMPERATURE,
    TIME,
)
from metrica.core.unit import ONE, BaseUnit, Unit
from metrica.format.symbols import SymbolEntry, SymbolMap
from metrica.units.prefixes import BINARY_PREFIXES, SI_PREFIXES

# ---------------------------------------------------------------------------
# Base units
# ---------------------------------------------------------------------------
METRE = BaseUnit("m", LENGTH)
KILOGRAM = BaseUnit("kg", MASS)
SECOND = BaseUnit("s", TIME)
AMPERE = BaseUnit("A", CURRENT)
KELVIN = BaseUnit("K", TEMPERATURE)
MOLE = BaseUnit("mol", AMOUNT)
CANDELA = BaseUnit("cd", LUMINOUS)

# UCUM counts mass in grams; the coherent unit stays the kilogram.
GRAM = KILOGRAM.divide(1000)

# Named, dimensionless
RADIAN = ONE.alternate("rad")
STERADIAN = ONE.alternate("sr")
TEN_POWER = ONE.multiply(10)
PERCENT = ONE.divide(100)

# Derived, coherent
HERTZ = SECOND.inverse().alternate("Hz")
NEWTON = (KILOGRAM * METRE / SECOND ** 2).alternate("N")
PASCAL = (NEWTON / METRE ** 2).alternate("Pa")
JOULE = (NEWTON * METRE).alternate("J")
WATT = (JOULE / SECOND).alternate("W")
COULOMB = (AMPERE * SECOND).alternate("C")
VOLT = (WATT / AMPERE).alternate("V")
FARAD = (COULOMB / VOLT).alternate("F")
OHM = (VOLT / AMPERE).alternate("Ohm")
SIEMENS = (AMPERE / VOLT).alternate("S")
WEBER = (VOLT * SECOND).alternate("Wb")
TESLA = (WEBER / METRE ** 2).alternate("T")
HENRY = (WEBER / AMPERE).alternate("H")
LUMEN = (CANDELA * STERADIAN).alternate("lm")
LUX = (LUMEN / METRE ** 2).alternate("lx")
BECQUEREL = SECOND.inverse().alternate("Bq")
GRAY = (JOULE / KILOGRAM).alternate("Gy")
SIEVERT = (JOULE / KILOGRAM).alternate("Sv")
KATAL = (MOLE / SECOND).alternate("kat")

# Accepted non-SI units
CELSIUS = KELVIN.shift(273.15)
MINUTE = SECOND.multiply(60)
HOUR = MINUTE.multiply(60)
DAY = HOUR.multiply(24)
WEEK = DAY.multiply(7)
LITRE = (METRE ** 3).divide(1000)

# Information
BIT = BaseUnit("bit")
BYTE = BIT.multiply(8)


def _entries() -> Iterator[SymbolEntry]:
    units = (
        ("m", METRE),
        ("kg", KILOGRAM),
        ("g", GRAM),
        ("s", SECOND),
        ("A", AMPERE),
        ("K", KELVIN),
        ("mol", MOLE),
        ("cd", CANDELA),
        ("rad", RADIAN),
        ("sr", STERADIAN),
        ("10*", TEN_POWER),
        ("%", PERCENT),
        ("Hz", HERTZ),
        ("N", NEWTON),
        ("Pa", PASCAL),
        ("J", JOULE),
        ("W", WATT),
        ("C", COULOMB),
        ("V", VOLT),
        ("F", FARAD),
        ("Ohm", OHM),
        ("S", SIEMENS),
        ("Wb", WEBER),
        ("T", TESLA),
        ("H", HENRY),
        ("lm", LUMEN),
        ("lx", LUX),
        ("Bq", BECQUEREL),
        ("Gy", GRAY),
        ("Sv", SIEVERT),
        ("kat", KATAL),
        ("Cel", CELSIUS),
        ("min", MINUTE),
        ("h", HOUR),
        ("d", DAY),
        ("wk", WEEK),
        ("L", LITRE),
        ("bit", BIT),
        ("By", BYTE),
    )
    aliases = (
        ("10^", TEN_POWER),
        ("l", LITRE),
    )

    for symbol, unit in units:
        yield symbol, unit, False
    for symbol, unit in aliases:
        yield symbol, unit, True
    for prefix in SI_PREFIXES + BINARY_PREFIXES:
        yield prefix.symbol, prefix, False


def build_symbol_map() -> SymbolMap:
    """Return a new frozen symbol map holding the default UCUM atoms and prefixes."""
    return SymbolMap.from_entries(_entries(), freeze=True)


DEFAULT_SYMBOLS = build_symbol_map()

BASE_UNITS: List[Unit] = [METRE, KILOGRAM, SECOND, AMPERE, KELVIN, MOLE, CANDELA]

__all__ = [
    "build_symbol_map",
    "DEFAULT_SYMBOLS",
    "BASE_UNITS",
    "METRE",
    "KILOGRAM",
    "GRAM",
    "SECOND",
    "AMPERE",
    "KELVIN",
    "MOLE",
    "CANDELA",
    "RADIAN",
    "STERADIAN",
    "PERCENT",
    "NEWTON",
    "JOULE",
    "WATT",
    "CELSIUS",
    "MINUTE",
    "HOUR",
    "DAY",
    "LITRE",
    "BIT",
    "BYTE",
]
