"""
metrica.units.prefixes
======================

Unit prefixes: a name, a symbol and the exact converter they stand for.
"""

from __future__ import annotations

from dataclasses import dataclass

from metrica.core.converters import Converter, rational


@dataclass(frozen=True, slots=True)
class Prefix:
    name: str
    symbol: str
    converter: Converter

    def __repr__(self) -> str:
        return f"Prefix({self.name!r}, {self.symbol!r})"


def _decimal(name: str, symbol: str, exponent: int) -> Prefix:
    if exponent >= 0:
        return Prefix(name, symbol, rational(10 ** exponent))
    return Prefix(name, symbol, rational(1, 10 ** -exponent))


SI_PREFIXES = (
    _decimal("quetta", "Q", 30),
    _decimal("ronna", "R", 27),
    _decimal("yotta", "Y", 24),
    _decimal("zetta", "Z", 21),
    _decimal("exa", "E", 18),
    _decimal("peta", "P", 15),
    _decimal("tera", "T", 12),
    _decimal("giga", "G", 9),
    _decimal("mega", "M", 6),
    _decimal("kilo", "k", 3),
    _decimal("hecto", "h", 2),
    _decimal("deka", "da", 1),
    _decimal("deci", "d", -1),
    _decimal("centi", "c", -2),
    _decimal("milli", "m", -3),
    _decimal("micro", "u", -6),
    _decimal("nano", "n", -9),
    _decimal("pico", "p", -12),
    _decimal("femto", "f", -15),
    _decimal("atto", "a", -18),
    _decimal("zepto", "z", -21),
    _decimal("yocto", "y", -24),
    _decimal("ronto", "r", -27),
    _decimal("quecto", "q", -30),
)

BINARY_PREFIXES = tuple(
    Prefix(name, symbol, rational(1024 ** power))
    for power, (name, symbol) in enumerate(
        (
            ("kibi", "Ki"),
            ("mebi", "Mi"),
            ("gibi", "Gi"),
            ("tebi", "Ti"),
            ("pebi", "Pi"),
            ("exbi", "Ei"),
            ("zebi", "Zi"),
            ("yobi", "Yi"),
        ),
        start=1,
    )
)

__all__ = ["Prefix", "SI_PREFIXES", "BINARY_PREFIXES"]
