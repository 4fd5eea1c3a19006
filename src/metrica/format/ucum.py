"""
metrica.format.ucum
===================

UCUM parsing and formatting bound to a symbol map.

Formatting follows the UCUM conventions: ``.`` for multiplication, ``/`` for
division, trailing integer exponents (``m2``, ``s-1`` is written ``/s``),
parentheses around sub-expressions, ``{...}`` for annotations and prefix
symbols for transformed units.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from metrica.core.converters import Converter, Rational, Scale
from metrica.core.unit import ONE, AnnotatedUnit, TransformedUnit, Unit
from metrica.errors import UnitFormatError
from metrica.format.parser import parse_unit
from metrica.format.symbols import SymbolMap
from metrica.units.registry import DEFAULT_SYMBOLS

# Largest integer a float represents exactly.
_MAX_EXACT_FLOAT_INT = 2**53


def _is_expression(text: str) -> bool:
    return "." in text or "/" in text


class UCUMFormat:
    def __init__(self, symbols: SymbolMap) -> None:
        self.symbols = symbols
        self._anchors: Optional[Dict[Unit, List[Tuple[TransformedUnit, str]]]] = None

    def parse(self, text: str) -> Unit:
        return parse_unit(text, self.symbols)

    def format(self, unit: Unit) -> str:
        annotation: Optional[str] = None
        if isinstance(unit, AnnotatedUnit):
            annotation = unit.annotation
            unit = unit.actual

        if annotation is not None and unit == ONE:
            return "{" + annotation + "}"

        symbol = self.symbols.get_symbol(unit)
        if symbol is None:
            if unit.product_units is not None:
                symbol = self._format_product(unit)
            elif isinstance(unit, TransformedUnit):
                symbol = self._format_transformed(unit)
            elif unit.symbol:
                symbol = unit.symbol
            else:
                raise UnitFormatError(f"Cannot format {unit!r} as a UCUM expression")

        if annotation:
            symbol += "{" + annotation + "}"
        return symbol

    # ------------------------------------------------------------------ products
    def _format_product(self, unit: Unit) -> str:
        factors = unit.product_units or {}
        if not factors:
            return "1"
        out = ""
        for factor, exponent in factors.items():
            if not isinstance(exponent, int):
                raise UnitFormatError(f"UCUM has no fractional exponents ({factor!r}^{exponent})")
            text = self.format(factor)
            if _is_expression(text):
                text = f"({text})"
            if out:
                out += "." if exponent > 0 else "/"
            elif exponent < 0:
                out += "1/"
            out += text
            if abs(exponent) != 1:
                out += str(abs(exponent))
        return out

    # -------------------------------------------------------------- transformed
    def _format_transformed(self, unit: TransformedUnit) -> str:
        parent, converter = unit.parent, unit.converter
        text = "" if parent == ONE else self.format(parent)
        is_expression = _is_expression(text)

        simple = bool(text) and parent.product_units is None and not is_expression
        if simple and not self._is_prefixed(text, parent):
            prefix = self.symbols.get_prefix(converter)
            if prefix is not None:
                return self.symbols.get_symbol(prefix) + text  # type: ignore[operator]

        # A labelled transform of the same parent plus a prefix: mg is m + g, not u + kg.
        for anchor, anchor_symbol in self._anchors_of(parent):
            if _is_expression(anchor_symbol):
                continue
            prefix = self.symbols.get_prefix(anchor.converter.inverse().concatenate(converter))
            if prefix is not None:
                return self.symbols.get_symbol(prefix) + anchor_symbol  # type: ignore[operator]

        return self._format_converter(converter, text, is_expression)

    def _is_prefixed(self, text: str, unit: Unit) -> bool:
        """True when `text` already reads as prefix + symbol for `unit` (``kg``)."""
        match = self.symbols.match_prefix(text)
        if match is None:
            return False
        prefix_symbol, prefix = match
        rest = self.symbols.get_unit(text[len(prefix_symbol):])
        return rest is not None and rest.transform(prefix.converter) == unit

    def _format_converter(self, converter: Converter, text: str, is_expression: bool) -> str:
        continued = bool(text)
        if isinstance(converter, Rational):
            if converter.numerator < 0:
                raise UnitFormatError("Only positive factors are supported in UCUM")
            if is_expression:
                text = f"({text})"
            if converter.numerator != 1:
                text += ("." if continued else "") + str(converter.numerator)
            if converter.denominator != 1:
                text = (text or "1") + f"/{converter.denominator}"
            return text
        if isinstance(converter, Scale):
            value = converter.factor
            if not value.is_integer() or not 0 < value <= _MAX_EXACT_FLOAT_INT:
                raise UnitFormatError("Only positive integer factors are supported in UCUM")
            if is_expression:
                text = f"({text})"
            return text + ("." if continued else "") + str(int(value))
        # Other converters (offsets, logarithms, π) have no UCUM spelling.
        return f"{type(converter).__name__}({text or '1'})"

    def _anchors_of(self, parent: Unit) -> List[Tuple[TransformedUnit, str]]:
        # Pure numbers (10*, %) never take a prefix.
        if parent == ONE:
            return []
        if self._anchors is None:
            anchors: Dict[Unit, List[Tuple[TransformedUnit, str]]] = {}
            for labelled, symbol in self.symbols.labels().items():
                if isinstance(labelled, TransformedUnit):
                    anchors.setdefault(labelled.parent, []).append((labelled, symbol))
            self._anchors = anchors
        return self._anchors.get(parent, [])


DEFAULT_FORMAT = UCUMFormat(DEFAULT_SYMBOLS)

__all__ = ["UCUMFormat", "DEFAULT_FORMAT"]
