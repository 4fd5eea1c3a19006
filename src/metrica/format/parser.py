"""
metrica.format.parser
=====================

Tokenizer and recursive-descent parser for UCUM unit expressions such as
``"m/s2"``, ``"kg.m/s2"``, ``"10*23"``, ``"mmol/(24.h)"`` or ``"g{dry}"``.

Grammar::

    unit        := term END
    term        := component (('.' | '/') component)*
    component   := annotatable ANNOTATION?
                 | ANNOTATION
                 | FACTOR
                 | '/' component
                 | '(' term ')'
    annotatable := simple_unit (SIGN? FACTOR)?
    simple_unit := ATOM

Atoms are resolved against a `SymbolMap`: first as a unit symbol, then as
the longest registered prefix followed by a unit symbol.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import FrozenSet, List, Tuple

from metrica.core.unit import ONE, Unit
from metrica.errors import InvalidExponentError, UnitSyntaxError, UnknownSymbolError
from metrica.format.symbols import SymbolMap

logger = logging.getLogger(__name__)

# --- Token kinds ------------------------------------------------------------
ATOM = "ATOM"
FACTOR = "FACTOR"
SIGN = "SIGN"
DOT = "'.'"
SOLIDUS = "'/'"
LPAREN = "'('"
RPAREN = "')'"
ANNOTATION = "ANNOTATION"
END = "END"

_OPERATORS = {".": DOT, "/": SOLIDUS, "(": LPAREN, ")": RPAREN, "+": SIGN, "-": SIGN}
_DIGITS = frozenset("0123456789")

_COMPONENT_START: FrozenSet[str] = frozenset({ATOM, ANNOTATION, FACTOR, SOLIDUS, LPAREN})

# exponents are signed 32-bit integers
_MIN_EXPONENT = -(2**31)
_MAX_EXPONENT = 2**31 - 1

# parenthesised or unary-divided components nested deeper than this are rejected
_MAX_NESTING = 100


@dataclass(frozen=True, slots=True)
class Token:
    kind: str
    text: str
    position: int


# ---------------- Tokenizer ---------------------------------------------------

def _scan_atom(text: str, i: int) -> int:
    """Return the end index of the atom run starting at `i`."""
    n = len(text)
    while i < n:
        ch = text[i]
        if ch.isspace() or ch in _OPERATORS or ch in "{}":
            break
        if ch == "[":
            end = text.find("]", i + 1)
            if end < 0:
                raise UnitSyntaxError("[", frozenset({"']'"}), i, f"Unterminated '[' at {i}")
            i = end + 1
        elif ch == "]":
            raise UnitSyntaxError("]", position=i)
        else:
            i += 1
    return i


# Cache the token stream only. Safe across symbol maps because tokens hold no units.
@lru_cache(maxsize=4096)
def tokenize(text: str) -> Tuple[Token, ...]:
    """Split a unit expression into tokens, ending with an END token.

    Trailing digits of an atom are its exponent: ``m2`` is ``ATOM(m) FACTOR(2)``
    and ``10*23`` is ``ATOM(10*) FACTOR(23)``. An all-digit run is a FACTOR.
    """
    tokens: List[Token] = []
    i, n = 0, len(text)
    while i < n:
        ch = text[i]
        if ch.isspace():
            i += 1
            continue
        if ch in _OPERATORS:
            tokens.append(Token(_OPERATORS[ch], ch, i))
            i += 1
            continue
        if ch == "{":
            end = text.find("}", i + 1)
            if end < 0:
                raise UnitSyntaxError("{", frozenset({"'}'"}), i, f"Unterminated annotation at {i}")
            tokens.append(Token(ANNOTATION, text[i + 1:end], i))
            i = end + 1
            continue
        if ch == "}":
            raise UnitSyntaxError("}", position=i)

        start = i
        i = _scan_atom(text, i)
        run = text[start:i]
        split = len(run)
        while split > 0 and run[split - 1] in _DIGITS:
            split -= 1
        if split == 0:
            tokens.append(Token(FACTOR, run, start))
        elif split == len(run):
            tokens.append(Token(ATOM, run, start))
        else:
            tokens.append(Token(ATOM, run[:split], start))
            tokens.append(Token(FACTOR, run[split:], start + split))
    tokens.append(Token(END, "", n))
    return tuple(tokens)


# ---------------- Parser ------------------------------------------------------

class UnitParser:
    """Recursive-descent parser building units against a symbol map.

    An instance keeps a cursor into the current token stream, so it must not
    be shared between threads; create one parser per thread (they can share
    a frozen `SymbolMap`).
    """

    def __init__(self, symbols: SymbolMap) -> None:
        self.symbols = symbols
        self._tokens: Tuple[Token, ...] = ()
        self._i = 0
        self._depth = 0

    def parse(self, text: str) -> Unit:
        logger.debug("Parsing unit expression %r", text)
        self._tokens = tokenize(text)
        self._i = 0
        self._depth = 0
        unit = self._term()
        tok = self._peek()
        if tok.kind != END:
            raise UnitSyntaxError(tok.text, frozenset({DOT, SOLIDUS, END}), tok.position)
        logger.debug("Parsed %r as %r", text, unit)
        return unit

    # term := component (('.' | '/') component)*
    def _term(self) -> Unit:
        result = ONE.multiply(self._component())
        while True:
            kind = self._peek().kind
            if kind == DOT:
                self._advance()
                result = result.multiply(self._component())
            elif kind == SOLIDUS:
                self._advance()
                result = result.divide(self._component())
            else:
                return result

    def _component(self) -> Unit:
        tok = self._peek()
        if tok.kind == ATOM:
            unit = self._annotatable()
            if self._peek().kind == ANNOTATION:
                unit = unit.annotate(self._advance().text)
            return unit
        if tok.kind == ANNOTATION:
            self._advance()
            return ONE.annotate(tok.text)
        if tok.kind == FACTOR:
            self._advance()
            value = self._integer(tok)
            if value == 0:
                raise InvalidExponentError(f"Factor must be non-zero at {tok.position}", tok.text, tok.position)
            return ONE.multiply(value)
        if tok.kind in (SOLIDUS, LPAREN):
            self._advance()
            self._enter(tok)
            if tok.kind == SOLIDUS:
                unit = ONE.divide(self._component())
            else:
                unit = self._term()
                self._expect(RPAREN, frozenset({DOT, SOLIDUS, RPAREN}))
            self._depth -= 1
            return unit
        raise UnitSyntaxError(tok.text, _COMPONENT_START, tok.position)

    # annotatable := simple_unit (SIGN? FACTOR)?
    def _annotatable(self) -> Unit:
        unit = self._simple_unit()
        tok = self._peek()
        if tok.kind == SIGN:
            self._advance()
            return unit.pow(self._exponent(self._expect(FACTOR), negative=tok.text == "-"))
        if tok.kind == FACTOR:
            self._advance()
            return unit.pow(self._exponent(tok))
        return unit

    def _simple_unit(self) -> Unit:
        tok = self._expect(ATOM)
        unit = self.symbols.get_unit(tok.text)
        if unit is not None:
            return unit
        match = self.symbols.match_prefix(tok.text)
        if match is not None:
            prefix_symbol, prefix = match
            unit = self.symbols.get_unit(tok.text[len(prefix_symbol):])
            if unit is not None:
                return unit.transform(prefix.converter)
        raise UnknownSymbolError(tok.text, tok.position)

    # ---- token helpers ----
    def _peek(self) -> Token:
        return self._tokens[self._i]

    def _advance(self) -> Token:
        tok = self._tokens[self._i]
        if tok.kind != END:
            self._i += 1
        return tok

    def _expect(self, kind: str, expected: FrozenSet[str] | None = None) -> Token:
        tok = self._peek()
        if tok.kind != kind:
            raise UnitSyntaxError(tok.text, expected or frozenset({kind}), tok.position)
        return self._advance()

    @staticmethod
    def _integer(tok: Token) -> int:
        try:
            return int(tok.text)
        except ValueError:
            raise InvalidExponentError(
                f"Malformed integer {tok.text!r} at {tok.position}", tok.text, tok.position
            ) from None

    def _enter(self, tok: Token) -> None:
        self._depth += 1
        if self._depth > _MAX_NESTING:
            raise UnitSyntaxError(
                tok.text,
                position=tok.position,
                message=f"Expression nested deeper than {_MAX_NESTING} levels at {tok.position}",
            )

    def _exponent(self, tok: Token, negative: bool = False) -> int:
        value = self._integer(tok)
        if negative:
            value = -value
        if not _MIN_EXPONENT <= value <= _MAX_EXPONENT:
            raise InvalidExponentError(
                f"Exponent {tok.text} at {tok.position} is out of range", tok.text, tok.position
            )
        return value


def parse_unit(text: str, symbols: SymbolMap) -> Unit:
    """Parse `text` with a fresh `UnitParser` bound to `symbols`."""
    return UnitParser(symbols).parse(text)


__all__ = [
    "Token",
    "tokenize",
    "UnitParser",
    "parse_unit",
    "ATOM",
    "FACTOR",
    "SIGN",
    "DOT",
    "SOLIDUS",
    "LPAREN",
    "RPAREN",
    "ANNOTATION",
    "END",
]
