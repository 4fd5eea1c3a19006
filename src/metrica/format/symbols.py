"""
metrica.format.symbols
======================

Bidirectional symbol table used by the parser and the formatter.

- ``label(unit, symbol)``   symbol <-> unit (the unit's canonical symbol)
- ``alias(unit, symbol)``   symbol  -> unit (parse-only synonym)
- ``label(prefix, symbol)`` symbol <-> prefix, and converter -> prefix

A `SymbolMap` is filled once during bootstrap (see `from_entries`) and then
frozen; after `freeze()` it is read-only and may be shared between threads.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, Mapping, Optional, Tuple, Union

from metrica.core.converters import Converter
from metrica.core.unit import Unit
from metrica.errors import ConfigError
from metrica.units.prefixes import Prefix

logger = logging.getLogger(__name__)

SymbolEntry = Tuple[str, Union[Unit, Prefix], bool]


class SymbolMap:
    def __init__(self) -> None:
        self._symbol_to_unit: Dict[str, Unit] = {}
        self._unit_to_symbol: Dict[Unit, str] = {}
        self._symbol_to_prefix: Dict[str, Prefix] = {}
        self._prefix_to_symbol: Dict[Prefix, str] = {}
        self._converter_to_prefix: Dict[Converter, Prefix] = {}
        self._frozen = False

    @classmethod
    def from_entries(cls, entries: Iterable[SymbolEntry], freeze: bool = True) -> "SymbolMap":
        """Build a map from ordered ``(symbol, unit_or_prefix, is_alias)`` entries.

        Entries that are neither units nor prefixes, and prefix aliases, are
        logged and skipped.
        """
        symbols = cls()
        for symbol, value, is_alias in entries:
            if isinstance(value, Unit):
                if is_alias:
                    symbols.alias(value, symbol)
                else:
                    symbols.label(value, symbol)
            elif isinstance(value, Prefix) and not is_alias:
                symbols.label(value, symbol)
            else:
                logger.error(
                    "Skipping symbol %r: cannot register %r as a %s",
                    symbol, value, "unit alias" if is_alias else "unit or prefix",
                )
        if freeze:
            symbols.freeze()
        return symbols

    # ------------------------------------------------------------------ writes
    def label(self, target: Union[Unit, Prefix], symbol: str) -> None:
        """Register the canonical symbol of a unit or prefix (last label wins)."""
        self._check_writable(symbol)
        if isinstance(target, Prefix):
            self._symbol_to_prefix[symbol] = target
            self._prefix_to_symbol[target] = symbol
            self._converter_to_prefix[target.converter] = target
            return
        previous = self._unit_to_symbol.get(target)
        if previous is not None and previous != symbol:
            logger.debug("Relabelling %r: %r -> %r", target, previous, symbol)
        self._symbol_to_unit[symbol] = target
        self._unit_to_symbol[target] = symbol

    def alias(self, unit: Unit, symbol: str) -> None:
        """Register an additional parse-only symbol for `unit`."""
        self._check_writable(symbol)
        self._symbol_to_unit[symbol] = unit

    def freeze(self) -> "SymbolMap":
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    def _check_writable(self, symbol: str) -> None:
        if self._frozen:
            raise ConfigError(f"Cannot register {symbol!r}: symbol map is frozen")
        if not symbol:
            raise ConfigError("Symbols must be non-empty strings")

    # ------------------------------------------------------------------- reads
    def get_unit(self, symbol: str) -> Optional[Unit]:
        return self._symbol_to_unit.get(symbol)

    def get_symbol(self, target: Union[Unit, Prefix]) -> Optional[str]:
        if isinstance(target, Prefix):
            return self._prefix_to_symbol.get(target)
        return self._unit_to_symbol.get(target)

    def get_prefix(self, key: Union[str, Converter]) -> Optional[Prefix]:
        """Prefix for a converter, or the longest prefix symbol starting `key`."""
        if isinstance(key, Converter):
            return self._converter_to_prefix.get(key)
        match = self.match_prefix(key)
        return None if match is None else match[1]

    def match_prefix(self, text: str) -> Optional[Tuple[str, Prefix]]:
        """Longest registered prefix symbol that `text` starts with, and its prefix."""
        best: Optional[str] = None
        for symbol in self._symbol_to_prefix:
            if text.startswith(symbol) and (best is None or len(symbol) > len(best)):
                best = symbol
        return None if best is None else (best, self._symbol_to_prefix[best])

    def units(self) -> Mapping[str, Unit]:
        """Snapshot of every unit symbol (labels and aliases)."""
        return dict(self._symbol_to_unit)

    def labels(self) -> Mapping[Unit, str]:
        """Snapshot of unit -> canonical symbol."""
        return dict(self._unit_to_symbol)

    def prefixes(self) -> Mapping[str, Prefix]:
        return dict(self._symbol_to_prefix)

    def __contains__(self, symbol: object) -> bool:
        return symbol in self._symbol_to_unit

    def __len__(self) -> int:
        return len(self._symbol_to_unit)

    def __repr__(self) -> str:
        state = "frozen" if self._frozen else "open"
        return (
            f"<SymbolMap {len(self._symbol_to_unit)} units, "
            f"{len(self._symbol_to_prefix)} prefixes, {state}>"
        )


__all__ = ["SymbolMap", "SymbolEntry"]
