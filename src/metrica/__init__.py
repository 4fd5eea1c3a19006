"""
Metrica: units of measurement with exact conversions and UCUM parsing/formatting.

Metrica models units as an algebra (products, powers, roots, prefixes and
arbitrary converters) over a pluggable dimensional model, and reads/writes
them as UCUM case-sensitive expressions. This module exposes a minimal,
stable public API. The default symbol table is built lazily on first use.
"""

import logging
from importlib import metadata as _metadata
from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:  # pragma: no cover - typing aid only
    from metrica.core.unit import Unit
    from metrica.format.symbols import SymbolMap

__license__ = "MIT"

# Library logging stays silent unless the application configures handlers.
logging.getLogger(__name__).addHandler(logging.NullHandler())

# Try to read the installed package version first; fall back to pyproject for local dev.
try:
    __version__ = _metadata.version("metrica")
except _metadata.PackageNotFoundError:
    import tomllib
    with open("pyproject.toml", "rb") as f:
        __version__ = tomllib.load(f)["project"]["version"]


def parse(text: str, symbols: Optional["SymbolMap"] = None) -> "Unit":
    """Parse a UCUM expression, with the default symbols unless `symbols` is given."""
    from metrica.format.ucum import DEFAULT_FORMAT, UCUMFormat

    fmt = DEFAULT_FORMAT if symbols is None else UCUMFormat(symbols)
    return fmt.parse(text)


def format_unit(unit: "Unit", symbols: Optional["SymbolMap"] = None) -> str:
    """Format `unit` as a UCUM expression."""
    from metrica.format.ucum import DEFAULT_FORMAT, UCUMFormat

    fmt = DEFAULT_FORMAT if symbols is None else UCUMFormat(symbols)
    return fmt.format(unit)


def __getattr__(name: str) -> Any:
    """Lazy access to the default symbol map as ``metrica.symbols``."""
    if name == "symbols":
        from metrica.units import _get_default_symbols

        return _get_default_symbols()
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


def __dir__() -> list[str]:
    return sorted(list(globals().keys()) + ["symbols"])


# Public names exposed by the package. Keep this minimal and stable.
__all__ = ["__version__", "__license__", "parse", "format_unit"]
