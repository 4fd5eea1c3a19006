from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:  # pragma: no cover - typing aid only
    from metrica.format.symbols import SymbolMap
# Lazy access helpers -------------------------------------------------------

def _get_default_symbols() -> "SymbolMap":
    # Import here: the registry builds every default unit at import time.
    from metrica.units.registry import DEFAULT_SYMBOLS
    return DEFAULT_SYMBOLS

def __getattr__(name: str) -> Any:
    """
    Lazy attribute access. Accessing 'symbols' builds the default symbol map
    on first use.
    """
    if name == "symbols":
        return _get_default_symbols()
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")

def __dir__() -> list[str]:
    return sorted(list(globals().keys()) + ["symbols"])
