import importlib
import importlib.metadata as metadata
import builtins
import io

import pytest

import metrica
from metrica.core.dimensions import LENGTH, TIME
from metrica.format.symbols import SymbolMap
from metrica.units.registry import DEFAULT_SYMBOLS, METRE


def test_version_fallback(monkeypatch):
    # Force PackageNotFoundError
    monkeypatch.setattr(metadata, "version", lambda _: (_ for _ in ()).throw(metadata.PackageNotFoundError))

    # Fake pyproject.toml content
    fake_toml = b"[project]\nversion = '0.1.0'\n"
    monkeypatch.setattr(builtins, "open", lambda *_: io.BytesIO(fake_toml))

    # Reload the module so the fallback branch executes
    importlib.reload(metrica)

    assert metrica.__version__ == "0.1.0"

def test_parse_and_format_helpers():
    speed = metrica.parse("m/s")
    assert speed.dimension == LENGTH / TIME
    assert metrica.format_unit(speed) == "m/s"

def test_helpers_accept_a_symbol_table():
    table = SymbolMap.from_entries([("metre", METRE, False)])
    assert metrica.parse("metre", table) == METRE
    assert metrica.format_unit(METRE, table) == "metre"

def test_lazy_symbols_attribute():
    assert metrica.symbols is DEFAULT_SYMBOLS
    assert "symbols" in dir(metrica)
    import metrica.units as units
    assert units.symbols is DEFAULT_SYMBOLS
    assert "symbols" in dir(units)

def test_unknown_attribute():
    with pytest.raises(AttributeError):
        metrica.not_there
