import pytest

from metrica.core.converters import Rational
from metrica.core.dimensions import BASE_DIMENSIONS, NONE
from metrica.errors import ConfigError
from metrica.units.prefixes import BINARY_PREFIXES, SI_PREFIXES
from metrica.units.registry import (
    BASE_UNITS,
    DEFAULT_SYMBOLS,
    KILOGRAM,
    build_symbol_map,
)


def test_default_table_is_frozen(symbols):
    assert symbols is DEFAULT_SYMBOLS
    assert symbols.frozen
    with pytest.raises(ConfigError):
        symbols.label(KILOGRAM, "kilo")

def test_builder_returns_fresh_tables():
    a, b = build_symbol_map(), build_symbol_map()
    assert a is not b
    assert a.units() == b.units()

@pytest.mark.parametrize("symbol", ["m", "g", "s", "A", "K", "mol", "cd", "rad", "sr", "10*", "10^", "%"])
def test_required_atoms_are_present(symbols, symbol):
    assert symbol in symbols

def test_base_units_cover_base_dimensions():
    assert [u.dimension for u in BASE_UNITS] == list(BASE_DIMENSIONS)
    assert all(u.is_system_unit for u in BASE_UNITS)

def test_all_prefixes_registered(symbols):
    for prefix in SI_PREFIXES + BINARY_PREFIXES:
        assert symbols.prefixes()[prefix.symbol] == prefix

def test_dimensionless_atoms(symbols):
    for symbol in ("rad", "sr", "10*", "%"):
        assert symbols.get_unit(symbol).dimension == NONE
    assert symbols.get_unit("%").converter_to_si == Rational(1, 100)

def test_derived_units_are_coherent(symbols):
    for symbol in ("N", "Pa", "J", "W", "Hz", "Ohm"):
        unit = symbols.get_unit(symbol)
        assert unit.is_system_unit
        assert unit.converter_to_si.is_identity

def test_joule_is_newton_metre(symbols):
    joule = symbols.get_unit("J")
    assert joule.get_converter_to(symbols.get_unit("N") * symbols.get_unit("m")).is_identity
    assert joule.get_converter_to(symbols.get_unit("kg") * symbols.get_unit("m") ** 2 / symbols.get_unit("s") ** 2).is_identity

def test_time_units(symbols):
    day = symbols.get_unit("d")
    assert day.get_converter_to(symbols.get_unit("s")).apply(1.0) == 86400.0
    assert symbols.get_unit("wk").get_converter_to(day).apply(1.0) == 7.0
