from metrica.core.converters import Rational
from metrica.units.prefixes import BINARY_PREFIXES, SI_PREFIXES, Prefix


def _by_symbol(prefixes):
    return {p.symbol: p for p in prefixes}


def test_si_prefix_table():
    si = _by_symbol(SI_PREFIXES)
    assert len(si) == 24
    assert si["k"].converter == Rational(1000, 1)
    assert si["u"].name == "micro"
    assert si["da"].converter == Rational(10, 1)
    assert si["q"].converter == Rational(1, 10 ** 30)

def test_binary_prefix_table():
    binary = _by_symbol(BINARY_PREFIXES)
    assert list(binary) == ["Ki", "Mi", "Gi", "Ti", "Pi", "Ei", "Zi", "Yi"]
    assert binary["Ki"].converter == Rational(1024, 1)
    assert binary["Yi"].converter == Rational(2 ** 80, 1)

def test_prefix_converters_are_unique():
    converters = [p.converter for p in SI_PREFIXES + BINARY_PREFIXES]
    assert len(set(converters)) == len(converters)

def test_prefix_repr():
    assert repr(Prefix("kilo", "k", Rational(1000, 1))) == "Prefix('kilo', 'k')"
