import pytest

from metrica.core.converters import IDENTITY, Rational, Scale, rational
from metrica.core.dimensions import LENGTH, MASS, NONE, TIME
from metrica.core.unit import (
    ONE,
    AlternateUnit,
    AnnotatedUnit,
    BaseUnit,
    ProductUnit,
    TransformedUnit,
    Unit,
)
from metrica.errors import ConfigError, IncommensurableError, UnitConversionError
from metrica.units.registry import (
    CELSIUS,
    GRAM,
    KELVIN,
    KILOGRAM,
    METRE,
    NEWTON,
    SECOND,
)

KM = METRE.transform(rational(1000))
MM = METRE.transform(rational(1, 1000))

# --- Structure --------------------------------------------------------------------

def test_base_unit_is_its_own_system_unit():
    assert METRE.system_unit is METRE
    assert METRE.converter_to_si is IDENTITY
    assert METRE.dimension == LENGTH
    assert METRE.is_system_unit
    assert METRE.product_units is None

def test_one_is_the_empty_product():
    assert isinstance(ONE, ProductUnit)
    assert ONE.product_units == {}
    assert ONE.dimension == NONE
    assert ONE.symbol is None

def test_gram_is_a_scaled_kilogram():
    assert isinstance(GRAM, TransformedUnit)
    assert GRAM.system_unit == KILOGRAM
    assert GRAM.converter_to_si == Rational(1, 1000)
    assert not GRAM.is_system_unit

def test_transform_by_identity_returns_system_unit():
    assert METRE.transform(IDENTITY) is METRE
    assert KM.transform(rational(1, 1000)) == METRE

def test_transformed_unit_needs_a_system_parent():
    with pytest.raises(ConfigError):
        TransformedUnit(GRAM, Rational(2, 1))

def test_alternate_unit():
    hz = SECOND.inverse().alternate("Hz")
    assert isinstance(hz, AlternateUnit)
    assert hz.dimension == TIME ** -1
    assert hz.system_unit is hz
    assert hz != SECOND.inverse()
    with pytest.raises(ConfigError):
        GRAM.alternate("gg")

def test_alternate_of_alternate_unwraps():
    rad = ONE.alternate("rad")
    assert AlternateUnit(rad, "r2").parent == ONE

# --- Algebra ----------------------------------------------------------------------

def test_products_and_powers():
    assert METRE * METRE == METRE ** 2
    assert (METRE ** 2).product_units == {METRE: 2}
    assert (METRE ** 2).root(2) == METRE
    assert METRE / METRE == ONE
    assert (METRE / SECOND).dimension == LENGTH / TIME

def test_product_equality_is_order_independent():
    assert METRE * SECOND == SECOND * METRE
    assert hash(METRE * SECOND) == hash(SECOND * METRE)

def test_one_is_neutral():
    assert ONE * METRE is METRE
    assert METRE.multiply(ONE) is METRE
    assert ONE.inverse() is ONE

@pytest.mark.regression(reason="1/unit must be the reciprocal, other numerators are rejected")
def test_reciprocal():
    assert 1 / SECOND == SECOND ** -1
    assert 1 / (1 / SECOND) == SECOND
    with pytest.raises(TypeError):
        2 / SECOND

def test_pow_requires_int():
    with pytest.raises(TypeError):
        METRE.pow(0.5)

def test_root_of_zero_order():
    with pytest.raises(ValueError):
        METRE.root(0)

def test_multiply_by_numbers():
    assert METRE * 1000 == KM
    assert 1000 * METRE == KM
    assert METRE / 1000 == MM
    assert METRE * 1 is METRE
    assert (METRE * 2.5).converter_to_si == Scale(2.5)

def test_shift_is_affine():
    assert CELSIUS.get_converter_to(KELVIN).apply(0.0) == 273.15
    assert KELVIN.get_converter_to(CELSIUS).apply(273.15) == 0.0
    assert KELVIN.shift(0) is KELVIN

# --- Conversion -------------------------------------------------------------------

def test_prefixed_conversions():
    assert KM.get_converter_to(METRE).apply(2.0) == 2000.0
    assert KM.get_converter_to(MM).apply(1.0) == 1e6
    assert METRE.get_converter_to(METRE) is IDENTITY

def test_scaled_factors_in_products():
    assert (KM ** 2).converter_to_si == Rational(10 ** 6, 1)
    assert (KM / SECOND).get_converter_to(METRE / SECOND).apply(1.0) == 1000.0

def test_fractional_power_of_scaled_unit_cannot_convert():
    with pytest.raises(UnitConversionError):
        KM.root(2).converter_to_si

def test_nonlinear_factor_cannot_convert():
    with pytest.raises(UnitConversionError):
        (CELSIUS / SECOND).converter_to_si

def test_alternate_and_product_are_compatible():
    assert NEWTON.is_compatible(KILOGRAM * METRE / SECOND ** 2)
    assert NEWTON.get_converter_to(KILOGRAM * METRE / SECOND ** 2).is_identity

def test_incommensurable_units():
    assert not METRE.is_compatible(SECOND)
    with pytest.raises(IncommensurableError):
        METRE.get_converter_to(SECOND)
    with pytest.raises(ValueError):
        KILOGRAM.get_converter_to(METRE)

# --- Annotations ----------------------------------------------------------------------

def test_annotation_keeps_conversion():
    dry = GRAM.annotate("dry")
    assert isinstance(dry, AnnotatedUnit)
    assert dry != GRAM
    assert dry.dimension == MASS
    assert dry.get_converter_to(GRAM).is_identity
    assert dry.annotate("wet").actual == GRAM

def test_annotation_equality():
    assert METRE.annotate("x") == METRE.annotate("x")
    assert METRE.annotate("x") != METRE.annotate("y")

# --- Parsing & printing through the default table ---------------------------------------

def test_unit_of_parses_ucum():
    assert Unit.of("km") == KM
    assert Unit.of("kg.m/s2") == KILOGRAM * METRE / SECOND ** 2

def test_str_uses_ucum():
    assert str(KM) == "km"
    assert str(METRE / SECOND ** 2) == "m/s2"

def test_str_falls_back_to_repr():
    odd = METRE.transform(Scale(2.5))
    assert str(odd) == repr(odd)

def test_custom_base_unit():
    px = BaseUnit("px")
    assert px.dimension == NONE
    assert px.is_compatible(ONE)
