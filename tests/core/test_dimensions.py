from fractions import Fraction

import pytest

from metrica.core.dimensions import (
    AMOUNT,
    BASE_DIMENSIONS,
    CURRENT,
    LENGTH,
    LUMINOUS,
    MASS,
    NONE,
    TEMPERATURE,
    TIME,
    Dimension,
)
from metrica.core.model import get_model

# --- Base dimensions ---------------------------------------------------------------

def test_base_dimensions():
    assert len(BASE_DIMENSIONS) == 7
    assert all(d.is_base for d in BASE_DIMENSIONS)
    assert len(set(BASE_DIMENSIONS)) == 7
    assert [d.symbol for d in (LENGTH, MASS, TIME, CURRENT, TEMPERATURE, AMOUNT, LUMINOUS)] == [
        "L", "M", "T", "I", "Θ", "N", "J",
    ]

def test_class_level_aliases():
    assert Dimension.LENGTH is LENGTH
    assert Dimension.NONE is NONE

def test_none_is_dimensionless():
    assert NONE.is_dimensionless
    assert not LENGTH.is_dimensionless
    assert repr(NONE) == "[1]"
    assert NONE.get_product_dimensions() == {}

def test_base_dimension_has_no_product_map():
    assert LENGTH.get_product_dimensions() is None

def test_symbol_and_elements_are_exclusive():
    with pytest.raises(ValueError):
        Dimension("X", elements=LENGTH.pow(2).elements)

# --- Algebra ----------------------------------------------------------------------

def test_single_factor_normalises_to_base():
    assert LENGTH * TIME / TIME == LENGTH
    assert (LENGTH * TIME / TIME).is_base

def test_product_equality_is_order_independent():
    assert LENGTH * TIME == TIME * LENGTH
    assert hash(LENGTH * TIME) == hash(TIME * LENGTH)

def test_cancellation_gives_none():
    assert LENGTH / LENGTH == NONE

def test_pow_and_root():
    area = LENGTH ** 2
    assert area.get_product_dimensions() == {LENGTH: 2}
    assert area.root(2) == LENGTH
    assert LENGTH.pow(0) == NONE
    assert LENGTH.root(-1) == LENGTH ** -1

def test_fractional_power():
    half = LENGTH ** Fraction(1, 2)
    assert half.get_product_dimensions() == {LENGTH: Fraction(1, 2)}
    assert half * half == LENGTH
    assert repr(half) == "[L^(1/2)]"

def test_pow_rejects_non_integers():
    with pytest.raises(TypeError):
        LENGTH.pow(1.5)

def test_pow_rejects_modulo():
    with pytest.raises(TypeError):
        pow(LENGTH, 2, 3)

def test_root_of_zero_order():
    with pytest.raises(ValueError):
        LENGTH.root(0)

def test_repr_of_products():
    assert repr(LENGTH) == "[L]"
    assert repr(LENGTH ** 2 / TIME ** 2) == "[L^2][T^-2]"

def test_mixing_with_other_types_is_rejected():
    with pytest.raises(TypeError):
        LENGTH * 2

# --- Decomposition ------------------------------------------------------------------

def test_fundamental_dimension_round_trip():
    accel = LENGTH.pow(2).divide(TIME.pow(2))
    fundamental = get_model().get_fundamental_dimension(accel)
    assert fundamental.get_product_dimensions() == {LENGTH: 2, TIME: -2}
    assert fundamental == accel
