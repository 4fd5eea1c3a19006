from fractions import Fraction

import pytest

from metrica.core import product
from metrica.core.product import ProductElement


A = (ProductElement("a", 1),)
B = (ProductElement("b", 1),)


def test_multiply_appends_new_factors_in_order():
    out = product.multiply(A, B)
    assert [e.factor for e in out] == ["a", "b"]

def test_multiply_merges_shared_factors():
    out = product.multiply(product.multiply(A, B), A)
    assert product.as_map(out) == {"a": 2, "b": 1}

def test_divide_cancels_to_empty_product():
    assert product.divide(A, A) == ()

def test_power_and_zero_power():
    ab = product.multiply(A, B)
    assert product.as_map(product.power(ab, -3)) == {"a": -3, "b": -3}
    assert product.power(ab, 0) == ()

def test_root_reduces_exponents():
    a4 = product.power(A, 4)
    assert product.root(a4, 2) == (ProductElement("a", 2, 1),)
    assert product.as_map(product.root(A, 3)) == {"a": Fraction(1, 3)}

def test_root_order_must_be_positive():
    with pytest.raises(ValueError):
        product.root(A, 0)

def test_fractional_exponents_add_up():
    half = product.root(A, 2)
    assert product.multiply(half, half) == A

def test_equality_and_hash_ignore_order():
    ab = product.multiply(A, B)
    ba = product.multiply(B, A)
    assert ab != ba
    assert product.same_product(ab, ba)
    assert product.product_hash(ab) == product.product_hash(ba)

def test_element_exponent():
    assert ProductElement("a", 3).exponent == 3
    assert ProductElement("a", -1, 2).exponent == Fraction(-1, 2)
