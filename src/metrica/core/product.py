"""
metrica.core.product
====================

Products of factors raised to rational exponents.

A product is an ordered tuple of `ProductElement(factor, pow, root)` meaning
``factor ** (pow / root)``. Units and dimensions both build on these helpers,
so the exponent algebra (merging equal factors, gcd reduction, cancellation)
exists exactly once.

Invariants of every tuple returned here:
- each factor appears at most once,
- ``pow != 0`` and ``root > 0``,
- ``gcd(|pow|, root) == 1``.
"""

from __future__ import annotations

from dataclasses import dataclass
from fractions import Fraction
from math import gcd
from typing import Any, Dict, Hashable, Tuple


@dataclass(frozen=True, slots=True)
class ProductElement:
    factor: Hashable
    pow: int
    root: int = 1

    @property
    def exponent(self) -> int | Fraction:
        return self.pow if self.root == 1 else Fraction(self.pow, self.root)


Elements = Tuple[ProductElement, ...]


def _element(factor: Hashable, pow: int, root: int) -> ProductElement | None:
    if pow == 0:
        return None
    g = gcd(abs(pow), root)
    return ProductElement(factor, pow // g, root // g)


def multiply(left: Elements, right: Elements) -> Elements:
    """Merge two products, adding exponents of shared factors."""
    right_by_factor = {e.factor: e for e in right}
    result = []
    for le in left:
        re = right_by_factor.pop(le.factor, None)
        if re is None:
            result.append(le)
            continue
        merged = _element(le.factor, le.pow * re.root + re.pow * le.root, le.root * re.root)
        if merged is not None:
            result.append(merged)
    # factors only present on the right keep their original order
    result.extend(e for e in right if e.factor in right_by_factor)
    return tuple(result)


def invert(elements: Elements) -> Elements:
    return tuple(ProductElement(e.factor, -e.pow, e.root) for e in elements)


def divide(left: Elements, right: Elements) -> Elements:
    return multiply(left, invert(right))


def power(elements: Elements, n: int) -> Elements:
    if n == 0:
        return ()
    out = (_element(e.factor, e.pow * n, e.root) for e in elements)
    return tuple(e for e in out if e is not None)


def root(elements: Elements, n: int) -> Elements:
    if n <= 0:
        raise ValueError(f"Root order must be positive, got {n}")
    out = (_element(e.factor, e.pow, e.root * n) for e in elements)
    return tuple(e for e in out if e is not None)


def as_map(elements: Elements) -> Dict[Any, int | Fraction]:
    """Exponent map ``{factor: exponent}`` in element order."""
    return {e.factor: e.exponent for e in elements}


def same_product(a: Elements, b: Elements) -> bool:
    """Order-independent equality of two products."""
    return len(a) == len(b) and frozenset(a) == frozenset(b)


def product_hash(elements: Elements) -> int:
    return hash(frozenset(elements))


__all__ = [
    "ProductElement",
    "Elements",
    "multiply",
    "invert",
    "divide",
    "power",
    "root",
    "as_map",
    "same_product",
    "product_hash",
]
