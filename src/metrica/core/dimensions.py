# metrica.core.dimensions

from __future__ import annotations

from dataclasses import dataclass
from fractions import Fraction
from typing import Any, ClassVar, Dict, Optional, TypeAlias

from metrica.core import product
from metrica.core.product import Elements, ProductElement

Exponent: TypeAlias = "int | Fraction"


@dataclass(frozen=True, slots=True, eq=False)
class Dimension:
    """
    Physical dimension: either a base dimension (``symbol`` set) or a product
    of base dimensions raised to rational exponents (``elements`` set).

    `NONE` is the empty product. A product of a single base dimension with
    exponent 1 is always normalised back to that base dimension, so
    ``LENGTH * TIME / TIME == LENGTH`` holds structurally.
    """

    symbol: str = ""
    elements: Elements = ()

    LENGTH: ClassVar["Dimension"]
    MASS: ClassVar["Dimension"]
    TIME: ClassVar["Dimension"]
    ELECTRIC_CURRENT: ClassVar["Dimension"]
    TEMPERATURE: ClassVar["Dimension"]
    AMOUNT_OF_SUBSTANCE: ClassVar["Dimension"]
    LUMINOUS_INTENSITY: ClassVar["Dimension"]
    NONE: ClassVar["Dimension"]

    def __post_init__(self) -> None:
        if self.symbol and self.elements:
            raise ValueError("A dimension is either a base symbol or a product, not both.")

    @classmethod
    def _of(cls, elements: Elements) -> "Dimension":
        if not elements:
            return NONE
        if len(elements) == 1 and elements[0].pow == 1 and elements[0].root == 1:
            return elements[0].factor  # type: ignore[return-value]
        return cls(elements=elements)

    def _factors(self) -> Elements:
        if self.symbol:
            return (ProductElement(self, 1, 1),)
        return self.elements

    # --- Algebra ---
    def multiply(self, other: "Dimension") -> "Dimension":
        return Dimension._of(product.multiply(self._factors(), other._factors()))

    def divide(self, other: "Dimension") -> "Dimension":
        return Dimension._of(product.divide(self._factors(), other._factors()))

    def pow(self, n: int) -> "Dimension":
        if not isinstance(n, int):
            raise TypeError(f"Exponent must be int, got {type(n).__name__}")
        return Dimension._of(product.power(self._factors(), n))

    def root(self, n: int) -> "Dimension":
        if n == 0:
            raise ValueError("Root's order of zero")
        if n < 0:
            return NONE.divide(self.root(-n))
        return Dimension._of(product.root(self._factors(), n))

    def __mul__(self, other: "Dimension") -> "Dimension":
        if not isinstance(other, Dimension):
            return NotImplemented
        return self.multiply(other)

    def __truediv__(self, other: "Dimension") -> "Dimension":
        if not isinstance(other, Dimension):
            return NotImplemented
        return self.divide(other)

    def __pow__(self, n: int | Fraction, modulo: Any | None = None) -> "Dimension":
        # pow(d, n, mod) passes a modulo; not meaningful for dimensions
        if modulo is not None:
            raise TypeError("Modulo exponentiation is not supported for Dimension.")
        if isinstance(n, Fraction):
            return self.root(n.denominator).pow(n.numerator)
        return self.pow(n)

    # --- Decomposition ---
    def get_product_dimensions(self) -> Optional[Dict["Dimension", Exponent]]:
        """``None`` for a base dimension, else the exponent map of the product."""
        if self.symbol:
            return None
        return product.as_map(self.elements)

    @property
    def is_base(self) -> bool:
        return bool(self.symbol)

    @property
    def is_dimensionless(self) -> bool:
        return not self.symbol and not self.elements

    # --- Value semantics ---
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Dimension):
            return NotImplemented
        if self.symbol or other.symbol:
            return self.symbol == other.symbol
        return product.same_product(self.elements, other.elements)

    def __hash__(self) -> int:
        if self.symbol:
            return hash(("Dimension", self.symbol))
        return product.product_hash(self.elements)

    def __repr__(self) -> str:
        if self.symbol:
            return f"[{self.symbol}]"
        if not self.elements:
            return "[1]"

        parts = ""
        for e in self.elements:
            exp = e.exponent
            if isinstance(exp, Fraction):
                exp = f"({exp.numerator}/{exp.denominator})"
            parts += f"[{e.factor.symbol}^{exp}]"  # type: ignore[attr-defined]
        return parts


# --- Public constants ----------------------------------------------------------

NONE = Dimension()
LENGTH = Dimension("L")
MASS = Dimension("M")
TIME = Dimension("T")
ELECTRIC_CURRENT = Dimension("I")
TEMPERATURE = Dimension("Θ")
AMOUNT_OF_SUBSTANCE = Dimension("N")
LUMINOUS_INTENSITY = Dimension("J")

Dimension.NONE = NONE
Dimension.LENGTH = LENGTH
Dimension.MASS = MASS
Dimension.TIME = TIME
Dimension.ELECTRIC_CURRENT = ELECTRIC_CURRENT
Dimension.TEMPERATURE = TEMPERATURE
Dimension.AMOUNT_OF_SUBSTANCE = AMOUNT_OF_SUBSTANCE
Dimension.LUMINOUS_INTENSITY = LUMINOUS_INTENSITY

# Short names
CURRENT = ELECTRIC_CURRENT
AMOUNT = AMOUNT_OF_SUBSTANCE
LUMINOUS = LUMINOUS_INTENSITY

BASE_DIMENSIONS = (
    LENGTH,
    MASS,
    TIME,
    ELECTRIC_CURRENT,
    TEMPERATURE,
    AMOUNT_OF_SUBSTANCE,
    LUMINOUS_INTENSITY,
)

__all__ = [
    "Dimension",
    "NONE",
    "LENGTH",
    "MASS",
    "TIME",
    "ELECTRIC_CURRENT",
    "TEMPERATURE",
    "AMOUNT_OF_SUBSTANCE",
    "LUMINOUS_INTENSITY",
    "CURRENT",
    "AMOUNT",
    "LUMINOUS",
    "BASE_DIMENSIONS",
]
