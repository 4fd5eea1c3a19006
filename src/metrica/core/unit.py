from __future__ import annotations

from dataclasses import dataclass
from fractions import Fraction
from typing import Dict, Optional, Union

from metrica.core import product
from metrica.core.converters import IDENTITY, Affine, Converter, factor, rational, scale
from metrica.core.dimensions import NONE, Dimension
from metrica.core.model import get_model
from metrica.core.product import Elements, ProductElement
from metrica.errors import ConfigError, IncommensurableError, UnitConversionError, UnitFormatError

Number = Union[int, float, Fraction]


class Unit:
    """A unit of measurement.

    Every unit knows its `dimension`, the coherent `system_unit` it derives
    from, and the `converter_to_si` taking values in this unit to values in
    that system unit. Units are immutable; all operations return new units.
    """

    __slots__ = ()

    # Field or property of every concrete unit; ``None`` for products and transforms.
    symbol: Optional[str]

    # --- structure (overridden by the concrete units) ---
    @property
    def dimension(self) -> Dimension:
        raise NotImplementedError

    @property
    def converter_to_si(self) -> Converter:
        raise NotImplementedError

    @property
    def system_unit(self) -> "Unit":
        raise NotImplementedError

    @property
    def product_units(self) -> Optional[Dict["Unit", int | Fraction]]:
        """Exponent map for product units, ``None`` for every other unit."""
        return None

    @property
    def is_system_unit(self) -> bool:
        return self.system_unit == self

    def _elements(self) -> Elements:
        return (ProductElement(self, 1, 1),)

    @staticmethod
    def of(text: str) -> "Unit":
        """Parse a UCUM expression with the default symbol table."""
        from metrica.format.ucum import DEFAULT_FORMAT

        return DEFAULT_FORMAT.parse(text)

    # --- algebra ---
    def multiply(self, other: "Unit | Number") -> "Unit":
        if not isinstance(other, Unit):
            if other == 1:
                return self
            return self.transform(factor(other))
        if self == ONE:
            return other
        if other == ONE:
            return self
        return _product_of(product.multiply(self._elements(), other._elements()))

    def divide(self, other: "Unit | Number") -> "Unit":
        if not isinstance(other, Unit):
            if other == 1:
                return self
            if isinstance(other, Fraction):
                return self.transform(rational(other.denominator, other.numerator))
            if isinstance(other, int) or (isinstance(other, float) and other.is_integer()):
                return self.transform(rational(1, int(other)))
            return self.transform(scale(1.0 / other))
        return self.multiply(other.inverse())

    def inverse(self) -> "Unit":
        if self == ONE:
            return self
        return _product_of(product.invert(self._elements()))

    def pow(self, n: int) -> "Unit":
        if not isinstance(n, int):
            raise TypeError(f"Exponent must be int, got {type(n).__name__}")
        return _product_of(product.power(self._elements(), n))

    def root(self, n: int) -> "Unit":
        if n == 0:
            raise ValueError("Root's order of zero")
        if n < 0:
            return ONE.divide(self.root(-n))
        return _product_of(product.root(self._elements(), n))

    def transform(self, operation: Converter) -> "Unit":
        """Unit whose values convert to this one through `operation`."""
        system = self.system_unit
        cvtr = self.converter_to_si.concatenate(operation)
        if cvtr.is_identity:
            return system
        return TransformedUnit(system, cvtr)

    def shift(self, offset: float) -> "Unit":
        if offset == 0:
            return self
        return self.transform(Affine(offset))

    def annotate(self, annotation: str) -> "AnnotatedUnit":
        return AnnotatedUnit(self, annotation)

    def alternate(self, symbol: str) -> "AlternateUnit":
        return AlternateUnit(self, symbol)

    # --- operators ---
    def __mul__(self, other: "Unit | Number") -> "Unit":
        if not isinstance(other, (Unit, int, float, Fraction)):
            return NotImplemented
        return self.multiply(other)

    def __rmul__(self, other: Number) -> "Unit":
        if not isinstance(other, (int, float, Fraction)):
            return NotImplemented
        return self.multiply(other)

    def __truediv__(self, other: "Unit | Number") -> "Unit":
        if not isinstance(other, (Unit, int, float, Fraction)):
            return NotImplemented
        return self.divide(other)

    def __rtruediv__(self, n: Number) -> "Unit":
        if n != 1:
            raise TypeError(
                f"Invalid operation: cannot divide {n} by a Unit ({self}). "
                "Only 1/unit (reciprocal) is supported."
            )
        return self.inverse()

    def __pow__(self, n: int) -> "Unit":
        return self.pow(n)

    # --- compatibility & conversion ---
    def is_compatible(self, other: "Unit") -> bool:
        if self == other:
            return True
        this_dim, that_dim = self.dimension, other.dimension
        if this_dim == that_dim:
            return True
        model = get_model()
        return model.get_fundamental_dimension(this_dim) == model.get_fundamental_dimension(that_dim)

    def get_converter_to(self, other: "Unit") -> Converter:
        """Converter from values in this unit to values in `other`."""
        if self == other:
            return IDENTITY
        if self.system_unit != other.system_unit:
            return self.get_converter_to_any(other)
        return other.converter_to_si.inverse().concatenate(self.converter_to_si)

    def get_converter_to_any(self, other: "Unit") -> Converter:
        """Like `get_converter_to`, going through the active dimensional model."""
        if not self.is_compatible(other):
            raise IncommensurableError(f"{self} is not compatible with {other}")
        model = get_model()
        this_to_dim = model.get_dimensional_transform(self.system_unit.dimension).concatenate(
            self.converter_to_si
        )
        that_to_dim = model.get_dimensional_transform(other.system_unit.dimension).concatenate(
            other.converter_to_si
        )
        return that_to_dim.inverse().concatenate(this_to_dim)

    def __str__(self) -> str:
        from metrica.format.ucum import DEFAULT_FORMAT

        try:
            return DEFAULT_FORMAT.format(self)
        except UnitFormatError:
            return repr(self)


def _product_of(elements: Elements) -> Unit:
    if not elements:
        return ONE
    if len(elements) == 1 and elements[0].pow == 1 and elements[0].root == 1:
        return elements[0].factor  # type: ignore[return-value]
    return ProductUnit(elements)


# ---------------------------------------------------------------------------
# Concrete units
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class BaseUnit(Unit):
    """A coherent unit of a (usually base) dimension, e.g. metre."""

    symbol: str
    dimension: Dimension = NONE

    @property
    def converter_to_si(self) -> Converter:
        return IDENTITY

    @property
    def system_unit(self) -> Unit:
        return self


@dataclass(frozen=True, slots=True)
class AlternateUnit(Unit):
    """A coherent unit given its own symbol, e.g. ``rad`` for ONE or ``N`` for kg.m/s2."""

    parent: Unit
    symbol: str

    def __post_init__(self) -> None:
        if not self.parent.is_system_unit:
            raise ConfigError(f"The parent unit {self.parent!r} is not an unscaled system unit")
        if isinstance(self.parent, AlternateUnit):
            object.__setattr__(self, "parent", self.parent.parent)

    @property
    def dimension(self) -> Dimension:
        return self.parent.dimension

    @property
    def converter_to_si(self) -> Converter:
        return self.parent.converter_to_si

    @property
    def system_unit(self) -> Unit:
        return self


@dataclass(frozen=True, slots=True, eq=False)
class ProductUnit(Unit):
    """A product of units raised to rational exponents; the empty product is `ONE`."""

    elements: Elements = ()

    @property
    def symbol(self) -> Optional[str]:
        return None

    def _elements(self) -> Elements:
        return self.elements

    @property
    def product_units(self) -> Dict[Unit, int | Fraction]:
        return product.as_map(self.elements)

    @property
    def dimension(self) -> Dimension:
        dim = NONE
        for e in self.elements:
            dim = dim.multiply(e.factor.dimension.pow(e.pow).root(e.root))  # type: ignore[attr-defined]
        return dim

    @property
    def converter_to_si(self) -> Converter:
        converter = IDENTITY
        for e in self.elements:
            unit: Unit = e.factor  # type: ignore[assignment]
            cvtr = unit.converter_to_si
            if cvtr.is_identity:
                continue
            if not cvtr.is_linear:
                raise UnitConversionError(f"{unit!r} is non-linear, cannot convert")
            if e.root != 1:
                raise UnitConversionError(f"{unit!r} holds a scaled unit with fractional exponent")
            pow = e.pow
            if pow < 0:
                pow = -pow
                cvtr = cvtr.inverse()
            for _ in range(pow):
                converter = converter.concatenate(cvtr)
        return converter

    @property
    def system_unit(self) -> Unit:
        system: Unit = ONE
        for e in self.elements:
            unit: Unit = e.factor  # type: ignore[assignment]
            system = system.multiply(unit.system_unit.pow(e.pow).root(e.root))
        return system

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ProductUnit):
            return NotImplemented
        return product.same_product(self.elements, other.elements)

    def __hash__(self) -> int:
        return product.product_hash(self.elements)


ONE: Unit = ProductUnit()


@dataclass(frozen=True, slots=True)
class TransformedUnit(Unit):
    """A system unit seen through a converter, e.g. km = m scaled by 1000."""

    parent: Unit
    converter: Converter

    def __post_init__(self) -> None:
        if not self.parent.is_system_unit:
            raise ConfigError(f"The parent unit {self.parent!r} is not a system unit")

    @property
    def symbol(self) -> Optional[str]:
        return None

    @property
    def dimension(self) -> Dimension:
        return self.parent.dimension

    @property
    def converter_to_si(self) -> Converter:
        return self.parent.converter_to_si.concatenate(self.converter)

    @property
    def system_unit(self) -> Unit:
        return self.parent.system_unit


@dataclass(frozen=True, slots=True)
class AnnotatedUnit(Unit):
    """A unit carrying a display-only annotation (UCUM ``{...}``).

    Conversion and dimension are those of `actual`; equality also compares
    the annotation so formatting can round-trip it.
    """

    actual: Unit
    annotation: str

    def __post_init__(self) -> None:
        if isinstance(self.actual, AnnotatedUnit):
            object.__setattr__(self, "actual", self.actual.actual)

    @property
    def symbol(self) -> Optional[str]:
        return self.actual.symbol

    @property
    def dimension(self) -> Dimension:
        return self.actual.dimension

    @property
    def converter_to_si(self) -> Converter:
        return self.actual.converter_to_si

    @property
    def system_unit(self) -> Unit:
        return self.actual.system_unit

    @property
    def product_units(self) -> Optional[Dict[Unit, int | Fraction]]:
        return self.actual.product_units


__all__ = [
    "Unit",
    "BaseUnit",
    "AlternateUnit",
    "ProductUnit",
    "TransformedUnit",
    "AnnotatedUnit",
    "ONE",
]
