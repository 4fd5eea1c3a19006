"""
metrica.core.model
==================

Dimensional models: the policy deciding which dimensions are fundamental and
how every other dimension reduces to them.

The standard model treats the seven SI base dimensions as mutually
independent. Alternative models override `fundamental_of` / `transform_of`
to declare relationships between base dimensions; `RelativisticModel`, for
instance, measures length in time through the speed of light.

One model is active per process. It is created lazily by `get_model()` and
replaced explicitly with `init_model()`; the switch is not thread-local.
"""

from __future__ import annotations

import logging
import threading
from typing import Dict, Optional, Tuple

from metrica.core.converters import IDENTITY, Converter, Rational
from metrica.core.dimensions import LENGTH, NONE, TIME, Dimension
from metrica.errors import ModelError, NonlinearTransformError

logger = logging.getLogger(__name__)

# Speed of light in vacuum, m/s (exact by definition of the metre).
SPEED_OF_LIGHT = 299_792_458


class DimensionalModel:
    """Maps dimensions to their fundamental decomposition.

    Subclasses only need to describe base dimensions; the recursion over
    products is shared.
    """

    name = "standard"

    # --- hooks for base dimensions ---
    def fundamental_of(self, dimension: Dimension) -> Dimension:
        """Fundamental dimension of a base dimension."""
        return dimension

    def transform_of(self, dimension: Dimension) -> Converter:
        """Converter from the coherent unit of a base dimension to its fundamental one."""
        return IDENTITY

    # --- public API ---
    def get_fundamental_dimension(self, dimension: Dimension) -> Dimension:
        factors = dimension.get_product_dimensions()
        if factors is None:
            return self.fundamental_of(dimension)

        result = NONE
        for factor, exponent in factors.items():
            decomposed = self.get_fundamental_dimension(factor)
            result = result.multiply(decomposed ** exponent)
        return result

    def get_dimensional_transform(self, dimension: Dimension) -> Converter:
        factors = dimension.get_product_dimensions()
        if factors is None:
            return self.transform_of(dimension)

        to_fundamental = IDENTITY
        for factor, exponent in factors.items():
            cvtr = self.get_dimensional_transform(factor)
            if not cvtr.is_linear:
                raise NonlinearTransformError(
                    f"Non-linear dimensional transform for {factor!r}: {cvtr!r}"
                )
            if cvtr.is_identity:
                continue
            if not isinstance(exponent, int):
                raise ModelError(
                    f"Cannot raise the transform of {factor!r} to the fractional power {exponent}"
                )
            if exponent < 0:
                exponent = -exponent
                cvtr = cvtr.inverse()
            for _ in range(exponent):
                to_fundamental = to_fundamental.concatenate(cvtr)
        return to_fundamental

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


StandardModel = DimensionalModel


class RelativisticModel(DimensionalModel):
    """Length is measured in time: ``1 m == 1/c s``."""

    name = "relativistic"

    _overrides: Dict[Dimension, Tuple[Dimension, Converter]] = {
        LENGTH: (TIME, Rational(1, SPEED_OF_LIGHT)),
    }

    def fundamental_of(self, dimension: Dimension) -> Dimension:
        override = self._overrides.get(dimension)
        return dimension if override is None else override[0]

    def transform_of(self, dimension: Dimension) -> Converter:
        override = self._overrides.get(dimension)
        return IDENTITY if override is None else override[1]


# ---------------------------------------------------------------------------
# Process-wide current model
# ---------------------------------------------------------------------------

_lock = threading.RLock()
_current: Optional[DimensionalModel] = None


def get_model() -> DimensionalModel:
    """Return the active model, creating the standard one on first use."""
    global _current
    with _lock:
        if _current is None:
            _current = StandardModel()
            logger.debug("Dimensional model defaulted to %r", _current)
        return _current


def init_model(model: DimensionalModel) -> DimensionalModel:
    """Install `model` as the active model and return it."""
    global _current
    if not isinstance(model, DimensionalModel):
        raise TypeError(f"Expected a DimensionalModel, got {type(model).__name__}")
    with _lock:
        _current = model
    logger.info("Dimensional model set to %r", model)
    return model


def reset_model() -> None:
    """Forget the active model; the next `get_model()` builds a standard one."""
    global _current
    with _lock:
        _current = None


__all__ = [
    "SPEED_OF_LIGHT",
    "DimensionalModel",
    "StandardModel",
    "RelativisticModel",
    "get_model",
    "init_model",
    "reset_model",
]
