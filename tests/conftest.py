# tests/conftest.py
import pytest
from metrica.core.model import reset_model
from metrica.units.registry import DEFAULT_SYMBOLS as _symbols



@pytest.fixture(scope="session")
def symbols():
    return _symbols

@pytest.fixture(autouse=True)
def standard_model():
    # Every test starts (and ends) on the lazily created standard model.
    reset_model()
    yield
    reset_model()
