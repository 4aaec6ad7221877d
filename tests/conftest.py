import pytest

from mathsolver import MathEngine
from mathsolver.Arithmetic import ArithmeticMode, ArithmeticSettings
from mathsolver.SymbolTable import SymbolTable


@pytest.fixture(autouse=True)
def fresh_default_session():
    MathEngine.reset()
    yield
    MathEngine.reset()


@pytest.fixture
def session():
    return MathEngine.Session()


@pytest.fixture
def variables():
    return SymbolTable()


@pytest.fixture
def normal():
    return ArithmeticSettings()


@pytest.fixture
def make_settings():
    def _make(mode=ArithmeticMode.NORMAL, precision=4, use_significant_digits=False):
        return ArithmeticSettings(mode, precision, use_significant_digits)
    return _make
