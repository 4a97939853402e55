import pytest

from backend.engine import CalculatorEngine, Operation


@pytest.fixture
def engine():
    return CalculatorEngine()


@pytest.fixture
def type_digits():
    """Feed a string of digits and dots into an engine the way the keypad does."""
    def _type(engine, text):
        for ch in text:
            if ch == ".":
                engine.operate(Operation.DECIMAL)
            else:
                engine.operate(Operation.APPEND, float(ch))
    return _type
