"""
Button layout and the translation from a pressed button to an engine call.

Kept free of Tkinter so the key handling can be driven without a window.
"""
from typing import Dict, List

from backend.engine import CalculatorEngine, Operation

# Rows top to bottom, as drawn on screen.
KEYPAD: List[List[str]] = [
    ["C", "sqrt", "pow", "/"],
    ["7", "8", "9", "x"],
    ["4", "5", "6", "-"],
    ["1", "2", "3", "+"],
    ["+/-", "0", ".", "="],
]

DIGITS = frozenset("0123456789")

# Buttons that feed the lower display into an operation.
OPERATOR_BUTTONS: Dict[str, Operation] = {
    "+": Operation.ADD,
    "-": Operation.SUBTRACT,
    "x": Operation.MULTIPLY,
    "/": Operation.DIVIDE,
    "pow": Operation.SQUARE,
    "sqrt": Operation.SQUARE_ROOT,
}

# Buttons whose operation takes no operand.
MARKER_BUTTONS: Dict[str, Operation] = {
    ".": Operation.DECIMAL,
    "+/-": Operation.NEGATE,
    "=": Operation.EQUAL,
}

# Tk keysym -> button label
KEY_BINDINGS: Dict[str, str] = {
    **{d: d for d in DIGITS},
    **{f"KP_{d}": d for d in DIGITS},
    "period": ".",
    "KP_Decimal": ".",
    "plus": "+",
    "KP_Add": "+",
    "minus": "-",
    "KP_Subtract": "-",
    "asterisk": "x",
    "KP_Multiply": "x",
    "slash": "/",
    "KP_Divide": "/",
    "equal": "=",
    "Return": "=",
    "KP_Enter": "=",
    "Escape": "C",
    "Delete": "C",
}


def press(engine: CalculatorEngine, label: str) -> None:
    """
    Run the engine call behind one button. "C" resets the registers directly
    and never reaches the operation log.

    Raises KeyError for a label that is not on the keypad; engine errors
    (CalculatorError) propagate to the caller.
    """
    if label == "C":
        engine.clear()
    elif label in DIGITS:
        engine.operate(Operation.APPEND, float(label))
    elif label in OPERATOR_BUTTONS:
        engine.operate(OPERATOR_BUTTONS[label], engine.current)
    elif label in MARKER_BUTTONS:
        engine.operate(MARKER_BUTTONS[label])
    else:
        raise KeyError(label)
