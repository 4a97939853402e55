import logging
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Tuple

import numpy as np

logger = logging.getLogger(__name__)

# Bump when the snapshot layout changes; newer snapshots are not restored.
SNAPSHOT_VERSION = 1


class CalculatorError(Exception):
    pass


class InvalidOperandError(CalculatorError):
    """An operation that needs a number was called without a usable one."""


class ParseError(CalculatorError):
    """Digit entry produced text that does not read back as a float."""


class Operation(Enum):
    ADD = "Add"
    APPEND = "Append"
    SUBTRACT = "Subtract"
    MULTIPLY = "Multiply"
    DIVIDE = "Divide"
    SQUARE = "Square"
    SQUARE_ROOT = "SquareRoot"
    NEGATE = "Negate"
    EQUAL = "Equal"
    DECIMAL = "Decimal"
    NONE = "None"

    def __str__(self):
        return self.value


# "=" looks past these when deciding which operation to repeat.
ENTRY_OPERATIONS = frozenset({Operation.EQUAL, Operation.APPEND, Operation.DECIMAL})

_BINARY_UFUNCS = {
    Operation.ADD: np.add,
    Operation.SUBTRACT: np.subtract,
    Operation.MULTIPLY: np.multiply,
    Operation.DIVIDE: np.true_divide,
}

# These replace a zero total with the operand instead of computing 0 <op> rhs.
_SEEDING_OPERATIONS = frozenset({Operation.SUBTRACT, Operation.MULTIPLY, Operation.DIVIDE})

_UNARY_UFUNCS = {
    Operation.SQUARE: np.square,
    Operation.SQUARE_ROOT: np.sqrt,
}


def format_number(value: float) -> str:
    """
    Shortest text that reads back as the same float, never in exponent form
    and without a trailing ".0":

        1.0 -> "1", -0.0 -> "-0", 1.5 -> "1.5", 1e-7 -> "0.0000001", inf -> "inf"

    Digit entry builds on this text, and the displays show it as-is.
    """
    return np.format_float_positional(float(value), trim="-")


def _ieee(ufunc, *args: float) -> float:
    # numpy keeps IEEE-754 results (inf/nan) where Python float raises.
    with np.errstate(all="ignore"):
        return float(ufunc(*(np.float64(a) for a in args)))


class CalculatorEngine:
    """
    Pocket-calculator state machine driven one button press at a time.

    `total` is the upper display (last committed result), `current` the
    number being typed. Every successful `operate` call appends its
    operation to `history`; "=" uses that log to find what to repeat.
    """

    def __init__(self):
        self._total = 0.0
        self._current = 0.0
        self._history: List[Operation] = []

    @property
    def total(self) -> float:
        return self._total

    @property
    def current(self) -> float:
        return self._current

    @property
    def history(self) -> Tuple[Operation, ...]:
        return tuple(self._history)

    @property
    def last_operation(self) -> Optional[Operation]:
        return self._history[-1] if self._history else None

    def operate(self, operation: Operation, rhs: Optional[float] = None) -> None:
        """
        Apply one operation. `rhs` is the operand for Add/Subtract/Multiply/
        Divide/Square/SquareRoot and the digit for Append; the other
        operations ignore it.

        Raises InvalidOperandError or ParseError without touching any state.
        """
        if not isinstance(operation, Operation):
            raise TypeError(f"Expected an Operation, got {operation!r}")

        if operation is Operation.EQUAL:
            repeated = self.find_last_operation_excluding(ENTRY_OPERATIONS)
            if repeated is None:
                total, current = self._total, self._current
            else:
                logger.debug("Equal repeats %s with %s", repeated, format_number(self._current))
                total, current = self._apply(repeated, self._current)
        else:
            total, current = self._apply(operation, rhs)

        self._total, self._current = total, current
        self._history.append(operation)
        logger.debug("%s(%s): total=%s current=%s", operation, rhs,
                     format_number(total), format_number(current))

    def _apply(self, operation: Operation, rhs: Optional[float]) -> Tuple[float, float]:
        """Compute the (total, current) pair `operation` leads to."""
        total, current = self._total, self._current

        if operation in _BINARY_UFUNCS:
            value = _operand(operation, rhs)
            if operation in _SEEDING_OPERATIONS and total == 0.0:
                return value, 0.0
            return _ieee(_BINARY_UFUNCS[operation], total, value), 0.0

        if operation in _UNARY_UFUNCS:
            return _ieee(_UNARY_UFUNCS[operation], _operand(operation, rhs)), 0.0

        if operation is Operation.NEGATE:
            return total, current * -1.0

        if operation is Operation.APPEND:
            return total, self._append_digit(rhs)

        # Decimal only marks the log for the next Append; None does nothing.
        return total, current

    def _append_digit(self, rhs: Optional[float]) -> float:
        """
        Digit entry works on the display text: "1" + "2" -> 12. Right after
        a "." on a whole number the point is written in first: "1" + ".2".
        """
        digit = format_number(_digit(rhs))
        shown = format_number(self._current)
        if self.last_operation is Operation.DECIMAL and self._current.is_integer():
            text = f"{shown}.{digit}"
        else:
            text = shown + digit
        try:
            return float(text)
        except ValueError:
            logger.warning("Digit entry produced unreadable text %r", text)
            raise ParseError(f"Cannot read {text!r} as a number") from None

    def find_last_operation_excluding(self, excluded: Iterable[Operation]) -> Optional[Operation]:
        """Most recent operation in the history that is not in `excluded`."""
        skip = frozenset(excluded)
        for operation in reversed(self._history):
            if operation not in skip:
                return operation
        return None

    def clear(self) -> None:
        """The C key: zero both registers. Bypasses the history on purpose."""
        self._total = 0.0
        self._current = 0.0
        logger.debug("Cleared registers")

    def to_snapshot(self) -> Dict[str, Any]:
        # Registers and history always start fresh, so only the layout version is kept.
        return {"version": SNAPSHOT_VERSION}

    @classmethod
    def from_snapshot(cls, data: Any) -> "CalculatorEngine":
        if not isinstance(data, dict):
            logger.warning("Ignoring snapshot that is not a mapping: %r", type(data).__name__)
            return cls()
        version = data.get("version", SNAPSHOT_VERSION)
        if not isinstance(version, int) or version > SNAPSHOT_VERSION:
            logger.warning("Ignoring snapshot with unsupported version %r", version)
            return cls()
        return cls()


def _operand(operation: Operation, rhs: Optional[float]) -> float:
    if rhs is None:
        _raise(f"{operation} needs an operand")
    try:
        return float(rhs)
    except (TypeError, ValueError):
        _raise(f"{operation} operand is not a number: {rhs!r}")


def _digit(rhs: Optional[float]) -> float:
    value = _operand(Operation.APPEND, rhs)
    if not value.is_integer() or not 0 <= value <= 9:
        _raise(f"Append expects a digit 0-9, got {rhs!r}")
    # -0.0 would otherwise be typed as "-0"
    return abs(value)


def _raise(msg):
    logger.warning(msg)
    raise InvalidOperandError(msg)
