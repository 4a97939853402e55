import pytest

from backend.engine import Operation, ParseError
from frontend.keypad import KEY_BINDINGS, KEYPAD, press


def press_all(engine, *labels):
    for label in labels:
        press(engine, label)


def test_keypad_is_five_rows_of_four():
    assert len(KEYPAD) == 5
    assert all(len(row) == 4 for row in KEYPAD)


def test_every_key_binding_targets_a_button():
    buttons = {label for row in KEYPAD for label in row}
    assert set(KEY_BINDINGS.values()) <= buttons


def test_every_button_is_handled(engine):
    for row in KEYPAD:
        for label in row:
            press(engine, label)


def test_add_then_equal(engine):
    press_all(engine, "1", "2", "+", "3", "=")
    assert engine.total == 15.0


def test_subtract_seeds_first_operand(engine):
    press_all(engine, "7", "-", "2", "=")
    assert engine.total == 5.0


def test_multiply_then_equal(engine):
    press_all(engine, "6", "x", "7", "=")
    assert engine.total == 42.0


def test_divide_then_equal(engine):
    press_all(engine, "9", "/", "4", "=")
    assert engine.total == 2.25


def test_decimal_entry(engine):
    press_all(engine, "3", ".", "2", "5")
    assert engine.current == 3.25


def test_square_root_button_uses_current(engine):
    press_all(engine, "8", "1", "sqrt")
    assert engine.total == 9.0
    assert engine.current == 0.0


def test_pow_button_squares_current(engine):
    press_all(engine, "1", "2", "pow")
    assert engine.total == 144.0


def test_sign_button(engine):
    press_all(engine, "4", "+/-")
    assert engine.current == -4.0
    assert engine.history[-1] is Operation.NEGATE


def test_clear_button_skips_history(engine):
    press_all(engine, "5", "+", "2")
    logged = len(engine.history)
    press(engine, "C")
    assert (engine.total, engine.current) == (0.0, 0.0)
    assert len(engine.history) == logged


def test_unknown_label(engine):
    with pytest.raises(KeyError):
        press(engine, "%")
    with pytest.raises(KeyError):
        press(engine, "12")
    assert engine.history == ()


def test_engine_errors_propagate(engine):
    for _ in range(310):
        press(engine, "9")
    press(engine, "+/-")
    with pytest.raises(ParseError):
        press(engine, "1")


@pytest.mark.parametrize("keysym, label", [
    ("5", "5"),
    ("KP_5", "5"),
    ("period", "."),
    ("asterisk", "x"),
    ("Return", "="),
    ("Escape", "C"),
])
def test_key_bindings(keysym, label):
    assert KEY_BINDINGS[keysym] == label
