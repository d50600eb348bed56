"""Tests for the stateful Calculator engine."""

import pytest

from keypad_calc.calc_types import HistoryEntry, Operation
from keypad_calc.engine import Calculator
from keypad_calc.errors import DivisionByZeroError, InvalidInputError, ResultOutOfRangeError


@pytest.fixture
def calc():
    return Calculator()


def test_starts_at_zero(calc):
    assert calc.get_value() == 0
    assert calc.memory_recall() == 0
    assert calc.get_history() == []


def test_add_then_subtract(calc):
    assert calc.add(5) == 5
    assert calc.subtract(2) == 3
    assert calc.get_value() == 3
    assert len(calc.get_history()) == 2


def test_history_tracks_every_result(calc):
    observed = []
    for method, value in [("set_value", 4), ("add", 6), ("multiply", 3), ("divide", 2), ("subtract", 1)]:
        getattr(calc, method)(value)
        observed.append(calc.get_value())

    history = calc.get_history()
    assert len(history) == 5
    assert [h.result for h in history] == observed
    assert [h.operation for h in history] == [
        Operation.SET,
        Operation.ADD,
        Operation.MULTIPLY,
        Operation.DIVIDE,
        Operation.SUBTRACT,
    ]
    assert all(isinstance(h, HistoryEntry) for h in history)


def test_divide_by_zero_leaves_state_alone(calc):
    calc.set_value(10)
    before = calc.get_history()
    with pytest.raises(DivisionByZeroError):
        calc.divide(0)
    assert calc.get_value() == 10
    assert calc.get_history() == before


def test_invalid_operand_rejected(calc):
    calc.set_value(3)
    for bad in (float("nan"), float("inf"), None, "2"):
        with pytest.raises(InvalidInputError):
            calc.add(bad)
    with pytest.raises(InvalidInputError):
        calc.set_value(float("nan"))
    assert calc.get_value() == 3
    assert len(calc.get_history()) == 1


def test_overflow_leaves_state_alone(calc):
    calc.set_value(1e308)
    with pytest.raises(ResultOutOfRangeError):
        calc.multiply(10)
    with pytest.raises(ResultOutOfRangeError):
        calc.add(1e308)
    assert calc.get_value() == 1e308
    assert len(calc.get_history()) == 1


def test_huge_int_operand_rejected(calc):
    with pytest.raises(InvalidInputError):
        calc.add(10**400)
    assert calc.get_value() == 0
    assert calc.get_history() == []


def test_clear_twice(calc):
    calc.set_value(8)
    calc.clear()
    assert calc.get_value() == 0
    calc.clear()
    assert calc.get_value() == 0
    history = calc.get_history()
    assert [h.operation for h in history[-2:]] == [Operation.CLEAR, Operation.CLEAR]
    assert history[-1].value == 0 and history[-1].result == 0


def test_memory_register(calc):
    calc.set_value(5)
    calc.memory_store()
    calc.set_value(3)
    calc.memory_add()
    assert calc.memory_recall() == 8
    calc.memory_subtract()
    assert calc.memory_recall() == 5
    calc.clear()
    assert calc.memory_recall() == 5
    calc.memory_clear()
    assert calc.memory_recall() == 0
    # Memory operations are not part of the history.
    assert [h.operation for h in calc.get_history()] == [Operation.SET, Operation.SET, Operation.CLEAR]


def test_get_history_is_a_copy(calc):
    calc.add(1)
    history = calc.get_history()
    history.clear()
    assert len(calc.get_history()) == 1


def test_clear_history_keeps_values(calc):
    calc.set_value(7)
    calc.memory_store()
    calc.clear_history()
    assert calc.get_history() == []
    assert calc.get_value() == 7
    assert calc.memory_recall() == 7


def test_undo_empty(calc):
    assert calc.undo() is False


def test_undo_add_restores(calc):
    calc.set_value(10)
    calc.add(5)
    assert calc.undo() is True
    assert calc.get_value() == 10
    assert len(calc.get_history()) == 1


def test_undo_subtract_and_divide(calc):
    calc.set_value(10)
    calc.subtract(4)
    calc.divide(2)
    calc.undo()
    assert calc.get_value() == 6
    calc.undo()
    assert calc.get_value() == 10


def test_undo_multiply(calc):
    calc.set_value(10)
    calc.multiply(4)
    calc.undo()
    assert calc.get_value() == 10


def test_undo_multiply_by_zero_is_lossy(calc):
    calc.set_value(10)
    calc.multiply(0)
    assert calc.undo() is True
    assert calc.get_value() == 0


def test_undo_set_resets_to_zero(calc):
    calc.set_value(3)
    calc.set_value(10)
    calc.undo()
    assert calc.get_value() == 0


def test_undo_clear_keeps_value(calc):
    calc.set_value(10)
    calc.clear()
    assert calc.undo() is True
    assert calc.get_value() == 0
    assert len(calc.get_history()) == 1


def test_snapshot(calc):
    calc.set_value(2)
    calc.memory_store()
    snap = calc.snapshot()
    assert snap["value"] == 2
    assert snap["memory"] == 2
    assert snap["history"][0]["operation"] == "set"
    assert "timestamp" in snap["history"][0]
