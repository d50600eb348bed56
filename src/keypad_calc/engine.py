"""
Stateful calculator engine.

Holds a current value, an independent memory register and an append-only
history of mutations. Undo is a single-step inverse log: entries that cannot
be inverted exactly (``set``, ``clear``, multiply by zero) are approximated,
see :meth:`Calculator.undo`.
"""

import logging
from typing import Callable, Dict, List, Optional

from . import arithmetic
from .calc_types import HistoryEntry, Operation
from .errors import InvalidInputError, ResultOutOfRangeError

logger = logging.getLogger(__name__)


def _undo_add(current: float, value: float) -> Optional[float]:
    return current - value


def _undo_subtract(current: float, value: float) -> Optional[float]:
    return current + value


def _undo_multiply(current: float, value: float) -> Optional[float]:
    if value == 0:
        # x * 0 loses x; nothing to divide back.
        return None
    return current / value


def _undo_divide(current: float, value: float) -> Optional[float]:
    return current * value


def _undo_set(current: float, value: float) -> Optional[float]:
    # The value before the set was never recorded.
    return 0


def _undo_clear(current: float, value: float) -> Optional[float]:
    return None


_INVERSES: Dict[Operation, Callable[[float, float], Optional[float]]] = {
    Operation.ADD: _undo_add,
    Operation.SUBTRACT: _undo_subtract,
    Operation.MULTIPLY: _undo_multiply,
    Operation.DIVIDE: _undo_divide,
    Operation.SET: _undo_set,
    Operation.CLEAR: _undo_clear,
}


class Calculator:
    """Calculator with memory, history and best-effort undo."""

    def __init__(self):
        self._current_value: float = 0
        self._memory: float = 0
        self._history: List[HistoryEntry] = []

    def get_value(self) -> float:
        return self._current_value

    def set_value(self, value: float) -> None:
        self._check_operand(value)
        self._current_value = value
        self._record(Operation.SET, value)

    def clear(self) -> None:
        """Reset the current value to 0. Memory is left alone."""
        self._current_value = 0
        self._record(Operation.CLEAR, 0)

    def add(self, value: float) -> float:
        return self._apply(Operation.ADD, arithmetic.add, value)

    def subtract(self, value: float) -> float:
        return self._apply(Operation.SUBTRACT, arithmetic.subtract, value)

    def multiply(self, value: float) -> float:
        return self._apply(Operation.MULTIPLY, arithmetic.multiply, value)

    def divide(self, value: float) -> float:
        """
        Divide the current value.

        Raises:
            DivisionByZeroError: If value is zero. State and history are untouched.
        """
        return self._apply(Operation.DIVIDE, arithmetic.divide, value)

    # ---- memory register ----

    def memory_store(self) -> None:
        self._memory = self._current_value

    def memory_recall(self) -> float:
        return self._memory

    def memory_add(self) -> None:
        self._memory += self._current_value

    def memory_subtract(self) -> None:
        self._memory -= self._current_value

    def memory_clear(self) -> None:
        self._memory = 0

    # ---- history ----

    def get_history(self) -> List[HistoryEntry]:
        return list(self._history)

    def clear_history(self) -> None:
        self._history = []

    def undo(self) -> bool:
        """
        Pop the last history entry and apply its inverse.

        Returns False when there is nothing to undo, True otherwise, even when
        the popped entry could not change the current value:

        - ``set`` resets the value to 0, the previous value is unknown.
        - ``clear`` leaves the value as is.
        - ``multiply`` by 0 leaves the value as is.
        """
        if not self._history:
            return False

        entry = self._history.pop()
        restored = _INVERSES[entry.operation](self._current_value, entry.value)
        if restored is None:
            logger.debug("undo %s(%s): not invertible, value kept", entry.operation.value, entry.value)
        else:
            logger.debug("undo %s(%s): %s -> %s", entry.operation.value, entry.value,
                         self._current_value, restored)
            self._current_value = restored
        return True

    def snapshot(self) -> Dict:
        return {
            "value": self._current_value,
            "memory": self._memory,
            "history": [entry.to_dict() for entry in self._history],
        }

    def _apply(self, operation: Operation, func: Callable[[float, float], float], value: float) -> float:
        self._check_operand(value)
        try:
            result = func(self._current_value, value)
        except ArithmeticError:
            logger.warning("%s(%s) failed on %s", operation.value, value, self._current_value)
            raise
        if not arithmetic.is_valid_number(result):
            logger.warning("%s(%s) on %s is out of range", operation.value, value, self._current_value)
            raise ResultOutOfRangeError("Result out of range")
        self._current_value = result
        self._record(operation, value)
        return result

    def _record(self, operation: Operation, value: float) -> None:
        entry = HistoryEntry(operation=operation, value=value, result=self._current_value)
        self._history.append(entry)
        logger.debug("%s(%s) -> %s", operation.value, value, self._current_value)

    @staticmethod
    def _check_operand(value: float) -> None:
        if not arithmetic.is_valid_number(value):
            raise InvalidInputError(f"Invalid operand: {value!r}")
