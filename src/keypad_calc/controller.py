"""
Keypad controller.

Turns keypresses into calculations the way a pocket calculator does: operands
are typed into a display buffer, binary operators chain strictly left to right
(``1 + 2 * 3`` is ``9``) and failures are shown on the display instead of
being raised, so the keypad keeps working after an error.

The controller keeps its own two-operand state and talks to
:mod:`keypad_calc.arithmetic` directly; it does not wrap
:class:`keypad_calc.engine.Calculator`.
"""

import logging
from typing import List, Optional

from . import arithmetic
from .calc_types import CalculationRecord, ControllerState
from .display import Display
from .errors import CalculatorError, InvalidInputError

logger = logging.getLogger(__name__)

VALID_DIGITS = frozenset("0123456789.")
DEFAULT_PRECISION = 10


class CalculatorController:
    """Two-operand, no-precedence keypad state machine over a :class:`Display`."""

    def __init__(self, display: Display, precision: int = DEFAULT_PRECISION):
        self.display = display
        self.precision = precision
        self._first_operand: Optional[float] = None
        self._current_operator: Optional[str] = None
        self._waiting_for_second_operand = False
        self._history: List[CalculationRecord] = []

    def get_state(self) -> ControllerState:
        return ControllerState(
            first_operand=self._first_operand,
            current_operator=self._current_operator,
            waiting_for_second_operand=self._waiting_for_second_operand,
            display=self.display.get_text(),
            error=self.display.error,
        )

    def input_digit(self, digit: str) -> None:
        """
        Type one character of an operand.

        Args:
            digit: ``"0"``-``"9"`` or ``"."``

        Raises:
            InvalidInputError: For any other character.
        """
        if digit not in VALID_DIGITS:
            raise InvalidInputError(f"Invalid digit: {digit}")

        had_error = self.display.error is not None
        self.display.clear_error()
        if self._waiting_for_second_operand or had_error:
            self.display.set_text("0")
            self._waiting_for_second_operand = False

        current = self.display.get_text()
        if digit == "." and "." in current:
            return
        if current == "0" and digit != ".":
            self.display.set_text(digit)
        else:
            self.display.set_text(current + digit)

    def input_operator(self, operator: str) -> None:
        """
        Press a binary operator.

        A pending operation is resolved first when a second operand has been
        typed since the last operator, so repeated operator presses only swap
        the pending operator.
        """
        symbol = arithmetic.normalize_operator(operator)
        display_value = arithmetic.parse_number(self.display.get_text())

        if self._first_operand is None or (
            self._current_operator is None and not self._waiting_for_second_operand
        ):
            self._first_operand = display_value
        elif self._current_operator and not self._waiting_for_second_operand:
            result = self.perform_calculation(self._first_operand, self._current_operator, display_value)
            if result is not None:
                self._first_operand = result

        self._current_operator = symbol
        self._waiting_for_second_operand = True

    def calculate(self) -> Optional[float]:
        """Equals key. Returns the result, or None when nothing was resolved."""
        if self._current_operator is None or self._waiting_for_second_operand:
            return None

        display_value = arithmetic.parse_number(self.display.get_text())
        result = self.perform_calculation(self._first_operand, self._current_operator, display_value)
        if result is not None:
            self._first_operand = result
            self._current_operator = None
            self._waiting_for_second_operand = True
        return result

    def perform_calculation(
        self, first: Optional[float], operator: str, second: Optional[float]
    ) -> Optional[float]:
        """
        Resolve ``first operator second`` and show the result.

        Errors are written to the display and reported as ``None``; controller
        bookkeeping is left for the caller to decide.
        """
        self.display.clear_error()

        if not arithmetic.is_valid_number(first) or not arithmetic.is_valid_number(second):
            self.display.show_error("Invalid input")
            return None

        try:
            raw = arithmetic.resolve(first, operator, second)
        except CalculatorError as exc:
            logger.info("%s %s %s failed: %s", first, operator, second, exc)
            self.display.show_error(str(exc))
            return None
        if not arithmetic.is_valid_number(raw):
            self.display.show_error("Result out of range")
            return None

        result = arithmetic.round_to(raw, self.precision)
        self.display.set_text(arithmetic.format_number(result))
        self._history.append(CalculationRecord(first=first, operator=operator, second=second, result=result))
        logger.debug("%s %s %s = %s", first, operator, second, result)
        return result

    def clear(self) -> None:
        """C key: forget everything typed so far."""
        self._first_operand = None
        self._current_operator = None
        self._waiting_for_second_operand = False
        self.display.set_text("0")
        self.display.clear_error()

    def clear_entry(self) -> None:
        """CE key: reset the operand being typed, keep the pending operation."""
        self.display.set_text("0")
        self.display.clear_error()

    def backspace(self) -> None:
        if self._waiting_for_second_operand:
            return
        if self.display.error is not None:
            self.clear_entry()
            return

        current = self.display.get_text()
        trimmed = current[:-1]
        if len(current) <= 1 or current == "0" or trimmed == "-":
            self.display.set_text("0")
        else:
            self.display.set_text(trimmed)

    def toggle_sign(self) -> None:
        value = arithmetic.parse_number(self.display.get_text())
        if value is None:
            return
        self.display.set_text(arithmetic.format_number(-value))

    def square_root(self) -> Optional[float]:
        value = arithmetic.parse_number(self.display.get_text())
        self.display.clear_error()
        if value is None:
            self.display.show_error("Invalid input")
            return None

        try:
            result = arithmetic.round_to(arithmetic.square_root(value), self.precision)
        except CalculatorError as exc:
            self.display.show_error(str(exc))
            return None

        self.display.set_text(arithmetic.format_number(result))
        self._history.append(CalculationRecord(first=value, operator="√", second=None, result=result))
        return result

    def percent(self) -> None:
        """
        % key. With a pending first operand shows that percentage of it
        (``200 + 10 %`` shows ``20``), otherwise divides the buffer by 100.
        """
        value = arithmetic.parse_number(self.display.get_text())
        if value is None:
            return
        if self._first_operand is not None:
            result = arithmetic.calculate_percentage(self._first_operand, value)
        else:
            result = value / 100
        self.display.set_text(arithmetic.format_number(arithmetic.round_to(result, self.precision)))

    def get_history(self) -> List[CalculationRecord]:
        return list(self._history)

    def clear_history(self) -> None:
        self._history = []
