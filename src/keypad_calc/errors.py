"""Exception hierarchy shared by the arithmetic, engine and controller layers."""


class CalculatorError(Exception):
    """Base class for every failure raised by keypad_calc."""


class DivisionByZeroError(CalculatorError, ZeroDivisionError):
    """Divisor (or percentage total) was zero."""


class NegativeRadicandError(CalculatorError, ValueError):
    """Square root requested for a negative number."""


class InvalidRangeError(CalculatorError, ValueError):
    """A percentage fell outside the closed range [0, 100]."""


class InvalidOperatorError(CalculatorError, ValueError):
    """Operator symbol is not one of the recognized binary operators."""


class InvalidInputError(CalculatorError, ValueError):
    """Operand or keypad input failed validation."""


class ResultOutOfRangeError(CalculatorError, OverflowError):
    """Result is not a finite number."""


__all__ = [
    "CalculatorError",
    "DivisionByZeroError",
    "NegativeRadicandError",
    "InvalidRangeError",
    "InvalidOperatorError",
    "InvalidInputError",
    "ResultOutOfRangeError",
]
