"""
Stateless arithmetic primitives.

Every function here is pure: no logging, no shared state. Failures are raised
immediately as subclasses of :class:`~keypad_calc.errors.CalculatorError`.
"""

import math
import re
from typing import Any, Callable, Dict, Optional

from .errors import (
    DivisionByZeroError,
    InvalidOperatorError,
    InvalidRangeError,
    NegativeRadicandError,
)

# Display aliases accepted wherever an operator symbol is.
OPERATOR_ALIASES: Dict[str, str] = {"×": "*", "÷": "/"}

# Leading float literal, in the spirit of a lenient parseFloat.
_FLOAT_PREFIX = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def add(a: float, b: float) -> float:
    return a + b


def subtract(a: float, b: float) -> float:
    return a - b


def multiply(a: float, b: float) -> float:
    return a * b


def divide(a: float, b: float) -> float:
    """
    Divide a by b.

    Raises:
        DivisionByZeroError: If b is zero. Checked up front, never via inf/nan.
    """
    if b == 0:
        raise DivisionByZeroError("Cannot divide by zero")
    return a / b


def modulo(a: float, b: float) -> float:
    if b == 0:
        raise DivisionByZeroError("Cannot calculate modulo with zero")
    # Remainder keeps the sign of the dividend: modulo(-7, 3) == -1.
    return math.fmod(a, b)


def power(base: float, exponent: float) -> float:
    """
    Raise base to exponent, always returning a real float.

    Results with no real value are NaN (``power(-8, 1/3)``). Overflow and zero
    to a negative power give an infinity, negative for a negative base with an
    odd integer exponent.
    """
    try:
        result = base**exponent
        if isinstance(result, complex):
            return math.nan
        return float(result)
    except (ZeroDivisionError, OverflowError):
        negative = math.copysign(1.0, base) < 0 and _is_odd_integer(exponent)
        return -math.inf if negative else math.inf


def _is_odd_integer(value: float) -> bool:
    return float(value).is_integer() and int(value) % 2 == 1


def square_root(n: float) -> float:
    if n < 0:
        raise NegativeRadicandError("Cannot calculate square root of negative number")
    return math.sqrt(n)


def absolute(n: float) -> float:
    return abs(n)


def calculate_percentage(value: float, percentage: float) -> float:
    """Return ``percentage`` percent of ``value``."""
    return (value * percentage) / 100


def get_percentage_of(part: float, total: float) -> float:
    """Return what percentage ``part`` is of ``total``."""
    if total == 0:
        raise DivisionByZeroError("Cannot calculate percentage of zero")
    return (part / total) * 100


def apply_discount(original_price: float, discount_percent: float) -> float:
    """
    Apply a percentage discount to a price.

    Raises:
        InvalidRangeError: If the discount is below 0 or above 100.
    """
    if discount_percent < 0 or discount_percent > 100:
        raise InvalidRangeError("Discount must be between 0 and 100")
    return original_price - calculate_percentage(original_price, discount_percent)


def round_to(value: float, decimals: int = 2) -> float:
    """
    Round to ``decimals`` places, halves away from zero.

    The value is scaled by 10**decimals, rounded and scaled back, so the usual
    binary floating point caveats apply (1.005 rounds to 1.0, not 1.01).
    """
    factor = 10**decimals
    scaled = value * factor
    if not math.isfinite(scaled):
        # Too large to carry any fractional digits at this precision.
        return value
    return math.copysign(math.floor(abs(scaled) + 0.5), scaled) / factor


def is_valid_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        # int too large for a float
        return False


def parse_number(text: Any) -> Optional[float]:
    """Parse the leading float literal of ``text``; ``None`` when there is none."""
    if not isinstance(text, str):
        return None
    match = _FLOAT_PREFIX.match(text)
    if not match:
        return None
    try:
        num = float(match.group(1))
    except ValueError:
        return None
    return num if is_valid_number(num) else None


def format_number(value: float) -> str:
    """Render a number for a display: ``46.0`` -> ``"46"``, ``0.5`` -> ``"0.5"``."""
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


_BINARY_OPERATIONS: Dict[str, Callable[[float, float], float]] = {
    "+": add,
    "-": subtract,
    "*": multiply,
    "/": divide,
}


def normalize_operator(op: str) -> str:
    """Map a display alias to its canonical symbol, rejecting unknown operators."""
    symbol = OPERATOR_ALIASES.get(op, op)
    if symbol not in _BINARY_OPERATIONS:
        raise InvalidOperatorError(f"Unknown operator: {op}")
    return symbol


def resolve(a: float, op: str, b: float) -> float:
    """Apply the binary operator ``op`` to ``a`` and ``b`` (no precedence)."""
    return _BINARY_OPERATIONS[normalize_operator(op)](a, b)
