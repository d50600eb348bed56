"""
keypad-calc - a pocket calculator core: arithmetic primitives, a stateful
engine with memory/history/undo, and a keypad controller.
"""

from .arithmetic import (
    absolute,
    add,
    apply_discount,
    calculate_percentage,
    divide,
    get_percentage_of,
    is_valid_number,
    modulo,
    multiply,
    parse_number,
    power,
    round_to,
    square_root,
    subtract,
)
from .calc_types import CalculationRecord, ControllerState, HistoryEntry, Operation
from .controller import CalculatorController
from .display import Display, TextDisplay
from .engine import Calculator
from .errors import (
    CalculatorError,
    DivisionByZeroError,
    InvalidInputError,
    InvalidOperatorError,
    InvalidRangeError,
    NegativeRadicandError,
    ResultOutOfRangeError,
)

__version__ = "0.1.0"
__all__ = [
    "absolute",
    "add",
    "apply_discount",
    "calculate_percentage",
    "divide",
    "get_percentage_of",
    "is_valid_number",
    "modulo",
    "multiply",
    "parse_number",
    "power",
    "round_to",
    "square_root",
    "subtract",
    "CalculationRecord",
    "ControllerState",
    "HistoryEntry",
    "Operation",
    "CalculatorController",
    "Display",
    "TextDisplay",
    "Calculator",
    "CalculatorError",
    "DivisionByZeroError",
    "InvalidInputError",
    "InvalidOperatorError",
    "InvalidRangeError",
    "NegativeRadicandError",
    "ResultOutOfRangeError",
]
