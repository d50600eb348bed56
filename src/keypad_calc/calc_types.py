"""
=============================================================================
MODULE NAME: calc_types.py
=============================================================================

NOTES:
- Plain dataclasses shared by the engine, the controller and the web layer.
- HistoryEntry and CalculationRecord are frozen; the engine and controller
  only ever append new instances, never edit old ones.
=============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Dict, Optional


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Operation(str, Enum):
    """Tags recorded in the engine history."""

    ADD = "add"
    SUBTRACT = "subtract"
    MULTIPLY = "multiply"
    DIVIDE = "divide"
    SET = "set"
    CLEAR = "clear"


@dataclass(frozen=True, slots=True)
class HistoryEntry:
    """One mutation applied to the engine, with the value it produced."""

    operation: Operation
    value: float
    result: float
    timestamp: datetime = field(default_factory=_utcnow)

    def to_dict(self) -> Dict:
        return {
            "operation": self.operation.value,
            "value": self.value,
            "result": self.result,
            "timestamp": self.timestamp.isoformat(),
        }


@dataclass(frozen=True, slots=True)
class CalculationRecord:
    """A binary (or unary) calculation resolved by the keypad controller."""

    first: float
    operator: str
    second: Optional[float]
    result: float
    timestamp: datetime = field(default_factory=_utcnow)

    def to_dict(self) -> Dict:
        return {
            "first": self.first,
            "operator": self.operator,
            "second": self.second,
            "result": self.result,
            "timestamp": self.timestamp.isoformat(),
        }


@dataclass(frozen=True, slots=True)
class ControllerState:
    """Snapshot of the keypad controller, mostly useful in tests and UIs."""

    first_operand: Optional[float]
    current_operator: Optional[str]
    waiting_for_second_operand: bool
    display: str
    error: Optional[str] = None

    def to_dict(self) -> Dict:
        return {
            "first_operand": self.first_operand,
            "current_operator": self.current_operator,
            "waiting_for_second_operand": self.waiting_for_second_operand,
            "display": self.display,
            "error": self.error,
        }


__all__ = [
    "Operation",
    "HistoryEntry",
    "CalculationRecord",
    "ControllerState",
]
