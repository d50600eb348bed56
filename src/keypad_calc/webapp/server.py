"""
Flask server exposing a keypad controller and a calculator engine.

State is kept in module-level instances, shared by every client, and guarded
by a lock because the development server handles requests on threads.
"""

import logging
import threading

from flask import Flask, jsonify, request

from ..arithmetic import parse_number
from ..config import load_settings
from ..controller import CalculatorController
from ..display import TextDisplay
from ..engine import Calculator
from ..errors import CalculatorError

logger = logging.getLogger(__name__)

app = Flask(__name__)

settings = load_settings()
display = TextDisplay()
controller = CalculatorController(display, precision=settings.precision)
calculator = Calculator()
_lock = threading.Lock()

KEYPAD_ACTIONS = {
    "equals": lambda c, v: c.calculate(),
    "clear": lambda c, v: c.clear(),
    "clear_entry": lambda c, v: c.clear_entry(),
    "backspace": lambda c, v: c.backspace(),
    "toggle_sign": lambda c, v: c.toggle_sign(),
    "sqrt": lambda c, v: c.square_root(),
    "percent": lambda c, v: c.percent(),
    "digit": lambda c, v: c.input_digit(v),
    "op": lambda c, v: c.input_operator(v),
}

ENGINE_VALUE_OPERATIONS = {
    "set": "set_value",
    "add": "add",
    "subtract": "subtract",
    "multiply": "multiply",
    "divide": "divide",
}

ENGINE_PLAIN_OPERATIONS = {
    "clear",
    "undo",
    "memory_store",
    "memory_recall",
    "memory_add",
    "memory_subtract",
    "memory_clear",
    "clear_history",
}


def _keypad_payload():
    state = controller.get_state()
    return {"display": state.display, "error": state.error, "state": state.to_dict()}


@app.route("/api/keypad", methods=["POST"])
def keypad():
    """
    Press a key.

    Expected JSON payload:
        {
            "action": "digit|op|equals|clear|clear_entry|backspace|toggle_sign|sqrt|percent",
            "value": "..."  // digit or operator symbol, where needed
        }

    Returns:
        {"display": "...", "error": null, "state": {...}}
    """
    data = request.get_json(silent=True)

    if not data or not isinstance(data, dict):
        return jsonify({"error": "Expected a JSON object"}), 400

    action = data.get("action", "")
    if action not in KEYPAD_ACTIONS:
        return jsonify({"error": f"Unknown action: {action}"}), 400

    with _lock:
        try:
            KEYPAD_ACTIONS[action](controller, data.get("value"))
        except CalculatorError as exc:
            return jsonify({"error": str(exc)}), 400
        return jsonify(_keypad_payload())


@app.route("/api/keypad/reset", methods=["POST"])
def reset_keypad():
    """Reset the keypad and forget its calculation history."""
    with _lock:
        controller.clear()
        controller.clear_history()
        return jsonify(_keypad_payload())


@app.route("/api/keypad/history", methods=["GET"])
def keypad_history():
    with _lock:
        return jsonify({"history": [r.to_dict() for r in controller.get_history()]})


@app.route("/api/engine", methods=["GET"])
def engine_state():
    with _lock:
        return jsonify(calculator.snapshot())


@app.route("/api/engine", methods=["POST"])
def engine_operation():
    """
    Apply one engine operation.

    Expected JSON payload:
        {"operation": "set|add|subtract|multiply|divide|clear|undo|memory_*|clear_history",
         "value": 5}

    Returns:
        {"value": ..., "memory": ..., "history": [...], "returned": ...}
    """
    data = request.get_json(silent=True)

    if not data or not isinstance(data, dict):
        return jsonify({"error": "Expected a JSON object"}), 400

    operation = data.get("operation", "")
    if operation in ENGINE_VALUE_OPERATIONS:
        value = data.get("value")
        if isinstance(value, str):
            value = parse_number(value)
        args = [value]
        method = ENGINE_VALUE_OPERATIONS[operation]
    elif operation in ENGINE_PLAIN_OPERATIONS:
        args = []
        method = operation
    else:
        return jsonify({"error": f"Unknown operation: {operation}"}), 400

    with _lock:
        try:
            returned = getattr(calculator, method)(*args)
        except CalculatorError as exc:
            logger.info("engine %s rejected: %s", operation, exc)
            return jsonify({"error": str(exc)}), 400
        payload = calculator.snapshot()
        payload["returned"] = returned
        return jsonify(payload)


if __name__ == "__main__":
    logging.basicConfig(level=settings.log_level)
    app.run(host=settings.host, port=settings.port, debug=False)
