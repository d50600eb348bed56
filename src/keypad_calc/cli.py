import json
import logging
from typing import Callable, Dict, List, Tuple

import click

from .arithmetic import OPERATOR_ALIASES
from .config import load_settings
from .controller import VALID_DIGITS, CalculatorController
from .display import TextDisplay
from .engine import Calculator
from .errors import CalculatorError

logger = logging.getLogger(__name__)

KEY_ACTIONS: Dict[str, Callable[[CalculatorController], object]] = {
    "=": lambda c: c.calculate(),
    "C": lambda c: c.clear(),
    "CE": lambda c: c.clear_entry(),
    "BS": lambda c: c.backspace(),
    "+/-": lambda c: c.toggle_sign(),
    "sqrt": lambda c: c.square_root(),
    "%": lambda c: c.percent(),
}

OPERATOR_KEYS = {"+", "-", "*", "/", *OPERATOR_ALIASES}

# Engine commands taking an operand, written as ``name:value``.
ENGINE_VALUE_OPS = {
    "set": "set_value",
    "add": "add",
    "sub": "subtract",
    "mul": "multiply",
    "div": "divide",
}

ENGINE_PLAIN_OPS = {
    "clear": "clear",
    "undo": "undo",
    "ms": "memory_store",
    "mr": "memory_recall",
    "m+": "memory_add",
    "m-": "memory_subtract",
    "mc": "memory_clear",
    "clear-history": "clear_history",
}


def press_keys(controller: CalculatorController, keys: List[str]) -> None:
    for key in keys:
        if key in KEY_ACTIONS:
            KEY_ACTIONS[key](controller)
        elif key in OPERATOR_KEYS:
            controller.input_operator(key)
        elif key and all(ch in VALID_DIGITS for ch in key):
            # Multi-character numbers are typed one digit at a time.
            for ch in key:
                controller.input_digit(ch)
        else:
            raise click.BadParameter(f"unknown key {key!r}", param_hint="KEYS")


def parse_engine_op(token: str) -> Tuple[str, List[float]]:
    name, sep, raw = token.partition(":")
    if name in ENGINE_VALUE_OPS and sep:
        try:
            return ENGINE_VALUE_OPS[name], [float(raw)]
        except ValueError:
            raise click.BadParameter(f"bad number in {token!r}", param_hint="OPS") from None
    if name in ENGINE_PLAIN_OPS and not sep:
        return ENGINE_PLAIN_OPS[name], []
    raise click.BadParameter(f"unknown engine operation {token!r}", param_hint="OPS")


@click.group()
@click.option("-v", "--verbose", is_flag=True, default=False, help="Log at DEBUG level")
@click.pass_context
def main(ctx: click.Context, verbose: bool) -> None:
    """Pocket calculator from the command line."""
    settings = load_settings()
    logging.basicConfig(
        level=logging.DEBUG if verbose else settings.log_level,
        format="%(levelname)s %(name)s: %(message)s",
    )
    ctx.obj = settings


@main.command()
@click.argument("keys", nargs=-1, required=True)
@click.pass_obj
def keys(settings, keys: Tuple[str, ...]) -> None:
    """Press KEYS on a keypad, e.g. ``keys 12 + 34 - 6 =``."""
    display = TextDisplay()
    controller = CalculatorController(display, precision=settings.precision)
    press_keys(controller, list(keys))
    state = controller.get_state()
    click.echo(
        json.dumps(
            {
                "display": state.display,
                "error": state.error,
                "state": state.to_dict(),
                "history": [r.to_dict() for r in controller.get_history()],
            }
        )
    )


@main.command()
@click.argument("ops", nargs=-1, required=True)
def engine(ops: Tuple[str, ...]) -> None:
    """Run engine OPS in order, e.g. ``engine set:10 add:5 undo``."""
    calc = Calculator()
    returned = None
    for token in ops:
        method, args = parse_engine_op(token)
        try:
            returned = getattr(calc, method)(*args)
        except CalculatorError as exc:
            raise click.ClickException(f"{token}: {exc}") from exc
    out = calc.snapshot()
    out["returned"] = returned
    click.echo(json.dumps(out))


@main.command()
@click.option("--host", default=None, help="Interface to bind (default from KEYPAD_CALC_HOST)")
@click.option("--port", default=None, type=int, help="Port (default from KEYPAD_CALC_PORT)")
@click.pass_obj
def serve(settings, host: str, port: int) -> None:
    """Run the JSON web API."""
    from .webapp.server import app

    host = host or settings.host
    port = port or settings.port
    logger.info("serving on http://%s:%s", host, port)
    app.run(host=host, port=port, debug=False)


if __name__ == "__main__":  # pragma: no cover
    main()
