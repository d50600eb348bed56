"""
Display capability injected into the keypad controller.

The controller reads and writes text through this protocol only, so it runs
headless in tests and behind any front end (terminal, web API, GUI).
"""

from typing import Optional, Protocol, runtime_checkable


@runtime_checkable
class Display(Protocol):
    """
    Text surface holding the operand being entered plus an error flag.

    Only ``get_text`` and ``set_text`` carry operands. The error members exist
    because a failed calculation leaves message text in the buffer: the
    controller checks ``error`` so the next digit replaces that text instead of
    appending to it, and front ends use it to style the display.
    """

    @property
    def error(self) -> Optional[str]:
        """Current error message, or None when the display is in normal state."""
        ...

    def get_text(self) -> str:
        ...

    def set_text(self, text: str) -> None:
        ...

    def show_error(self, message: str) -> None:
        """Write ``message`` and flag the display as errored."""
        ...

    def clear_error(self) -> None:
        ...


class TextDisplay:
    """In-memory :class:`Display`."""

    def __init__(self, text: str = "0"):
        self._text = text
        self._error: Optional[str] = None

    @property
    def error(self) -> Optional[str]:
        return self._error

    def get_text(self) -> str:
        return self._text

    def set_text(self, text: str) -> None:
        self._text = str(text)

    def show_error(self, message: str = "Error") -> None:
        self._text = message
        self._error = message

    def clear_error(self) -> None:
        self._error = None

    def __repr__(self) -> str:
        return f"TextDisplay(text={self._text!r}, error={self._error!r})"
