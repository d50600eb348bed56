"""
JSON web API for keypad-calc.

Exposes one keypad controller and one engine over HTTP.
"""

from .server import app

__all__ = ["app"]
