"""Settings read from the environment."""

import os
from dataclasses import dataclass
from typing import Mapping, Optional


@dataclass(frozen=True)
class Settings:
    precision: int = 10
    log_level: str = "WARNING"
    host: str = "127.0.0.1"
    port: int = 5000


def _int_from_env(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def load_settings(env: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Build :class:`Settings` from ``KEYPAD_CALC_*`` variables.

    Args:
        env: Mapping to read instead of ``os.environ`` (handy in tests)

    Raises:
        ValueError: If an integer setting cannot be parsed.
    """
    env = os.environ if env is None else env
    return Settings(
        precision=_int_from_env(env, "KEYPAD_CALC_PRECISION", Settings.precision),
        log_level=env.get("KEYPAD_CALC_LOG_LEVEL", Settings.log_level).upper(),
        host=env.get("KEYPAD_CALC_HOST", Settings.host),
        port=_int_from_env(env, "KEYPAD_CALC_PORT", Settings.port),
    )
