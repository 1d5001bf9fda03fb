"""
settings.py - App configuration.

Defaults live here as constants. Each one can be overridden with an
environment variable, which is handy for tests and for keeping the history
file somewhere other than next to the app:

    PASSGEN_HISTORY_PATH        SQLite file for the history
    PASSGEN_KEY_PATH            Fernet key file that encrypts it
    PASSGEN_HISTORY_SIZE        How many passwords to remember
    PASSGEN_CLIPBOARD_CLEAR_MS  Clipboard auto-clear delay (0 = never)
    PASSGEN_PERSIST_HISTORY     "0"/"false"/"no" keeps history in memory only
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional


APP_NAME = "Password Generator"
APP_VERSION = "1.0.0"

_APP_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

DEFAULT_HISTORY_PATH = os.path.join(_APP_DIR, "history.db")
DEFAULT_KEY_PATH = os.path.join(_APP_DIR, "history.key")
DEFAULT_HISTORY_SIZE = 10
DEFAULT_CLIPBOARD_CLEAR_MS = 15000

# UI limits
MIN_LENGTH = 4
MAX_LENGTH = 64
DEFAULT_LENGTH = 16
MAX_COUNT = 10

_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class Settings:
    history_path: str = DEFAULT_HISTORY_PATH
    key_path: str = DEFAULT_KEY_PATH
    history_size: int = DEFAULT_HISTORY_SIZE
    clipboard_clear_ms: int = DEFAULT_CLIPBOARD_CLEAR_MS
    persist_history: bool = True

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """
        Build settings from environment variables, falling back to defaults.

        Raises:
            ValueError: If a numeric variable isn't an integer or is below its minimum
        """
        env = os.environ if environ is None else environ

        persist = env.get("PASSGEN_PERSIST_HISTORY", "1").strip().lower() not in _FALSE_VALUES

        return cls(
            history_path=env.get("PASSGEN_HISTORY_PATH", DEFAULT_HISTORY_PATH),
            key_path=env.get("PASSGEN_KEY_PATH", DEFAULT_KEY_PATH),
            history_size=_read_int(env, "PASSGEN_HISTORY_SIZE", DEFAULT_HISTORY_SIZE, minimum=1),
            clipboard_clear_ms=_read_int(env, "PASSGEN_CLIPBOARD_CLEAR_MS", DEFAULT_CLIPBOARD_CLEAR_MS),
            persist_history=persist,
        )


def _read_int(env: Mapping[str, str], name: str, default: int, minimum: int = 0) -> int:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}.") from None
    if value < minimum:
        raise ValueError(f"{name} must be at least {minimum}, got {value}.")
    return value
