"""
Runtime defaults, overridable through environment variables.
"""

import os


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None
    if value < 1:
        raise ValueError(f"{name} must be positive, got {value}")
    return value


DEFAULT_DIFFICULTY = os.getenv("FOOTCHESS_DEFAULT_DIFFICULTY", "easy")
DEFAULT_STYLE = os.getenv("FOOTCHESS_DEFAULT_STYLE", "moderate")
GOALS_TO_WIN = _int_env("FOOTCHESS_GOALS_TO_WIN", 3)
MAX_MATCH_MOVES = _int_env("FOOTCHESS_MAX_MATCH_MOVES", 400)
PRO_BEAM_WIDTH = _int_env("FOOTCHESS_PRO_BEAM_WIDTH", 4)
