from __future__ import annotations

import os
from typing import Optional

HEX_SIZE = 35
GRID_WIDTH = 25
GRID_HEIGHT = 16

# Minimum axial (|dq| + |dr|) spacing between two cities of one nation.
MIN_CITY_DISTANCE = 4

DEFAULT_LOG_LEVEL = "INFO"


def _env_int(name: str, default: Optional[int]) -> Optional[int]:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}")


def game_seed() -> Optional[int]:
    return _env_int("HEXCIV_SEED", None)


def grid_width() -> int:
    return _env_int("HEXCIV_GRID_WIDTH", GRID_WIDTH)


def grid_height() -> int:
    return _env_int("HEXCIV_GRID_HEIGHT", GRID_HEIGHT)


def log_level() -> str:
    return os.environ.get("HEXCIV_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()
