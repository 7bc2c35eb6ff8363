"""
Composer limits and mode gating.

- Generation count: 1..10 normally, up to 40 with ultra mode
- Remix and extend need a source draft; compose does not
"""

from __future__ import annotations

import math
from typing import Any

from uvdrafts.config import GENS_COUNT_MAX_DEFAULT, GENS_COUNT_MAX_ULTRA, GENS_COUNT_MIN

SOURCE_REQUIRED_MODES: frozenset[str] = frozenset({"remix", "extend"})


def mode_requires_composer_source(mode: Any) -> bool:
    if not isinstance(mode, str):
        return False
    return mode.strip().lower() in SOURCE_REQUIRED_MODES


def get_gens_count_max(ultra_mode_enabled: Any) -> int:
    return GENS_COUNT_MAX_ULTRA if ultra_mode_enabled else GENS_COUNT_MAX_DEFAULT


def _as_number(value: Any) -> float:
    if value is None:
        return 0.0
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return 0.0
        try:
            return float(text)
        except ValueError:
            return math.nan
    return math.nan


def clamp_gens_count(value: Any, ultra_mode_enabled: Any = False) -> int:
    """
    Clamp a requested generation count into the allowed range.

    Non-numeric input falls back to the minimum. Halves round up (39.5 -> 40).
    """
    number = _as_number(value)
    if not math.isfinite(number):
        return GENS_COUNT_MIN
    rounded = math.floor(number + 0.5)
    return min(get_gens_count_max(ultra_mode_enabled), max(GENS_COUNT_MIN, rounded))
