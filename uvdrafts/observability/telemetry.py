"""
In-process telemetry for the drafts core.

Nothing is exported externally. Counters exist so the dashboard glue and the
tests can see how often fallbacks fire (fail-closed merges, skipped pending
items, dropped ids) without the pure functions returning extra values.
"""

from __future__ import annotations

from typing import Any

from uvdrafts.observability.logging import get_logger

logger = get_logger(__name__)

_COUNTERS: dict[str, int] = {}


def log_event(event_name: str, **fields: Any) -> None:
    """
    Structured log event at DEBUG level.

    Side Effects:
        - Writes to logger (debug level)
    """
    logger.debug("event=%s %s", event_name, fields)


def counter(name: str, increment: int = 1) -> int:
    """
    Increment an in-memory counter and emit a debug log.

    Side Effects:
        - Modifies _COUNTERS dict (in-memory state)
        - Writes to logger (debug level)
    """
    value = _COUNTERS.get(name, 0) + increment
    _COUNTERS[name] = value
    logger.debug("counter=%s value=%s", name, value)
    return value


def get_counter(name: str) -> int:
    return _COUNTERS.get(name, 0)


def reset_counters() -> None:
    """
    Clear all counters (useful for tests).

    Side Effects:
        - Clears _COUNTERS dict (in-memory state)
    """
    _COUNTERS.clear()
