"""
Identity normalization for draft records.

Every collection operation compares ids through ``normalize_id`` so that an
id read from JSON as ``123`` and one stored as ``"123"`` are the same draft.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any


def normalize_id(value: Any) -> str:
    """
    Canonical string key for an id-like value.

    Returns "" for None, which callers treat as "no id". Booleans and
    integral floats stringify the way they appear in the JSON they came from
    ("true", "12" rather than "True", "12.0").

    Side Effects: None (pure function)
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def draft_id(draft: Any) -> str:
    """Normalized id of a draft record, "" when it is not a mapping or has none."""
    if not isinstance(draft, Mapping):
        return ""
    return normalize_id(draft.get("id"))


def ordered_ids(values: Any) -> list[str]:
    """
    Non-empty normalized ids in first-seen order, without duplicates.

    Accepts any non-string iterable (list, tuple, set, dict keys). Anything
    else yields an empty list.
    """
    if values is None or isinstance(values, (str, bytes)) or not isinstance(values, Iterable):
        return []
    out: list[str] = []
    seen: set[str] = set()
    for value in values:
        key = normalize_id(value)
        if not key or key in seen:
            continue
        seen.add(key)
        out.append(key)
    return out


def normalize_id_set(values: Any) -> frozenset[str]:
    """Membership set of normalized ids; see ``ordered_ids`` for accepted inputs."""
    return frozenset(ordered_ids(values))
