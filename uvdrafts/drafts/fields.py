"""
Field access helpers for loosely typed draft records.

Server records use "falsy means unset": an empty string, zero, False and a
missing key all read as not set. These helpers keep that rule in one place.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from uvdrafts.drafts.identity import normalize_id


def as_mapping(value: Any) -> Mapping[str, Any]:
    """The value itself when it is a mapping, otherwise an empty dict."""
    return value if isinstance(value, Mapping) else {}


def text_of(value: Any) -> str:
    """String form of a field value; falsy values read as ""."""
    if not value:
        return ""
    return normalize_id(value)


def field_text(draft: Any, key: str) -> str:
    return text_of(as_mapping(draft).get(key))


def first_text(*values: Any) -> str:
    """String form of the first truthy value, "" when none is set."""
    for value in values:
        if value:
            return normalize_id(value)
    return ""
