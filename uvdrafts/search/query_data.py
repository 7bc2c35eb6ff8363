"""
Module: query_data
Purpose: Vocabularies for the dashboard search language.
Dependencies: None (pure data)
"""

from __future__ import annotations

import re

# Keys accepted in ``key:value`` tokens; anything else stays a free-text term
SEARCH_FILTER_KEYS: frozenset[str] = frozenset(
    {
        "id",
        "task",
        "ws",
        "workspace",
        "model",
        "ori",
        "orientation",
        "kind",
        "tag",
        "title",
        "prompt",
        "dur",
        "duration",
        "new",
        "hidden",
        "bookmarked",
        "resolution",
        "style",
        "seed",
    }
)

# Filter key -> draft field compared by case-insensitive substring
TEXT_FILTER_FIELDS: dict[str, str] = {
    "id": "id",
    "task": "task_id",
    "model": "model",
    "ori": "orientation",
    "orientation": "orientation",
    "kind": "kind",
    "title": "title",
    "prompt": "prompt",
    "resolution": "resolution",
    "style": "style",
    "seed": "seed",
}

WORKSPACE_FILTER_KEYS: frozenset[str] = frozenset({"ws", "workspace"})
DURATION_FILTER_KEYS: frozenset[str] = frozenset({"dur", "duration"})
BOOLEAN_FILTER_KEYS: frozenset[str] = frozenset({"new", "hidden", "bookmarked"})

BOOLEAN_TRUE_VALUES: frozenset[str] = frozenset({"1", "true", "yes", "y"})
BOOLEAN_FALSE_VALUES: frozenset[str] = frozenset({"0", "false", "no", "n"})

# Whitespace as JavaScript's \s and trim() define it (not str.isspace)
QUERY_WHITESPACE: str = (
    "\t\n\v\f\r \u00a0\u1680"
    "\u2000\u2001\u2002\u2003\u2004\u2005\u2006\u2007\u2008\u2009\u200a"
    "\u2028\u2029\u202f\u205f\u3000\ufeff"
)
TOKEN_SEPARATORS: frozenset[str] = frozenset({",", ";"})
TRAILING_PUNCTUATION: str = ";,"

# ">=12s", "<8sec", "10", "=5.5seconds"
DURATION_FILTER_PATTERN = re.compile(
    r"(>=|<=|>|<|=)?\s*(\d+(?:\.\d+)?)(?:s|sec|secs|seconds?)?", re.IGNORECASE | re.ASCII
)

# Stored duration values: plain ASCII decimal numbers only
DURATION_NUMBER_PATTERN = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)

# Draft fields joined (in this order) into the free-text search blob
SEARCH_BLOB_FIELDS: tuple[str, ...] = (
    "id",
    "task_id",
    "prompt",
    "title",
    "kind",
    "generation_type",
    "orientation",
    "model",
    "resolution",
    "style",
    "seed",
    "duration_seconds",
)
