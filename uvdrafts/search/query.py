"""
Search query parsing for the drafts dashboard.

Grammar (informal):
    query   := token (sep token)*
    sep     := whitespace | "," | ";"        (outside quotes)
    token   := key ":" value | term
    "..."   groups text, including separators, into one token

Example:
    model:sora2 ws:"Music Lab" "exact phrase" nonsense:value
    -> filters [model=sora2, ws=Music Lab], terms ["exact phrase", "nonsense:value"]

Unknown keys and empty values degrade to a plain term, so a query can never
fail to parse.
"""

from __future__ import annotations

import math
import operator
from collections.abc import Callable
from typing import Any

from uvdrafts import config
from uvdrafts.drafts.fields import text_of
from uvdrafts.search.query_data import (
    BOOLEAN_FALSE_VALUES,
    BOOLEAN_TRUE_VALUES,
    DURATION_FILTER_PATTERN,
    DURATION_NUMBER_PATTERN,
    QUERY_WHITESPACE,
    SEARCH_FILTER_KEYS,
    TOKEN_SEPARATORS,
    TRAILING_PUNCTUATION,
)
from uvdrafts.types import ParsedQuery, SearchFilter

_COMPARATORS: dict[str, Callable[[float, float], bool]] = {
    ">": operator.gt,
    "<": operator.lt,
    ">=": operator.ge,
    "<=": operator.le,
}


def tokenize_search_query(query: Any) -> list[str]:
    """
    Split a query into raw tokens.

    A double quote toggles quoting unless it follows a backslash, in which
    case it is kept as a literal character. Quote characters themselves are
    not part of the token.
    """
    text = query if isinstance(query, str) else ""
    tokens: list[str] = []
    current: list[str] = []
    in_quotes = False

    for index, char in enumerate(text):
        if char == '"' and (index == 0 or text[index - 1] != "\\"):
            in_quotes = not in_quotes
            continue
        if not in_quotes and (char in QUERY_WHITESPACE or char in TOKEN_SEPARATORS):
            if current:
                tokens.append("".join(current))
                current = []
            continue
        current.append(char)

    if current:
        tokens.append("".join(current))
    return tokens


def _strip_token(value: str) -> str:
    return value.strip(QUERY_WHITESPACE).rstrip(TRAILING_PUNCTUATION)


def parse_search_query(query: Any) -> ParsedQuery:
    """
    Parse a free-text query into filters and lowercase terms.

    Side Effects: None (pure function)
    """
    filters: list[SearchFilter] = []
    terms: list[str] = []

    for token in tokenize_search_query(query):
        cleaned = _strip_token(token)
        if not cleaned:
            continue

        separator = cleaned.find(":")
        if separator > 0:
            key = cleaned[:separator].strip(QUERY_WHITESPACE).lower()
            value = _strip_token(cleaned[separator + 1 :])
            if value and key in SEARCH_FILTER_KEYS:
                filters.append(SearchFilter(key=key, value=value))
                continue

        terms.append(cleaned.lower())

    return ParsedQuery(filters=tuple(filters), terms=tuple(terms))


def parse_boolean_filter_value(value: Any) -> bool | None:
    """True/False for yes-like/no-like values, None when the value is neither."""
    normalized = text_of(value).strip().lower()
    if normalized in BOOLEAN_TRUE_VALUES:
        return True
    if normalized in BOOLEAN_FALSE_VALUES:
        return False
    return None


def _duration_number(value: Any) -> float:
    """Numeric duration; unset reads as 0 and unparseable as NaN (never matches)."""
    if not value:
        return 0.0
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        text = value.strip(QUERY_WHITESPACE)
        if not text:
            return 0.0
        if not DURATION_NUMBER_PATTERN.fullmatch(text):
            return math.nan
        return float(text)
    return math.nan


def matches_duration_filter(duration_seconds: Any, value: Any) -> bool:
    """
    Compare a draft duration against a ``dur:`` filter value.

    Accepts an optional comparator (>, <, >=, <=, =; default =), a number and
    an optional seconds suffix. Equality tolerates float noise. Malformed
    filter values never match.
    """
    match = DURATION_FILTER_PATTERN.fullmatch(text_of(value).strip(QUERY_WHITESPACE))
    if not match:
        return False

    duration = _duration_number(duration_seconds)
    target = float(match.group(2))
    comparator = _COMPARATORS.get(match.group(1) or "=")
    if comparator is not None:
        return comparator(duration, target)
    return abs(duration - target) < config.DURATION_EPSILON
