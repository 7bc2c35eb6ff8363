"""
List reconciliation for cached and freshly fetched drafts.

The dashboard shows a locally cached list immediately, then folds in the
first page from the server, later pages from the background sync, and user
deletes. These helpers keep that list ordered and free of duplicate ids.

Side Effects: None. Inputs are never mutated; every call returns a new list.
"""

from __future__ import annotations

from typing import Any

from uvdrafts.drafts.identity import draft_id, normalize_id
from uvdrafts.observability.logging import get_logger
from uvdrafts.types import Draft

logger = get_logger(__name__)


def _as_list(drafts: Any) -> list[Any]:
    return list(drafts) if isinstance(drafts, (list, tuple)) else []


def merge_draft_list_by_id(primary: Any, secondary: Any) -> list[Draft]:
    """
    Merge two draft lists, primary first.

    The first occurrence of each id wins and ids keep the order in which they
    were first encountered. Drafts without an id are dropped.

    Example:
        merge_draft_list_by_id(fetched=[c, a], cached=[a, b]) -> [c, a, b]
    """
    merged: list[Draft] = []
    seen: set[str] = set()

    for draft in _as_list(primary) + _as_list(secondary):
        key = draft_id(draft)
        if not key or key in seen:
            continue
        seen.add(key)
        merged.append(draft)

    return merged


def append_unique_drafts(existing: Any, incoming: Any) -> list[Draft]:
    """
    Append a later page onto an existing list.

    ``existing`` is copied as-is; only incoming drafts whose id is new (to
    ``existing`` and to earlier incoming items) are added, in incoming order.
    """
    out = _as_list(existing)
    seen = {key for key in (draft_id(draft) for draft in out) if key}

    appended = 0
    for draft in _as_list(incoming):
        key = draft_id(draft)
        if not key or key in seen:
            continue
        seen.add(key)
        out.append(draft)
        appended += 1

    logger.debug("append_unique_drafts: %d existing, %d appended", len(out) - appended, appended)
    return out


def remove_draft_by_id(drafts: Any, target_id: Any) -> list[Draft]:
    """Return a new list without any draft whose id equals ``target_id``."""
    key = normalize_id(target_id)
    items = _as_list(drafts)
    if not key:
        return items
    return [draft for draft in items if draft_id(draft) != key]
