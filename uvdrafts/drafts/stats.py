"""
Stats Aggregator

Header counts for the dashboard: total, bookmarked, hidden and new.
"New" excludes always-old drafts and anything the user has already seen in
this session (``just_seen_ids``), so opening a card drops the count at once
without waiting for the server to flip ``is_read``.
"""

from __future__ import annotations

from typing import Any

from uvdrafts.drafts.classifier import is_draft_unread
from uvdrafts.drafts.identity import draft_id, normalize_id_set
from uvdrafts.types import DraftStats


def compute_draft_stats(
    drafts: Any, bookmarked_ids: Any = None, just_seen_ids: Any = None
) -> DraftStats:
    """
    Aggregate counts over a draft list.

    Args:
        drafts: Ordered draft list; drafts without an id are not counted
        bookmarked_ids: Bookmarked ids (set or sequence); ids not in the list are ignored
        just_seen_ids: Ids marked as seen during this session

    Returns:
        DraftStats (use ``as_dict()`` for the dashboard's camelCase shape)

    Side Effects: None (pure function)
    """
    items = drafts if isinstance(drafts, (list, tuple)) else []
    bookmarks = normalize_id_set(bookmarked_ids)
    just_seen = normalize_id_set(just_seen_ids)

    total = hidden = bookmarked = new_count = 0
    for draft in items:
        key = draft_id(draft)
        if not key:
            continue
        total += 1
        if draft.get("hidden"):
            hidden += 1
        if key in bookmarks:
            bookmarked += 1
        if is_draft_unread(draft) and key not in just_seen:
            new_count += 1

    return DraftStats(total=total, bookmarked=bookmarked, hidden=hidden, new_count=new_count)
