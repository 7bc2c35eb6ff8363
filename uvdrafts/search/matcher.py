"""
Search matching for the drafts dashboard.

A draft matches a parsed query when every filter passes AND every term is a
substring of the draft's search blob. Filters on derived state (``new:``,
``bookmarked:``) go through the classifier and the caller's bookmark set.

Side Effects: None (pure functions). The workspace name callback is the only
collaborator and is expected to be a cheap lookup.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import Any

from uvdrafts.drafts.classifier import is_draft_unread
from uvdrafts.drafts.fields import as_mapping, field_text
from uvdrafts.drafts.identity import draft_id, normalize_id, normalize_id_set
from uvdrafts.observability.logging import get_logger
from uvdrafts.search.query import (
    matches_duration_filter,
    parse_boolean_filter_value,
    parse_search_query,
)
from uvdrafts.search.query_data import (
    BOOLEAN_FILTER_KEYS,
    DURATION_FILTER_KEYS,
    SEARCH_BLOB_FIELDS,
    TEXT_FILTER_FIELDS,
    WORKSPACE_FILTER_KEYS,
)
from uvdrafts.types import Draft, ParsedQuery, SearchFilter

logger = get_logger(__name__)

WorkspaceNameResolver = Callable[[Any], Any]


@dataclass(frozen=True)
class SearchContext:
    """
    Caller-side state needed to match drafts.

    Attributes:
        bookmarks: Bookmarked draft ids (set or sequence)
        resolve_workspace_name: workspace_id -> display name
        workspace_name: Fixed display name used when no resolver is given
    """

    bookmarks: Iterable[Any] = field(default_factory=frozenset)
    resolve_workspace_name: WorkspaceNameResolver | None = None
    workspace_name: str = ""

    def workspace_name_for(self, workspace_id: Any) -> str:
        if self.resolve_workspace_name is not None:
            name = self.resolve_workspace_name(workspace_id)
        else:
            name = self.workspace_name
        return str(name) if name else ""


_EMPTY_CONTEXT = SearchContext()


def _cameo_usernames(profiles: Any) -> str:
    if not isinstance(profiles, (list, tuple)):
        return ""
    names = []
    for profile in profiles:
        if isinstance(profile, str):
            names.append(profile)
        elif isinstance(as_mapping(profile).get("username"), str):
            names.append(profile["username"])
    return " ".join(name for name in names if name)


def _tag_texts(draft: Any) -> list[str]:
    tags = as_mapping(draft).get("tags")
    if not isinstance(tags, (list, tuple)):
        return []
    return ["" if tag is None else normalize_id(tag) for tag in tags]


def build_draft_search_blob(draft: Any, workspace_name: Any = "") -> str:
    """
    Lowercased text used for free-text term matching.

    Joins the searchable draft fields, the resolved workspace name, cameo
    usernames and tags with single spaces. Unset fields are skipped; a
    literal 0 or False is still searchable.
    """
    data = as_mapping(draft)
    tags = " ".join(_tag_texts(data))
    parts = [data.get(name) for name in SEARCH_BLOB_FIELDS]
    parts += [workspace_name or "", _cameo_usernames(data.get("cameo_profiles")), tags]
    text = " ".join(normalize_id(part) for part in parts if part is not None and part != "")
    return text.lower()


def _passes_filter(
    data: Draft,
    key: str,
    value_raw: str,
    workspace_name: str,
    bookmarks: frozenset[str],
) -> bool:
    value = value_raw.lower()

    if key in TEXT_FILTER_FIELDS:
        return value in field_text(data, TEXT_FILTER_FIELDS[key]).lower()
    if key in WORKSPACE_FILTER_KEYS:
        return value in workspace_name or value in field_text(data, "workspace_id").lower()
    if key == "tag":
        return any(value in tag.lower() for tag in _tag_texts(data))
    if key in DURATION_FILTER_KEYS:
        return matches_duration_filter(data.get("duration_seconds"), value_raw)

    if key in BOOLEAN_FILTER_KEYS:
        wanted = parse_boolean_filter_value(value_raw)
        if wanted is None:
            return False
        if key == "new":
            actual = is_draft_unread(data)
        elif key == "hidden":
            actual = bool(data.get("hidden"))
        else:
            actual = draft_id(data) in bookmarks
        return actual is wanted

    # Keys outside the recognized set never come out of parse_search_query
    return True


def _filters_pass(
    draft: Any, filters: tuple[SearchFilter, ...], ctx: SearchContext, bookmarks: frozenset[str]
) -> bool:
    data = as_mapping(draft)
    workspace_name = ctx.workspace_name_for(data.get("workspace_id")).lower()
    for search_filter in filters:
        key = search_filter.key.lower()
        value_raw = str(search_filter.value or "").strip()
        if not _passes_filter(data, key, value_raw, workspace_name, bookmarks):
            return False
    return True


def _draft_matches(
    draft: Any, query: ParsedQuery, ctx: SearchContext, bookmarks: frozenset[str]
) -> bool:
    if query.filters and not _filters_pass(draft, query.filters, ctx, bookmarks):
        return False
    if not query.terms:
        return True

    workspace_name = ctx.workspace_name_for(as_mapping(draft).get("workspace_id"))
    blob = build_draft_search_blob(draft, workspace_name)
    return all(term.lower() in blob for term in query.terms)


def matches_draft_search_filters(
    draft: Any, parsed: ParsedQuery | None, context: SearchContext | None = None
) -> bool:
    """All filters of ``parsed`` pass for ``draft`` (trivially true with no filters)."""
    filters = parsed.filters if isinstance(parsed, ParsedQuery) else ()
    if not filters:
        return True
    ctx = context or _EMPTY_CONTEXT
    return _filters_pass(draft, filters, ctx, normalize_id_set(ctx.bookmarks))


def draft_matches_search_query(
    draft: Any, parsed: ParsedQuery | None, context: SearchContext | None = None
) -> bool:
    """
    Full match: every filter passes and every term is in the search blob.

    A missing or invalid ``parsed`` behaves like an empty query (matches all).
    """
    query = parsed if isinstance(parsed, ParsedQuery) else ParsedQuery()
    ctx = context or _EMPTY_CONTEXT
    return _draft_matches(draft, query, ctx, normalize_id_set(ctx.bookmarks))


def filter_drafts(
    drafts: Any, query: str | ParsedQuery, context: SearchContext | None = None
) -> list[Draft]:
    """
    Drafts matching ``query``, in input order.

    The query and the bookmark set are normalized once for the whole list.
    """
    parsed = query if isinstance(query, ParsedQuery) else parse_search_query(query)
    ctx = context or _EMPTY_CONTEXT
    bookmarks = normalize_id_set(ctx.bookmarks)
    items = drafts if isinstance(drafts, (list, tuple)) else []
    matched = [draft for draft in items if _draft_matches(draft, parsed, ctx, bookmarks)]
    logger.debug(
        "filter_drafts: %d/%d matched (%d filters, %d terms)",
        len(matched),
        len(items),
        len(parsed.filters),
        len(parsed.terms),
    )
    return matched
