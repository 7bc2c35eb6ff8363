"""UV Drafts - reconciliation and search core for the drafts dashboard"""

from __future__ import annotations

__version__ = "1.0.0"

from uvdrafts.composer.limits import (
    clamp_gens_count,
    get_gens_count_max,
    mode_requires_composer_source,
)
from uvdrafts.composer.overrides import apply_create_body_overrides, normalize_create_overrides
from uvdrafts.drafts.classifier import classify_draft, is_draft_always_old, is_draft_unread
from uvdrafts.drafts.identity import normalize_id
from uvdrafts.drafts.links import (
    can_trim_draft,
    get_draft_post_url,
    get_draft_preview_text,
    get_draft_trim_url,
    is_draft_publicly_posted,
)
from uvdrafts.drafts.reconcile import (
    append_unique_drafts,
    merge_draft_list_by_id,
    remove_draft_by_id,
)
from uvdrafts.drafts.stats import compute_draft_stats
from uvdrafts.pending.flatten import (
    flatten_pending_payload,
    get_dropped_ids,
    looks_like_pending_task,
    pending_ids,
)
from uvdrafts.preferences.view_state import DEFAULT_VIEW_STATE, ViewState, normalize_view_state
from uvdrafts.search.matcher import (
    SearchContext,
    build_draft_search_blob,
    draft_matches_search_query,
    filter_drafts,
    matches_draft_search_filters,
)
from uvdrafts.search.query import matches_duration_filter, parse_search_query
from uvdrafts.types import DraftStats, ParsedQuery, SearchFilter

__all__ = [
    # Identity / reconciliation
    "normalize_id",
    "merge_draft_list_by_id",
    "append_unique_drafts",
    "remove_draft_by_id",
    # Classification / stats
    "classify_draft",
    "is_draft_always_old",
    "is_draft_unread",
    "compute_draft_stats",
    "DraftStats",
    # Links
    "get_draft_preview_text",
    "is_draft_publicly_posted",
    "get_draft_post_url",
    "can_trim_draft",
    "get_draft_trim_url",
    # Search
    "ParsedQuery",
    "SearchFilter",
    "SearchContext",
    "parse_search_query",
    "matches_duration_filter",
    "build_draft_search_blob",
    "matches_draft_search_filters",
    "draft_matches_search_query",
    "filter_drafts",
    # Pending feed
    "looks_like_pending_task",
    "flatten_pending_payload",
    "pending_ids",
    "get_dropped_ids",
    # Composer
    "normalize_create_overrides",
    "apply_create_body_overrides",
    "mode_requires_composer_source",
    "get_gens_count_max",
    "clamp_gens_count",
    # View state
    "ViewState",
    "DEFAULT_VIEW_STATE",
    "normalize_view_state",
]
