"""
View-State Normalizer

The dashboard persists its filter, sort, workspace and search box between
sessions. Anything read back from storage may be stale (older builds had
"api" and "duration" sorts) or hand-edited, so it is validated here and every
field falls back to a default rather than being left unset.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

FilterState = Literal["all", "bookmarked", "hidden", "violations", "new", "unsynced"]
SortState = Literal["newest", "oldest"]

VIEW_FILTER_VALUES: frozenset[str] = frozenset(
    {"all", "bookmarked", "hidden", "violations", "new", "unsynced"}
)
VIEW_SORT_VALUES: frozenset[str] = frozenset({"newest", "oldest"})

# Sort modes removed from the dashboard; both now mean API order, newest first
LEGACY_SORT_VALUES: dict[str, str] = {"api": "newest", "duration": "newest"}


class ViewState(BaseModel):
    """Persisted dashboard view preferences (camelCase on the wire)."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    filter_state: FilterState = Field(default="all", alias="filterState")
    sort_state: SortState = Field(default="newest", alias="sortState")
    workspace_filter: str | None = Field(default=None, alias="workspaceFilter")
    search_query: str = Field(default="", alias="searchQuery")

    def as_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


DEFAULT_VIEW_STATE = ViewState()


def normalize_view_state(raw: Any) -> ViewState:
    """
    Validate a persisted view-state object.

    Args:
        raw: Mapping with camelCase keys (or a ViewState); anything else
             yields the defaults

    Returns:
        Fully populated ViewState

    Side Effects: None (pure function)
    """
    if isinstance(raw, ViewState):
        raw = raw.as_dict()
    if not isinstance(raw, Mapping):
        return DEFAULT_VIEW_STATE

    values: dict[str, Any] = {}

    filter_state = raw.get("filterState")
    if isinstance(filter_state, str) and filter_state in VIEW_FILTER_VALUES:
        values["filter_state"] = filter_state

    sort_state = raw.get("sortState")
    if isinstance(sort_state, str):
        normalized = sort_state.strip().lower()
        normalized = LEGACY_SORT_VALUES.get(normalized, normalized)
        if normalized in VIEW_SORT_VALUES:
            values["sort_state"] = normalized

    workspace_filter = raw.get("workspaceFilter")
    if isinstance(workspace_filter, str) and workspace_filter.strip():
        values["workspace_filter"] = workspace_filter.strip()

    search_query = raw.get("searchQuery")
    if isinstance(search_query, str):
        values["search_query"] = search_query

    return ViewState(**values)
