"""
Module: types
Purpose: Shared value types for the drafts core.
Dependencies: None (stdlib only)

Leaf module so the search, stats, pending and composer modules can share
result types without importing each other.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

# Drafts are server records passed through untouched; fields are read by name.
Draft = Mapping[str, Any]


# ---------------------------------------------------------------------------
# Search
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SearchFilter:
    """A recognized ``key:value`` token from a search query."""

    key: str
    value: str


@dataclass(frozen=True)
class ParsedQuery:
    """Filters and free-text terms, both in query order."""

    filters: tuple[SearchFilter, ...] = ()
    terms: tuple[str, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.filters and not self.terms


# ---------------------------------------------------------------------------
# Classification / stats
# ---------------------------------------------------------------------------


class AlwaysOldReason(str, Enum):
    """Why a draft is treated as terminal regardless of its read state.

    Extends str so the value logs and serializes as the raw string.
    """

    CONTENT_VIOLATION = "content_violation"
    CONTEXT_VIOLATION = "context_violation"
    PROCESSING_ERROR = "processing_error"
    REASON_VIOLATION = "reason_violation"
    ERROR_WITHOUT_MEDIA = "error_without_media"


@dataclass(frozen=True)
class DraftClassification:
    """Derived flags for a single draft."""

    always_old: bool
    reason: AlwaysOldReason | None = None
    source: str | None = None  # "kind" | "status" | "violation_reason"


@dataclass(frozen=True)
class DraftStats:
    """Aggregate counts shown in the dashboard header."""

    total: int = 0
    bookmarked: int = 0
    hidden: int = 0
    new_count: int = 0

    def as_dict(self) -> dict[str, int]:
        return {
            "total": self.total,
            "bookmarked": self.bookmarked,
            "hidden": self.hidden,
            "newCount": self.new_count,
        }


# ---------------------------------------------------------------------------
# Pending feed
# ---------------------------------------------------------------------------


class PendingPayloadShape(str, Enum):
    """Shape of one pending-feed batch, decided once for the whole batch."""

    EMPTY = "empty"
    TASK = "task"  # tasks carrying a ``generations`` list
    FLAT = "flat"  # generation-level items


# ---------------------------------------------------------------------------
# Composer
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class CreateOverrides:
    """User overrides for a create request, already trimmed and validated."""

    prompt: str | None = None
    model: str | None = None
    orientation: str | None = None
    resolution: str | None = None
    style: str | None = None
    mode: str | None = None
    seed: str | None = None

    def is_empty(self) -> bool:
        return all(getattr(self, name) is None for name in self.__dataclass_fields__)

