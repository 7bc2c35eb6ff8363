"""
Module: classifier_data
Purpose: Vocabularies for the always-old draft classifier.
Dependencies: None (pure data)

Separates classification policy data from the rules in classifier.py. The
exact boundaries here are observable behavior (they decide what counts as
"new"), so edits need matching test updates.
"""

from __future__ import annotations

import re

# ---------------------------------------------------------------------------
# Content violations (kind and status)
# ---------------------------------------------------------------------------

CONTENT_VIOLATION_KINDS: frozenset[str] = frozenset({"sora_content_violation"})
CONTENT_VIOLATION_STATUSES: frozenset[str] = frozenset(
    {"content_violation", "sora_content_violation"}
)
CONTENT_VIOLATION_SUBSTRINGS: tuple[str, ...] = (
    "content_violation",
    "policy_violation",
    "moderation_violation",
    "safety_violation",
)

# ---------------------------------------------------------------------------
# Context violations
# ---------------------------------------------------------------------------

CONTEXT_VIOLATION_VALUES: frozenset[str] = frozenset(
    {"sora_context_violation", "context_violation"}
)
CONTEXT_VIOLATION_SUBSTRINGS: tuple[str, ...] = ("context_violation",)

# ---------------------------------------------------------------------------
# Processing errors
# ---------------------------------------------------------------------------

PROCESSING_ERROR_KINDS: frozenset[str] = frozenset({"sora_processing_error", "processing_error"})
PROCESSING_ERROR_STATUSES: frozenset[str] = frozenset({"processing_error", "failed"})
PROCESSING_ERROR_SUBSTRINGS: tuple[str, ...] = (
    "processing_error",
    "processing_failed",
    "generation_error",
)
PROCESSING_ERROR_KIND_SUFFIXES: tuple[str, ...] = ("_error",)
PROCESSING_ERROR_STATUS_SUFFIXES: tuple[str, ...] = ("_error", "_failed")

# ---------------------------------------------------------------------------
# Free-text violation reasons
# ---------------------------------------------------------------------------

REASON_CONTENT_SIGNALS = re.compile(
    r"(content|policy|moderation|safety|blocked|violat|disallow)", re.IGNORECASE
)
REASON_INFRA_SIGNALS = re.compile(
    r"(processing|generation|internal error|timeout|network|retry|server error|failed)",
    re.IGNORECASE,
)

# Fields that carry renderable output for a draft
MEDIA_FIELDS: tuple[str, ...] = ("preview_url", "thumbnail_url")

# Status fields, in precedence order
STATUS_FIELDS: tuple[str, ...] = ("status", "pending_status", "pending_task_status")
