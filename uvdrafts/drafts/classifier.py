"""
Draft Classifier

Derives semantic flags from a draft record:
- Always-old: violation and error drafts are terminal. They never count as
  "new", whatever their ``is_read`` flag says.
- Unread: not always-old and explicitly ``is_read is False``.

Signals, checked in order:
1. ``kind`` against the content/context violation and processing error vocabularies
2. status (``status`` | ``pending_status`` | ``pending_task_status``) against the same
3. ``violation_reason`` text that reads like a policy block, not an infra failure
4. Any reason text at all while the draft has no preview or thumbnail

Vocabularies live in classifier_data.py.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

from uvdrafts.drafts.classifier_data import (
    CONTENT_VIOLATION_KINDS,
    CONTENT_VIOLATION_STATUSES,
    CONTENT_VIOLATION_SUBSTRINGS,
    CONTEXT_VIOLATION_SUBSTRINGS,
    CONTEXT_VIOLATION_VALUES,
    MEDIA_FIELDS,
    PROCESSING_ERROR_KIND_SUFFIXES,
    PROCESSING_ERROR_KINDS,
    PROCESSING_ERROR_STATUS_SUFFIXES,
    PROCESSING_ERROR_STATUSES,
    PROCESSING_ERROR_SUBSTRINGS,
    REASON_CONTENT_SIGNALS,
    REASON_INFRA_SIGNALS,
    STATUS_FIELDS,
)
from uvdrafts.drafts.fields import as_mapping, field_text, first_text
from uvdrafts.observability.logging import get_logger
from uvdrafts.types import AlwaysOldReason, DraftClassification

logger = get_logger(__name__)

_NOT_OLD = DraftClassification(always_old=False)


def _contains_any(value: str, needles: tuple[str, ...]) -> bool:
    return any(needle in value for needle in needles)


# =============================================================================
# Section 1: Key extraction
# =============================================================================


def draft_kind_key(draft: Any) -> str:
    return field_text(draft, "kind").strip().lower()


def draft_status_key(draft: Any) -> str:
    data = as_mapping(draft)
    return first_text(*(data.get(name) for name in STATUS_FIELDS)).strip().lower()


def draft_reason_text(draft: Any) -> str:
    """
    Lowercased ``violation_reason``.

    Structured reasons (objects from newer API versions) are JSON-encoded
    before matching. Anything that cannot be encoded reads as "".
    """
    value = as_mapping(draft).get("violation_reason")
    if isinstance(value, str):
        return value.lower()
    if isinstance(value, (Mapping, list, tuple)):
        try:
            return json.dumps(value, separators=(",", ":"), ensure_ascii=False).lower()
        except (TypeError, ValueError):
            logger.debug("violation_reason is not JSON-encodable: %r", type(value))
            return ""
    return ""


def draft_has_media(draft: Any) -> bool:
    return any(field_text(draft, name).strip() for name in MEDIA_FIELDS)


# =============================================================================
# Section 2: Vocabulary rules
# =============================================================================


def is_kind_content_violation(kind: str) -> bool:
    return kind in CONTENT_VIOLATION_KINDS or _contains_any(kind, CONTENT_VIOLATION_SUBSTRINGS)


def is_kind_context_violation(kind: str) -> bool:
    return kind in CONTEXT_VIOLATION_VALUES or _contains_any(kind, CONTEXT_VIOLATION_SUBSTRINGS)


def is_kind_processing_error(kind: str) -> bool:
    return (
        kind in PROCESSING_ERROR_KINDS
        or _contains_any(kind, PROCESSING_ERROR_SUBSTRINGS)
        or kind.endswith(PROCESSING_ERROR_KIND_SUFFIXES)
    )


def is_status_content_violation(status: str) -> bool:
    return status in CONTENT_VIOLATION_STATUSES or _contains_any(
        status, CONTENT_VIOLATION_SUBSTRINGS
    )


def is_status_context_violation(status: str) -> bool:
    return status in CONTEXT_VIOLATION_VALUES or _contains_any(status, CONTEXT_VIOLATION_SUBSTRINGS)


def is_status_processing_error(status: str) -> bool:
    return (
        status in PROCESSING_ERROR_STATUSES
        or _contains_any(status, PROCESSING_ERROR_SUBSTRINGS)
        or status.endswith(PROCESSING_ERROR_STATUS_SUFFIXES)
    )


def is_reason_likely_content_violation(reason: str) -> bool:
    """Policy wording without infrastructure wording ("blocked by safety" vs "timeout")."""
    if not reason:
        return False
    return bool(REASON_CONTENT_SIGNALS.search(reason)) and not REASON_INFRA_SIGNALS.search(reason)


# =============================================================================
# Section 3: Public classifier
# =============================================================================


def classify_draft(draft: Any) -> DraftClassification:
    """
    Classify a draft as always-old (with the rule that fired) or not.

    Side Effects: None (pure function)
    """
    kind = draft_kind_key(draft)
    if is_kind_content_violation(kind):
        return DraftClassification(True, AlwaysOldReason.CONTENT_VIOLATION, "kind")
    if is_kind_context_violation(kind):
        return DraftClassification(True, AlwaysOldReason.CONTEXT_VIOLATION, "kind")
    if is_kind_processing_error(kind):
        return DraftClassification(True, AlwaysOldReason.PROCESSING_ERROR, "kind")

    status = draft_status_key(draft)
    if is_status_content_violation(status):
        return DraftClassification(True, AlwaysOldReason.CONTENT_VIOLATION, "status")
    if is_status_context_violation(status):
        return DraftClassification(True, AlwaysOldReason.CONTEXT_VIOLATION, "status")
    if is_status_processing_error(status):
        return DraftClassification(True, AlwaysOldReason.PROCESSING_ERROR, "status")

    reason = draft_reason_text(draft)
    if is_reason_likely_content_violation(reason):
        return DraftClassification(True, AlwaysOldReason.REASON_VIOLATION, "violation_reason")

    # Error text with nothing renderable means the generation never produced output
    if reason and not draft_has_media(draft):
        return DraftClassification(True, AlwaysOldReason.ERROR_WITHOUT_MEDIA, "violation_reason")

    return _NOT_OLD


def is_draft_always_old(draft: Any) -> bool:
    return classify_draft(draft).always_old


def is_draft_unread(draft: Any) -> bool:
    """True only for a non-terminal draft whose ``is_read`` is exactly False."""
    if is_draft_always_old(draft):
        return False
    return as_mapping(draft).get("is_read") is False
