"""
Pending-Task Flattener

Normalizes the "pending generations" feed into one list of generation-level
items that can be merged into the drafts list like any other draft.

The feed comes in two shapes depending on API version:
- Task-shaped: ``[{id, status, prompt, generations: [{...}, ...]}, ...]``
- Flat: ``[{id | generation_id | draft_id, status, ...}, ...]``

The shape is decided once per batch (see ``detect_payload_shape``); a batch
that contains a single task-shaped item is flattened as tasks.

Between polls, ``get_dropped_ids`` reports generations that left the pending
state (finished, failed or vanished) so the caller can refresh those drafts.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any

from uvdrafts.drafts.fields import as_mapping, first_text
from uvdrafts.drafts.identity import normalize_id, normalize_id_set, ordered_ids
from uvdrafts.observability.logging import get_logger
from uvdrafts.observability.telemetry import counter, log_event
from uvdrafts.types import PendingPayloadShape

logger = get_logger(__name__)

# Statuses that still mean "in flight"; anything else drops the item
ACTIVE_PENDING_STATUSES: frozenset[str] = frozenset(
    {
        "pending",
        "queued",
        "queueing",
        "enqueued",
        "running",
        "processing",
        "in_progress",
        "in-progress",
        "starting",
        "submitted",
        "waiting",
        "retrying",
    }
)
DEFAULT_PENDING_STATUS = "pending"

# Generation id fields, in precedence order
GENERATION_ID_FIELDS: tuple[str, ...] = ("id", "generation_id", "draft_id")


# =============================================================================
# Section 1: Payload shape
# =============================================================================


def extract_pending_items(payload: Any) -> list[Any]:
    """Item list from a bare list, ``{items: [...]}`` or ``{data: {items: [...]}}``."""
    if isinstance(payload, (list, tuple)):
        return list(payload)
    data = as_mapping(payload)
    items = data.get("items")
    if isinstance(items, (list, tuple)):
        return list(items)
    nested = as_mapping(data.get("data")).get("items")
    if isinstance(nested, (list, tuple)):
        return list(nested)
    return []


def looks_like_pending_task(item: Any) -> bool:
    """A task has a resolvable id and a ``generations`` list."""
    if not isinstance(item, Mapping):
        return False
    if not isinstance(item.get("generations"), (list, tuple)):
        return False
    return bool(normalize_id(item.get("id")))


def detect_payload_shape(items: list[Any]) -> PendingPayloadShape:
    if not items:
        return PendingPayloadShape.EMPTY
    if any(looks_like_pending_task(item) for item in items):
        return PendingPayloadShape.TASK
    return PendingPayloadShape.FLAT


# =============================================================================
# Section 2: Status and id resolution
# =============================================================================


def normalize_pending_status(status: Any) -> str:
    """Lowercased status; an unset status means the item is still pending."""
    raw = first_text(status).strip()
    if not raw:
        return DEFAULT_PENDING_STATUS
    return raw.lower()


def is_pending_like_status(status: Any) -> bool:
    return normalize_pending_status(status) in ACTIVE_PENDING_STATUSES


def resolve_pending_generation_id(generation: Any, task_id: Any = "", index: Any = 0) -> str:
    """
    Id for a pending generation.

    Uses the first set id field; without one, synthesizes
    ``"<task_id>:pending:<index>"`` so a placeholder card can be shown. Returns
    "" when there is neither an id nor a task.
    """
    data = as_mapping(generation)
    direct = first_text(*(data.get(name) for name in GENERATION_ID_FIELDS))
    if direct:
        return direct

    task = normalize_id(task_id)
    if not task:
        return ""
    safe_index = 0
    if isinstance(index, (int, float)) and not isinstance(index, bool):
        if math.isfinite(index) and index >= 0:
            safe_index = math.floor(index)
    return f"{task}:pending:{safe_index}"


# =============================================================================
# Section 3: Flattening
# =============================================================================


def _flatten_task(task: Mapping[str, Any]) -> list[dict[str, Any]]:
    task_id = normalize_id(task.get("id"))
    task_prompt = task.get("prompt") if isinstance(task.get("prompt"), str) else ""
    task_status = normalize_pending_status(task.get("status"))

    out: list[dict[str, Any]] = []
    for index, generation in enumerate(task.get("generations") or ()):
        if not isinstance(generation, Mapping):
            continue
        pending_status = normalize_pending_status(generation.get("status") or task_status)
        if pending_status not in ACTIVE_PENDING_STATUSES:
            counter("pending.generation_inactive")
            continue
        generation_id = resolve_pending_generation_id(generation, task_id, index)
        if not generation_id:
            continue

        item = {**generation, "id": generation_id}
        if not item.get("task_id") and task_id:
            item["task_id"] = task_id
        if not item.get("prompt") and task_prompt:
            item["prompt"] = task_prompt
        creation_config = dict(as_mapping(item.get("creation_config")))
        if not creation_config.get("prompt") and task_prompt:
            creation_config["prompt"] = task_prompt
        item["creation_config"] = creation_config
        item["pending_status"] = pending_status
        item["pending_task_status"] = task_status
        item["is_pending"] = True
        out.append(item)
    return out


def _flatten_item(item: Any) -> dict[str, Any] | None:
    if not isinstance(item, Mapping):
        return None
    pending_status = normalize_pending_status(item.get("status"))
    if pending_status not in ACTIVE_PENDING_STATUSES:
        counter("pending.item_inactive")
        return None
    item_id = resolve_pending_generation_id(item)
    if not item_id:
        return None
    return {**item, "id": item_id, "pending_status": pending_status, "is_pending": True}


def flatten_pending_payload(payload: Any) -> list[dict[str, Any]]:
    """
    Flatten a pending feed response into generation-level pending items.

    Every item carries ``id``, ``pending_status`` and ``is_pending: True``.
    Items from task-shaped batches also carry ``task_id``,
    ``pending_task_status`` and a ``creation_config`` with the task prompt
    backfilled. Inputs are never mutated.

    Side Effects:
        - Increments telemetry counters for items skipped as no longer pending
    """
    items = extract_pending_items(payload)
    shape = detect_payload_shape(items)

    out: list[dict[str, Any]] = []
    if shape is PendingPayloadShape.TASK:
        for task in items:
            if looks_like_pending_task(task):
                out.extend(_flatten_task(task))
    elif shape is PendingPayloadShape.FLAT:
        for item in items:
            flattened = _flatten_item(item)
            if flattened is not None:
                out.append(flattened)

    logger.debug(
        "flatten_pending_payload: shape=%s items=%d pending=%d", shape.value, len(items), len(out)
    )
    return out


def pending_ids(items: Any) -> list[str]:
    """Ordered ids of a flattened batch, for diffing against the next poll."""
    if not isinstance(items, (list, tuple)):
        return []
    return ordered_ids(as_mapping(item).get("id") for item in items)


def get_dropped_ids(previous_ids: Any, next_ids: Any) -> list[str]:
    """
    Ids present in ``previous_ids`` but not in ``next_ids``.

    Order follows ``previous_ids`` iteration order, so pass ordered
    sequences when the order matters (a plain set iterates in hash order).
    """
    upcoming = normalize_id_set(next_ids)
    dropped = [key for key in ordered_ids(previous_ids) if key not in upcoming]
    if dropped:
        counter("pending.dropped", len(dropped))
        log_event("pending.dropped", ids=dropped)
    return dropped
