"""
Create-Payload Override Merger

Applies composer overrides (prompt, model, orientation, resolution, style,
seed, mode) onto an outgoing create request body without touching any other
field.

The body is a JSON string that may carry a second JSON-encoded copy of itself
under ``body``:

    {"prompt": ..., "model": ..., "mode": ..., "resolution": ...,
     "creation_config": {...}, "body": "{\"prompt\": ..., ...}"}

Field placement per level:
- prompt, model, resolution -> level root AND creation_config
- orientation, style, seed  -> creation_config only
- mode                      -> level root only

Fails closed: if the outer body is not a strict JSON object (NaN and
Infinity are rejected) or a changed level holds a number JSON cannot
represent, the original string is returned verbatim. A level is re-encoded
only when a value actually changed. Integral numbers re-encode without a
fraction ("30", not "30.0").
"""

from __future__ import annotations

import json
import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from uvdrafts.config import SEED_MAX_DIGITS
from uvdrafts.observability.logging import get_logger
from uvdrafts.observability.telemetry import counter, log_event
from uvdrafts.types import CreateOverrides

logger = get_logger(__name__)

TEXT_OVERRIDE_FIELDS: tuple[str, ...] = (
    "prompt",
    "model",
    "orientation",
    "resolution",
    "style",
    "mode",
)
# Where each override lands on a level; key order matches the extension
ROOT_FIELDS: tuple[str, ...] = ("prompt", "model", "resolution", "mode")
CREATION_CONFIG_FIELDS: tuple[str, ...] = (
    "prompt",
    "model",
    "orientation",
    "resolution",
    "style",
    "seed",
)

_NON_DIGITS = re.compile(r"[^0-9]")
# JSON.stringify switches to exponent notation from 1e21 on
_INTEGRAL_FLOAT_LIMIT = 1e21


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


def _parse_float(text: str) -> float | int:
    # JSON.stringify writes integral numbers without a fraction ("30", not "30.0")
    value = float(text)
    if value.is_integer() and abs(value) < _INTEGRAL_FLOAT_LIMIT:
        return int(value)
    return value


def _encode(value: Any) -> str:
    """Compact JSON as JSON.stringify writes it; raises ValueError for NaN or Infinity."""
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False, allow_nan=False)


def _decode_object(text: str) -> dict[str, Any] | None:
    try:
        value = json.loads(text, parse_float=_parse_float, parse_constant=_reject_constant)
    except (TypeError, ValueError) as e:
        logger.debug("create body is not valid JSON: %s", e)
        return None
    return value if isinstance(value, dict) else None


def normalize_create_overrides(overrides: Any) -> CreateOverrides | None:
    """
    Trim and validate raw overrides.

    Text fields must be non-blank strings. ``seed`` keeps digits only, capped
    at 10. Returns None when nothing usable remains.
    """
    if not isinstance(overrides, Mapping):
        return None

    values: dict[str, str] = {}
    for name in TEXT_OVERRIDE_FIELDS:
        value = overrides.get(name)
        if isinstance(value, str) and value.strip():
            values[name] = value.strip()

    seed = overrides.get("seed")
    if isinstance(seed, str):
        digits = _NON_DIGITS.sub("", seed)[:SEED_MAX_DIGITS]
        if digits:
            values["seed"] = digits

    if not values:
        return None
    return CreateOverrides(**values)


def apply_overrides_to_object(payload: dict[str, Any], overrides: CreateOverrides) -> bool:
    """
    Write overrides into one decoded level of the request body.

    Mutates ``payload`` (a freshly decoded object owned by the caller).

    Returns:
        True if any value changed, including creating ``creation_config``
    """
    changed = False
    creation_config = payload.get("creation_config")
    if not isinstance(creation_config, dict):
        creation_config = {}
        payload["creation_config"] = creation_config
        changed = True

    def write(target: dict[str, Any], name: str) -> None:
        nonlocal changed
        value = getattr(overrides, name)
        if value is not None and target.get(name) != value:
            target[name] = value
            changed = True

    for name in ROOT_FIELDS:
        write(payload, name)
    for name in CREATION_CONFIG_FIELDS:
        write(creation_config, name)
    return changed


@dataclass
class NestedEnvelope:
    """
    A create request body with its optional double-encoded ``body`` field.

    ``inner`` is None when there is no string ``body`` or it does not decode
    to a JSON object; in that case the nested string is left untouched.
    """

    source: str
    outer: dict[str, Any]
    inner: dict[str, Any] | None = None

    @classmethod
    def decode(cls, body_string: str) -> NestedEnvelope | None:
        """Decode both levels; None when the outer body is not a JSON object."""
        outer = _decode_object(body_string)
        if outer is None:
            return None
        nested = outer.get("body")
        inner = _decode_object(nested) if isinstance(nested, str) else None
        return cls(source=body_string, outer=outer, inner=inner)

    def apply(self, overrides: CreateOverrides) -> bool:
        changed = apply_overrides_to_object(self.outer, overrides)
        if self.inner is not None and apply_overrides_to_object(self.inner, overrides):
            self.outer["body"] = _encode(self.inner)
            changed = True
        return changed

    def encode(self) -> str:
        return _encode(self.outer)


def _fail_closed(body_string: str) -> str:
    counter("composer.fail_closed")
    log_event("composer.fail_closed", body_length=len(body_string))
    return body_string


def apply_create_body_overrides(body_string: Any, overrides: Any) -> Any:
    """
    Apply composer overrides to a create request body string.

    Args:
        body_string: JSON request body (non-strings are returned as-is)
        overrides: Mapping of raw override values from the composer

    Returns:
        The re-encoded body when something changed, otherwise ``body_string``
        unchanged (also for invalid JSON)

    Side Effects:
        - Increments ``composer.fail_closed`` when the body cannot be decoded
          or a level holds a number JSON cannot represent
    """
    if not isinstance(body_string, str):
        return body_string
    normalized = normalize_create_overrides(overrides)
    if normalized is None:
        return body_string

    envelope = NestedEnvelope.decode(body_string)
    if envelope is None:
        return _fail_closed(body_string)

    try:
        if not envelope.apply(normalized):
            return body_string
        return envelope.encode()
    except ValueError as e:
        logger.debug("create body cannot be re-encoded: %s", e)
        return _fail_closed(body_string)
