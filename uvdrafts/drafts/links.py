"""
Draft Links - card text and outbound URLs for a draft

Provides:
1. Preview text: prompt, then title, then "Untitled", truncated
2. Post links: https://sora.chatgpt.com/p/{postId}
3. Trim links: https://sora.chatgpt.com/storyboard/{storyboardId} or /d/{draftId}

Every URL is built against one origin (``UVDRAFTS_SORA_ORIGIN``, default
https://sora.chatgpt.com) unless the caller passes its own.
"""

from __future__ import annotations

import math
from typing import Any
from urllib.parse import quote, urljoin, urlsplit

from uvdrafts import config
from uvdrafts.drafts.fields import as_mapping, field_text, first_text

# Matches encodeURIComponent, which the extension uses for the same links
_COMPONENT_SAFE = "-_.!~*'()"


def _resolve_origin(origin: Any) -> str:
    if isinstance(origin, str) and origin.strip():
        return origin.strip().removesuffix("/")
    return config.SORA_ORIGIN.removesuffix("/")


def _quote_component(value: str) -> str:
    return quote(value, safe=_COMPONENT_SAFE)


def get_draft_preview_text(draft: Any, max_len: Any = None) -> str:
    """
    Short card label for a draft.

    Args:
        draft: Draft record
        max_len: Character limit before "..." is appended (invalid -> config default)
    """
    limit = config.PREVIEW_MAX_LEN
    if isinstance(max_len, (int, float)) and not isinstance(max_len, bool):
        if math.isfinite(max_len) and max_len > 0:
            limit = math.floor(max_len)

    source = first_text(field_text(draft, "prompt"), field_text(draft, "title"))
    if not source:
        source = config.PREVIEW_FALLBACK_TEXT
    if len(source) <= limit:
        return source
    return source[:limit] + "..."


def _is_public_visibility(value: Any) -> bool:
    return isinstance(value, str) and value.strip().lower() == "public"


def is_draft_publicly_posted(draft: Any) -> bool:
    """
    True when the draft was shared publicly.

    Checks the top-level post fields, then ``post_meta``, then ``post``. A
    permalink alone does not make a post public (private shares have one too).
    """
    data = as_mapping(draft)
    if _is_public_visibility(data.get("post_visibility")):
        return True
    if data.get("posted_to_public") is True:
        return True

    for nested in (as_mapping(data.get("post_meta")), as_mapping(data.get("post"))):
        if nested.get("posted_to_public") is True:
            return True
        if _is_public_visibility(nested.get("visibility")):
            return True

    return False


def normalize_post_url(url_value: Any, origin: Any = None) -> str:
    """
    Canonical post permalink on ``origin``.

    Relative permalinks resolve against the origin. Only http(s) URLs whose
    path contains ``/p/`` are accepted; everything else returns "".
    """
    raw = url_value.strip() if isinstance(url_value, str) else ""
    if not raw:
        return ""
    base = _resolve_origin(origin)
    try:
        parsed = urlsplit(urljoin(base + "/", raw))
    except ValueError:
        return ""
    if parsed.scheme.lower() not in ("http", "https"):
        return ""
    if "/p/" not in parsed.path.lower():
        return ""
    query = f"?{parsed.query}" if parsed.query else ""
    return f"{base}{parsed.path}{query}"


def get_draft_post_url(draft: Any, origin: Any = None) -> str:
    """Post link for a draft: permalink first, then a link built from the post id."""
    data = as_mapping(draft)
    post_meta = as_mapping(data.get("post_meta"))
    post = as_mapping(data.get("post"))

    permalink = first_text(
        data.get("post_permalink"), post_meta.get("permalink"), post.get("permalink")
    )
    direct = normalize_post_url(permalink, origin)
    if direct:
        return direct

    post_id = first_text(
        data.get("post_id"),
        post_meta.get("id"),
        post.get("id"),
        post_meta.get("share_ref"),
        post.get("share_ref"),
    ).strip()
    if not post_id:
        return ""
    return f"{_resolve_origin(origin)}/p/{_quote_component(post_id)}"


def can_trim_draft(draft: Any) -> bool:
    data = as_mapping(draft)
    if not data.get("id"):
        return False
    if field_text(data, "storyboard_id").strip():
        return True
    return data.get("can_storyboard") is not False


def get_draft_trim_url(draft: Any, origin: Any = None) -> str:
    """Storyboard link when one exists, otherwise the draft editor link."""
    if not can_trim_draft(draft):
        return ""
    base = _resolve_origin(origin)
    storyboard_id = field_text(draft, "storyboard_id").strip()
    if storyboard_id:
        return f"{base}/storyboard/{_quote_component(storyboard_id)}"
    return f"{base}/d/{_quote_component(field_text(draft, 'id'))}"
