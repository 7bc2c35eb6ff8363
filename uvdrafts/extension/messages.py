"""Pydantic models for the extension's background message contract.

The content script asks the background worker to open the dashboard tab:

    request:  {"action": "open_dashboard"}
    response: {"success": true, "tabId": 12}  |  {"success": false, "error": "..."}

Only the contract lives here; opening the tab is the host's job and is
passed in as a callable.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from uvdrafts.config import DASHBOARD_PAGE
from uvdrafts.observability.logging import get_logger

logger = get_logger(__name__)

OPEN_DASHBOARD_ACTION = "open_dashboard"

# Host callback: opens ``url`` in a new tab, returns the tab id (or None)
OpenTab = Callable[[str], Any]


class OpenDashboardRequest(BaseModel):
    action: Literal["open_dashboard"]


class OpenDashboardResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool
    tab_id: int | str | None = Field(default=None, alias="tabId")
    error: str | None = None

    def as_message(self) -> dict[str, Any]:
        if self.success:
            return {"success": True, "tabId": self.tab_id}
        return {"success": False, "error": self.error or ""}


def parse_open_dashboard_request(message: Any) -> OpenDashboardRequest | None:
    """The request model, or None for any other message."""
    if not isinstance(message, Mapping):
        return None
    try:
        return OpenDashboardRequest.model_validate(dict(message))
    except ValidationError:
        return None


def handle_extension_message(
    message: Any, open_tab: OpenTab, page: str = DASHBOARD_PAGE
) -> OpenDashboardResponse | None:
    """
    Handle a message relayed to the background worker.

    Returns:
        None when the message is not an open-dashboard request (the host
        should let other listeners answer), otherwise the response to send.
        Failures of ``open_tab`` are reported in the response, never raised.
    """
    if parse_open_dashboard_request(message) is None:
        return None

    try:
        tab_id = open_tab(page)
    except Exception as e:  # noqa: BLE001 - host errors go back to the content script
        logger.warning("Failed to open dashboard tab: %s", e)
        return OpenDashboardResponse(success=False, error=str(e))

    if isinstance(tab_id, bool) or not isinstance(tab_id, (int, str)):
        tab_id = None
    logger.info("Opened dashboard tab %s", tab_id)
    return OpenDashboardResponse(success=True, tab_id=tab_id)
