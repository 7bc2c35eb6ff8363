"""
Pytest configuration for the drafts core tests

Provides fixtures shared across unit and integration tests
"""

import pytest

from uvdrafts.observability import telemetry


@pytest.fixture(autouse=True)
def reset_telemetry():
    """Start every test with empty in-memory counters"""
    telemetry.reset_counters()
    yield
    telemetry.reset_counters()


@pytest.fixture
def workspace_names():
    """workspace_id -> display name, as the dashboard resolves it"""
    return {"w1": "Music Lab", "w2": "Travel"}


@pytest.fixture
def resolve_workspace_name(workspace_names):
    def resolve(workspace_id):
        return workspace_names.get(workspace_id, "")

    return resolve
