"""Shared test fixtures and configuration.

Keeps tests offline: the relay gets a recording fake instead of a real
Capacities client, and configs are built explicitly instead of from the
process environment.
"""

from __future__ import annotations

import json

import pytest

from todoist_capacities.config import RelayConfig
from todoist_capacities.errors import CapacitiesAPIError
from todoist_capacities.services.signature import compute_signature

SECRET = "todoist-test-secret"


# ---------------------------------------------------------------------------
# Fakes
# ---------------------------------------------------------------------------


class FakeCapacitiesClient:
    """Records every block it is asked to save; optionally fails."""

    def __init__(self, error: CapacitiesAPIError | None = None):
        self.saved: list[str] = []
        self.error = error

    async def save_to_daily_note(self, md_text: str) -> None:
        if self.error is not None:
            raise self.error
        self.saved.append(md_text)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def make_body(event_name: str = "item:added", **task_fields) -> bytes:
    """Serialize a webhook envelope the way Todoist would send it."""
    task = {"id": "123", "content": "Buy milk", "priority": 1, "labels": []}
    task.update(task_fields)
    payload = {
        "event_name": event_name,
        "user_id": "42",
        "event_data": task,
        "initiator": {"id": "42", "email": "jane@example.com", "full_name": "Jane"},
        "version": "9",
    }
    return json.dumps(payload).encode("utf-8")


def signed_headers(body: bytes, secret: str = SECRET) -> dict[str, str]:
    return {"X-Todoist-Hmac-SHA256": compute_signature(body, secret)}


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def relay_config() -> RelayConfig:
    return RelayConfig(
        todoist_client_secret=SECRET,
        capacities_api_token="cap-token",
        capacities_space_id="space-1",
    )


@pytest.fixture()
def fake_client() -> FakeCapacitiesClient:
    return FakeCapacitiesClient()


@pytest.fixture()
def webhook_body():
    """Factory fixture: ``webhook_body(event_name, **task_fields) -> bytes``."""
    return make_body


@pytest.fixture()
def sign():
    """Factory fixture: ``sign(body, secret=SECRET) -> headers``."""
    return signed_headers


@pytest.fixture()
def failing_client():
    """Factory fixture: ``failing_client(error) -> FakeCapacitiesClient``."""
    return lambda error: FakeCapacitiesClient(error=error)
