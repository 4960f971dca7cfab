"""Todoist webhooks API client.

Used once, from the CLI, to subscribe the deployed relay URL to item
events and to inspect existing subscriptions. Not part of the request path.
"""

from __future__ import annotations

import json

import httpx

from todoist_capacities.errors import TodoistAPIError
from todoist_capacities.models import SUPPORTED_EVENTS, WebhookSubscription

_WEBHOOKS_URL = "https://api.todoist.com/sync/v9/webhooks"
_DEFAULT_TIMEOUT = 30.0

DEFAULT_EVENTS: list[str] = sorted(SUPPORTED_EVENTS)


class TodoistWebhookClient:
    """Registers and lists webhooks for a Todoist app.

    Args:
        client_id: Todoist app client id.
        client_secret: Todoist app client secret.
        base_url: Override the webhooks endpoint (useful for testing).
        timeout: HTTP request timeout in seconds.
        transport: Optional httpx transport (tests pass ``httpx.MockTransport``).
    """

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        *,
        base_url: str = _WEBHOOKS_URL,
        timeout: float = _DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._client_id = client_id
        self._client_secret = client_secret
        self._url = base_url
        self._timeout = timeout
        self._transport = transport

    async def register(
        self, url: str, events: list[str] | None = None
    ) -> WebhookSubscription:
        """Subscribe *url* to *events* (defaults to all item events)."""
        form = {
            "client_id": self._client_id,
            "client_secret": self._client_secret,
            "url": url,
            "events": json.dumps(events or DEFAULT_EVENTS),
        }
        async with httpx.AsyncClient(
            timeout=self._timeout, transport=self._transport
        ) as client:
            response = await client.post(self._url, data=form)

        data = self._json_or_text(response)
        if not response.is_success:
            raise TodoistAPIError(response.status_code, self._detail(data))
        return WebhookSubscription.model_validate(data)

    async def list_webhooks(self) -> list | dict:
        """Return the app's existing webhook subscriptions as sent by Todoist."""
        params = {"client_id": self._client_id, "client_secret": self._client_secret}
        async with httpx.AsyncClient(
            timeout=self._timeout, transport=self._transport
        ) as client:
            response = await client.get(self._url, params=params)

        data = self._json_or_text(response)
        if not response.is_success:
            raise TodoistAPIError(response.status_code, self._detail(data))
        return data

    @staticmethod
    def _json_or_text(response: httpx.Response):
        try:
            return response.json()
        except ValueError:
            return response.text

    @staticmethod
    def _detail(data) -> str:
        if isinstance(data, dict):
            return str(data.get("error") or json.dumps(data))
        return str(data)
