"""Webhook relay: Todoist event in, Capacities daily-note block out.

The relay knows nothing about the hosting runtime. Adapters hand it the
request method, the raw body bytes and the headers, and write back the
:class:`RelayResponse` it returns.

Each call is one pass with exactly one response:

1. non-POST                         -> 405
2. required settings missing        -> 500 (names logged, not returned)
3. bad or missing signature         -> 401
4. body is not a webhook envelope   -> 400
5. event we do not handle           -> 200 "ignored", nothing sent
6. item event without a valid task  -> 400
7. Capacities rejects / unreachable -> 500 with diagnostic details
8. otherwise                        -> 200 "ok"

Nothing is retried; Todoist re-delivers on non-2xx responses.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import UTC, tzinfo
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import ValidationError

from todoist_capacities.config import RelayConfig
from todoist_capacities.errors import CapacitiesAPIError
from todoist_capacities.models import SUPPORTED_EVENTS, WebhookPayload
from todoist_capacities.services.capacities import (
    CapacitiesClient,
    CapacitiesClientProtocol,
)
from todoist_capacities.services.formatter import format_task_as_markdown
from todoist_capacities.services.signature import (
    get_signature_from_headers,
    verify_signature,
)
from todoist_capacities.utils.logger import get_logger

logger = get_logger(__name__.rsplit(".", 1)[-1])


@dataclass(frozen=True)
class RelayResponse:
    """Status code and JSON body to send back to Todoist."""

    status_code: int
    body: dict[str, str] = field(default_factory=dict)


def _resolve_timezone(name: str) -> tzinfo:
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning("Unknown timezone %r, rendering times in UTC", name)
        return UTC


class WebhookRelay:
    """Verifies, formats and forwards Todoist webhook events.

    Args:
        config: Relay settings; never read from the environment here.
        client: Capacities client; built from *config* when omitted.
    """

    def __init__(
        self,
        config: RelayConfig,
        client: CapacitiesClientProtocol | None = None,
    ) -> None:
        self.config = config
        self._client = client
        self._tz = _resolve_timezone(config.timezone)

    def _get_client(self) -> CapacitiesClientProtocol:
        if self._client is None:
            self._client = CapacitiesClient(
                self.config.capacities_api_token or "",
                self.config.capacities_space_id or "",
                base_url=self.config.capacities_api_url,
            )
        return self._client

    async def handle(
        self,
        method: str,
        raw_body: bytes,
        headers: Mapping[str, Any],
    ) -> RelayResponse:
        """Process one webhook request and return the response to send."""
        if method.upper() != "POST":
            return RelayResponse(405, {"error": "Method not allowed"})

        missing = self.config.missing_settings()
        if missing:
            logger.error("Missing required environment variables: %s", ", ".join(missing))
            return RelayResponse(500, {"error": "Server configuration error"})

        signature = get_signature_from_headers(headers)
        if not verify_signature(raw_body, signature, self.config.todoist_client_secret):
            logger.warning(
                "Invalid webhook signature (header %s)",
                "present" if signature else "missing",
            )
            return RelayResponse(401, {"error": "Invalid signature"})

        try:
            payload = WebhookPayload.model_validate_json(raw_body)
        except ValidationError as exc:
            logger.warning("Failed to parse webhook payload: %s", exc.errors()[:3])
            return RelayResponse(400, {"error": "Invalid payload"})

        event_name = payload.event_name
        if event_name not in SUPPORTED_EVENTS:
            logger.info("Ignoring unsupported event: %s", event_name)
            return RelayResponse(200, {"status": "ignored", "event": event_name})

        try:
            task = payload.task()
        except ValidationError as exc:
            logger.warning("Invalid task data for %s: %s", event_name, exc.errors()[:3])
            return RelayResponse(400, {"error": "Invalid payload"})

        markdown = format_task_as_markdown(task, event_name, tz=self._tz)

        try:
            await self._get_client().save_to_daily_note(markdown)
        except CapacitiesAPIError as exc:
            logger.error("Failed to save to Capacities: %s", exc)
            return RelayResponse(
                500,
                {"error": "Failed to save to Capacities", "details": str(exc)},
            )

        logger.info("Synced %s for task %s", event_name, task.id or "<no id>")
        return RelayResponse(200, {"status": "ok", "event": event_name})
