"""Capacities API client.

Defines a Protocol for testability and a concrete implementation backed by
httpx that appends markdown to the user's daily note.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

import httpx

from todoist_capacities.config import CAPACITIES_API_URL
from todoist_capacities.errors import CapacitiesAPIError
from todoist_capacities.models import CapacitiesSaveToDailyNoteRequest

_MAX_DETAIL_LENGTH = 500


@runtime_checkable
class CapacitiesClientProtocol(Protocol):
    """Anything that can append a markdown block to the daily note."""

    async def save_to_daily_note(self, md_text: str) -> None:
        """Append *md_text* to today's daily note."""
        ...


class CapacitiesClient:
    """Concrete Capacities client using httpx.

    No request timeout is set by default; the hosting environment bounds
    the lifetime of each webhook call.

    Args:
        api_token: Capacities API token.
        space_id: Space whose daily note receives the text.
        base_url: Override the save-to-daily-note URL (useful for testing).
        timeout: HTTP timeout in seconds, or None for no timeout.
        transport: Optional httpx transport (tests pass ``httpx.MockTransport``).
    """

    def __init__(
        self,
        api_token: str,
        space_id: str,
        *,
        base_url: str = CAPACITIES_API_URL,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._headers = {
            "Authorization": f"Bearer {api_token}",
            "Content-Type": "application/json",
        }
        self._space_id = space_id
        self._url = base_url
        self._timeout = timeout
        self._transport = transport

    async def save_to_daily_note(self, md_text: str) -> None:
        """Append *md_text* to the daily note, keeping Capacities' timestamp.

        Raises:
            CapacitiesAPIError: on a non-2xx response, a transport failure,
                or a request that cannot be built from the configured
                token and URL.
        """
        body = CapacitiesSaveToDailyNoteRequest(
            spaceId=self._space_id,
            mdText=md_text,
            noTimeStamp=False,
        )
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport
            ) as client:
                response = await client.post(
                    self._url,
                    headers=self._headers,
                    json=body.model_dump(exclude_none=True),
                )
        except httpx.RequestError as exc:
            raise CapacitiesAPIError(None, f"{type(exc).__name__}: {exc}") from exc
        except (httpx.HTTPError, httpx.InvalidURL, UnicodeEncodeError) as exc:
            # Request could not be built; the message may quote the token or URL
            raise CapacitiesAPIError(None, type(exc).__name__) from exc

        if not response.is_success:
            raise CapacitiesAPIError(
                response.status_code, response.text[:_MAX_DETAIL_LENGTH]
            )
