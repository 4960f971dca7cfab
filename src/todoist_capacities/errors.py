"""Exceptions raised by the outbound API clients."""

from __future__ import annotations


class RelayError(Exception):
    """Base class for errors talking to an external service.

    Args:
        status_code: HTTP status returned by the service, or None when the
            request never got a response.
        detail: Diagnostic text safe to show to the caller.
    """

    service = "upstream"

    def __init__(self, status_code: int | None, detail: str = ""):
        self.status_code = status_code
        self.detail = detail
        super().__init__(self._message())

    def _message(self) -> str:
        if self.status_code is None:
            return f"{self.service} request failed: {self.detail}"
        return f"{self.service} API error {self.status_code}: {self.detail}"


class CapacitiesAPIError(RelayError):
    """The Capacities API rejected the note or could not be reached."""

    service = "Capacities"


class TodoistAPIError(RelayError):
    """The Todoist webhooks endpoint returned an error."""

    service = "Todoist"
