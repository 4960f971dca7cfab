"""Pydantic models for Todoist webhook payloads and the Capacities API."""

from __future__ import annotations

from typing import Any, Literal, get_args

from pydantic import BaseModel, ConfigDict, Field

EventName = Literal[
    "item:added",
    "item:updated",
    "item:completed",
    "item:uncompleted",
    "item:deleted",
]

# Events we forward to Capacities; anything else is acknowledged and ignored
SUPPORTED_EVENTS: frozenset[str] = frozenset(get_args(EventName))


class TodoistDue(BaseModel):
    """Due date object attached to a Todoist task."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    date: str  # "2024-01-15" or "2024-01-15T14:00:00"
    datetime: str | None = None  # set only when the due has a time
    is_recurring: bool = False
    string: str = ""  # human readable, e.g. "every monday"
    timezone: str | None = None
    lang: str | None = None


class TodoistTask(BaseModel):
    """Snapshot of a Todoist task as delivered in ``event_data``."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str = ""
    content: str
    description: str = ""
    project_id: str = ""
    section_id: str | None = None
    parent_id: str | None = None
    user_id: str | None = None
    # 4 = urgent (red), 3 = high, 2 = medium, 1 = normal
    priority: int = Field(default=1, ge=1, le=4)
    due: TodoistDue | None = None
    labels: list[str] = Field(default_factory=list)
    checked: bool = False
    is_deleted: bool = False
    added_at: str | None = None
    updated_at: str | None = None
    completed_at: str | None = None


class WebhookInitiator(BaseModel):
    """The user who triggered the event."""

    model_config = ConfigDict(extra="ignore")

    id: str | None = None
    email: str | None = None
    full_name: str | None = None


class WebhookPayload(BaseModel):
    """Envelope of a Todoist webhook request.

    ``event_data`` stays a plain mapping here: only item events carry a task,
    so it is validated with :meth:`task` once the event is known to be one.
    """

    model_config = ConfigDict(extra="ignore")

    event_name: str
    user_id: str = ""
    event_data: dict[str, Any]
    initiator: WebhookInitiator | None = None
    version: str | None = None

    def task(self) -> TodoistTask:
        """Validate ``event_data`` as a :class:`TodoistTask`."""
        return TodoistTask.model_validate(self.event_data)


class CapacitiesSaveToDailyNoteRequest(BaseModel):
    """Body of ``POST /save-to-daily-note``."""

    spaceId: str
    mdText: str
    origin: Literal["commandPalette"] | None = None
    noTimeStamp: bool | None = None


class WebhookSubscription(BaseModel):
    """A webhook registration returned by the Todoist webhooks endpoint."""

    model_config = ConfigDict(extra="allow")

    id: str | int | None = None
    url: str | None = None
    events: list[str] = Field(default_factory=list)
