"""Render Todoist task events as markdown blocks for a Capacities daily note.

Everything here is pure: the same task and event always give the same text.
Each block ends with a blank line and a ``---`` rule so that blocks appended
one after another to the same note stay visually separate.
"""

from __future__ import annotations

from datetime import UTC, datetime, tzinfo

from todoist_capacities.models import EventName, TodoistTask

SEPARATOR = "---"
BLOCK_END = f"\n\n{SEPARATOR}\n"

_PRIORITY_LABELS = {
    4: "Urgent",
    3: "High",
    2: "Medium",
    1: "Normal",
}

# event -> (heading, strike through the title)
_EVENT_HEADINGS: dict[EventName, tuple[str, bool]] = {
    "item:added": ("New Task Added", False),
    "item:updated": ("Task Updated", False),
    "item:uncompleted": ("Task Reopened", False),
    "item:completed": ("Task Completed", True),
    "item:deleted": ("Task Deleted", True),
}

# Fixed en-US names so output does not depend on the process locale
_WEEKDAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
_MONTHS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


def get_priority_label(priority: int) -> str:
    """Convert a Todoist priority (1-4) to its display label."""
    return _PRIORITY_LABELS.get(priority, _PRIORITY_LABELS[1])


def format_datetime(value: str, tz: tzinfo = UTC) -> str:
    """Format an ISO-8601 timestamp as e.g. ``Mon, Jan 15, 2024, 2:00 PM``.

    Timezone-aware values are shown in *tz*; floating (naive) values, which
    Todoist uses for due times without a timezone, are shown as given.
    Anything that does not parse is returned unchanged.
    """
    try:
        dt = datetime.fromisoformat(value)
        if dt.tzinfo is not None:
            dt = dt.astimezone(tz)
    except (TypeError, ValueError, OverflowError):
        return value

    hour = dt.hour % 12 or 12
    meridiem = "AM" if dt.hour < 12 else "PM"
    return (
        f"{_WEEKDAYS[dt.weekday()]}, {_MONTHS[dt.month - 1]} {dt.day}, {dt.year}, "
        f"{hour}:{dt.minute:02d} {meridiem}"
    )


def _metadata_lines(task: TodoistTask, tz: tzinfo) -> list[str]:
    lines: list[str] = []

    # Normal priority is the default; only call out raised ones
    if task.priority > 1:
        lines.append(f"- **Priority:** {get_priority_label(task.priority)}")

    if task.due:
        due = format_datetime(task.due.datetime, tz) if task.due.datetime else task.due.date
        recurring = " (recurring)" if task.due.is_recurring else ""
        lines.append(f"- **Due:** {due}{recurring}")

    if task.labels:
        lines.append(f"- **Labels:** {', '.join(task.labels)}")

    if task.description.strip():
        lines.append("")
        lines.append("> " + "\n> ".join(task.description.split("\n")))

    return lines


def format_task_as_markdown(task: TodoistTask, event_name: str, *, tz: tzinfo = UTC) -> str:
    """Render one task event as a markdown block.

    Completed and deleted tasks are struck through and carry no metadata
    (a completed task only shows when it was completed). Every other event,
    including ones without a dedicated heading, lists priority, due date,
    labels and description when present.
    """
    heading, strike = _EVENT_HEADINGS.get(event_name, (f"Task Event: {event_name}", False))
    title = f"~~{task.content}~~" if strike else f"**{task.content}**"
    lines = [f"### {heading}", "", title]

    if event_name == "item:completed":
        if task.completed_at:
            lines.append("")
            lines.append(f"- **Completed:** {format_datetime(task.completed_at, tz)}")
        return "\n".join(lines) + BLOCK_END

    if event_name == "item:deleted":
        return "\n".join(lines) + BLOCK_END

    lines.append("")
    lines.extend(_metadata_lines(task, tz))
    return "\n".join(lines) + BLOCK_END
