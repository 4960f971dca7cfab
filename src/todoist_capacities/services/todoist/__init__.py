"""Todoist integration service package."""

from .client import DEFAULT_EVENTS, TodoistWebhookClient

__all__ = [
    "DEFAULT_EVENTS",
    "TodoistWebhookClient",
]
