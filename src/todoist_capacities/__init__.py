"""Relay Todoist task events into a Capacities daily note."""

__version__ = "0.1.0"
