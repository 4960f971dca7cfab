"""Vercel serverless entry point: deploy with the Python runtime."""

from todoist_capacities.adapters.vercel import handler

__all__ = ["handler"]
