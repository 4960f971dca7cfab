"""Message helpers for CLI output."""

from __future__ import annotations

import json
from typing import Any

from rich.markup import escape

from .console import get_console


def format_error(message: str) -> None:
    """Format and display an error message."""
    get_console(stderr=True).print(f"[bold red]Error:[/bold red] {escape(message)}")


def format_success(message: str) -> None:
    """Format and display a success message."""
    get_console().print(f"[bold green]Success:[/bold green] {escape(message)}")


def format_info(message: str) -> None:
    """Format and display an info message."""
    get_console().print(f"[bold blue]Info:[/bold blue] {escape(message)}")


def format_json(data: Any) -> None:
    """Pretty-print *data* as JSON."""
    get_console().print_json(json.dumps(data))
