"""Shared Rich console."""

from functools import lru_cache

from rich.console import Console


@lru_cache(maxsize=2)
def get_console(stderr: bool = False) -> Console:
    """Get a Rich Console instance; ``stderr=True`` for diagnostics."""
    return Console(stderr=stderr, highlight=False)
