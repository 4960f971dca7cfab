"""Tests for the command_wrapper decorator."""

from __future__ import annotations

import pytest
import typer

from todoist_capacities.commands.decorators import AppError, command_wrapper
from todoist_capacities.errors import TodoistAPIError
from todoist_capacities.utils.exit_codes import (
    ERROR_AUTH_FAILURE,
    ERROR_GENERAL,
    ERROR_INVALID_ARGS,
    ERROR_NETWORK,
)


def test_runs_sync_function():
    @command_wrapper
    def cmd(x):
        return x * 2

    assert cmd(3) == 6


def test_runs_async_function():
    @command_wrapper
    async def cmd(x):
        return x + 1

    assert cmd(1) == 2


def test_preserves_name():
    @command_wrapper
    def my_command():
        pass

    assert my_command.__name__ == "my_command"


@pytest.mark.parametrize(
    "error,code",
    [
        (AppError("bad args", ERROR_INVALID_ARGS), ERROR_INVALID_ARGS),
        (TodoistAPIError(401, "nope"), ERROR_AUTH_FAILURE),
        (TodoistAPIError(403, "nope"), ERROR_AUTH_FAILURE),
        (TodoistAPIError(502, "down"), ERROR_NETWORK),
        (TodoistAPIError(None, "unreachable"), ERROR_NETWORK),
        (RuntimeError("surprise"), ERROR_GENERAL),
    ],
)
def test_maps_errors_to_exit_codes(error, code):
    @command_wrapper
    def cmd():
        raise error

    with pytest.raises(typer.Exit) as exc_info:
        cmd()
    assert exc_info.value.exit_code == code


def test_typer_exit_passes_through():
    @command_wrapper
    def cmd():
        raise typer.Exit(0)

    with pytest.raises(typer.Exit) as exc_info:
        cmd()
    assert exc_info.value.exit_code == 0
