"""Tests for the application logger utility."""

from __future__ import annotations

import logging
import logging.handlers
from unittest.mock import patch

import pytest

from todoist_capacities.utils.logger import _owned_handlers as _owned


@pytest.fixture(autouse=True)
def reset_logger():
    """Reset the logger singleton and logging state between tests."""
    import todoist_capacities.utils.logger as logger_mod

    app_logger = logging.getLogger("todoist_capacities")
    original = logger_mod._logger
    original_handlers = list(app_logger.handlers)
    original_level = app_logger.level
    logger_mod._logger = None
    app_logger.handlers[:] = [h for h in original_handlers if h not in _owned(app_logger)]

    yield

    for handler in _owned(app_logger):
        if handler not in original_handlers:
            handler.close()
    app_logger.handlers[:] = original_handlers
    app_logger.setLevel(original_level)
    logger_mod._logger = original


def test_get_logger_creates_log_file(tmp_path):
    """Logger creates the log file inside user_log_dir."""
    with patch("todoist_capacities.utils.logger.user_log_dir", return_value=str(tmp_path)):
        from todoist_capacities.utils.logger import get_logger

        logger = get_logger()

    assert (tmp_path / "relay.log").exists(), "Log file should be created on first use"
    assert isinstance(logger, logging.Logger)


def test_get_logger_returns_singleton(tmp_path):
    """Repeated calls return the same logger instance."""
    with patch("todoist_capacities.utils.logger.user_log_dir", return_value=str(tmp_path)):
        from todoist_capacities.utils.logger import get_logger

        assert get_logger() is get_logger()


def test_named_logger_is_child(tmp_path):
    with patch("todoist_capacities.utils.logger.user_log_dir", return_value=str(tmp_path)):
        from todoist_capacities.utils.logger import get_logger

        child = get_logger("relay")

    assert child.name == "todoist_capacities.relay"
    assert child.parent is get_logger()


def test_get_logger_writes_message(tmp_path):
    """Messages written to the logger appear in the log file."""
    with patch("todoist_capacities.utils.logger.user_log_dir", return_value=str(tmp_path)):
        from todoist_capacities.utils.logger import get_logger

        logger = get_logger()
        logger.info("hello from test")

    for handler in _owned(logger):
        handler.flush()

    assert "hello from test" in (tmp_path / "relay.log").read_text()


def test_unwritable_log_dir_falls_back_to_stderr(tmp_path):
    """When the log dir cannot be created only the stderr handler is used."""
    with patch(
        "todoist_capacities.utils.logger.Path.mkdir", side_effect=PermissionError("read-only")
    ):
        with patch("todoist_capacities.utils.logger.user_log_dir", return_value=str(tmp_path / "x")):
            from todoist_capacities.utils.logger import get_logger

            logger = get_logger()

    owned = _owned(logger)
    assert len(owned) == 1
    assert isinstance(owned[0], logging.StreamHandler)
    assert not isinstance(owned[0], logging.FileHandler)


@pytest.mark.parametrize(
    "level,expected",
    [("debug", logging.DEBUG), ("WARNING", logging.WARNING), ("bogus", logging.INFO), (40, 40)],
)
def test_configure_level(tmp_path, level, expected):
    with patch("todoist_capacities.utils.logger.user_log_dir", return_value=str(tmp_path)):
        from todoist_capacities.utils.logger import configure_level, get_logger

        configure_level(level)
        assert get_logger().level == expected


def test_foreign_handler_does_not_block_setup(tmp_path):
    """A handler attached by the host before first use is kept, ours are added."""
    foreign = logging.NullHandler()
    app_logger = logging.getLogger("todoist_capacities")
    app_logger.addHandler(foreign)
    try:
        with patch("todoist_capacities.utils.logger.user_log_dir", return_value=str(tmp_path)):
            from todoist_capacities.utils.logger import get_logger

            logger = get_logger()
            logger.info("reaches our file")

        assert foreign in logger.handlers
        owned = _owned(logger)
        assert {type(h) for h in owned} == {
            logging.StreamHandler,
            logging.handlers.RotatingFileHandler,
        }
        for handler in owned:
            handler.flush()
        assert "reaches our file" in (tmp_path / "relay.log").read_text()
    finally:
        app_logger.removeHandler(foreign)
