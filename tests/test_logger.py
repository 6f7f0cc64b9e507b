"""Tests for loguru logging setup."""

import logging

import pytest
from loguru import logger

from ea_auth.core.logger import setup_structured_logging


@pytest.fixture
def restore_logging():
    """Undo sink and root handler changes after each test."""
    root_handlers = logging.root.handlers[:]
    root_level = logging.root.level
    yield
    logger.remove()
    logging.root.handlers = root_handlers
    logging.root.setLevel(root_level)


def test_stdlib_logging_is_intercepted(restore_logging):
    """Records from stdlib loggers such as aiohttp end up in loguru."""
    setup_structured_logging("DEBUG")
    messages = []
    logger.add(lambda message: messages.append(message.record["message"]), level="DEBUG")

    logging.getLogger("aiohttp.client").warning("connection reset")

    assert "connection reset" in messages


def test_level_filters_records(restore_logging):
    """Records below the configured level are dropped by the root logger."""
    setup_structured_logging("WARNING")
    messages = []
    logger.add(lambda message: messages.append(message.record["message"]), level="DEBUG")

    logging.getLogger("aiohttp.client").info("too chatty")

    assert messages == []


def test_json_sink_created(restore_logging, tmp_path):
    """The JSON sink writes into the logs directory."""
    logs_dir = tmp_path / "logs"

    setup_structured_logging("INFO", json_format=True, logs_dir=logs_dir)

    assert list(logs_dir.glob("ea_auth*"))
