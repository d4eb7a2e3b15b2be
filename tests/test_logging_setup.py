"""Tests for logging_setup.py."""

from __future__ import annotations

import logging
import sys

import pytest
from pythonjsonlogger.json import JsonFormatter

from workflow_diagram.logging_setup import setup_logging


@pytest.fixture
def root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


class TestSetupLogging:
    def test_json_handler_on_stderr(self, root_logger):
        setup_logging("DEBUG")
        (handler,) = root_logger.handlers
        assert handler.stream is sys.stderr
        assert isinstance(handler.formatter, JsonFormatter)
        assert root_logger.level == logging.DEBUG

    def test_plain_format(self, root_logger):
        setup_logging("WARNING", json=False)
        (handler,) = root_logger.handlers
        assert not isinstance(handler.formatter, JsonFormatter)

    def test_repeated_setup_does_not_duplicate(self, root_logger):
        setup_logging()
        setup_logging()
        assert len(root_logger.handlers) == 1
