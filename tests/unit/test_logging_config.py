"""Tests for structlog-based logging setup."""

from __future__ import annotations

import json
import logging

import pytest
import structlog

from symptom_dialogue.core.config import ObservabilityConfig
from symptom_dialogue.hooks.logging_config import setup_logging


@pytest.fixture
def restore_logging():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)
    structlog.reset_defaults()


class TestSetupLogging:
    def test_installs_single_structlog_handler(self, restore_logging) -> None:
        setup_logging(ObservabilityConfig(log_level="debug", json_logs=True))

        root = restore_logging
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, structlog.stdlib.ProcessorFormatter)
        assert root.level == logging.DEBUG
        assert logging.getLogger("symptom_dialogue").level == logging.DEBUG
        assert logging.getLogger("LiteLLM").level == logging.WARNING

    def test_json_output_for_stdlib_records(self, restore_logging) -> None:
        setup_logging(ObservabilityConfig(json_logs=True))

        record = logging.LogRecord(
            "symptom_dialogue.engine", logging.INFO, __file__, 1, "Session %s started", ("s1",), None
        )
        payload = json.loads(restore_logging.handlers[0].formatter.format(record))

        assert payload["event"] == "Session s1 started"
        assert payload["level"] == "info"
        assert payload["logger"] == "symptom_dialogue.engine"
        assert "timestamp" in payload

    def test_unknown_level_defaults_to_info(self, restore_logging) -> None:
        setup_logging(ObservabilityConfig(log_level="chatty", json_logs=True))
        assert restore_logging.level == logging.INFO
