"""
Test suite for logging configuration

Tests the JSON formatter, handler setup and structured action logging.
"""

import json
import logging

import pytest

from pocket_bank.logging_config import JSONFormatter, setup_logging, get_logger, log_action


class ListHandler(logging.Handler):
    """Collects formatted records"""

    def __init__(self):
        super().__init__()
        self.setFormatter(JSONFormatter())
        self.messages = []

    def emit(self, record):
        self.messages.append(json.loads(self.format(record)))


@pytest.fixture
def captured():
    logger = logging.getLogger("pocket_bank.tests")
    handler = ListHandler()
    logger.addHandler(handler)
    logger.setLevel(logging.INFO)
    logger.propagate = False
    yield logger, handler
    logger.removeHandler(handler)


class TestJSONFormatter:
    """Test structured log records"""

    def test_log_action_fields(self, captured):
        logger, handler = captured

        log_action(logger, "info", "Deposit completed", action="deposit",
                   resource="Bob", extra={"balance": "100.00"})

        entry = handler.messages[0]
        assert entry["level"] == "INFO"
        assert entry["module"] == "pocket_bank.tests"
        assert entry["message"] == "Deposit completed"
        assert entry["action"] == "deposit"
        assert entry["resource"] == "Bob"
        assert entry["extra"] == {"balance": "100.00"}
        assert "timestamp" in entry

    def test_missing_fields_are_dropped(self, captured):
        logger, handler = captured

        log_action(logger, "warning", "Transaction failed")

        assert set(handler.messages[0]) == {"timestamp", "level", "module", "message"}

    def test_level_is_respected(self, captured):
        logger, handler = captured
        logger.setLevel(logging.WARNING)

        log_action(logger, "info", "Quiet")
        log_action(logger, "error", "Loud")

        assert [m["message"] for m in handler.messages] == ["Loud"]


class TestSetupLogging:
    """Test handler configuration"""

    def test_json_to_file(self, tmp_path):
        path = tmp_path / "pocket_bank.log"
        logger = setup_logging("INFO", "json", str(path), logger_name="pocket_bank.file_test")

        log_action(logger, "info", "Session started", action="start")
        for handler in logger.handlers:
            handler.flush()

        entry = json.loads(path.read_text(encoding="utf-8").strip())
        assert entry["action"] == "start"
        assert logger.propagate is False

    def test_text_format(self):
        logger = setup_logging("debug", "text", logger_name="pocket_bank.text_test")

        assert len(logger.handlers) == 1
        assert not isinstance(logger.handlers[0].formatter, JSONFormatter)
        assert logger.level == logging.DEBUG

    def test_setup_replaces_handlers(self):
        setup_logging(logger_name="pocket_bank.repeat_test")
        logger = setup_logging(logger_name="pocket_bank.repeat_test")

        assert len(logger.handlers) == 1
        assert logger.level == logging.WARNING

    def test_get_logger(self):
        assert get_logger("pocket_bank.session") is logging.getLogger("pocket_bank.session")
