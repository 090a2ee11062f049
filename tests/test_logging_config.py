"""
Test suite for structured logging helpers
"""

import json
import logging
import sys

import pytest

from money_transfer.config import MoneyTransferConfig
from money_transfer.logging_config import (
    JSONFormatter, get_logger, log_action, setup_logging, setup_logging_from_config
)


@pytest.fixture
def scratch_logger_name():
    name = "money_transfer_test_scratch"
    yield name
    logger = logging.getLogger(name)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


class TestJSONFormatter:
    """Test JSONFormatter output"""

    def test_format_includes_structured_fields(self):
        """Test optional fields are emitted only when present"""
        record = logging.LogRecord("money_transfer.x", logging.INFO, __file__, 1, "hello %s", ("world",), None)
        record.action = "transfer"
        record.extra = {"amount": "JPY 10"}

        entry = json.loads(JSONFormatter().format(record))
        assert entry["message"] == "hello world"
        assert entry["level"] == "INFO"
        assert entry["logger"] == "money_transfer.x"
        assert entry["action"] == "transfer"
        assert entry["extra"] == {"amount": "JPY 10"}
        assert "correlation_id" not in entry
        assert "timestamp" in entry

    def test_format_exception(self):
        """Test exception info is serialized"""
        try:
            raise ValueError("boom")
        except ValueError:
            record = logging.LogRecord("t", logging.ERROR, __file__, 1, "failed", (), sys.exc_info())
        entry = json.loads(JSONFormatter().format(record))
        assert "ValueError: boom" in entry["exception"]


class TestSetupLogging:
    """Test logger setup helpers"""

    def test_setup_json(self, scratch_logger_name):
        """Test a single JSON handler is installed"""
        logger = setup_logging("debug", logger_name=scratch_logger_name)
        logger = setup_logging("debug", logger_name=scratch_logger_name)
        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0].formatter, JSONFormatter)
        assert logger.level == logging.DEBUG
        assert logger.propagate is False

    def test_setup_text_to_file(self, scratch_logger_name, tmp_path):
        """Test text format written to a log file"""
        log_file = tmp_path / "transfer.log"
        logger = setup_logging("info", logger_name=scratch_logger_name, fmt="text", log_file=str(log_file))
        logger.info("plain line")
        logger.handlers[0].flush()
        assert "plain line" in log_file.read_text()
        assert not isinstance(logger.handlers[0].formatter, JSONFormatter)

    def test_setup_from_config(self, tmp_path):
        """Test the package logger follows configuration"""
        log_file = tmp_path / "pkg.log"
        settings = MoneyTransferConfig(_env_file=None, log_level="WARNING", log_file=str(log_file))
        logger = setup_logging_from_config(settings)
        try:
            assert logger.name == "money_transfer"
            assert logger.level == logging.WARNING
            log_action(get_logger("money_transfer.accounts"), "warning", "written", action="send")
            logger.handlers[0].flush()
            entry = json.loads(log_file.read_text().splitlines()[0])
            assert entry["action"] == "send"
        finally:
            for handler in logger.handlers[:]:
                logger.removeHandler(handler)
                handler.close()
            logger.propagate = True
            logger.setLevel(logging.NOTSET)

    def test_log_action_respects_level(self, scratch_logger_name, caplog):
        """Test records below the logger level are dropped"""
        logger = get_logger(scratch_logger_name)
        logger.setLevel(logging.WARNING)
        with caplog.at_level(logging.DEBUG):
            log_action(logger, "info", "hidden", action="noop")
            log_action(logger, "error", "shown", action="fail", correlation_id="c-1")
        messages = [r.getMessage() for r in caplog.records if r.name == scratch_logger_name]
        assert messages == ["shown"]
        assert caplog.records[-1].correlation_id == "c-1"
