"""Tests for logging setup."""
import logging

import pytest
from logging_config import setup_logging


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in list(root.handlers):
        handler.close()
        root.removeHandler(handler)
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)


class TestSetupLogging:
    """Test root logger configuration."""

    def test_without_file_discards(self):
        root = setup_logging()
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0], logging.NullHandler)

    def test_file_handler_writes(self, tmp_path):
        log_file = tmp_path / "logs" / "notex.log"
        root = setup_logging(str(log_file), "debug")
        assert root.level == logging.DEBUG
        logging.getLogger("notex.test").debug("hello")
        for handler in root.handlers:
            handler.flush()
        assert "notex.test - DEBUG - hello" in log_file.read_text(encoding="utf-8")

    def test_unknown_level_falls_back_to_info(self):
        assert setup_logging(level="chatty").level == logging.INFO
