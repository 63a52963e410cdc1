"""
Tests for root logger configuration.
"""

import logging
import sys

import pytest

from utils.logging_config import LOG_FORMAT, setup_logging


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    level = root.level
    yield
    for handler in list(root.handlers):
        if handler.formatter is not None and handler.formatter._fmt == LOG_FORMAT:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)


class TestSetupLogging:

    def test_console_only(self) -> None:
        root = setup_logging("debug")

        assert root is logging.getLogger()
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert root.handlers[0].stream is sys.stdout
        assert root.handlers[0].formatter._fmt == LOG_FORMAT

    def test_repeated_calls_do_not_stack_handlers(self) -> None:
        setup_logging("INFO")
        root = setup_logging("WARNING")

        assert len(root.handlers) == 1
        assert root.level == logging.WARNING

    def test_file_handler(self, tmp_path) -> None:
        log_file = tmp_path / "nested" / "ephemeris.log"

        root = setup_logging("INFO", str(log_file))
        logging.getLogger("tle.catalog").info("catalog message")
        for handler in root.handlers:
            handler.flush()

        assert len(root.handlers) == 2
        contents = log_file.read_text()
        assert "tle.catalog - INFO - catalog message" in contents
        assert "Logging configured" in contents

    def test_unknown_level(self) -> None:
        with pytest.raises(ValueError):
            setup_logging("LOUD")
