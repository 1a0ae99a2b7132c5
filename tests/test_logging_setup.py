"""Unit tests for logging setup."""

import logging
import os
import sys

# Add project root to path so we can import the package
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, project_root)

from prediction_bot.logging_setup import LOG_FORMAT, setup_logging


class TestSetupLogging:
    """Root logger configuration."""

    def test_configures_stdout_and_file(self, tmp_path, monkeypatch):
        root = logging.getLogger()
        monkeypatch.setattr(root, "handlers", [])
        monkeypatch.setattr(root, "level", root.level)
        log_file = tmp_path / "bot.log"

        setup_logging(level=logging.DEBUG, log_file=str(log_file))

        assert len(root.handlers) == 2
        assert root.handlers[0].formatter._fmt == LOG_FORMAT
        for handler in root.handlers:
            handler.close()

    def test_does_not_duplicate_handlers(self, monkeypatch):
        root = logging.getLogger()
        existing = logging.NullHandler()
        monkeypatch.setattr(root, "handlers", [existing])

        setup_logging()

        assert root.handlers == [existing]
