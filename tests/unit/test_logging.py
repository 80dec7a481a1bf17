"""Unit tests for logging configuration."""

import json

import pytest
import structlog

from seoedit.utils import logging as seoedit_logging
from seoedit.utils.logging import configure_logging, get_logger, log_file_path


@pytest.fixture(autouse=True)
def reset_structlog():
    yield
    structlog.reset_defaults()


class TestConfigureLogging:
    """Test configure_logging."""

    def test_writes_json_lines(self, isolated_home):
        """Test events end up as JSON in the log file."""
        configure_logging()

        get_logger(__name__).info("document_saved", path="content.md")

        lines = log_file_path().read_text(encoding="utf-8").splitlines()
        event = json.loads(lines[-1])
        assert event["event"] == "document_saved"
        assert event["path"] == "content.md"
        assert event["level"] == "info"
        assert log_file_path() == isolated_home / ".cache" / "seoedit" / "logs" / "seoedit.log"

    def test_reuses_open_file(self):
        """Test repeated configuration does not open another handle."""
        configure_logging()
        first = seoedit_logging._log_stream

        configure_logging()

        assert seoedit_logging._log_stream is first
        assert not first.closed

    def test_new_home_closes_old_file(self, tmp_path, monkeypatch):
        """Test a changed log path closes the previous handle."""
        configure_logging()
        first = seoedit_logging._log_stream

        other_home = tmp_path / "other-home"
        other_home.mkdir()
        monkeypatch.setattr(seoedit_logging.Path, "home", lambda: other_home)
        configure_logging()

        assert first.closed
        assert seoedit_logging._log_path == log_file_path()

    def test_level_filters_debug(self, monkeypatch):
        """Test debug events are dropped at the default level."""
        configure_logging()
        get_logger(__name__).debug("command_ignored")

        assert "command_ignored" not in log_file_path().read_text(encoding="utf-8")

    def test_debug_level_from_env(self, monkeypatch):
        """Test SEOEDIT_LOG_LEVEL=debug enables debug events."""
        monkeypatch.setenv("SEOEDIT_LOG_LEVEL", "debug")
        configure_logging()

        get_logger(__name__).debug("command_ignored", reason="unknown page")

        assert "command_ignored" in log_file_path().read_text(encoding="utf-8")

    def test_unknown_level_falls_back_to_info(self, monkeypatch):
        """Test a bad level behaves like INFO."""
        monkeypatch.setenv("SEOEDIT_LOG_LEVEL", "chatty")
        configure_logging()
        logger = get_logger(__name__)

        logger.debug("hidden_event")
        logger.info("shown_event")

        text = log_file_path().read_text(encoding="utf-8")
        assert "hidden_event" not in text
        assert "shown_event" in text
