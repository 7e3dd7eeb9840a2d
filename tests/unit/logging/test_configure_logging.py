"""Tests for configure_logging."""

from __future__ import annotations

import io
import logging
import sys
from pathlib import Path

import pytest

from slogkit.config.models import LoggingConfig
from slogkit.logging.config import configure_logging
from slogkit.logging.handlers import SlogkitHandler


@pytest.fixture(autouse=True)
def reset_root_logger():
    """Restore the root logger's handlers and level after each test."""
    root = logging.getLogger()
    saved_handlers = root.handlers[:]
    saved_level = root.level
    yield root
    for handler in root.handlers[:]:
        root.removeHandler(handler)
        if isinstance(handler, SlogkitHandler):
            handler.close()
    for handler in saved_handlers:
        root.addHandler(handler)
    root.setLevel(saved_level)


class FakeStderr:
    """Stands in for sys.stderr with a byte buffer."""

    def __init__(self):
        self.buffer = io.BytesIO()
        self.text = io.StringIO()

    def write(self, s: str) -> int:
        return self.text.write(s)

    def flush(self) -> None:
        pass


@pytest.fixture
def fake_stderr(monkeypatch):
    stderr = FakeStderr()
    monkeypatch.setattr(sys, "stderr", stderr)
    return stderr


class TestConfigureLogging:
    """Tests for configure_logging function."""

    def test_stderr_by_default(self, reset_root_logger, fake_stderr) -> None:
        configure_logging(LoggingConfig(format="json"))
        handlers = reset_root_logger.handlers
        assert len(handlers) == 1
        assert isinstance(handlers[0], SlogkitHandler)
        assert handlers[0].stream is fake_stderr.buffer

        logging.getLogger("app").info("ready")
        assert b'"msg":"ready"' in fake_stderr.buffer.getvalue()

    def test_sets_root_level(self, reset_root_logger, fake_stderr) -> None:
        configure_logging(LoggingConfig(level="warn"))
        assert reset_root_logger.level == logging.WARNING
        logging.getLogger("app").info("hidden")
        assert fake_stderr.buffer.getvalue() == b""

    def test_file_only(self, reset_root_logger, fake_stderr, tmp_path: Path) -> None:
        log_file = tmp_path / "logs" / "app.log"
        configure_logging(LoggingConfig(file=log_file))
        logging.getLogger("app").warning("to file")
        assert len(reset_root_logger.handlers) == 1
        assert "msg=\"to file\"" in log_file.read_text()
        assert fake_stderr.buffer.getvalue() == b""

    def test_file_and_stderr(self, reset_root_logger, fake_stderr, tmp_path: Path) -> None:
        log_file = tmp_path / "app.log"
        configure_logging(LoggingConfig(file=log_file, include_stderr=True))
        logging.getLogger("app").error("both")
        assert len(reset_root_logger.handlers) == 2
        assert b"msg=both" in fake_stderr.buffer.getvalue()
        assert "msg=both" in log_file.read_text()

    def test_unwritable_file_falls_back(
        self, reset_root_logger, fake_stderr, tmp_path: Path
    ) -> None:
        """Should warn and log to stderr when the file cannot be opened."""
        blocker = tmp_path / "blocker"
        blocker.write_text("")
        configure_logging(LoggingConfig(file=blocker / "app.log"))
        assert "Warning: Could not open log file" in fake_stderr.text.getvalue()
        assert len(reset_root_logger.handlers) == 1
        assert reset_root_logger.handlers[0].stream is fake_stderr.buffer

    def test_reconfigure_replaces_handlers(
        self, reset_root_logger, fake_stderr, tmp_path: Path
    ) -> None:
        """Should remove earlier handlers and close the files they opened."""
        log_file = tmp_path / "app.log"
        configure_logging(LoggingConfig(file=log_file))
        first = reset_root_logger.handlers[0]
        stream = first.stream

        configure_logging(LoggingConfig())
        assert first not in reset_root_logger.handlers
        assert stream.closed
