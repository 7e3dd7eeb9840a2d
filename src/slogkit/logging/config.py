"""Logging configuration.

Provides configure_logging() to route the standard logging module through
slogkit handlers based on LoggingConfig.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from slogkit.config.logging_factory import build_handler
from slogkit.logging.handlers import SlogkitHandler, to_stdlib_level

if TYPE_CHECKING:
    from slogkit.config.models import LoggingConfig


def configure_logging(config: LoggingConfig) -> None:
    """Configure the root logger based on LoggingConfig.

    Replaces the root logger's handlers with slogkit bridges writing to the
    configured file and/or stderr.

    Args:
        config: Logging configuration.
    """
    level = to_stdlib_level(config.min_level)

    # Get root logger
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Clear existing handlers, releasing files opened by earlier calls
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        if isinstance(handler, SlogkitHandler):
            handler.close()

    # Add file handler if configured
    file_handler_added = False
    if config.file:
        try:
            file_path = Path(config.file).expanduser()
            file_path.parent.mkdir(parents=True, exist_ok=True)
            stream = open(file_path, "ab", buffering=0)  # noqa: SIM115
        except OSError as e:
            # Log file unavailable - fall back to stderr
            sys.stderr.write(f"Warning: Could not open log file {config.file}: {e}\n")
        else:
            file_handler = SlogkitHandler(
                build_handler(config, stream), level, stream=stream, close_stream=True
            )
            root_logger.addHandler(file_handler)
            file_handler_added = True

    # Add stderr handler if configured or as fallback
    if config.include_stderr or not file_handler_added:
        stderr = sys.stderr.buffer
        stderr_handler = SlogkitHandler(build_handler(config, stderr), level, stream=stderr)
        root_logger.addHandler(stderr_handler)
