"""Configuration data models."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from slogkit.level import LEVELS_BY_NAME, Level, parse_level

VALID_FORMATS = frozenset({"text", "json", "pretty"})


@dataclass
class LoggingConfig:
    """Configuration for log output."""

    # Minimum level: fx, fx_error, debug, info, warn, warning, error
    level: str = "info"

    # Output encoding: text, json or pretty
    format: str = "text"

    # Log file path (None = stderr only)
    file: Path | None = None

    # Also log to stderr when file is set
    include_stderr: bool = False

    # Add the caller's source location to every record
    add_source: bool = False

    # Color the level in pretty output
    color: bool = True

    # strftime() layout of the time field in pretty output (None = default)
    time_layout: str | None = None

    # Field separator in text output (None = default)
    separator: str | None = None

    # Quote ambiguous text values (None = the format's default)
    safe: bool | None = None

    def __post_init__(self) -> None:
        """Validate configuration."""
        if self.level.lower() not in LEVELS_BY_NAME:
            raise ValueError(
                f"level must be one of {sorted(LEVELS_BY_NAME)}, got {self.level}"
            )
        if self.format.lower() not in VALID_FORMATS:
            raise ValueError(
                f"format must be one of {sorted(VALID_FORMATS)}, got {self.format}"
            )
        if self.separator == "":
            raise ValueError("separator must not be empty")
        if self.time_layout == "":
            raise ValueError("time_layout must not be empty")

    @property
    def min_level(self) -> Level:
        return parse_level(self.level)
