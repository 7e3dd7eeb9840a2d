"""Configuration builder with explicit layering.

Configuration values come from several sources. Each is captured as a
ConfigSource in which None means "not set here"; ConfigBuilder applies them
in precedence order and fills the gaps with defaults.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

from slogkit.config.env import EnvReader
from slogkit.config.models import LoggingConfig

# Environment variables read by source_from_env().
ENV_LEVEL = "SLOGKIT_LEVEL"
ENV_FORMAT = "SLOGKIT_FORMAT"
ENV_FILE = "SLOGKIT_FILE"
ENV_INCLUDE_STDERR = "SLOGKIT_INCLUDE_STDERR"
ENV_ADD_SOURCE = "SLOGKIT_ADD_SOURCE"
ENV_COLOR = "SLOGKIT_COLOR"
ENV_TIME_LAYOUT = "SLOGKIT_TIME_LAYOUT"
ENV_SEPARATOR = "SLOGKIT_SEPARATOR"
ENV_SAFE = "SLOGKIT_SAFE"
# Any non-empty value disables color (https://no-color.org).
ENV_NO_COLOR = "NO_COLOR"


@dataclass
class ConfigSource:
    """Configuration values from a single source.

    None values indicate "not specified in this source" and do not override
    values from lower-precedence sources.
    """

    level: str | None = None
    format: str | None = None
    file: Path | None = None
    include_stderr: bool | None = None
    add_source: bool | None = None
    color: bool | None = None
    time_layout: str | None = None
    separator: str | None = None
    safe: bool | None = None


class ConfigBuilder:
    """Builds LoggingConfig by layering ConfigSources.

    Later sources override earlier ones (for non-None values).

    Example:
        builder = ConfigBuilder()
        builder.apply(source_from_file(file_config))
        builder.apply(source_from_env(reader))
        builder.apply(ConfigSource(level="debug"))
        config = builder.build()
    """

    def __init__(self) -> None:
        self._values: dict[str, Any] = {}

    def apply(self, source: ConfigSource) -> None:
        """Apply a configuration source, overriding existing values.

        Args:
            source: Configuration source to apply.
        """
        for field_obj in fields(source):
            value = getattr(source, field_obj.name)
            if value is not None:
                self._values[field_obj.name] = value

    def build(self) -> LoggingConfig:
        """Build the final LoggingConfig with defaults for unset values.

        Raises:
            ValueError: If the combined values are invalid.
        """
        return LoggingConfig(**self._values)


def source_from_file(file_config: dict[str, Any]) -> ConfigSource:
    """Create a ConfigSource from a parsed config file.

    Args:
        file_config: Parsed configuration dictionary; only the ``logging``
            table is used.

    Returns:
        ConfigSource with values from the config file.
    """
    logging_conf = file_config.get("logging", {})
    log_file = logging_conf.get("file")
    return ConfigSource(
        level=logging_conf.get("level"),
        format=logging_conf.get("format"),
        file=Path(log_file).expanduser() if log_file else None,
        include_stderr=logging_conf.get("include_stderr"),
        add_source=logging_conf.get("add_source"),
        color=logging_conf.get("color"),
        time_layout=logging_conf.get("time_layout"),
        separator=logging_conf.get("separator"),
        safe=logging_conf.get("safe"),
    )


def source_from_env(reader: EnvReader) -> ConfigSource:
    """Create a ConfigSource from SLOGKIT_* environment variables.

    NO_COLOR, when set to a non-empty value, disables color unless
    SLOGKIT_COLOR is set explicitly.

    Args:
        reader: Environment reader.

    Returns:
        ConfigSource with values from the environment.
    """
    color = reader.get_bool(ENV_COLOR)
    if color is None and reader.get_str(ENV_NO_COLOR):
        color = False
    level = reader.get_str(ENV_LEVEL)
    fmt = reader.get_str(ENV_FORMAT)
    return ConfigSource(
        level=level.lower() if level else None,
        format=fmt.lower() if fmt else None,
        file=reader.get_path(ENV_FILE),
        include_stderr=reader.get_bool(ENV_INCLUDE_STDERR),
        add_source=reader.get_bool(ENV_ADD_SOURCE),
        color=color,
        time_layout=reader.get_str(ENV_TIME_LAYOUT),
        separator=reader.get_str(ENV_SEPARATOR),
        safe=reader.get_bool(ENV_SAFE),
    )
