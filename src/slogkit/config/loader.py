"""Configuration loader with precedence handling.

Configuration is loaded with the following precedence (highest to lowest):
1. Keyword overrides passed to load_config()
2. Environment variables (SLOGKIT_*, NO_COLOR)
3. Config file (``[logging]`` table of ~/.slogkit/config.toml)
4. Default values

Environment variables:
- SLOGKIT_CONFIG_PATH: Path to config file (overrides default location)
- SLOGKIT_LEVEL, SLOGKIT_FORMAT, SLOGKIT_FILE, SLOGKIT_INCLUDE_STDERR,
  SLOGKIT_ADD_SOURCE, SLOGKIT_COLOR, SLOGKIT_TIME_LAYOUT,
  SLOGKIT_SEPARATOR, SLOGKIT_SAFE: the LoggingConfig field of the same name
- NO_COLOR: Disable color when set to a non-empty value
"""

from __future__ import annotations

import logging
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from slogkit.config.builder import (
    ConfigBuilder,
    ConfigSource,
    source_from_env,
    source_from_file,
)
from slogkit.config.env import EnvReader
from slogkit.config.models import LoggingConfig
from slogkit.config.schema import LoggingFileModel
from slogkit.errors import ConfigError

logger = logging.getLogger(__name__)

# Default config location
DEFAULT_CONFIG_DIR = Path.home() / ".slogkit"
DEFAULT_CONFIG_FILE = DEFAULT_CONFIG_DIR / "config.toml"

ENV_CONFIG_PATH = "SLOGKIT_CONFIG_PATH"


def get_default_config_path(reader: EnvReader | None = None) -> Path:
    """Get the default config file path.

    Can be overridden by the SLOGKIT_CONFIG_PATH environment variable.
    """
    reader = reader or EnvReader()
    return reader.get_path(ENV_CONFIG_PATH) or DEFAULT_CONFIG_FILE


def load_config_file(path: Path) -> dict[str, Any]:
    """Load and validate the logging settings of a TOML config file.

    Args:
        path: Path to the config file.

    Returns:
        ``{"logging": {...}}`` with only the keys set in the file. Empty
        dict if the file does not exist.

    Raises:
        ConfigError: If the file is not valid TOML or its ``[logging]``
            table has unknown keys or invalid values.
    """
    if not path.exists():
        logger.debug("Config file not found: %s", path)
        return {}

    try:
        with path.open("rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError("config file", str(path), str(e)) from e

    section = data.get("logging", {})
    if not isinstance(section, dict):
        raise ConfigError("logging", section, "must be a table")

    try:
        model = LoggingFileModel.model_validate(section)
    except ValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(part) for part in first["loc"])
        raise ConfigError(f"logging.{field}", first.get("input"), first["msg"]) from e

    logger.debug("Loaded logging config from %s", path)
    return {"logging": model.model_dump(exclude_none=True)}


def load_config(
    path: Path | None = None,
    *,
    env: Mapping[str, str] | None = None,
    **overrides: Any,
) -> LoggingConfig:
    """Load the logging configuration with full precedence handling.

    Args:
        path: Config file path. If None, uses get_default_config_path().
        env: Environment mapping to read instead of os.environ.
        **overrides: LoggingConfig field values that take precedence over
            everything else; None values are ignored.

    Returns:
        Validated LoggingConfig.

    Raises:
        ConfigError: If the config file is invalid.
        ValueError: If the combined configuration is invalid.
        TypeError: If an override names an unknown field.
    """
    reader = EnvReader(env=env)
    if path is None:
        path = get_default_config_path(reader)

    builder = ConfigBuilder()
    builder.apply(source_from_file(load_config_file(path)))
    builder.apply(source_from_env(reader))
    builder.apply(ConfigSource(**overrides))
    return builder.build()
