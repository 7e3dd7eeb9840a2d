"""Logging configuration.

Load a LoggingConfig from a TOML file, the environment and explicit
overrides, then turn it into a handler:

    config = load_config()
    handler = build_handler(config, sys.stderr.buffer)
"""

from slogkit.config.builder import (
    ConfigBuilder,
    ConfigSource,
    source_from_env,
    source_from_file,
)
from slogkit.config.env import EnvReader
from slogkit.config.loader import (
    DEFAULT_CONFIG_FILE,
    get_default_config_path,
    load_config,
    load_config_file,
)
from slogkit.config.logging_factory import build_handler
from slogkit.config.models import LoggingConfig
from slogkit.config.schema import LoggingFileModel

__all__ = [
    "DEFAULT_CONFIG_FILE",
    "ConfigBuilder",
    "ConfigSource",
    "EnvReader",
    "LoggingConfig",
    "LoggingFileModel",
    "build_handler",
    "get_default_config_path",
    "load_config",
    "load_config_file",
    "source_from_env",
    "source_from_file",
]
