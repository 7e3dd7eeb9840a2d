"""slogkit: structured log record encoding.

Renders log records (time, level, message and attribute trees) as
``key=value`` text, colored pretty text or JSON, compatible with Go's
log/slog text and JSON handler output.

Example:
    from slogkit import Handler, Logger

    log = Logger(Handler.json(sys.stdout.buffer))
    log.with_group("request").info("handled", "method", "GET", status=200)
"""

from slogkit.builder import HandlerBuilder
from slogkit.colors import (
    DEFAULT_COLOR_MAP,
    DEFAULT_LEVEL_COLOR,
    EMPTY_COLOR_MAP,
    NO_COLOR,
    NO_COLOR_MAP,
    LevelColorMap,
    UniformColorMap,
    get_color,
)
from slogkit.errors import ConfigError, KindError, SlogkitError
from slogkit.handler import (
    DEFAULT_DATETIME_LAYOUT,
    DEFAULT_PRETTY_DATETIME_LAYOUT,
    JSON_SEP,
    PRETTY_SEP,
    STRUCT_SEP,
    Handler,
    HandlerOptions,
    Mode,
)
from slogkit.level import (
    DEBUG,
    ERROR,
    FX,
    FX_ERROR,
    INFO,
    WARN,
    Level,
    LevelVar,
    level_name,
    parse_level,
)
from slogkit.logger import Logger
from slogkit.record import (
    LEVEL_KEY,
    MESSAGE_KEY,
    SOURCE_KEY,
    TIME_KEY,
    Record,
    Source,
)
from slogkit.value import (
    BAD_KEY,
    EMPTY_ATTR,
    Attr,
    JSONMarshaler,
    Kind,
    LogValuer,
    TextMarshaler,
    Value,
    group,
)

__version__ = "0.1.0"

__all__ = [
    # Handler
    "DEFAULT_DATETIME_LAYOUT",
    "DEFAULT_PRETTY_DATETIME_LAYOUT",
    "JSON_SEP",
    "PRETTY_SEP",
    "STRUCT_SEP",
    "Handler",
    "HandlerBuilder",
    "HandlerOptions",
    "Mode",
    # Colors
    "DEFAULT_COLOR_MAP",
    "DEFAULT_LEVEL_COLOR",
    "EMPTY_COLOR_MAP",
    "NO_COLOR",
    "NO_COLOR_MAP",
    "LevelColorMap",
    "UniformColorMap",
    "get_color",
    # Levels
    "DEBUG",
    "ERROR",
    "FX",
    "FX_ERROR",
    "INFO",
    "WARN",
    "Level",
    "LevelVar",
    "level_name",
    "parse_level",
    # Records and values
    "BAD_KEY",
    "EMPTY_ATTR",
    "LEVEL_KEY",
    "MESSAGE_KEY",
    "SOURCE_KEY",
    "TIME_KEY",
    "Attr",
    "JSONMarshaler",
    "Kind",
    "LogValuer",
    "Logger",
    "Record",
    "Source",
    "TextMarshaler",
    "Value",
    "group",
    # Errors
    "ConfigError",
    "KindError",
    "SlogkitError",
    "__version__",
]
