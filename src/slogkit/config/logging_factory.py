"""Handler factory.

Builds a Handler from a LoggingConfig, so applications can go from a config
file to a working handler in one call.
"""

from __future__ import annotations

from slogkit.builder import HandlerBuilder
from slogkit.colors import NO_COLOR_MAP
from slogkit.config.models import LoggingConfig
from slogkit.handler import Handler, HandlerOptions, Writer


def build_handler(config: LoggingConfig, writer: Writer) -> Handler:
    """Build a Handler for config that writes to writer.

    Args:
        config: Logging configuration.
        writer: Output sink.

    Returns:
        Handler with the configured format, level, source setting, colors,
        time layout, separator and quoting.

    Example:
        config = load_config()
        handler = build_handler(config, sys.stderr.buffer)
    """
    builder = HandlerBuilder().with_writer(writer)
    fmt = config.format.lower()
    if fmt == "json":
        builder.with_json()
    elif fmt == "pretty":
        builder.with_pretty()
        if not config.color:
            builder.with_color(NO_COLOR_MAP)
    if config.safe is True:
        builder.with_safe()
    elif config.safe is False:
        builder.with_insecure()
    builder.with_time_layout(config.time_layout)
    builder.with_separator(config.separator)
    builder.with_options(
        HandlerOptions(level=config.min_level, add_source=config.add_source)
    )
    return builder.build()
