"""Fluent construction of handlers.

Usage:
    handler = (
        HandlerBuilder()
        .with_pretty()
        .with_time_layout("%H:%M:%S")
        .with_options(HandlerOptions(level=DEBUG))
        .build()
    )
"""

from __future__ import annotations

import sys

from slogkit.colors import DEFAULT_COLOR_MAP, EMPTY_COLOR_MAP, LevelColorMap
from slogkit.handler import (
    DEFAULT_DATETIME_LAYOUT,
    DEFAULT_PRETTY_DATETIME_LAYOUT,
    JSON_SEP,
    PRETTY_SEP,
    STRUCT_SEP,
    Handler,
    HandlerOptions,
    Mode,
    Writer,
)


class HandlerBuilder:
    """Collects handler settings and builds a Handler.

    Defaults: text mode, safe quoting, no colors, separator STRUCT_SEP and
    standard output. Setters ignore None and empty arguments.
    """

    def __init__(self) -> None:
        self._mode = Mode.TEXT
        self._safe = True
        self._safe_explicit = False
        self._colors: LevelColorMap = EMPTY_COLOR_MAP
        self._time_layout = DEFAULT_DATETIME_LAYOUT
        self._separator = STRUCT_SEP
        self._options = HandlerOptions()
        self._writer: Writer | None = None

    def with_pretty(self) -> HandlerBuilder:
        """Switch to pretty mode with the default colors, layout and separator."""
        self._mode = Mode.PRETTY
        self._colors = DEFAULT_COLOR_MAP
        self._time_layout = DEFAULT_PRETTY_DATETIME_LAYOUT
        self._separator = PRETTY_SEP
        return self

    def with_color(self, colors: LevelColorMap | None) -> HandlerBuilder:
        if colors is not None:
            self._colors = colors
        return self

    def with_insecure(self) -> HandlerBuilder:
        """Write text values unquoted."""
        self._safe = False
        self._safe_explicit = False
        return self

    def with_safe(self) -> HandlerBuilder:
        """Quote text values that need it, even in pretty mode."""
        self._safe = True
        self._safe_explicit = True
        return self

    def with_time_layout(self, layout: str | None) -> HandlerBuilder:
        if layout:
            self._time_layout = layout
        return self

    def with_separator(self, separator: str | None) -> HandlerBuilder:
        if separator:
            self._separator = separator
        return self

    def with_options(self, options: HandlerOptions | None) -> HandlerBuilder:
        if options is not None:
            self._options = options
        return self

    def with_writer(self, writer: Writer | None) -> HandlerBuilder:
        if writer is not None:
            self._writer = writer
        return self

    def with_json(self) -> HandlerBuilder:
        """Switch to JSON. Overrides pretty mode, colors and the separator."""
        self._mode = Mode.JSON
        return self

    def build(self) -> Handler:
        """Build the handler.

        JSON mode forces safe escaping, JSON_SEP and no colors. Pretty mode
        is unquoted unless with_safe() was called.
        """
        mode = self._mode
        safe = self._safe
        colors = self._colors
        separator = self._separator
        if mode is Mode.JSON:
            safe = True
            separator = JSON_SEP
            colors = EMPTY_COLOR_MAP
        elif mode is Mode.PRETTY and not self._safe_explicit:
            safe = False
        writer = self._writer if self._writer is not None else sys.stdout.buffer
        return Handler(
            writer,
            mode=mode,
            safe=safe,
            colors=colors,
            time_layout=self._time_layout,
            separator=separator,
            options=self._options,
        )
