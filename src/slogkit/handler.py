"""The record handler.

A Handler turns records into bytes in one of three encodings and writes them
to a sink:

- ``Mode.TEXT``: ``key=value`` pairs, values quoted when ambiguous.
- ``Mode.PRETTY``: the same shape with a custom time layout and a colored
  level, strings written unquoted unless the handler is safe.
- ``Mode.JSON``: one JSON object per line.

Handlers are immutable. with_attrs() and with_group() return new handlers
that share the sink and its lock; attributes bound with with_attrs() are
serialized once, at bind time, and copied into every subsequent record.
"""

from __future__ import annotations

import copy
import enum
import threading
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any, Protocol

from slogkit.colors import (
    DEFAULT_COLOR_MAP,
    EMPTY_COLOR_MAP,
    NO_COLOR,
    LevelColorMap,
    get_color,
)
from slogkit.core.buffer import BUFFER_POOL
from slogkit.level import FX, Level, level_name
from slogkit.record import LEVEL_KEY, MESSAGE_KEY, SOURCE_KEY, TIME_KEY, Record, Source
from slogkit.state import HandleState
from slogkit.value import Attr, Value

# Field separators.
PRETTY_SEP = " "
STRUCT_SEP = " "
JSON_SEP = ","

# strftime() layouts for the time field in pretty mode.
DEFAULT_PRETTY_DATETIME_LAYOUT = "%Y-%m-%d %H:%M:%S"
DEFAULT_DATETIME_LAYOUT = "%Y-%m-%dT%H:%M:%S%z"

ReplaceAttr = Callable[[list[str], Attr], Attr]


class Mode(enum.Enum):
    """Output encoding."""

    JSON = "json"
    TEXT = "text"
    PRETTY = "pretty"


class Writer(Protocol):
    """Output sink: anything with a write(bytes) method."""

    def write(self, data: bytes, /) -> Any: ...


class Leveler(Protocol):
    """A source of a minimum level, such as LevelVar."""

    def level(self) -> int: ...


@dataclass(frozen=True)
class HandlerOptions:
    """Options shared by all encodings.

    Attributes:
        level: Minimum level to log, as an int or a Leveler. None means FX,
            the lowest named level.
        add_source: Add a ``source`` field with the caller's location.
        replace_attr: Called for every non-group attr (built-in fields
            included) with the names of the open groups and the attr; the
            returned attr is logged instead. Returning an attr with an empty
            key and a None value drops it. The groups list must not be
            retained.
    """

    level: int | Leveler | None = None
    add_source: bool = False
    replace_attr: ReplaceAttr | None = None

    def min_level(self) -> int:
        if self.level is None:
            return FX
        if isinstance(self.level, int):
            return self.level
        return self.level.level()


_DEFAULT_OPTIONS = HandlerOptions()

_MODE_SEPARATORS = {
    Mode.JSON: JSON_SEP,
    Mode.TEXT: STRUCT_SEP,
    Mode.PRETTY: PRETTY_SEP,
}


class Handler:
    """Encodes records and writes them to a shared sink.

    Prefer the json(), text() and pretty() constructors or HandlerBuilder.

    Args:
        writer: Sink for encoded records; one write() call per record.
        mode: Output encoding.
        safe: Quote text values that need it. Defaults to False for pretty
            mode and True otherwise; JSON is always escaped.
        colors: Level color table for pretty mode. Defaults to
            DEFAULT_COLOR_MAP in pretty mode.
        time_layout: strftime() layout for the time field in pretty mode.
        separator: Written between fields in the text modes.
        options: Level, source and replace_attr settings.
    """

    def __init__(
        self,
        writer: Writer,
        *,
        mode: Mode = Mode.PRETTY,
        safe: bool | None = None,
        colors: LevelColorMap | None = None,
        time_layout: str | None = None,
        separator: str | None = None,
        options: HandlerOptions | None = None,
    ) -> None:
        if not isinstance(mode, Mode):
            raise ValueError(f"Invalid handler mode: {mode!r}")
        if safe is None:
            safe = mode is not Mode.PRETTY
        if colors is None:
            colors = DEFAULT_COLOR_MAP if mode is Mode.PRETTY else EMPTY_COLOR_MAP
        if mode is Mode.JSON:
            separator = JSON_SEP
        elif not separator:
            separator = _MODE_SEPARATORS[mode]

        self._writer = writer
        self._mode = mode
        self._safe = safe
        self._colors = colors
        self._time_layout = time_layout or DEFAULT_PRETTY_DATETIME_LAYOUT
        self._separator = separator
        self._attr_sep = separator.encode("utf-8")
        self._options = options or _DEFAULT_OPTIONS
        self._preformatted_attrs = b""
        self._group_prefix = ""
        self._groups: tuple[str, ...] = ()
        self._n_open_groups = 0
        self._lock = threading.Lock()

    @classmethod
    def json(cls, writer: Writer, options: HandlerOptions | None = None) -> Handler:
        """Create a JSON handler."""
        return cls(writer, mode=Mode.JSON, safe=True, options=options)

    @classmethod
    def text(cls, writer: Writer, options: HandlerOptions | None = None) -> Handler:
        """Create a ``key=value`` text handler."""
        return cls(writer, mode=Mode.TEXT, safe=True, options=options)

    @classmethod
    def pretty(cls, writer: Writer, options: HandlerOptions | None = None) -> Handler:
        """Create a colored, unquoted text handler."""
        return cls(
            writer,
            mode=Mode.PRETTY,
            safe=False,
            colors=DEFAULT_COLOR_MAP,
            time_layout=DEFAULT_PRETTY_DATETIME_LAYOUT,
            separator=PRETTY_SEP,
            options=options,
        )

    # Read-only views

    @property
    def mode(self) -> Mode:
        return self._mode

    @property
    def is_json(self) -> bool:
        return self._mode is Mode.JSON

    @property
    def is_pretty(self) -> bool:
        return self._mode is Mode.PRETTY

    @property
    def safe(self) -> bool:
        return self._safe

    @property
    def colors(self) -> LevelColorMap:
        return self._colors

    @property
    def time_layout(self) -> str:
        return self._time_layout

    @property
    def separator(self) -> str:
        return self._separator

    @property
    def attr_sep(self) -> bytes:
        """Encoded separator written between fields."""
        return self._attr_sep

    @property
    def options(self) -> HandlerOptions:
        return self._options

    @property
    def writer(self) -> Writer:
        return self._writer

    @property
    def preformatted_attrs(self) -> bytes:
        return self._preformatted_attrs

    @property
    def group_prefix(self) -> str:
        return self._group_prefix

    @property
    def groups(self) -> tuple[str, ...]:
        return self._groups

    @property
    def n_open_groups(self) -> int:
        return self._n_open_groups

    # Handler operations

    def enabled(self, level: int) -> bool:
        """Report whether records at level would be logged."""
        return level >= self._options.min_level()

    def emit(self, record: Record) -> None:
        """Encode record and write it as a single line.

        Encoding happens outside the lock; only the write is serialized.

        Raises:
            Exception: Whatever the writer raises.
        """
        state = HandleState(self, BUFFER_POOL.acquire(), free_buf=True, sep=b"")
        try:
            if self.is_json:
                state.buf += b"{"
            # Built-in fields are not in any group.
            state_groups = state.groups
            state.groups = None
            rep = self._options.replace_attr

            if record.time is not None:
                if rep is None:
                    state.append_key(TIME_KEY)
                    state.append_time(record.time)
                else:
                    state.append_attr(Attr(TIME_KEY, Value.time(record.time)))

            if self.is_pretty:
                state.color = get_color(self._colors, record.level)
            if rep is None:
                state.append_key(LEVEL_KEY)
                state.append_string(level_name(record.level))
            else:
                state.append_attr(Attr(LEVEL_KEY, Value.any(Level(record.level))))
            state.color = NO_COLOR

            if self._options.add_source:
                source = record.source if record.source is not None else Source()
                state.append_attr(Attr(SOURCE_KEY, Value.any(source)))

            if rep is None:
                state.append_key(MESSAGE_KEY)
                state.append_string(record.message)
            else:
                state.append_attr(Attr(MESSAGE_KEY, Value.string(record.message)))

            state.groups = state_groups
            state.append_non_builtins(record)
            state.buf += b"\n"
            data = bytes(state.buf)
        finally:
            state.free()

        with self._lock:
            self._writer.write(data)

    def with_attrs(self, attrs: Iterable[Attr]) -> Handler:
        """Return a handler that adds attrs to every record.

        The attrs are serialized now, inside any groups added with
        with_group(). Returns this handler when there is nothing to add.
        """
        attrs = list(attrs)
        if all(a.value.is_empty_group() for a in attrs):
            return self
        h2 = self._clone()
        buf = bytearray(self._preformatted_attrs)
        state = HandleState(h2, buf, free_buf=False, sep=b"")
        try:
            state.prefix = self._group_prefix
            if buf:
                state.sep = self._attr_sep
                if self.is_json and buf.endswith(b"{"):
                    state.sep = b""
            state.open_groups()
            if state.append_attrs(attrs):
                h2._preformatted_attrs = bytes(buf)
                h2._group_prefix = state.prefix
                h2._n_open_groups = len(h2._groups)
        finally:
            state.free()
        return h2

    def with_group(self, name: str) -> Handler:
        """Return a handler that nests subsequent attrs under name.

        An empty name returns this handler.
        """
        if not name:
            return self
        h2 = self._clone()
        h2._groups = self._groups + (name,)
        return h2

    def _clone(self) -> Handler:
        # Bound state is immutable (bytes, str, tuple), so a shallow copy
        # shares only the writer, options and lock with the original.
        return copy.copy(self)

    def __repr__(self) -> str:
        return (
            f"Handler(mode={self._mode.value}, safe={self._safe}, "
            f"groups={list(self._groups)})"
        )
