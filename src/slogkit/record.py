"""Log records and source locations."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from slogkit.level import Level
from slogkit.value import Attr, Value, args_to_attrs

# Keys of the built-in fields.
TIME_KEY = "time"
LEVEL_KEY = "level"
SOURCE_KEY = "source"
MESSAGE_KEY = "msg"


@dataclass(frozen=True)
class Source:
    """Location of the code that produced a record.

    Attributes:
        function: Qualified function name.
        file: Absolute path of the source file.
        line: Line number, 0 when unknown.
    """

    function: str = ""
    file: str = ""
    line: int = 0

    def group_value(self) -> Value:
        """Return the non-empty fields as a group value."""
        attrs = []
        if self.function:
            attrs.append(Attr("function", Value.string(self.function)))
        if self.file:
            attrs.append(Attr("file", Value.string(self.file)))
        if self.line:
            attrs.append(Attr("line", Value.int64(self.line)))
        return Value.group(*attrs)


@dataclass(frozen=True)
class Record:
    """A single log event.

    Attributes:
        time: When the event happened; None omits the time field.
        level: Severity.
        message: Log message.
        attrs: Attributes, in order. Empty groups are dropped.
        source: Where the event was logged, if known.
    """

    time: datetime | None
    level: int
    message: str
    attrs: tuple[Attr, ...] = field(default=())
    source: Source | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "level", Level(self.level))
        object.__setattr__(
            self,
            "attrs",
            tuple(a for a in self.attrs if not a.value.is_empty_group()),
        )

    def add_attrs(self, *args: Any) -> Record:
        """Return a copy of this record with more attributes.

        Args:
            *args: Attrs or alternating key/value arguments.
        """
        return dataclasses.replace(self, attrs=self.attrs + tuple(args_to_attrs(args)))

    @property
    def num_attrs(self) -> int:
        return len(self.attrs)
