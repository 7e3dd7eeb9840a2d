"""Bridge from the standard logging module.

SlogkitHandler is a logging.Handler that converts each LogRecord into a
Record and emits it through a slogkit Handler, so existing
``logging.getLogger(__name__)`` call sites get text, pretty or JSON output.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import BinaryIO

from slogkit.handler import Handler
from slogkit.record import Record, Source
from slogkit.value import Attr, Value

# Offset of the stdlib INFO level; stdlib levels are 10 apart where slogkit
# levels are 4 apart.
_STDLIB_INFO = logging.INFO


def from_stdlib_level(levelno: int) -> int:
    """Map a logging module level to a slogkit level.

    DEBUG, INFO, WARNING, ERROR and CRITICAL map to -4, 0, 4, 8 and 12;
    levels in between keep their relative position.
    """
    return (levelno - _STDLIB_INFO) * 2 // 5


def to_stdlib_level(level: int) -> int:
    """Map a slogkit level to the lowest logging module level that reaches it."""
    return max(1, level * 5 // 2 + _STDLIB_INFO)


class SlogkitHandler(logging.Handler):
    """Emit standard library log records through a slogkit Handler.

    Each record becomes:
    - time: record.created, as a local aware datetime
    - level: the mapped level (see from_stdlib_level)
    - msg: record.getMessage()
    - attrs: ``logger`` (unless root), every ``extra`` field, ``exception``
      and ``stack`` when present
    - source: pathname, lineno and funcName
    """

    # Standard LogRecord attributes to exclude from attrs
    _STANDARD_ATTRS: frozenset[str] = frozenset(
        {
            "name",
            "msg",
            "args",
            "levelname",
            "levelno",
            "pathname",
            "filename",
            "module",
            "lineno",
            "funcName",
            "created",
            "msecs",
            "relativeCreated",
            "thread",
            "threadName",
            "processName",
            "process",
            "message",
            "exc_info",
            "exc_text",
            "stack_info",
            "taskName",
        }
    )

    def __init__(
        self,
        target: Handler,
        level: int = logging.NOTSET,
        *,
        stream: BinaryIO | None = None,
        close_stream: bool = False,
    ) -> None:
        """Initialize the handler.

        Args:
            target: slogkit handler that encodes and writes the records.
            level: Minimum logging module level.
            stream: The target's underlying stream, flushed after every
                record when given.
            close_stream: Close stream when this handler is closed.
        """
        super().__init__(level)
        self.target = target
        self.stream = stream
        self.close_stream = close_stream
        self._exc_formatter = logging.Formatter()

    def to_record(self, record: logging.LogRecord) -> Record:
        """Convert a LogRecord into a Record."""
        attrs: list[Attr] = []

        if record.name and record.name != "root":
            attrs.append(Attr("logger", Value.string(record.name)))

        for key, value in record.__dict__.items():
            if key not in self._STANDARD_ATTRS and not key.startswith("_"):
                attrs.append(Attr.of(key, value))

        if record.exc_info:
            if not record.exc_text:
                record.exc_text = self._exc_formatter.formatException(record.exc_info)
            attrs.append(Attr("exception", Value.string(record.exc_text)))
        if record.stack_info:
            attrs.append(Attr("stack", Value.string(record.stack_info)))

        return Record(
            time=datetime.fromtimestamp(record.created).astimezone(),
            level=from_stdlib_level(record.levelno),
            message=record.getMessage(),
            attrs=tuple(attrs),
            source=Source(
                function=record.funcName or "",
                file=record.pathname or "",
                line=record.lineno or 0,
            ),
        )

    def emit(self, record: logging.LogRecord) -> None:
        """Emit a record.

        Failures (including write errors from the target) are reported
        through handleError(), as with any logging handler.
        """
        try:
            if not self.target.enabled(from_stdlib_level(record.levelno)):
                return
            self.target.emit(self.to_record(record))
            if self.stream is not None:
                self.stream.flush()
        except RecursionError:
            raise
        except Exception:
            self.handleError(record)

    def close(self) -> None:
        self.acquire()
        try:
            if self.close_stream and self.stream is not None:
                stream = self.stream
                self.stream = None
                stream.close()
        finally:
            self.release()
            super().close()
