"""Logger front end.

A Logger turns logging calls into records and hands them to its Handler::

    log = Logger(Handler.text(sys.stdout.buffer))
    log.info("request handled", "method", "GET", status=200)
    # time=... level=INFO msg="request handled" method=GET status=200
"""

from __future__ import annotations

import sys
from datetime import datetime
from typing import Any

from slogkit.handler import Handler
from slogkit.level import DEBUG, ERROR, FX, INFO, WARN
from slogkit.record import Record, Source
from slogkit.value import Attr, args_to_attrs


def _attrs_from(args: tuple[Any, ...], kwargs: dict[str, Any]) -> list[Attr]:
    attrs = args_to_attrs(args)
    attrs.extend(Attr.of(key, value) for key, value in kwargs.items())
    return attrs


def _caller_source(depth: int) -> Source:
    try:
        frame = sys._getframe(depth + 1)
    except ValueError:
        return Source()
    code = frame.f_code
    module = frame.f_globals.get("__name__", "")
    function = f"{module}.{code.co_qualname}" if module else code.co_qualname
    return Source(function=function, file=code.co_filename, line=frame.f_lineno)


class Logger:
    """Creates records from logging calls.

    Positional arguments after the message follow the usual conventions: an
    Attr is used as is, a str followed by a value forms a pair, anything else
    is logged under the ``!BADKEY`` key. Keyword arguments become attrs, in
    order, after the positional ones.
    """

    def __init__(self, handler: Handler) -> None:
        self._handler = handler

    @property
    def handler(self) -> Handler:
        return self._handler

    def with_attrs(self, *args: Any, **kwargs: Any) -> Logger:
        """Return a logger whose records all carry the given attrs."""
        attrs = _attrs_from(args, kwargs)
        if not attrs:
            return self
        return Logger(self._handler.with_attrs(attrs))

    def with_group(self, name: str) -> Logger:
        """Return a logger that nests subsequent attrs under name."""
        if not name:
            return self
        return Logger(self._handler.with_group(name))

    def enabled(self, level: int) -> bool:
        return self._handler.enabled(level)

    def log(self, level: int, msg: str, *args: Any, **kwargs: Any) -> None:
        self._log(level, msg, args, kwargs)

    def fx(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._log(FX, msg, args, kwargs)

    def debug(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._log(DEBUG, msg, args, kwargs)

    def info(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._log(INFO, msg, args, kwargs)

    def warn(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._log(WARN, msg, args, kwargs)

    def error(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._log(ERROR, msg, args, kwargs)

    def _log(
        self, level: int, msg: str, args: tuple[Any, ...], kwargs: dict[str, Any]
    ) -> None:
        # Called directly by the public methods, so the caller is two
        # frames up.
        if not self._handler.enabled(level):
            return
        source = None
        if self._handler.options.add_source:
            source = _caller_source(2)
        record = Record(
            time=datetime.now().astimezone(),
            level=level,
            message=msg,
            attrs=tuple(_attrs_from(args, kwargs)),
            source=source,
        )
        self._handler.emit(record)
