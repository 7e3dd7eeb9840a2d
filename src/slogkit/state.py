"""Per-call encoding state.

A HandleState lives for one Handler.emit() or Handler.with_attrs() call. It
owns the output buffer, the separator to write before the next key, the
color of the value being written (pretty mode), the dotted key prefix of the
open groups (text modes) and, when a replace_attr hook is configured, the
list of open group names passed to the hook.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime
from typing import TYPE_CHECKING

from slogkit.colors import NO_COLOR, colorize
from slogkit.core.buffer import BUFFER_POOL, GROUP_LIST_POOL, encode_text
from slogkit.core.datetime_utils import (
    format_layout,
    format_rfc3339_nano,
    write_time_rfc3339_millis,
)
from slogkit.core.escape import escape_json_string, needs_quoting, quote
from slogkit.core.formatting import format_duration, format_float, format_json_float
from slogkit.core.json_utils import marshal_json
from slogkit.errors import KindError
from slogkit.record import Record, Source
from slogkit.value import Attr, JSONMarshaler, Kind, TextMarshaler, Value

if TYPE_CHECKING:
    from slogkit.handler import Handler

# Joins group names and keys in text output.
KEY_COMPONENT_SEP = "."

_BYTES_TYPES = (bytes, bytearray, memoryview)


class HandleState:
    """Formatting state for a single record or bind operation.

    Args:
        handler: Handler whose settings drive the encoding.
        buf: Output buffer to append to.
        free_buf: Whether free() returns buf to the buffer pool.
        sep: Separator written before the first key.
    """

    def __init__(
        self, handler: Handler, buf: bytearray, *, free_buf: bool, sep: bytes
    ) -> None:
        self.handler = handler
        self.buf = buf
        self.free_buf = free_buf
        self.sep = sep
        self.color: str | None = NO_COLOR
        self.prefix = ""
        self.groups: list[str] | None = None

        self._json = handler.is_json
        self._pretty = handler.is_pretty
        self._safe = handler.safe
        self._attr_sep = handler.attr_sep
        self._replace_attr = handler.options.replace_attr
        if self._replace_attr is not None:
            self.groups = GROUP_LIST_POOL.acquire()
            self.groups.extend(handler.groups[: handler.n_open_groups])

    def free(self) -> None:
        """Return pooled objects. The state must not be used afterwards."""
        if self.free_buf:
            BUFFER_POOL.release(self.buf)
        if self.groups is not None:
            GROUP_LIST_POOL.release(self.groups)
            self.groups = None

    # Groups

    def open_groups(self) -> None:
        """Open the handler groups that are not yet in its pre-formatted attrs."""
        for name in self.handler.groups[self.handler.n_open_groups :]:
            self.open_group(name)

    def open_group(self, name: str) -> None:
        if self._json:
            self.append_key(name)
            self.buf += b"{"
            self.sep = b""
        else:
            self.prefix += name + KEY_COMPONENT_SEP
        if self.groups is not None:
            self.groups.append(name)

    def close_group(self, name: str) -> None:
        if self._json:
            self.buf += b"}"
        else:
            self.prefix = self.prefix[: len(self.prefix) - len(name) - 1]
        self.sep = self._attr_sep
        if self.groups is not None:
            self.groups.pop()

    # Attributes

    def append_attrs(self, attrs: Iterable[Attr]) -> bool:
        """Append attrs, reporting whether anything was written."""
        non_empty = False
        for a in attrs:
            if self.append_attr(a):
                non_empty = True
        return non_empty

    def append_attr(self, a: Attr) -> bool:
        """Append one attr, applying replace_attr and eliding empty output.

        Args:
            a: Attribute to append.

        Returns:
            False if nothing was written: the attr was empty after
            replacement, or it was a group whose members all elided.
        """
        rep = self._replace_attr
        if rep is not None and a.value.kind is not Kind.GROUP:
            # Resolve before calling the hook, so it sees the final value.
            a = Attr(a.key, a.value.resolve())
            groups = self.groups if self.groups is not None else []
            a = rep(groups, a)
        value = a.value.resolve()
        if a.key == "" and value.kind is Kind.ANY and value.as_any() is None:
            return False

        if value.kind is Kind.ANY and isinstance(value.as_any(), Source):
            src = value.as_any()
            if self._json:
                value = src.group_value()
            else:
                value = Value.string(f"{src.file}:{src.line}")

        if value.kind is Kind.GROUP:
            attrs = value.as_group()
            if not attrs:
                return False
            # Members may all elide; remember where the group started so it
            # can be removed.
            pos = len(self.buf)
            sep = self.sep
            if a.key:
                self.open_group(a.key)
            wrote = self.append_attrs(attrs)
            if a.key:
                self.close_group(a.key)
            if not wrote:
                del self.buf[pos:]
                self.sep = sep
            return wrote

        self.append_key(a.key)
        self.append_value(value)
        return True

    def append_key(self, key: str) -> None:
        self.buf += self.sep
        # Keys are never colored.
        color = self.color
        self.color = NO_COLOR
        if self.prefix:
            self.append_string(self.prefix + key)
        else:
            self.append_string(key)
        self.color = color
        self.buf += b":" if self._json else b"="
        self.sep = self._attr_sep

    def append_string(self, s: str) -> None:
        if self._json:
            self.buf += b'"'
            self.buf += encode_text(escape_json_string(s))
            self.buf += b'"'
        elif self._safe and needs_quoting(s):
            self.buf += encode_text(quote(s))
        else:
            if self.color is not NO_COLOR:
                s = colorize(s, self.color)
            self.buf += encode_text(s)

    def append_error(self, err: BaseException) -> None:
        self.append_string(f"!ERROR:{err}")

    def append_value(self, v: Value) -> None:
        """Append a resolved, non-group value.

        Failures raised while formatting the payload (by its own methods or
        by the JSON marshaler) are written inline as ``!ERROR:<message>``.

        Raises:
            KindError: If the value kind cannot be rendered in this mode.
        """
        try:
            if self._json:
                self._append_json_value(v)
            else:
                self._append_text_value(v)
        except KindError:
            raise
        except Exception as e:
            self.append_error(e)

    def _append_text_value(self, v: Value) -> None:
        kind = v.kind
        if kind is Kind.STRING:
            self.append_string(v.as_str())
        elif kind is Kind.TIME:
            self.append_time(v.as_time())
        elif kind is Kind.ANY:
            obj = v.as_any()
            if isinstance(obj, TextMarshaler) and not isinstance(obj, type):
                data = obj.marshal_text()
                if isinstance(data, _BYTES_TYPES):
                    data = bytes(data).decode("utf-8", "surrogateescape")
                self.append_string(data)
            elif isinstance(obj, _BYTES_TYPES):
                raw = bytes(obj)
                if not self._safe and self._pretty:
                    self.buf += raw
                else:
                    self.buf += encode_text(quote(raw.decode("utf-8", "surrogateescape")))
            else:
                self.append_string(str(obj))
        elif kind is Kind.INT64 or kind is Kind.UINT64:
            self.buf += b"%d" % v.as_any()
        elif kind is Kind.FLOAT64:
            self.buf += format_float(v.as_float()).encode("ascii")
        elif kind is Kind.BOOL:
            self.buf += b"true" if v.as_bool() else b"false"
        elif kind is Kind.DURATION:
            self.buf += format_duration(v.as_duration()).encode("utf-8")
        elif kind is Kind.GROUP or kind is Kind.LOG_VALUER:
            self.buf += encode_text(str(v))
        else:
            raise KindError(f"bad kind: {kind}")

    def _append_json_value(self, v: Value) -> None:
        kind = v.kind
        if kind is Kind.STRING:
            self.append_string(v.as_str())
        elif kind is Kind.INT64 or kind is Kind.UINT64:
            self.buf += b"%d" % v.as_any()
        elif kind is Kind.FLOAT64:
            self.buf += format_json_float(v.as_float()).encode("ascii")
        elif kind is Kind.BOOL:
            self.buf += b"true" if v.as_bool() else b"false"
        elif kind is Kind.DURATION:
            self.buf += b"%d" % v.as_duration()
        elif kind is Kind.TIME:
            self.append_time(v.as_time())
        elif kind is Kind.ANY:
            obj = v.as_any()
            if isinstance(obj, BaseException) and not isinstance(obj, JSONMarshaler):
                self.append_string(str(obj))
            else:
                self.buf += encode_text(marshal_json(obj))
        else:
            raise KindError(f"bad kind: {kind}")

    def append_time(self, t: datetime) -> None:
        if self._json:
            self.buf += b'"'
            self.buf += format_rfc3339_nano(t).encode("ascii")
            self.buf += b'"'
        elif self._pretty:
            self.buf += encode_text(format_layout(t, self.handler.time_layout))
        else:
            write_time_rfc3339_millis(self.buf, t)

    def append_non_builtins(self, record: Record) -> None:
        """Append the pre-formatted attrs, the record attrs and closing braces."""
        h = self.handler
        pfa = h.preformatted_attrs
        if pfa:
            self.buf += self.sep
            self.buf += pfa
            self.sep = self._attr_sep
            if self._json and pfa.endswith(b"{"):
                self.sep = b""
        # Handler groups are only opened for records that have attrs.
        n_open_groups = h.n_open_groups
        if record.attrs:
            self.prefix += h.group_prefix
            pos = len(self.buf)
            sep = self.sep
            self.open_groups()
            n_open_groups = len(h.groups)
            if not self.append_attrs(record.attrs):
                del self.buf[pos:]
                self.sep = sep
                n_open_groups = h.n_open_groups
        if self._json:
            self.buf += b"}" * n_open_groups
            self.buf += b"}"
