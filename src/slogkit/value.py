"""Attribute values.

A Value is a tagged union: the kind tells the encoder how to render the
payload without inspecting it. Scalar kinds (strings, integers, floats,
booleans, durations, times) have fixed renderings; GROUP holds nested
attributes; ANY holds an arbitrary object that is rendered through its
capabilities (``marshal_text()``, ``marshal_json()``) or str(); LOG_VALUER
holds an object whose ``log_value()`` produces the value to log, resolved
lazily at encoding time.
"""

from __future__ import annotations

import enum
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Protocol, runtime_checkable

from slogkit.core.formatting import format_duration, format_float
from slogkit.core.json_utils import timedelta_nanos
from slogkit.errors import KindError

# Key used for arguments that could not be paired into key/value attrs.
BAD_KEY = "!BADKEY"

# Upper bound on chained log_value() calls before resolution gives up.
MAX_LOG_VALUE_CALLS = 100

_INT64_MIN = -(1 << 63)
_INT64_MAX = (1 << 63) - 1
_UINT64_MAX = (1 << 64) - 1


@runtime_checkable
class LogValuer(Protocol):
    """An object that supplies its own value for logging."""

    def log_value(self) -> Any:
        """Return the value to log in place of this object."""
        ...


@runtime_checkable
class TextMarshaler(Protocol):
    """An object with a custom text rendering."""

    def marshal_text(self) -> str | bytes:
        """Return the text form of this object."""
        ...


@runtime_checkable
class JSONMarshaler(Protocol):
    """An object with a custom JSON rendering."""

    def marshal_json(self) -> str | bytes:
        """Return this object as JSON text, used verbatim."""
        ...


class Kind(enum.Enum):
    """Kind of a Value."""

    ANY = "Any"
    BOOL = "Bool"
    DURATION = "Duration"
    FLOAT64 = "Float64"
    INT64 = "Int64"
    STRING = "String"
    TIME = "Time"
    UINT64 = "Uint64"
    GROUP = "Group"
    LOG_VALUER = "LogValuer"

    def __str__(self) -> str:
        return self.value


class Value:
    """A kind-tagged attribute value.

    Build values with the classmethod constructors or with Value.of(), which
    infers the kind from a Python object. Values are not modified after
    construction.
    """

    def __init__(self, kind: Kind, payload: Any) -> None:
        self._kind = kind
        self._payload = payload

    # Constructors

    @classmethod
    def string(cls, s: str) -> Value:
        return cls(Kind.STRING, s)

    @classmethod
    def int64(cls, n: int) -> Value:
        return cls(Kind.INT64, int(n))

    @classmethod
    def uint64(cls, n: int) -> Value:
        return cls(Kind.UINT64, int(n))

    @classmethod
    def float64(cls, f: float) -> Value:
        return cls(Kind.FLOAT64, float(f))

    @classmethod
    def boolean(cls, b: bool) -> Value:
        return cls(Kind.BOOL, bool(b))

    @classmethod
    def duration(cls, d: int | timedelta) -> Value:
        """Create a duration value from nanoseconds or a timedelta."""
        if isinstance(d, timedelta):
            d = timedelta_nanos(d)
        return cls(Kind.DURATION, int(d))

    @classmethod
    def time(cls, t: datetime) -> Value:
        return cls(Kind.TIME, t)

    @classmethod
    def group(cls, *attrs: Attr) -> Value:
        """Create a group value; members that are empty groups are dropped."""
        return cls(Kind.GROUP, tuple(a for a in attrs if not a.value.is_empty_group()))

    @classmethod
    def any(cls, obj: Any) -> Value:
        """Wrap obj as an opaque value, without kind inference."""
        return cls(Kind.ANY, obj)

    @classmethod
    def resolvable(cls, obj: LogValuer) -> Value:
        return cls(Kind.LOG_VALUER, obj)

    @classmethod
    def of(cls, obj: Any) -> Value:
        """Infer a Value from a Python object.

        Exact str, int and float instances map to their scalar kinds;
        subclasses of them (Level, IntEnum, ...) are kept as ANY so that
        their own rendering is used. Integers outside the 64-bit ranges are
        ANY as well.

        Args:
            obj: Any object.

        Returns:
            obj itself if it already is a Value, otherwise a new Value.
        """
        if isinstance(obj, Value):
            return obj
        obj_type = type(obj)
        if obj_type is str:
            return cls(Kind.STRING, obj)
        if obj_type is bool:
            return cls(Kind.BOOL, obj)
        if obj_type is int:
            if _INT64_MIN <= obj <= _INT64_MAX:
                return cls(Kind.INT64, obj)
            if 0 <= obj <= _UINT64_MAX:
                return cls(Kind.UINT64, obj)
            return cls(Kind.ANY, obj)
        if obj_type is float:
            return cls(Kind.FLOAT64, obj)
        if isinstance(obj, timedelta):
            return cls.duration(obj)
        if isinstance(obj, datetime):
            return cls(Kind.TIME, obj)
        if isinstance(obj, LogValuer) and not isinstance(obj, type):
            return cls(Kind.LOG_VALUER, obj)
        if isinstance(obj, list | tuple) and obj and all(isinstance(a, Attr) for a in obj):
            return cls.group(*obj)
        return cls(Kind.ANY, obj)

    # Accessors

    @property
    def kind(self) -> Kind:
        return self._kind

    def _expect(self, kind: Kind) -> Any:
        if self._kind is not kind:
            raise KindError(f"Value kind is {self._kind}, not {kind}")
        return self._payload

    def as_any(self) -> Any:
        """Return the payload whatever the kind."""
        return self._payload

    def as_str(self) -> str:
        return self._expect(Kind.STRING)

    def as_int(self) -> int:
        return self._expect(Kind.INT64)

    def as_uint(self) -> int:
        return self._expect(Kind.UINT64)

    def as_float(self) -> float:
        return self._expect(Kind.FLOAT64)

    def as_bool(self) -> bool:
        return self._expect(Kind.BOOL)

    def as_duration(self) -> int:
        """Return the duration in nanoseconds."""
        return self._expect(Kind.DURATION)

    def as_time(self) -> datetime:
        return self._expect(Kind.TIME)

    def as_group(self) -> tuple[Attr, ...]:
        return self._expect(Kind.GROUP)

    def as_log_valuer(self) -> LogValuer:
        return self._expect(Kind.LOG_VALUER)

    # Behavior

    def is_empty_group(self) -> bool:
        return self._kind is Kind.GROUP and not self._payload

    def resolve(self) -> Value:
        """Resolve a LOG_VALUER value to the value it produces.

        log_value() is called repeatedly until the result is no longer
        resolvable. An exception raised by log_value(), or a chain longer
        than MAX_LOG_VALUE_CALLS, resolves to an ANY value holding the
        exception. Other kinds are returned unchanged.
        """
        v = self
        for _ in range(MAX_LOG_VALUE_CALLS):
            if v._kind is not Kind.LOG_VALUER:
                return v
            orig = v._payload
            try:
                v = Value.of(orig.log_value())
            except Exception as e:
                return Value.any(e)
        if v._kind is not Kind.LOG_VALUER:
            return v
        err = RuntimeError(
            "LogValue called too many times on Value of type "
            + type(v._payload).__name__
        )
        return Value.any(err)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Value):
            return NotImplemented
        return self._kind is other._kind and self._payload == other._payload

    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        kind = self._kind
        if kind is Kind.STRING:
            return self._payload
        if kind is Kind.BOOL:
            return "true" if self._payload else "false"
        if kind is Kind.FLOAT64:
            return format_float(self._payload)
        if kind is Kind.DURATION:
            return format_duration(self._payload)
        if kind is Kind.GROUP:
            return "[" + " ".join(str(a) for a in self._payload) + "]"
        return str(self._payload)

    def __repr__(self) -> str:
        return f"Value({self._kind.name}, {self._payload!r})"


@dataclass(frozen=True, eq=True)
class Attr:
    """A key/value pair."""

    key: str
    value: Value

    @classmethod
    def of(cls, key: str, obj: Any) -> Attr:
        """Create an attr, inferring the value kind from obj."""
        return cls(key, Value.of(obj))

    def is_empty(self) -> bool:
        """Report whether this is the empty attr, which encoders skip."""
        return (
            self.key == ""
            and self.value.kind is Kind.ANY
            and self.value.as_any() is None
        )

    def __str__(self) -> str:
        return f"{self.key}={self.value}"


EMPTY_ATTR = Attr("", Value.any(None))


def args_to_attrs(args: Iterable[Any]) -> list[Attr]:
    """Convert loosely-typed logging arguments into attrs.

    An Attr is taken as is; a str followed by another argument forms a
    key/value pair; a trailing str, or any other lone argument, becomes an
    attr with key BAD_KEY.

    Args:
        args: Logging call arguments.

    Returns:
        The attrs, in argument order.
    """
    items = list(args)
    attrs: list[Attr] = []
    i = 0
    while i < len(items):
        arg = items[i]
        if isinstance(arg, Attr):
            attrs.append(arg)
            i += 1
        elif isinstance(arg, str):
            if i + 1 < len(items):
                attrs.append(Attr.of(arg, items[i + 1]))
                i += 2
            else:
                attrs.append(Attr(BAD_KEY, Value.string(arg)))
                i += 1
        else:
            attrs.append(Attr.of(BAD_KEY, arg))
            i += 1
    return attrs


def group(key: str, *args: Any) -> Attr:
    """Create a group attr from Attrs or alternating key/value arguments.

    Example:
        >>> str(group("request", "method", "GET", "status", 200))
        'request=[method=GET status=200]'
    """
    return Attr(key, Value.group(*args_to_attrs(args)))
