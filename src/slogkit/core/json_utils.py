"""JSON marshaling for opaque attribute values.

The standard json module escapes differently (HTML-unsafe characters are
left alone here, U+2028/U+2029 are escaped) and formats floats with repr(),
so values of kind ANY are marshaled by a small recursive encoder that shares
the string and float formatting of the rest of the JSON encoding.

Supported values:
    - objects with a ``marshal_json()`` method (result used verbatim)
    - None, bool, int, float, str
    - mappings with str (or int) keys, lists and tuples
    - bytes-like objects, as base64 strings
    - datetime (RFC 3339), timedelta (integer nanoseconds), Enum (its value)
    - dataclasses, pydantic models and exceptions (their message)
"""

from __future__ import annotations

import base64
import dataclasses
import enum
from collections.abc import Mapping
from datetime import datetime, timedelta
from typing import Any

from pydantic import BaseModel

from slogkit.core.datetime_utils import format_rfc3339_nano
from slogkit.core.escape import escape_json_string
from slogkit.core.formatting import format_json_float

# Nesting limit; deeper (or cyclic) structures are reported as errors.
MAX_DEPTH = 100


def json_string(s: str) -> str:
    """Return s as a quoted JSON string literal."""
    return '"' + escape_json_string(s) + '"'


def timedelta_nanos(td: timedelta) -> int:
    """Convert a timedelta to integer nanoseconds."""
    return (td // timedelta(microseconds=1)) * 1000


def marshal_json(obj: Any) -> str:
    """Marshal obj to JSON text.

    Args:
        obj: Value to marshal.

    Returns:
        Compact JSON (no insignificant whitespace).

    Raises:
        TypeError: If obj (or something inside it) has no JSON form.
        ValueError: For NaN/infinite floats or structures nested deeper than
            MAX_DEPTH.
    """
    out: list[str] = []
    _encode(obj, out, 0)
    return "".join(out)


def _encode(obj: Any, out: list[str], depth: int) -> None:
    if depth > MAX_DEPTH:
        raise ValueError(f"json: exceeded max depth of {MAX_DEPTH}")

    marshal = getattr(obj, "marshal_json", None)
    if callable(marshal) and not isinstance(obj, type):
        result = marshal()
        if isinstance(result, bytes | bytearray):
            result = bytes(result).decode("utf-8", "replace")
        out.append(result)
    elif obj is None:
        out.append("null")
    elif isinstance(obj, bool):
        out.append("true" if obj else "false")
    elif isinstance(obj, enum.Enum):
        _encode(obj.value, out, depth + 1)
    elif isinstance(obj, int):
        out.append(str(int(obj)))
    elif isinstance(obj, float):
        out.append(format_json_float(obj))
    elif isinstance(obj, str):
        out.append(json_string(obj))
    elif isinstance(obj, bytes | bytearray | memoryview):
        out.append('"' + base64.b64encode(bytes(obj)).decode("ascii") + '"')
    elif isinstance(obj, datetime):
        out.append(json_string(format_rfc3339_nano(obj)))
    elif isinstance(obj, timedelta):
        out.append(str(timedelta_nanos(obj)))
    elif isinstance(obj, BaseException):
        out.append(json_string(str(obj)))
    elif isinstance(obj, BaseModel):
        _encode(obj.model_dump(mode="json"), out, depth + 1)
    elif dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        fields = {f.name: getattr(obj, f.name) for f in dataclasses.fields(obj)}
        _encode_mapping(fields, out, depth)
    elif isinstance(obj, Mapping):
        _encode_mapping(obj, out, depth)
    elif isinstance(obj, list | tuple):
        out.append("[")
        for i, item in enumerate(obj):
            if i:
                out.append(",")
            _encode(item, out, depth + 1)
        out.append("]")
    else:
        raise TypeError(f"json: unsupported type: {type(obj).__name__}")


def _encode_mapping(obj: Mapping, out: list[str], depth: int) -> None:
    out.append("{")
    first = True
    for key, value in obj.items():
        if isinstance(key, bool) or not isinstance(key, str | int):
            raise TypeError(
                f"json: unsupported type: mapping with {type(key).__name__} keys"
            )
        if not first:
            out.append(",")
        first = False
        out.append(json_string(str(key)))
        out.append(":")
        _encode(value, out, depth + 1)
    out.append("}")
