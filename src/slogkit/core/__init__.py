"""Core encoding helpers.

Pure functions and small utilities used by the record encoder: string
escaping, number/duration/time formatting, JSON marshaling of opaque values,
and the scratch buffer pools.
"""

from slogkit.core.buffer import (
    BUFFER_POOL,
    GROUP_LIST_POOL,
    MAX_BUFFER_SIZE,
    FreeList,
    encode_text,
)
from slogkit.core.datetime_utils import (
    format_layout,
    format_rfc3339_nano,
    write_time_rfc3339_millis,
)
from slogkit.core.escape import escape_json_string, needs_quoting, quote
from slogkit.core.formatting import format_duration, format_float, format_json_float
from slogkit.core.json_utils import json_string, marshal_json, timedelta_nanos

__all__ = [
    # Buffers
    "BUFFER_POOL",
    "GROUP_LIST_POOL",
    "MAX_BUFFER_SIZE",
    "FreeList",
    "encode_text",
    # Time
    "format_layout",
    "format_rfc3339_nano",
    "write_time_rfc3339_millis",
    # Escaping
    "escape_json_string",
    "needs_quoting",
    "quote",
    # Numbers
    "format_duration",
    "format_float",
    "format_json_float",
    # JSON
    "json_string",
    "marshal_json",
    "timedelta_nanos",
]
