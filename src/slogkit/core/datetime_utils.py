"""Timestamp formatting for log output.

The text encoding uses RFC 3339 with millisecond precision, written digit by
digit into the output buffer rather than going through strftime(). The JSON
encoding uses RFC 3339 with as many fractional digits as needed. Naive
datetimes are treated as UTC.
"""

from __future__ import annotations

from datetime import datetime


def _offset_minutes(t: datetime) -> int:
    offset = t.utcoffset()
    if offset is None:
        return 0
    seconds = offset.days * 86400 + offset.seconds
    # Truncate toward zero, dropping any sub-minute part of the offset.
    if seconds < 0:
        return -(-seconds // 60)
    return seconds // 60


def _zone(t: datetime) -> bytes:
    minutes = _offset_minutes(t)
    if minutes == 0:
        return b"Z"
    sign = b"+"
    if minutes < 0:
        sign = b"-"
        minutes = -minutes
    return sign + b"%02d:%02d" % divmod(minutes, 60)


def write_time_rfc3339_millis(buf: bytearray, t: datetime) -> None:
    """Append t to buf as ``YYYY-MM-DDTHH:MM:SS.mmm`` plus zone.

    The zone is ``Z`` for a zero offset, ``+HH:MM``/``-HH:MM`` otherwise.

    Args:
        buf: Output buffer.
        t: Timestamp to write.
    """
    buf += b"%04d-%02d-%02dT%02d:%02d:%02d.%03d" % (
        t.year,
        t.month,
        t.day,
        t.hour,
        t.minute,
        t.second,
        t.microsecond // 1000,
    )
    buf += _zone(t)


def format_rfc3339_nano(t: datetime) -> str:
    """Format t as RFC 3339 with a trimmed fractional second.

    Trailing zeros of the fraction are dropped, and the fraction is omitted
    entirely when it is zero (``2024-01-15T10:30:00Z``).
    """
    text = "%04d-%02d-%02dT%02d:%02d:%02d" % (
        t.year,
        t.month,
        t.day,
        t.hour,
        t.minute,
        t.second,
    )
    if t.microsecond:
        text += ("." + "%06d" % t.microsecond).rstrip("0")
    return text + _zone(t).decode("ascii")


def format_layout(t: datetime, layout: str) -> str:
    """Format t with a strftime() layout, for pretty output."""
    return t.strftime(layout)
