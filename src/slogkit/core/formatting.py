"""Locale-free number and duration formatting.

Text output and JSON output format floats differently: text uses the
shortest ``%g`` form (exponent for exp < -4 or exp >= 6), JSON uses plain
decimal notation except for very small or very large magnitudes. Both use
the shortest digit string that round-trips.
"""

from __future__ import annotations

import math

_NANOS_PER_SECOND = 1_000_000_000


def _shortest_digits(f: float) -> tuple[str, int]:
    """Split abs(f) into its shortest significant digits and decimal point.

    For 1234.5 returns ("12345", 4), meaning 0.12345 * 10**4. f must be
    finite and non-zero.
    """
    mantissa, _, exp = repr(abs(f)).partition("e")
    int_part, _, frac_part = mantissa.partition(".")
    digits = int_part + frac_part
    point = len(int_part) + (int(exp) if exp else 0)
    stripped = digits.lstrip("0")
    point -= len(digits) - len(stripped)
    return stripped.rstrip("0"), point


def _format_exponent(digits: str, point: int) -> str:
    exp = point - 1
    mantissa = digits[0]
    if len(digits) > 1:
        mantissa += "." + digits[1:]
    sign = "-" if exp < 0 else "+"
    return f"{mantissa}e{sign}{abs(exp):02d}"


def _format_fixed(digits: str, point: int) -> str:
    if point <= 0:
        return "0." + "0" * -point + digits
    if point >= len(digits):
        return digits + "0" * (point - len(digits))
    return digits[:point] + "." + digits[point:]


def _sign(f: float) -> str:
    return "-" if math.copysign(1.0, f) < 0 else ""


def format_float(f: float) -> str:
    """Format a float the way text output renders it.

    Examples:
        >>> format_float(1.5)
        '1.5'
        >>> format_float(1e6)
        '1e+06'
        >>> format_float(0.0001)
        '0.0001'
        >>> format_float(float("inf"))
        '+Inf'
    """
    if math.isnan(f):
        return "NaN"
    if math.isinf(f):
        return "+Inf" if f > 0 else "-Inf"
    if f == 0:
        return _sign(f) + "0"
    digits, point = _shortest_digits(f)
    exp = point - 1
    if exp < -4 or exp >= 6:
        return _sign(f) + _format_exponent(digits, point)
    return _sign(f) + _format_fixed(digits, point)


def format_json_float(f: float) -> str:
    """Format a float as a JSON number.

    Raises:
        ValueError: For NaN and infinities, which JSON cannot represent.
    """
    if math.isnan(f) or math.isinf(f):
        raise ValueError(f"json: unsupported value: {format_float(f)}")
    if f == 0:
        return _sign(f) + "0"
    digits, point = _shortest_digits(f)
    magnitude = abs(f)
    if magnitude < 1e-6 or magnitude >= 1e21:
        s = _format_exponent(digits, point)
        # Shorten e-07 to e-7.
        if len(s) >= 4 and s[-4] == "e" and s[-3] == "-" and s[-2] == "0":
            s = s[:-2] + s[-1]
        return _sign(f) + s
    return _sign(f) + _format_fixed(digits, point)


def _split_fraction(value: int, precision: int) -> tuple[str, int]:
    """Split value / 10**precision into ".fraction" (trailing zeros dropped) and whole."""
    whole, frac = divmod(value, 10**precision)
    digits = f"{frac:0{precision}d}".rstrip("0") if precision else ""
    return ("." + digits if digits else ""), whole


def format_duration(nanos: int) -> str:
    """Format a duration in nanoseconds as a human-readable unit string.

    Sub-second durations use the largest unit that keeps the integer part
    non-zero (``1.5ms``, ``250ns``); longer ones use hours, minutes and
    seconds (``1h2m3.5s``, ``4m0s``). Zero is ``0s``.

    Args:
        nanos: Duration in nanoseconds, may be negative.

    Returns:
        Formatted duration.
    """
    negative = nanos < 0
    u = -nanos if negative else nanos
    if u < _NANOS_PER_SECOND:
        if u == 0:
            return "0s"
        if u < 1_000:
            unit, precision = "ns", 0
        elif u < 1_000_000:
            unit, precision = "\N{MICRO SIGN}s", 3
        else:
            unit, precision = "ms", 6
        frac, whole = _split_fraction(u, precision)
        out = f"{whole}{frac}{unit}"
    else:
        frac, seconds = _split_fraction(u, 9)
        minutes, seconds = divmod(seconds, 60)
        out = f"{seconds}{frac}s"
        if minutes > 0:
            hours, minutes = divmod(minutes, 60)
            out = f"{minutes}m{out}"
            if hours > 0:
                out = f"{hours}h{out}"
    return "-" + out if negative else out
