"""String escaping for the text and JSON encodings.

Text output quotes a value only when it would otherwise be ambiguous to a
``key=value`` reader; the quoted form matches Go's ``strconv.Quote``. JSON
output escapes the minimum required by RFC 8259 plus U+2028/U+2029, and
deliberately leaves ``<``, ``>`` and ``&`` alone.

Python strings cannot hold invalid UTF-8 directly. Lone surrogates stand in
for it: U+DC80..U+DCFF are bytes smuggled in by the ``surrogateescape`` error
handler, and any surrogate is treated as an invalid sequence.
"""

from __future__ import annotations

import re

_HEX = "0123456789abcdef"

# ASCII characters that force quoting in text output. Backslash and DEL are
# safe to print bare.
_TEXT_UNSAFE_ASCII = frozenset([chr(c) for c in range(0x20)] + [" ", "=", '"'])

_QUOTE_ESCAPES = {
    "\a": "\\a",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\v": "\\v",
    "\\": "\\\\",
    '"': '\\"',
}

_JSON_ESCAPES = {
    '"': '\\"',
    "\\": "\\\\",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}

# Characters JSON output must escape: controls, quote, backslash, the two
# JavaScript line terminators and every surrogate code point.
_JSON_UNSAFE = re.compile("[\\x00-\\x1f\"\\\\\\u2028\\u2029\\ud800-\\udfff]")


def _is_surrogate(code: int) -> bool:
    return 0xD800 <= code <= 0xDFFF


def needs_quoting(s: str) -> bool:
    """Report whether a text-mode value must be quoted.

    Args:
        s: The string to check.

    Returns:
        True for the empty string, strings containing a space, ``=``, ``"``,
        an ASCII control character, an invalid sequence, or any non-ASCII
        space or non-printable character.
    """
    if not s:
        return True
    if s.isascii() and s.isprintable():
        return " " in s or "=" in s or '"' in s
    for ch in s:
        if ch < "\x80":
            if ch in _TEXT_UNSAFE_ASCII:
                return True
            continue
        # isprintable() is False for surrogates, so invalid input is caught here.
        if ch.isspace() or not ch.isprintable():
            return True
    return False


def quote(s: str) -> str:
    """Return s as a double-quoted, escaped string.

    The result matches Go's ``strconv.Quote``: short escapes for the usual
    control characters, ``\\xNN`` for other ASCII controls, DEL and invalid
    bytes, and ``\\uNNNN``/``\\UNNNNNNNN`` for non-printable characters.
    Printable non-ASCII characters are kept as is.
    """
    out = ['"']
    for ch in s:
        escaped = _QUOTE_ESCAPES.get(ch)
        if escaped is not None:
            out.append(escaped)
            continue
        code = ord(ch)
        if code < 0x80:
            if code < 0x20 or code == 0x7F:
                out.append(f"\\x{code:02x}")
            else:
                out.append(ch)
        elif _is_surrogate(code):
            # Emit the raw bytes the surrogate stands for.
            errors = "surrogateescape" if 0xDC80 <= code <= 0xDCFF else "surrogatepass"
            out.extend(f"\\x{b:02x}" for b in ch.encode("utf-8", errors))
        elif ch.isprintable():
            out.append(ch)
        elif code < 0x10000:
            out.append(f"\\u{code:04x}")
        else:
            out.append(f"\\U{code:08x}")
    out.append('"')
    return "".join(out)


def _json_escape(match: re.Match[str]) -> str:
    ch = match.group()
    escaped = _JSON_ESCAPES.get(ch)
    if escaped is not None:
        return escaped
    code = ord(ch)
    if code < 0x20:
        return "\\u00" + _HEX[code >> 4] + _HEX[code & 0xF]
    if code == 0x2028 or code == 0x2029:
        return "\\u202" + _HEX[code & 0xF]
    # Lone surrogate: invalid input is replaced, as encoding/json does.
    return "\\ufffd"


def escape_json_string(s: str) -> str:
    """Escape s for inclusion in a JSON string literal.

    The result is not surrounded by quotation marks. HTML-significant
    characters are not escaped.
    """
    return _JSON_UNSAFE.sub(_json_escape, s)
