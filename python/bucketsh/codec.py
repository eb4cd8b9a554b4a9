"""Printable representation of binary keys and values.

``bytes_to_string`` escapes a byte string the way Go's ``%q`` verb does,
without the surrounding quotes and with line breaks written as ``\\x0a`` and
``\\x0d`` so every value fits on one line.  ``string_to_bytes`` reverses the
``\\xHH`` escapes, which lets users type arbitrary bytes at the prompt.
"""

from __future__ import annotations

import re

_NAMED_ESCAPES = {
    "\a": "\\a",
    "\b": "\\b",
    "\f": "\\f",
    "\t": "\\t",
    "\v": "\\v",
    "\n": "\\x0a",
    "\r": "\\x0d",
    "\\": "\\\\",
}

_HEX_ESCAPE = re.compile(rb"\\x([0-9a-f]{2})")


def _escape_char(ch: str) -> str:
    code = ord(ch)
    if 0xDC80 <= code <= 0xDCFF:
        # byte that is not part of valid UTF-8 (surrogateescape)
        return f"\\x{code - 0xDC00:02x}"
    named = _NAMED_ESCAPES.get(ch)
    if named is not None:
        return named
    if ch.isprintable():
        return ch
    if code < 0x20 or code == 0x7F:
        return f"\\x{code:02x}"
    if code < 0x10000:
        return f"\\u{code:04x}"
    return f"\\U{code:08x}"


def bytes_to_string(data: bytes) -> str:
    text = bytes(data).decode("utf-8", errors="surrogateescape")
    return "".join(_escape_char(ch) for ch in text)


def string_to_bytes(text: str) -> bytes:
    raw = text.encode("utf-8", errors="surrogateescape")
    return _HEX_ESCAPE.sub(lambda m: bytes((int(m.group(1), 16),)), raw)


__all__ = ["bytes_to_string", "string_to_bytes"]
