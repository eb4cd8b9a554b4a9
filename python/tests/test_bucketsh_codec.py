"""Tests for the byte/string codec."""

from __future__ import annotations

import pytest

from bucketsh.codec import bytes_to_string, string_to_bytes


@pytest.mark.parametrize("value", range(256))
def test_hex_escape_decodes_to_byte(value):
    assert string_to_bytes(f"\\x{value:02x}") == bytes([value])


def test_unicode_text_passes_through():
    text = "中文English"
    assert string_to_bytes(text) == text.encode("utf-8")
    assert bytes_to_string(text.encode("utf-8")) == text


def test_line_breaks_are_written_as_hex():
    assert bytes_to_string(b"a\nb\rc") == "a\\x0ab\\x0dc"


def test_quotes_are_not_escaped():
    assert bytes_to_string(b'say "hi"') == 'say "hi"'


def test_control_and_invalid_bytes_use_hex_escapes():
    assert bytes_to_string(b"\x00\x01\x7f") == "\\x00\\x01\\x7f"
    assert bytes_to_string(b"ok\xff") == "ok\\xff"


def test_uppercase_hex_is_left_alone():
    assert string_to_bytes("\\xFF") == b"\\xFF"
    assert string_to_bytes("\\xz1") == b"\\xz1"


@pytest.mark.parametrize(
    "raw",
    [
        b"",
        b"plain",
        b"line one\nline two\r\n",
        b"\x00\x01\x02binary\xfe\xff",
        "héllo wörld ✓".encode("utf-8"),
        b'{"json": true}',
    ],
)
def test_round_trip(raw):
    assert string_to_bytes(bytes_to_string(raw)) == raw


def test_output_stays_on_one_line():
    assert "\n" not in bytes_to_string(b"a\nb\n")
