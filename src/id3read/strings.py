"""Encoding-aware string reading shared by every frame decoder.

Encoding 0 is ISO-8859-1: one byte per code point, terminated by a single
zero byte. Encoding 1 is UCS-2/UTF-16: two-byte units with an optional
byte-order mark, terminated by a zero-zero pair aligned to the start of
the field.
"""

from __future__ import annotations

from typing import Tuple

from .errors import OutOfRangeError, UnsupportedEncodingError
from .view import ByteView

LATIN1 = 0
UTF16 = 1

_TERMINATORS = {
    LATIN1: b"\x00",
    UTF16: b"\x00\x00",
}

LANGUAGE_SIZE = 3


def check_encoding(encoding: int) -> int:
    if encoding not in _TERMINATORS:
        raise UnsupportedEncodingError(encoding)
    return encoding


def terminator_width(encoding: int) -> int:
    return len(_TERMINATORS[check_encoding(encoding)])


def find_terminator(view: ByteView, offset: int, encoding: int) -> int:
    """Offset of the terminator for a string starting at `offset`.

    Returns `len(view)` when the string runs to the end of the view.
    """
    terminator = _TERMINATORS[check_encoding(encoding)]
    end = len(view)
    pos = offset
    while pos < end:
        hit = view.find(terminator, pos)
        if hit < 0:
            return end
        # A UTF-16 terminator must start on a unit boundary.
        if (hit - offset) % len(terminator) == 0:
            return hit
        pos = hit + 1
    return end


def decode(data: bytes, encoding: int) -> str:
    if check_encoding(encoding) == LATIN1:
        return data.decode("latin-1")

    codec = "utf-16-be"
    if data[:2] == b"\xff\xfe":
        codec, data = "utf-16-le", data[2:]
    elif data[:2] == b"\xfe\xff":
        data = data[2:]
    # A dangling odd byte cannot form a unit.
    if len(data) % 2:
        data = data[:-1]
    return data.decode(codec, errors="replace")


def read_terminated_string(view: ByteView, offset: int, encoding: int) -> Tuple[str, int]:
    """Read a string up to its terminator.

    Returns `(value, next_offset)` where `next_offset` points past the
    terminator. A string with no terminator takes the rest of the view and
    `next_offset` is `len(view)`.
    """
    if offset < 0 or offset > len(view):
        raise OutOfRangeError(offset, 0, len(view))
    end = find_terminator(view, offset, encoding)
    value = decode(view.read_bytes(offset, end - offset), encoding)
    if end >= len(view):
        return value, len(view)
    return value, end + terminator_width(encoding)


def read_language(view: ByteView, offset: int) -> Tuple[str, int]:
    """Read a 3-byte language code, taking fewer bytes if the body is short.

    Zero bytes are not part of the code: an all-zero field reads as "" and
    a two-letter code padded with a zero reads as those two letters.
    """
    if offset < 0 or offset > len(view):
        raise OutOfRangeError(offset, LANGUAGE_SIZE, len(view))
    taken = min(LANGUAGE_SIZE, view.remaining(offset))
    raw = view.read_bytes(offset, taken)
    return raw.split(b"\x00", 1)[0].decode("latin-1"), offset + taken
