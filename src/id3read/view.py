from __future__ import annotations

from typing import Optional, Union

from .errors import OutOfRangeError

Buffer = Union[bytes, bytearray, memoryview]


class ByteView:
    """Read-only, bounds-checked window over a byte buffer.

    Offsets passed to the read methods are relative to the start of the
    window. Slicing shares the underlying buffer; nothing is copied until
    `read_bytes`/`tobytes` is called.
    """

    __slots__ = ("_data", "_start", "_length")

    def __init__(self, buffer: Buffer, offset: int = 0, length: Optional[int] = None):
        if isinstance(buffer, memoryview):
            buffer = buffer.tobytes()
        if not isinstance(buffer, (bytes, bytearray)):
            raise TypeError(f"ByteView needs a bytes-like buffer, got {type(buffer).__name__}")
        if offset < 0 or offset > len(buffer):
            raise OutOfRangeError(offset, 0, len(buffer))
        if length is None:
            length = len(buffer) - offset
        if length < 0 or offset + length > len(buffer):
            raise OutOfRangeError(offset, length, len(buffer))
        self._data = buffer
        self._start = offset
        self._length = length

    def __len__(self) -> int:
        return self._length

    def __repr__(self) -> str:
        return f"ByteView(start={self._start}, length={self._length})"

    def _check(self, off: int, length: int) -> int:
        if off < 0 or length < 0 or off + length > self._length:
            raise OutOfRangeError(off, length, self._length)
        return self._start + off

    def remaining(self, off: int) -> int:
        return max(0, self._length - off)

    def read_u8(self, off: int) -> int:
        return self._data[self._check(off, 1)]

    def read_u16_be(self, off: int) -> int:
        return self.read_uint_be(off, 2)

    def read_u32_be(self, off: int) -> int:
        return self.read_uint_be(off, 4)

    def read_uint_be(self, off: int, length: int) -> int:
        start = self._check(off, length)
        return int.from_bytes(self._data[start : start + length], "big")

    def read_synchsafe_u32(self, off: int) -> int:
        """Read a 28-bit integer stored as four 7-bit groups (high bits ignored)."""
        start = self._check(off, 4)
        value = 0
        for b in self._data[start : start + 4]:
            value = (value << 7) | (b & 0x7F)
        return value

    def read_bytes(self, off: int, length: int) -> bytes:
        start = self._check(off, length)
        return bytes(self._data[start : start + length])

    def slice(self, off: int, length: Optional[int] = None) -> "ByteView":
        if length is None:
            length = self.remaining(off)
        start = self._check(off, length)
        return ByteView(self._data, start, length)

    def find(self, sub: bytes, off: int = 0) -> int:
        """Offset of the first `sub` at or after `off`, or -1."""
        if off > self._length:
            return -1
        end = self._start + self._length
        hit = self._data.find(sub, self._start + max(off, 0), end)
        return -1 if hit < 0 else hit - self._start

    def tobytes(self) -> bytes:
        return bytes(self._data[self._start : self._start + self._length])
