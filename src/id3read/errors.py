from __future__ import annotations

from typing import Optional


class Id3Error(RuntimeError):
    """Base error for id3read."""


class NotATagError(Id3Error):
    """No ID3v2 magic at the requested offset."""


class UnsupportedVersionError(Id3Error):
    def __init__(self, major_version: int, message: Optional[str] = None) -> None:
        self.major_version = major_version
        super().__init__(message or f"Unsupported ID3v2 major version: {major_version}")


class TruncatedError(Id3Error):
    """The buffer ended before a fixed-size header could be read."""


class OutOfRangeError(Id3Error):
    def __init__(self, offset: int, length: int, available: int) -> None:
        self.offset = offset
        self.length = length
        self.available = available
        super().__init__(
            f"Read of {length} byte(s) at offset {offset} exceeds view of {available} byte(s)"
        )


class UnsupportedEncodingError(Id3Error):
    def __init__(self, encoding: int) -> None:
        self.encoding = encoding
        super().__init__(f"Unsupported text encoding byte: {encoding}")


class UnsupportedFrameFormatError(Id3Error):
    """Frame body is encrypted or its compressed data cannot be inflated."""
