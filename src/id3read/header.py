from __future__ import annotations

from typing import Optional

from . import logger as logger_mod
from .errors import NotATagError, TruncatedError, UnsupportedVersionError
from .models import ExtendedHeader, TagFlags, TagHeader
from .view import ByteView

log = logger_mod.get_logger()

TAG_MAGIC = b"ID3"
HEADER_SIZE = 10
EXTENDED_HEADER_MIN_SIZE = 10

# Majors whose header layout is understood (span can be computed) versus
# majors whose frames this package decodes.
KNOWN_MAJOR_VERSIONS = (2, 3, 4)
SUPPORTED_MAJOR_VERSIONS = (3,)

_CRC_PRESENT = 0x8000


def read_tag_header(
    view: ByteView, offset: int = 0, *, read_extended: bool = True
) -> TagHeader:
    """Parse the 10-byte ID3v2 header (and v2.3 extended header) at `offset`.

    Raises:
        NotATagError: the magic is not "ID3", or `offset` is negative.
        UnsupportedVersionError: the major version is not 2, 3 or 4.
        TruncatedError: the buffer ends inside the header.
    """
    if offset < 0:
        raise NotATagError(f"No ID3v2 tag at negative offset {offset}")
    available = view.remaining(offset)
    if available < len(TAG_MAGIC) or view.read_bytes(offset, len(TAG_MAGIC)) != TAG_MAGIC:
        raise NotATagError(f"No ID3v2 tag at offset {offset}")
    if available < HEADER_SIZE:
        raise TruncatedError(
            f"ID3v2 header at offset {offset} needs {HEADER_SIZE} bytes, {available} available"
        )

    major = view.read_u8(offset + 3)
    revision = view.read_u8(offset + 4)
    if major not in KNOWN_MAJOR_VERSIONS:
        raise UnsupportedVersionError(major)

    flags = TagFlags.from_int(view.read_u8(offset + 5))
    size = view.read_synchsafe_u32(offset + 6)
    log.debug(
        f"[ID3-HEADER] offset={offset} version=2.{major}.{revision} flags={flags} size={size}"
    )

    extended = None
    # The v2.4 extended header has a different layout; only v2.3 is read.
    if read_extended and flags.has_extended_header and major == 3:
        extended = _read_extended_header(view, offset + HEADER_SIZE, size)

    return TagHeader(
        major_version=major,
        revision=revision,
        flags=flags,
        size=size,
        extended_header=extended,
    )


def _read_extended_header(view: ByteView, offset: int, tag_size: int) -> Optional[ExtendedHeader]:
    """Read the v2.3 extended header, or None if the declared tag cannot hold one."""
    available = view.remaining(offset)
    if available < EXTENDED_HEADER_MIN_SIZE:
        raise TruncatedError(
            f"Extended header at offset {offset} needs {EXTENDED_HEADER_MIN_SIZE} bytes, "
            f"{available} available"
        )
    if tag_size < EXTENDED_HEADER_MIN_SIZE:
        log.warning(
            f"[ID3-HEADER] extended header flagged but tag declares only {tag_size} byte(s); ignored"
        )
        return None
    available = min(available, tag_size)
    size = view.read_synchsafe_u32(offset)
    ext_flags = view.read_u16_be(offset + 4)
    padding_size = view.read_u32_be(offset + 6)

    crc = None
    # size excludes its own 4 bytes: 6 without CRC, 10 with it.
    if ext_flags & _CRC_PRESENT and size >= 10 and available >= 14:
        crc = view.read_u32_be(offset + 10)

    return ExtendedHeader(size=size, flags=ext_flags, padding_size=padding_size, crc=crc)


def peek_tag_span(view: ByteView, offset: int = 0) -> Optional[int]:
    """Total byte span of the tag at `offset`, or None if there is no usable header.

    Only the fixed header is parsed, so this is cheap enough for an audio
    frame scanner to call at every candidate position.
    """
    try:
        header = read_tag_header(view, offset, read_extended=False)
    except (NotATagError, UnsupportedVersionError, TruncatedError):
        return None
    return header.span
