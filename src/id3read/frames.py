from __future__ import annotations

import re
import zlib
from typing import List, Optional, Tuple

from . import logger as logger_mod
from .content import FRAME_ERRORS, decode_frame_content
from .errors import UnsupportedFrameFormatError
from .models import ContentVariant, Frame, FrameFlags, FrameHeader, RawContent
from .view import ByteView

log = logger_mod.get_logger()

FRAME_HEADER_SIZE = 10

_FRAME_ID = re.compile(rb"[A-Za-z0-9]{4}")


def read_frame_header(region: ByteView, offset: int) -> Optional[FrameHeader]:
    """Read the 10-byte frame header at `offset`, or None if the id is not a frame id."""
    raw_id = region.read_bytes(offset, 4)
    if not _FRAME_ID.fullmatch(raw_id):
        return None
    return FrameHeader(
        id=raw_id.decode("ascii"),
        size=region.read_u32_be(offset + 4),
        flags=FrameFlags.from_int(region.read_u16_be(offset + 8)),
    )


def _inflate(header: FrameHeader, payload: ByteView, limit: int) -> ByteView:
    """Inflate a compressed body, refusing to produce more than `limit` bytes."""
    inflater = zlib.decompressobj()
    try:
        data = inflater.decompress(payload.tobytes(), limit + 1)
    except zlib.error as e:
        raise UnsupportedFrameFormatError(f"{header.id}: cannot inflate body: {e}") from e
    if len(data) > limit:
        raise UnsupportedFrameFormatError(
            f"{header.id}: compressed body inflates past {limit} byte(s)"
        )
    if not inflater.eof:
        raise UnsupportedFrameFormatError(f"{header.id}: compressed body is incomplete")
    return ByteView(data)


def _unwrap_body(
    header: FrameHeader, body: ByteView, max_inflated_size: Optional[int] = None
) -> Tuple[ByteView, Optional[int]]:
    """Strip the extra bytes the format flags add in front of the body.

    They follow the header in flag order: decompressed size (4 bytes),
    encryption method (1 byte), group id (1 byte). A compressed body may
    inflate to at most its declared decompressed size, and never past
    `max_inflated_size` when one is given.
    """
    flags = header.flags
    offset = 0
    inflated_size = 0
    if flags.compression:
        inflated_size = body.read_u32_be(0)
        if max_inflated_size is not None:
            inflated_size = min(inflated_size, max_inflated_size)
        offset += 4
    if flags.encryption:
        offset += 1
    group_id = None
    if flags.grouping_identity:
        group_id = body.read_u8(offset)
        offset += 1
    if flags.encryption:
        raise UnsupportedFrameFormatError(f"{header.id}: encrypted frame body")

    payload = body.slice(offset)
    if flags.compression:
        payload = _inflate(header, payload, inflated_size)
    return payload, group_id


def _build_frame(
    header: FrameHeader, body: ByteView, truncated: bool, max_inflated_size: Optional[int]
) -> Frame:
    group_id = None
    content: ContentVariant
    try:
        payload, group_id = _unwrap_body(header, body, max_inflated_size)
    except FRAME_ERRORS as e:
        log.debug(f"[FRAME-DECODE] {header.id}: kept as raw bytes: {e}")
        content = RawContent(data=body.tobytes(), error=e)
    else:
        content = decode_frame_content(header.id, payload)
    return Frame(header=header, content=content, truncated=truncated, group_id=group_id)


def scan_frames(region: ByteView, max_inflated_size: Optional[int] = None) -> List[Frame]:
    """Read consecutive frames from `region`, the tag body after any extended header.

    The scan halts, without raising, when fewer than a frame header's worth
    of bytes remain, when padding (a zero byte) starts, or when a frame id
    is not four ASCII letters/digits. A frame whose declared size runs past
    the region is clamped and flagged as truncated. `max_inflated_size` caps
    what any one compressed frame may inflate to.
    """
    frames: List[Frame] = []
    end = len(region)
    offset = 0
    while True:
        if end - offset < FRAME_HEADER_SIZE:
            log.debug(f"[FRAME-SCAN] {end - offset} byte(s) left at {offset}, stopping")
            break
        if region.read_u8(offset) == 0:
            log.debug(f"[FRAME-SCAN] padding starts at {offset}")
            break

        header = read_frame_header(region, offset)
        if header is None:
            log.warning(
                f"[FRAME-SCAN] invalid frame id {region.read_bytes(offset, 4)!r} at {offset}; "
                f"keeping {len(frames)} frame(s) read so far"
            )
            break

        body_start = offset + FRAME_HEADER_SIZE
        available = end - body_start
        truncated = header.size > available
        if truncated:
            log.warning(
                f"[FRAME-SCAN] {header.id} declares {header.size} byte(s), "
                f"only {available} left in tag; clamping"
            )
        body = region.slice(body_start, min(header.size, available))

        frames.append(_build_frame(header, body, truncated, max_inflated_size))
        offset = body_start + len(body)

    return frames
