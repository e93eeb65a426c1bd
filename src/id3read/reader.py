from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from . import config
from . import logger as logger_mod
from .errors import UnsupportedVersionError
from .frames import scan_frames
from .header import HEADER_SIZE, SUPPORTED_MAJOR_VERSIONS, peek_tag_span, read_tag_header
from .models import Tag
from .view import Buffer, ByteView

log = logger_mod.get_logger()

Source = Union[Buffer, ByteView]


@dataclass(frozen=True)
class ReadPolicy:
    """Limits applied while reading a tag.

    `max_tag_size` caps how many declared tag bytes are scanned, and how
    large any compressed frame may inflate to; None means the declared
    sizes are trusted (bounded only by the buffer).
    """

    max_tag_size: Optional[int] = None

    def __post_init__(self) -> None:
        if self.max_tag_size is not None and self.max_tag_size < 0:
            object.__setattr__(self, "max_tag_size", 0)


def _as_view(data: Source) -> ByteView:
    return data if isinstance(data, ByteView) else ByteView(data)


class Id3Reader:
    """Read ID3v2.3 tags from in-memory buffers.

    Contract:
    - read() returns an immutable Tag or raises NotATagError /
      UnsupportedVersionError / TruncatedError
    - per-frame problems never raise; they show up as RawContent with an
      `error`, or as `truncated` flags on the Frame and the Tag
    - peek() parses only the fixed header and returns the tag's byte span
    """

    def __init__(self, policy: Optional[ReadPolicy] = None):
        self._policy = policy or ReadPolicy()

    @classmethod
    def from_env(cls) -> "Id3Reader":
        return cls(policy=ReadPolicy(max_tag_size=config.MAX_TAG_SIZE))

    @property
    def policy(self) -> ReadPolicy:
        return self._policy

    def read(self, data: Source, offset: int = 0) -> Tag:
        view = _as_view(data)
        header = read_tag_header(view, offset)
        if header.major_version not in SUPPORTED_MAJOR_VERSIONS:
            raise UnsupportedVersionError(
                header.major_version,
                f"ID3v2.{header.major_version} frames are not decoded "
                f"(supported: {', '.join(f'2.{v}' for v in SUPPORTED_MAJOR_VERSIONS)})",
            )
        if header.flags.unsynchronization:
            log.warning(
                f"[ID3-READ] tag at {offset} is unsynchronised; frame bodies are read as stored"
            )

        truncated = False
        declared = header.size
        limit = self._policy.max_tag_size
        if limit is not None and declared > limit:
            log.warning(f"[ID3-READ] declared tag size {declared} exceeds limit {limit}")
            declared = limit
            truncated = True

        body_start = offset + HEADER_SIZE
        available = view.remaining(body_start)
        if declared > available:
            log.warning(
                f"[ID3-READ] declared tag size {declared} but only {available} byte(s) in buffer"
            )
            declared = available
            truncated = True

        skip = header.extended_header.consumed if header.extended_header else 0
        skip = min(skip, declared)
        region = view.slice(body_start + skip, declared - skip)

        frames = scan_frames(region, max_inflated_size=limit)
        truncated = truncated or any(f.truncated for f in frames)
        return Tag(header=header, frames=tuple(frames), truncated=truncated)

    def peek(self, data: Source, offset: int = 0) -> Optional[int]:
        return peek_tag_span(_as_view(data), offset)


def read_tag(data: Source, offset: int = 0, *, max_tag_size: Optional[int] = None) -> Tag:
    """Read the ID3v2.3 tag starting at `offset` of `data`."""
    return Id3Reader(ReadPolicy(max_tag_size=max_tag_size)).read(data, offset)
