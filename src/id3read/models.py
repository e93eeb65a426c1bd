from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, Iterator, List, Optional, Tuple, Union

from .frame_ids import frame_name


@dataclass(frozen=True)
class TagFlags:
    unsynchronization: bool = False
    has_extended_header: bool = False
    experimental: bool = False
    # Only meaningful for version 4 headers.
    has_footer: bool = False

    @classmethod
    def from_int(cls, bits: int) -> "TagFlags":
        return cls(
            unsynchronization=bool(bits & 0x80),
            has_extended_header=bool(bits & 0x40),
            experimental=bool(bits & 0x20),
            has_footer=bool(bits & 0x10),
        )


@dataclass(frozen=True)
class ExtendedHeader:
    size: int
    flags: int
    padding_size: int
    crc: Optional[int] = None

    @property
    def crc_present(self) -> bool:
        return bool(self.flags & 0x8000)

    @property
    def consumed(self) -> int:
        """Bytes occupied by the extended header, its own size field included."""
        return 4 + self.size


@dataclass(frozen=True)
class TagHeader:
    major_version: int
    revision: int
    flags: TagFlags
    size: int
    extended_header: Optional[ExtendedHeader] = None

    @property
    def version(self) -> str:
        return f"2.{self.major_version}.{self.revision}"

    @property
    def span(self) -> int:
        """Total bytes covered by the tag: header, frames, padding and any footer."""
        footer = 10 if self.major_version >= 4 and self.flags.has_footer else 0
        return 10 + self.size + footer


@dataclass(frozen=True)
class FrameFlags:
    tag_alter_preservation: bool = False
    file_alter_preservation: bool = False
    read_only: bool = False
    compression: bool = False
    encryption: bool = False
    grouping_identity: bool = False

    @classmethod
    def from_int(cls, bits: int) -> "FrameFlags":
        return cls(
            tag_alter_preservation=bool(bits & 0x8000),
            file_alter_preservation=bool(bits & 0x4000),
            read_only=bool(bits & 0x2000),
            compression=bool(bits & 0x0080),
            encryption=bool(bits & 0x0040),
            grouping_identity=bool(bits & 0x0020),
        )


@dataclass(frozen=True)
class FrameHeader:
    id: str
    size: int
    flags: FrameFlags = field(default_factory=FrameFlags)


# ---------------------------------------------------------------------------
# Frame content, one dataclass per frame family. `kind` is the union tag.
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TextContent:
    kind: ClassVar[str] = "text"

    encoding: int
    value: str


@dataclass(frozen=True)
class UserTextContent:
    kind: ClassVar[str] = "user_text"

    encoding: int
    description: str
    value: str


@dataclass(frozen=True)
class UrlContent:
    kind: ClassVar[str] = "url"

    value: str


@dataclass(frozen=True)
class UserUrlContent:
    kind: ClassVar[str] = "user_url"

    encoding: int
    description: str
    value: str


@dataclass(frozen=True)
class CommentContent:
    """Body of COMM and USLT frames."""

    kind: ClassVar[str] = "comment"

    encoding: int
    language: str
    description: str
    text: str


@dataclass(frozen=True)
class TermsOfUseContent:
    kind: ClassVar[str] = "terms_of_use"

    encoding: int
    language: str
    text: str


@dataclass(frozen=True)
class InvolvedPeopleContent:
    """IPLS strings in file order, not paired into involvement/involvee."""

    kind: ClassVar[str] = "involved_people"

    encoding: int
    values: Tuple[str, ...] = ()


@dataclass(frozen=True)
class UniqueFileIdContent:
    kind: ClassVar[str] = "unique_file_id"

    owner_identifier: str
    identifier: bytes


@dataclass(frozen=True)
class PrivateContent:
    kind: ClassVar[str] = "private"

    owner_identifier: str
    private_data: bytes


@dataclass(frozen=True)
class PlayCounterContent:
    kind: ClassVar[str] = "play_counter"

    counter: int


@dataclass(frozen=True)
class PopularimeterContent:
    kind: ClassVar[str] = "popularimeter"

    email: str
    rating: int
    counter: int = 0


@dataclass(frozen=True)
class PictureContent:
    kind: ClassVar[str] = "picture"

    encoding: int
    mime_type: str
    picture_type: int
    description: str
    picture_data: bytes


@dataclass(frozen=True)
class RawContent:
    """Undecoded frame body.

    `error` is set when a decoder for the frame id exists but failed on
    this body; it is None for ids that are never structurally decoded.
    """

    kind: ClassVar[str] = "raw"

    data: bytes
    error: Optional[Exception] = field(default=None, compare=False)


ContentVariant = Union[
    TextContent,
    UserTextContent,
    UrlContent,
    UserUrlContent,
    CommentContent,
    TermsOfUseContent,
    InvolvedPeopleContent,
    UniqueFileIdContent,
    PrivateContent,
    PlayCounterContent,
    PopularimeterContent,
    PictureContent,
    RawContent,
]


@dataclass(frozen=True)
class Frame:
    header: FrameHeader
    content: ContentVariant
    truncated: bool = False
    group_id: Optional[int] = None

    @property
    def id(self) -> str:
        return self.header.id

    @property
    def name(self) -> str:
        return frame_name(self.header.id)

    @property
    def decoded(self) -> bool:
        return not isinstance(self.content, RawContent)


@dataclass(frozen=True)
class Tag:
    header: TagHeader
    frames: Tuple[Frame, ...] = ()
    truncated: bool = False

    def __iter__(self) -> Iterator[Frame]:
        return iter(self.frames)

    def __len__(self) -> int:
        return len(self.frames)

    @property
    def frame_ids(self) -> List[str]:
        return [f.id for f in self.frames]

    def get_frames(self, frame_id: str) -> List[Frame]:
        return [f for f in self.frames if f.id == frame_id]

    def first(self, frame_id: str) -> Optional[Frame]:
        for f in self.frames:
            if f.id == frame_id:
                return f
        return None
