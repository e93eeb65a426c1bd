"""Read ID3v2.3 tags from in-memory MP3 data.

Public API:
- read_tag / Id3Reader / ReadPolicy
- peek_tag_span (header-only span, for skipping a tag)
- Tag, TagHeader, Frame, FrameHeader and the per-family content classes
- the Id3Error hierarchy
"""

from .errors import (
    Id3Error,
    NotATagError,
    OutOfRangeError,
    TruncatedError,
    UnsupportedEncodingError,
    UnsupportedFrameFormatError,
    UnsupportedVersionError,
)
from .header import peek_tag_span, read_tag_header
from .models import (
    CommentContent,
    ContentVariant,
    ExtendedHeader,
    Frame,
    FrameFlags,
    FrameHeader,
    InvolvedPeopleContent,
    PictureContent,
    PlayCounterContent,
    PopularimeterContent,
    PrivateContent,
    RawContent,
    Tag,
    TagFlags,
    TagHeader,
    TermsOfUseContent,
    TextContent,
    UniqueFileIdContent,
    UrlContent,
    UserTextContent,
    UserUrlContent,
)
from .reader import Id3Reader, ReadPolicy, read_tag
from .view import ByteView

__all__ = [
    "read_tag",
    "peek_tag_span",
    "read_tag_header",
    "Id3Reader",
    "ReadPolicy",
    "ByteView",
    "Tag",
    "TagHeader",
    "TagFlags",
    "ExtendedHeader",
    "Frame",
    "FrameHeader",
    "FrameFlags",
    "ContentVariant",
    "TextContent",
    "UserTextContent",
    "UrlContent",
    "UserUrlContent",
    "CommentContent",
    "TermsOfUseContent",
    "InvolvedPeopleContent",
    "UniqueFileIdContent",
    "PrivateContent",
    "PlayCounterContent",
    "PopularimeterContent",
    "PictureContent",
    "RawContent",
    "Id3Error",
    "NotATagError",
    "UnsupportedVersionError",
    "TruncatedError",
    "OutOfRangeError",
    "UnsupportedEncodingError",
    "UnsupportedFrameFormatError",
]
