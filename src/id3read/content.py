"""Per-frame-id content decoding.

Every decoder is a pure function of the frame body. `DECODERS` is the
fixed id -> decoder table; `decoder_for` falls back to the text and URL
family decoders for undeclared `T***`/`W***` ids and to `decode_raw` for
everything else. `decode_frame_content` contains per-frame failures so a
malformed body degrades to `RawContent` instead of failing the tag.
"""

from __future__ import annotations

from typing import Callable, Dict, List

from . import logger as logger_mod
from .errors import OutOfRangeError, UnsupportedEncodingError, UnsupportedFrameFormatError
from .models import (
    CommentContent,
    ContentVariant,
    InvolvedPeopleContent,
    PictureContent,
    PlayCounterContent,
    PopularimeterContent,
    PrivateContent,
    RawContent,
    TermsOfUseContent,
    TextContent,
    UniqueFileIdContent,
    UrlContent,
    UserTextContent,
    UserUrlContent,
)
from .strings import LATIN1, check_encoding, read_language, read_terminated_string
from .view import ByteView

log = logger_mod.get_logger()

Decoder = Callable[[ByteView], ContentVariant]

# Failures that stay inside a single frame.
FRAME_ERRORS = (OutOfRangeError, UnsupportedEncodingError, UnsupportedFrameFormatError)


def _read_encoding(body: ByteView) -> int:
    return check_encoding(body.read_u8(0))


def _read_rest(body: ByteView, offset: int, encoding: int) -> str:
    """Text from `offset` to the end of the body, stopping at a terminator if present."""
    return read_terminated_string(body, offset, encoding)[0]


def decode_raw(body: ByteView) -> RawContent:
    return RawContent(data=body.tobytes())


def decode_text(body: ByteView) -> TextContent:
    encoding = _read_encoding(body)
    return TextContent(encoding=encoding, value=_read_rest(body, 1, encoding))


def decode_user_text(body: ByteView) -> UserTextContent:
    encoding = _read_encoding(body)
    description, offset = read_terminated_string(body, 1, encoding)
    return UserTextContent(
        encoding=encoding,
        description=description,
        value=_read_rest(body, offset, encoding),
    )


def decode_url(body: ByteView) -> UrlContent:
    # URL frames carry no encoding byte.
    return UrlContent(value=_read_rest(body, 0, LATIN1))


def decode_user_url(body: ByteView) -> UserUrlContent:
    encoding = _read_encoding(body)
    description, offset = read_terminated_string(body, 1, encoding)
    # The URL itself is always ISO-8859-1, whatever the encoding byte says.
    return UserUrlContent(
        encoding=encoding,
        description=description,
        value=_read_rest(body, offset, LATIN1),
    )


def decode_comment(body: ByteView) -> CommentContent:
    """COMM and USLT: encoding, language, description, text."""
    encoding = _read_encoding(body)
    language, offset = read_language(body, 1)
    description, offset = read_terminated_string(body, offset, encoding)
    return CommentContent(
        encoding=encoding,
        language=language,
        description=description,
        text=_read_rest(body, offset, encoding),
    )


def decode_terms_of_use(body: ByteView) -> TermsOfUseContent:
    encoding = _read_encoding(body)
    language, offset = read_language(body, 1)
    return TermsOfUseContent(
        encoding=encoding,
        language=language,
        text=_read_rest(body, offset, encoding),
    )


def decode_involved_people(body: ByteView) -> InvolvedPeopleContent:
    encoding = _read_encoding(body)
    values: List[str] = []
    offset = 1
    while offset < len(body):
        value, offset = read_terminated_string(body, offset, encoding)
        values.append(value)
    return InvolvedPeopleContent(encoding=encoding, values=tuple(values))


def decode_unique_file_id(body: ByteView) -> UniqueFileIdContent:
    owner, offset = read_terminated_string(body, 0, LATIN1)
    return UniqueFileIdContent(
        owner_identifier=owner,
        identifier=body.read_bytes(offset, body.remaining(offset)),
    )


def decode_private(body: ByteView) -> PrivateContent:
    owner, offset = read_terminated_string(body, 0, LATIN1)
    return PrivateContent(
        owner_identifier=owner,
        private_data=body.read_bytes(offset, body.remaining(offset)),
    )


def decode_play_counter(body: ByteView) -> PlayCounterContent:
    if len(body) < 1:
        raise OutOfRangeError(0, 1, len(body))
    return PlayCounterContent(counter=body.read_uint_be(0, len(body)))


def decode_popularimeter(body: ByteView) -> PopularimeterContent:
    email, offset = read_terminated_string(body, 0, LATIN1)
    rating = body.read_u8(offset)
    offset += 1
    counter = body.read_uint_be(offset, body.remaining(offset)) if body.remaining(offset) else 0
    return PopularimeterContent(email=email, rating=rating, counter=counter)


def decode_picture(body: ByteView) -> PictureContent:
    encoding = _read_encoding(body)
    mime_type, offset = read_terminated_string(body, 1, LATIN1)
    picture_type = body.read_u8(offset)
    description, offset = read_terminated_string(body, offset + 1, encoding)
    return PictureContent(
        encoding=encoding,
        mime_type=mime_type,
        picture_type=picture_type,
        description=description,
        picture_data=body.read_bytes(offset, body.remaining(offset)),
    )


_RAW_IDS = (
    "AENC",
    "COMR",
    "ENCR",
    "EQUA",
    "ETCO",
    "GEOB",
    "GRID",
    "LINK",
    "MCDI",
    "MLLT",
    "OWNE",
    "POSS",
    "RBUF",
    "RVAD",
    "RVRB",
    "SYLT",
    "SYTC",
)

# fmt: off
_TEXT_IDS = (
    "TALB", "TBPM", "TCOM", "TCON", "TCOP", "TDAT", "TDLY", "TENC", "TEXT",
    "TFLT", "TIME", "TIT1", "TIT2", "TIT3", "TKEY", "TLAN", "TLEN", "TMED",
    "TOAL", "TOFN", "TOLY", "TOPE", "TORY", "TOWN", "TPE1", "TPE2", "TPE3",
    "TPE4", "TPOS", "TPUB", "TRCK", "TRDA", "TRSN", "TRSO", "TSIZ", "TSRC",
    "TSSE", "TYER",
)
# fmt: on

_URL_IDS = ("WCOM", "WCOP", "WOAF", "WOAR", "WOAS", "WORS", "WPAY", "WPUB")

DECODERS: Dict[str, Decoder] = {
    "TXXX": decode_user_text,
    "WXXX": decode_user_url,
    "COMM": decode_comment,
    "USLT": decode_comment,
    "USER": decode_terms_of_use,
    "IPLS": decode_involved_people,
    "UFID": decode_unique_file_id,
    "PRIV": decode_private,
    "PCNT": decode_play_counter,
    "POPM": decode_popularimeter,
    "APIC": decode_picture,
}
DECODERS.update({frame_id: decode_text for frame_id in _TEXT_IDS})
DECODERS.update({frame_id: decode_url for frame_id in _URL_IDS})
DECODERS.update({frame_id: decode_raw for frame_id in _RAW_IDS})


def decoder_for(frame_id: str) -> Decoder:
    decoder = DECODERS.get(frame_id)
    if decoder is not None:
        return decoder
    if frame_id.startswith("T"):
        return decode_text
    if frame_id.startswith("W"):
        return decode_url
    return decode_raw


def decode_frame_content(frame_id: str, body: ByteView) -> ContentVariant:
    try:
        return decoder_for(frame_id)(body)
    except FRAME_ERRORS as e:
        log.debug(f"[FRAME-DECODE] {frame_id}: kept as raw bytes: {e}")
        return RawContent(data=body.tobytes(), error=e)
