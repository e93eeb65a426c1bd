import pytest

from id3read.content import (
    DECODERS,
    decode_frame_content,
    decode_raw,
    decode_text,
    decode_url,
    decoder_for,
)
from id3read.errors import OutOfRangeError, UnsupportedEncodingError
from id3read.frame_ids import FRAME_NAMES
from id3read.models import (
    CommentContent,
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
from id3read.view import ByteView


def decode(frame_id, body):
    return decode_frame_content(frame_id, ByteView(body))


def test_text_frame_latin1():
    content = decode("TALB", b"\x00Album/Movie/Show title")
    assert content == TextContent(encoding=0, value="Album/Movie/Show title")
    assert content.kind == "text"


def test_text_frame_stops_at_embedded_terminator():
    assert decode("TIT2", b"\x00Title\x00garbage").value == "Title"


def test_text_frame_utf16(utf16):
    content = decode("TPE1", b"\x01" + utf16("αβγ Lead performer(s)/Soloist(s)", terminate=True))
    assert content.encoding == 1
    assert content.value == "αβγ Lead performer(s)/Soloist(s)"


def test_text_frame_does_not_interpret_value():
    # Date-like frames are plain text; no format is enforced.
    assert decode("TDAT", b"\x00not a date").value == "not a date"
    assert decode("TYER", b"\x00").value == ""


def test_user_text_frame(utf16):
    content = decode("TXXX", b"\x00Some description\x00Some value")
    assert content == UserTextContent(encoding=0, description="Some description", value="Some value")

    body = b"\x01" + utf16("αβγ desc", terminate=True) + utf16("αβγ value")
    content = decode("TXXX", body)
    assert content.description == "αβγ desc"
    assert content.value == "αβγ value"


def test_url_frame_has_no_encoding_byte():
    content = decode("WOAR", b"http://example.com/artist")
    assert content == UrlContent(value="http://example.com/artist")


def test_user_url_value_is_always_latin1(utf16):
    body = b"\x01" + utf16("αβγ link", terminate=True) + b"http://example.com/\xe9"
    content = decode("WXXX", body)

    assert isinstance(content, UserUrlContent)
    assert content.encoding == 1
    assert content.description == "αβγ link"
    assert content.value == "http://example.com/é"


def test_comment_frame_with_language():
    body = b"\x00eng" + b"commentWithLang\x00" + b"This comment has a language field"
    content = decode("COMM", body)

    assert content == CommentContent(
        encoding=0,
        language="eng",
        description="commentWithLang",
        text="This comment has a language field",
    )


@pytest.mark.parametrize("frame_id", ["COMM", "USLT"])
@pytest.mark.parametrize("language_bytes, expected", [(b"\x00\x00\x00", ""), (b"en\x00", "en")])
def test_comment_and_lyrics_language_edge_cases(frame_id, language_bytes, expected):
    content = decode(frame_id, b"\x00" + language_bytes + b"desc\x00text")
    assert content.language == expected
    assert content.description == "desc"
    assert content.text == "text"


def test_comment_frame_utf16(utf16):
    body = b"\x01eng" + utf16("αβγ description", terminate=True) + utf16("αβγ text")
    content = decode("USLT", body)
    assert content.description == "αβγ description"
    assert content.text == "αβγ text"


def test_comment_frame_short_language_does_not_fail():
    content = decode("COMM", b"\x00en")
    assert content == CommentContent(encoding=0, language="en", description="", text="")


def test_terms_of_use_frame():
    content = decode("USER", b"\x00engTerms of use")
    assert content == TermsOfUseContent(encoding=0, language="eng", text="Terms of use")


def test_involved_people_keeps_every_string_in_order():
    values = ["Involvement 1", "Involvee 1", "Involvement 2", "Involvee 2", "Involvement 3"]
    body = b"\x00" + b"".join(v.encode("latin-1") + b"\x00" for v in values)
    content = decode("IPLS", body)

    assert isinstance(content, InvolvedPeopleContent)
    assert content.values == tuple(values)


def test_involved_people_utf16(utf16):
    values = ["αβγ Involvement", "Involvee"]
    body = b"\x01" + b"".join(utf16(v, terminate=True) for v in values)
    assert decode("IPLS", body).values == tuple(values)


@pytest.mark.parametrize("length", [32, 64])
def test_unique_file_id_payload_is_kept_verbatim(length):
    owner = f"http://ufid/owner/for{length}ByteIdentifier"
    payload = bytes(range(length))
    content = decode("UFID", owner.encode("latin-1") + b"\x00" + payload)

    assert content == UniqueFileIdContent(owner_identifier=owner, identifier=payload)


@pytest.mark.parametrize("length", [32, 64])
def test_private_payload_is_kept_verbatim(length):
    owner = f"http://ufid/owner/for{length}BytePrivateData"
    payload = bytes(range(length))
    content = decode("PRIV", owner.encode("latin-1") + b"\x00" + payload)

    assert content == PrivateContent(owner_identifier=owner, private_data=payload)


def test_private_payload_may_be_empty_or_long():
    assert decode("PRIV", b"owner\x00").private_data == b""
    assert decode("PRIV", b"owner\x00" + b"\xab" * 300).private_data == b"\xab" * 300


@pytest.mark.parametrize(
    "body, expected",
    [
        ((303).to_bytes(4, "big"), 303),
        (b"\x05", 5),
        ((2**40 + 7).to_bytes(8, "big"), 2**40 + 7),
    ],
)
def test_play_counter_width_is_whatever_remains(body, expected):
    assert decode("PCNT", body) == PlayCounterContent(counter=expected)


def test_empty_play_counter_degrades_to_raw():
    content = decode("PCNT", b"")
    assert isinstance(content, RawContent)
    assert isinstance(content.error, OutOfRangeError)


def test_popularimeter():
    body = b"Email to user first\x00" + b"\x80" + (101).to_bytes(4, "big")
    content = decode("POPM", body)
    assert content == PopularimeterContent(email="Email to user first", rating=128, counter=101)


def test_popularimeter_without_counter():
    assert decode("POPM", b"a@b\x00\xff") == PopularimeterContent(email="a@b", rating=255, counter=0)


def test_popularimeter_without_rating_degrades_to_raw():
    content = decode("POPM", b"a@b\x00")
    assert isinstance(content, RawContent)
    assert content.data == b"a@b\x00"


def test_attached_picture():
    body = b"\x00MIME type 1\x00\x03" + b"Front cover\x00" + bytes(range(32))
    content = decode("APIC", body)

    assert content == PictureContent(
        encoding=0,
        mime_type="MIME type 1",
        picture_type=3,
        description="Front cover",
        picture_data=bytes(range(32)),
    )


def test_attached_picture_utf16_description(utf16):
    body = b"\x01image/png\x00\x04" + utf16("αβγ Back", terminate=True) + b"\x89PNG"
    content = decode("APIC", body)

    assert content.mime_type == "image/png"
    assert content.picture_type == 4
    assert content.description == "αβγ Back"
    assert content.picture_data == b"\x89PNG"


@pytest.mark.parametrize("frame_id", ["TIT2", "TXXX", "WXXX", "COMM", "USER", "IPLS", "APIC"])
def test_bad_encoding_byte_degrades_only_to_raw(frame_id):
    body = b"\x02whatever\x00"
    content = decode(frame_id, body)

    assert isinstance(content, RawContent)
    assert content.data == body
    assert isinstance(content.error, UnsupportedEncodingError)


def test_empty_body_degrades_to_raw():
    content = decode("TIT2", b"")
    assert isinstance(content, RawContent)
    assert isinstance(content.error, OutOfRangeError)


def test_routing_table():
    assert DECODERS["TALB"] is decode_text
    assert DECODERS["WCOM"] is decode_url
    assert decoder_for("TDRC") is decode_text
    assert decoder_for("WFOO") is decode_url
    assert decoder_for("ZZZZ") is decode_raw
    # Every declared frame is routed somewhere explicitly.
    assert set(FRAME_NAMES) <= set(DECODERS)


@pytest.mark.parametrize(
    "frame_id",
    ["AENC", "COMR", "ENCR", "EQUA", "ETCO", "GEOB", "GRID", "LINK", "MCDI",
     "MLLT", "OWNE", "POSS", "RBUF", "RVAD", "RVRB", "SYLT", "SYTC", "XYZ1"],
)  # fmt: skip
def test_undecoded_frames_are_raw_without_error(frame_id):
    content = decode(frame_id, b"\x01\x02\x03")
    assert content == RawContent(data=b"\x01\x02\x03")
    assert content.error is None
