import struct
import sys
from pathlib import Path

import pytest


def pytest_configure():
    # This repo uses a src/ layout, so when running tests without an editable
    # install, we add <repo>/src to sys.path.
    repo_root = Path(__file__).resolve().parents[2]
    src_path = str(repo_root / "src")
    if src_path not in sys.path:
        sys.path.insert(0, src_path)


def synchsafe(n: int) -> bytes:
    return bytes([(n >> 21) & 0x7F, (n >> 14) & 0x7F, (n >> 7) & 0x7F, n & 0x7F])


def _frame(frame_id: str, body: bytes, *, flags: int = 0, size=None) -> bytes:
    declared = len(body) if size is None else size
    return frame_id.encode("ascii") + struct.pack(">IH", declared, flags) + body


def _tag(
    *frames: bytes,
    version: int = 3,
    revision: int = 0,
    flags: int = 0,
    padding: int = 0,
    extended: bytes = b"",
    size=None,
) -> bytes:
    body = extended + b"".join(frames) + b"\x00" * padding
    declared = len(body) if size is None else size
    return b"ID3" + bytes([version, revision, flags]) + synchsafe(declared) + body


def _utf16(text: str, *, terminate: bool = False) -> bytes:
    """UTF-16 with a little-endian BOM, the way most taggers write encoding 1."""
    data = b"\xff\xfe" + text.encode("utf-16-le")
    return data + (b"\x00\x00" if terminate else b"")


@pytest.fixture
def make_frame():
    return _frame


@pytest.fixture
def make_tag():
    return _tag


@pytest.fixture
def utf16():
    return _utf16


@pytest.fixture
def as_synchsafe():
    return synchsafe
