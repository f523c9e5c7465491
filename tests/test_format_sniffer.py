from __future__ import annotations

import pytest

from roundicon.models.icon_model import ImageKind
from roundicon.services.format_sniffer import SIGNATURES, classify, find_signature, read_header


@pytest.mark.parametrize("signature", SIGNATURES, ids=lambda s: s.kind.value)
def test_classify_recognizes_canonical_signature(signature) -> None:
    prefix = (signature.magic + b"\x00" * 8)[:8]
    assert classify(prefix) == signature.kind


@pytest.mark.parametrize("signature", SIGNATURES, ids=lambda s: s.kind.value)
def test_classify_rejects_changed_first_byte(signature) -> None:
    mutated = bytes([signature.magic[0] ^ 0xFF]) + signature.magic[1:]
    prefix = (mutated + b"\x00" * 8)[:8]
    assert classify(prefix) is None


def test_classify_short_prefix_is_unknown() -> None:
    assert classify(b"") is None
    assert classify(b"\x89PN") is None
    assert classify(b"GIF8") is None


def test_two_byte_bitmap_signature_matches() -> None:
    assert classify(b"BM") == ImageKind.BMP


def test_gif_versions_are_distinct_kinds() -> None:
    assert classify(b"GIF87a\x01\x00") == ImageKind.GIF87
    assert classify(b"GIF89a\x01\x00") == ImageKind.GIF89


def test_jpeg_signature_accepts_both_extensions() -> None:
    signature = find_signature(b"\xff\xd8\xff\xe0\x00\x10JF")
    assert signature is not None
    assert signature.extensions == frozenset({".jpg", ".jpeg"})


def test_read_header_reads_only_prefix(tmp_path) -> None:
    path = tmp_path / "blob.bin"
    path.write_bytes(b"0123456789abcdef")
    assert read_header(path) == b"01234567"
    assert read_header(path, 2) == b"01"
