"""Определение формата изображения по магическим байтам.

Принципы:
- SRP: только побайтовое сравнение префикса с фиксированной таблицей, без кодеков.
- Стоимость зависит от размера таблицы, а не от размера файла.
"""
from __future__ import annotations

from pathlib import Path
from typing import Optional, Tuple

from roundicon.config import HEADER_BYTES
from roundicon.models.icon_model import ImageKind, ImageSignature

_JPEG_EXT = frozenset({".jpg", ".jpeg"})
_GIF_EXT = frozenset({".gif"})
_TIFF_EXT = frozenset({".tiff", ".tif"})

# Порядок объявления задаёт приоритет при совпадении нескольких записей.
SIGNATURES: Tuple[ImageSignature, ...] = (
    ImageSignature(ImageKind.JPEG, b"\xff\xd8\xff", _JPEG_EXT),
    ImageSignature(ImageKind.PNG, b"\x89PNG\r\n\x1a\n", frozenset({".png"})),
    ImageSignature(ImageKind.GIF87, b"GIF87a", _GIF_EXT),
    ImageSignature(ImageKind.GIF89, b"GIF89a", _GIF_EXT),
    ImageSignature(ImageKind.BMP, b"BM", frozenset({".bmp"})),
    ImageSignature(ImageKind.TIFF_LE, b"II*\x00", _TIFF_EXT),
    ImageSignature(ImageKind.TIFF_BE, b"MM\x00*", _TIFF_EXT),
    ImageSignature(ImageKind.ICO, b"\x00\x00\x01\x00", frozenset({".ico"})),
)


def find_signature(prefix: bytes) -> Optional[ImageSignature]:
    """Возвращает первую запись таблицы, чьи магические байты полностью совпали с началом `prefix`."""
    for signature in SIGNATURES:
        if prefix[: len(signature.magic)] == signature.magic:
            return signature
    return None


def classify(prefix: bytes) -> Optional[ImageKind]:
    """Классифицирует префикс файла.

    Args:
        prefix: Первые байты файла (обычно 8).

    Returns:
        Формат или None, если сигнатура неизвестна. Префикс короче сигнатуры с ней не совпадает.
    """
    signature = find_signature(prefix)
    return signature.kind if signature else None


def read_header(path: Path, length: int = HEADER_BYTES) -> bytes:
    """Читает не более `length` байт с начала файла."""
    with open(path, "rb") as handle:
        return handle.read(length)
