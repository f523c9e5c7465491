"""Модели данных иконки: сигнатуры форматов, цвета, холст, геометрия колец, пути.

Принципы:
- SRP: только структуры данных, без ввода-вывода.
- Чистый код: неизменяемость (`frozen=True`) для предсказуемости.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import FrozenSet, Tuple


class ImageKind(str, Enum):
    """Формат, определённый по магическим байтам."""
    JPEG = "jpeg"
    PNG = "png"
    GIF87 = "gif87"
    GIF89 = "gif89"
    BMP = "bmp"
    TIFF_LE = "tiff-le"
    TIFF_BE = "tiff-be"
    ICO = "ico"


@dataclass(frozen=True)
class ImageSignature:
    """Запись таблицы сигнатур: формат, магические байты, допустимые расширения."""
    kind: ImageKind
    magic: bytes
    extensions: FrozenSet[str]


@dataclass(frozen=True)
class ParsedColor:
    """Цвет кольца, 8 бит на канал."""
    red: int
    green: int
    blue: int

    @classmethod
    def from_hex(cls, value: str) -> "ParsedColor":
        """Разбирает строку вида `#RRGGBB` (формат уже проверен вызывающим)."""
        digits = value.lstrip("#")
        return cls(int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16))

    @property
    def rgb(self) -> Tuple[int, int, int]:
        return self.red, self.green, self.blue

    @property
    def hex(self) -> str:
        return f"#{self.red:02x}{self.green:02x}{self.blue:02x}"


@dataclass(frozen=True)
class CanvasSpec:
    """Холст иконки.

    Fields:
        size: Сторона квадратного холста, px.
        border_width: Толщина одного кольца, px.
        color_count: Количество колец.
    """
    size: int
    border_width: int
    color_count: int


@dataclass(frozen=True)
class RingSpec:
    """Одно кольцо: диаметр, отступ ограничивающего квадрата и признак отрисовки."""
    index: int
    size: int
    offset: float
    drawn: bool

    @property
    def radius(self) -> float:
        return self.size / 2


@dataclass(frozen=True)
class RingGeometry:
    """Раскладка круга и колец внутри холста.

    Fields:
        total_border_width: Суммарная толщина всех колец.
        margin: Отступ круга от края холста.
        image_size: Диаметр внутреннего круга.
        image_offset: Координата левого верхнего угла квадрата круга.
        degenerate: Включён ли запасной режим с минимальным отступом.
        rings: Кольца от внутреннего к внешнему.
    """
    canvas_size: int
    border_width: int
    total_border_width: int
    margin: int
    image_size: int
    image_offset: int
    degenerate: bool
    rings: Tuple[RingSpec, ...]

    @property
    def center(self) -> float:
        return self.canvas_size / 2

    @property
    def drawn_rings(self) -> Tuple[RingSpec, ...]:
        return tuple(ring for ring in self.rings if ring.drawn)


@dataclass(frozen=True)
class ResolvedPath:
    """Абсолютный путь результата.

    Вычисляется заново при каждом вызове по текущему состоянию файловой системы;
    между проверкой и записью файл может появиться (TOCTOU), это допустимо.
    """
    path: Path
    is_newly_generated: bool
