"""Модели данных для изображений.

Принципы:
- SRP: только структура данных, без логики обработки.
- Чистый код: неизменяемость (`frozen=True`) для предсказуемости.
"""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

from PIL import Image

from roundicon.models.icon_model import ImageKind, RingGeometry


@dataclass(frozen=True)
class ValidationResult:
    """Итог проверки исходного файла.

    Провалы проверки выражаются исключениями, поэтому возвращённый результат
    всегда имеет `ok=True`; поле оставлено для единообразия отчётов.
    """
    ok: bool
    kind: Optional[ImageKind]
    warnings: Tuple[str, ...] = ()
    failure_reason: Optional[str] = None


@dataclass(frozen=True)
class ImageData:
    """Неизменяемая модель изображения и его метаданные.

    Fields:
        path: Путь к исходному файлу.
        pil_image: Первый кадр в режиме RGBA.
        width: Ширина, px.
        height: Высота, px.
        mode: Исходный режим PIL до конвертации, например "CMYK".
        size_bytes: Размер файла.
        validation: Результат проверки с предупреждениями.
    """
    path: Path
    pil_image: Image.Image
    width: int
    height: int
    mode: str
    size_bytes: int
    validation: ValidationResult


@dataclass(frozen=True)
class CompositedImage:
    """Готовая иконка: RGBA-холст и геометрия, по которой он нарисован."""
    image: Image.Image
    size: int
    geometry: RingGeometry


@dataclass(frozen=True)
class IconResult:
    """Итог генерации: путь файла и/или data URI, предупреждения и сама иконка."""
    composited: CompositedImage
    output_path: Optional[Path] = None
    data_uri: Optional[str] = None
    warnings: Tuple[str, ...] = ()
