"""Построение круглой иконки: круг с изображением или заливкой и концентрические кольца.

Принципы:
- SRP: только геометрия и растеризация, без ввода-вывода.
- Сглаживание: покрытие пикселя считается по сетке 4×4 подвыборок (векторно, numpy).
- Смешивание: оператор «over» в премультиплицированной альфе.
"""
from __future__ import annotations

from dataclasses import replace
from typing import Optional, Sequence

import numpy as np
from PIL import Image

from roundicon.config import FALLBACK_COLOR
from roundicon.models.icon_model import CanvasSpec, ParsedColor, RingGeometry, RingSpec
from roundicon.models.image_model import CompositedImage

SUPERSAMPLE = 4
MIN_IMAGE_SIZE = 4


def compute_geometry(canvas: CanvasSpec) -> RingGeometry:
    """Раскладывает круг и кольца внутри холста.

    Если после отступов на круг остаётся меньше `MIN_IMAGE_SIZE` пикселей, отступ
    сокращается до 1 px; кольца, не помещающиеся в холст, помечаются как неотрисовываемые.
    """
    total_border_width = canvas.border_width * canvas.color_count
    margin = total_border_width + 2
    image_size = canvas.size - 2 * margin
    image_offset = margin
    degenerate = image_size < MIN_IMAGE_SIZE
    if degenerate:
        margin = 1
        image_size = canvas.size - 2
        image_offset = 1

    rings = []
    for index in range(canvas.color_count):
        ring_size = image_size + 2 * (index + 1) * canvas.border_width
        ring_offset = (canvas.size - ring_size) / 2
        drawn = ring_offset >= 0 and ring_offset + ring_size <= canvas.size
        rings.append(RingSpec(index=index, size=ring_size, offset=ring_offset, drawn=drawn))

    return RingGeometry(
        canvas_size=canvas.size,
        border_width=canvas.border_width,
        total_border_width=total_border_width,
        margin=margin,
        image_size=image_size,
        image_offset=image_offset,
        degenerate=degenerate,
        rings=tuple(rings),
    )


class ComposeService:
    def compose(
        self,
        canvas: CanvasSpec,
        source: Optional[Image.Image],
        colors: Sequence[ParsedColor],
        border_width: Optional[int] = None,
    ) -> CompositedImage:
        """Рисует иконку размером `canvas.size × canvas.size` в режиме RGBA.

        Args:
            canvas: Размер холста и толщина кольца.
            source: Исходное изображение или None для сплошного круга цвета `FALLBACK_COLOR`.
            colors: Цвета колец от внутреннего к внешнему; их число определяет число колец.
            border_width: Толщина кольца, если отличается от `canvas.border_width`.

        Returns:
            `CompositedImage`; вне круга и колец холст полностью прозрачен.
        """
        canvas = replace(
            canvas,
            border_width=canvas.border_width if border_width is None else border_width,
            color_count=len(colors),
        )
        geometry = compute_geometry(canvas)
        size = canvas.size
        distances = self._sample_distances(size, geometry.center)

        # premultiplied RGBA, 0..1
        layer = np.zeros((size, size, 4), dtype=np.float64)

        disk_radius = geometry.image_size / 2
        disk = self._coverage(distances <= disk_radius, size)
        if source is None:
            fill = np.broadcast_to(self._rgb(ParsedColor.from_hex(FALLBACK_COLOR)), (size, size, 3))
            self._over(layer, fill, disk)
        else:
            rgb, alpha = self._place_source(source, geometry)
            self._over(layer, rgb, alpha * disk)

        half_width = geometry.border_width / 2
        for ring, color in zip(geometry.rings, colors):
            if not ring.drawn:
                continue
            stroke = self._coverage(np.abs(distances - ring.radius) <= half_width, size)
            fill = np.broadcast_to(self._rgb(color), (size, size, 3))
            self._over(layer, fill, stroke)

        return CompositedImage(image=self._to_image(layer), size=size, geometry=geometry)

    # ---------- Вспомогательные функции ----------
    def _sample_distances(self, size: int, center: float) -> np.ndarray:
        """Расстояния от центра холста до центров подвыборок, форма (size*SS, size*SS)."""
        positions = (np.arange(size * SUPERSAMPLE) + 0.5) / SUPERSAMPLE - center
        return np.hypot(positions[np.newaxis, :], positions[:, np.newaxis])

    def _coverage(self, inside: np.ndarray, size: int) -> np.ndarray:
        """Доля подвыборок внутри фигуры для каждого пикселя, 0..1."""
        blocks = inside.reshape(size, SUPERSAMPLE, size, SUPERSAMPLE)
        return blocks.mean(axis=(1, 3))

    def _rgb(self, color: ParsedColor) -> np.ndarray:
        return np.array(color.rgb, dtype=np.float64) / 255.0

    def _place_source(self, source: Image.Image, geometry: RingGeometry):
        """Центральный квадрат источника, масштабированный бикубически в квадрат круга."""
        width, height = source.size
        src_size = min(width, height)
        left = (width - src_size) // 2
        top = (height - src_size) // 2
        square = source.convert("RGBA").crop((left, top, left + src_size, top + src_size))
        target = geometry.image_size
        scaled = square.resize((target, target), Image.Resampling.BICUBIC)
        pixels = np.asarray(scaled, dtype=np.float64) / 255.0

        size = geometry.canvas_size
        rgb = np.zeros((size, size, 3), dtype=np.float64)
        alpha = np.zeros((size, size), dtype=np.float64)
        start = geometry.image_offset
        stop = start + target
        rgb[start:stop, start:stop] = pixels[..., :3]
        alpha[start:stop, start:stop] = pixels[..., 3]
        return rgb, alpha

    def _over(self, dst: np.ndarray, rgb: np.ndarray, alpha: np.ndarray) -> None:
        """Накладывает слой (прямая альфа) поверх `dst` (премультиплицированная альфа) на месте."""
        a = alpha[..., np.newaxis]
        dst[..., :3] = rgb * a + dst[..., :3] * (1.0 - a)
        dst[..., 3:] = a + dst[..., 3:] * (1.0 - a)

    def _to_image(self, layer: np.ndarray) -> Image.Image:
        alpha = layer[..., 3:]
        with np.errstate(divide="ignore", invalid="ignore"):
            rgb = np.where(alpha > 0, layer[..., :3] / alpha, 0.0)
        out = np.concatenate([rgb, alpha], axis=-1)
        out = np.clip(np.rint(out * 255.0), 0, 255).astype(np.uint8)
        return Image.fromarray(out)
