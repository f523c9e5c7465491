from __future__ import annotations

import numpy as np
import pytest
from PIL import Image

from roundicon.models.icon_model import CanvasSpec, ParsedColor
from roundicon.services.compose_service import ComposeService, compute_geometry

FALLBACK_RGB = (0xEE, 0x4E, 0x04)
RED = ParsedColor(255, 0, 0)
BLUE = ParsedColor(0, 0, 255)


@pytest.fixture
def composer() -> ComposeService:
    return ComposeService()


def _pixels(image: Image.Image) -> np.ndarray:
    return np.asarray(image, dtype=np.uint8)


def _visible_colors(image: Image.Image) -> set:
    pixels = _pixels(image)
    visible = pixels[pixels[..., 3] > 0][:, :3]
    return {tuple(int(v) for v in rgb) for rgb in visible}


# ---- geometry ----
def test_geometry_without_rings() -> None:
    geometry = compute_geometry(CanvasSpec(size=32, border_width=3, color_count=0))
    assert (geometry.margin, geometry.image_size, geometry.image_offset) == (2, 28, 2)
    assert geometry.degenerate is False
    assert geometry.rings == ()


def test_geometry_degenerate_fallback() -> None:
    geometry = compute_geometry(CanvasSpec(size=16, border_width=10, color_count=20))
    assert geometry.total_border_width == 200
    assert geometry.degenerate is True
    assert (geometry.margin, geometry.image_size, geometry.image_offset) == (1, 14, 1)
    assert len(geometry.rings) == 20
    assert geometry.drawn_rings == ()


def test_geometry_rings_grow_outwards_and_fit() -> None:
    geometry = compute_geometry(CanvasSpec(size=64, border_width=3, color_count=2))
    assert (geometry.margin, geometry.image_size) == (8, 48)
    sizes = [ring.size for ring in geometry.rings]
    assert sizes == [54, 60]
    assert [ring.offset for ring in geometry.rings] == [5.0, 2.0]
    assert all(ring.drawn for ring in geometry.rings)
    radii = [ring.radius for ring in geometry.rings]
    assert radii == sorted(radii) and len(set(radii)) == len(radii)


@pytest.mark.parametrize("size", [16, 24, 32, 48, 64, 128])
@pytest.mark.parametrize("border_width", [1, 3, 10])
@pytest.mark.parametrize("color_count", [0, 1, 5, 20])
def test_geometry_never_leaves_canvas(size, border_width, color_count) -> None:
    geometry = compute_geometry(CanvasSpec(size, border_width, color_count))
    assert geometry.image_offset >= 1
    assert geometry.image_offset + geometry.image_size <= size
    assert geometry.image_size >= 4
    for ring in geometry.drawn_rings:
        assert ring.offset >= 0
        assert ring.offset + ring.size <= size


# ---- rendering ----
def test_solid_circle_without_source_or_colors(composer) -> None:
    result = composer.compose(CanvasSpec(32, 3, 0), None, [])
    image = result.image
    assert image.mode == "RGBA"
    assert image.size == (32, 32)
    assert result.size == 32
    for corner in ((0, 0), (31, 0), (0, 31), (31, 31)):
        assert image.getpixel(corner)[3] == 0
    assert image.getpixel((16, 16)) == FALLBACK_RGB + (255,)
    assert _visible_colors(image) == {FALLBACK_RGB}


def test_circle_edge_is_antialiased(composer) -> None:
    image = composer.compose(CanvasSpec(32, 3, 0), None, []).image
    alpha = _pixels(image)[..., 3]
    assert ((alpha > 0) & (alpha < 255)).any()


def test_rings_drawn_innermost_first(composer) -> None:
    result = composer.compose(CanvasSpec(64, 3, 2), None, [RED, BLUE])
    image = result.image
    # ring radii 27 and 30 around the canvas centre (32, 32)
    assert image.getpixel((59, 32)) == (255, 0, 0, 255)
    assert image.getpixel((62, 32)) == (0, 0, 255, 255)
    assert image.getpixel((32 - 28, 32)) == (255, 0, 0, 255)
    assert image.getpixel((32, 32)) == FALLBACK_RGB + (255,)
    assert image.getpixel((0, 0))[3] == 0
    assert len(result.geometry.drawn_rings) == 2


def test_no_ring_pixels_without_colors(composer) -> None:
    image = composer.compose(CanvasSpec(64, 3, 0), None, []).image
    assert _visible_colors(image) == {FALLBACK_RGB}


def test_degenerate_fallback_skips_rings(composer) -> None:
    result = composer.compose(CanvasSpec(16, 10, 20), None, [RED] * 20)
    assert result.geometry.degenerate is True
    assert _visible_colors(result.image) == {FALLBACK_RGB}


def test_border_width_argument_overrides_canvas(composer) -> None:
    result = composer.compose(CanvasSpec(64, 3, 0), None, [RED], border_width=5)
    assert result.geometry.border_width == 5
    assert result.geometry.rings[0].size == result.geometry.image_size + 10


def test_source_is_center_cropped_and_clipped(composer) -> None:
    source = Image.new("RGB", (30, 10), (255, 0, 0))
    source.paste((0, 255, 0), (10, 0, 20, 10))
    source.paste((0, 0, 255), (20, 0, 30, 10))
    image = composer.compose(CanvasSpec(32, 3, 0), source, []).image
    assert image.getpixel((16, 16)) == (0, 255, 0, 255)
    # corner of the inscribed square lies outside the circle
    assert image.getpixel((2, 2))[3] == 0
    assert image.getpixel((0, 0))[3] == 0
    opaque = _pixels(image)
    opaque = opaque[opaque[..., 3] == 255][:, :3]
    assert {tuple(int(v) for v in rgb) for rgb in opaque} == {(0, 255, 0)}


def test_source_transparency_is_kept(composer) -> None:
    source = Image.new("RGBA", (20, 20), (0, 0, 0, 0))
    image = composer.compose(CanvasSpec(32, 3, 1), source, [RED]).image
    assert image.getpixel((16, 16))[3] == 0
    assert _visible_colors(image) == {(255, 0, 0)}
