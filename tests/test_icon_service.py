from __future__ import annotations

import base64
import logging

import pytest
from PIL import Image

from roundicon.config import IconOptions
from roundicon.errors import ExtensionMismatch, InvalidColor, InvalidOption
from roundicon.services.image_service import CMYK_WARNING


def test_default_run_writes_solid_circle_to_downloads(icon_service, downloads_dir) -> None:
    result = icon_service.generate(IconOptions())
    assert result.output_path == downloads_dir / "icon_1.png"
    assert result.data_uri is None
    with Image.open(result.output_path) as written:
        assert written.size == (32, 32)
        rgba = written.convert("RGBA")
        assert rgba.getpixel((0, 0))[3] == 0
        assert rgba.getpixel((16, 16)) == (0xEE, 0x4E, 0x04, 255)


def test_second_run_does_not_overwrite(icon_service, downloads_dir) -> None:
    first = icon_service.generate(IconOptions())
    second = icon_service.generate(IconOptions())
    assert first.output_path != second.output_path
    assert second.output_path == downloads_dir / "icon_2.png"


def test_encoded_only_writes_no_file(icon_service, downloads_dir) -> None:
    result = icon_service.generate(IconOptions(encode=True, colors=("#ff0000",)))
    assert result.output_path is None
    assert result.data_uri.startswith("data:image/png;base64,")
    assert list(downloads_dir.iterdir()) == []


def test_encoded_with_blank_output_writes_no_file(icon_service, downloads_dir) -> None:
    result = icon_service.generate(IconOptions(encode=True, output_path="   "))
    assert result.output_path is None
    assert result.data_uri.startswith("data:image/png;base64,")
    assert list(downloads_dir.iterdir()) == []


def test_encoded_with_output_returns_both(icon_service, tmp_path) -> None:
    target = tmp_path / "out" / "favicon.png"
    result = icon_service.generate(IconOptions(output_path=str(target), encode=True, size=64))
    assert result.output_path == target
    payload = base64.b64decode(result.data_uri.split(",", 1)[1])
    assert payload == target.read_bytes()


def test_source_image_and_warnings(icon_service, make_image, tmp_path) -> None:
    source = make_image("print.jpg", size=(40, 30), mode="CMYK", color=(0, 0, 0, 0), image_format="JPEG")
    result = icon_service.generate(
        IconOptions(input_path=str(source), colors=("#000000", "#ffffff"), output_path=str(tmp_path), quiet=True)
    )
    assert result.output_path == tmp_path / "icon_1.png"
    assert CMYK_WARNING in result.warnings
    assert len(result.composited.geometry.drawn_rings) == 2


def test_invalid_color_aborts_before_writing(icon_service, downloads_dir) -> None:
    with pytest.raises(InvalidColor):
        icon_service.generate(IconOptions(colors=("#12345",)))
    assert list(downloads_dir.iterdir()) == []


def test_bad_source_aborts_before_writing(icon_service, make_image, downloads_dir) -> None:
    source = make_image("fake.gif", image_format="PNG")
    with pytest.raises(ExtensionMismatch):
        icon_service.generate(IconOptions(input_path=str(source)))
    assert list(downloads_dir.iterdir()) == []


@pytest.mark.parametrize("options", [IconOptions(size=20), IconOptions(border_width=0), IconOptions(border_width=11)])
def test_out_of_range_options(icon_service, options) -> None:
    with pytest.raises(InvalidOption):
        icon_service.generate(options)


def test_report_is_logged_unless_quiet(icon_service, caplog) -> None:
    caplog.set_level(logging.INFO, logger="roundicon")
    icon_service.generate(IconOptions(colors=("#ff0000",)))
    messages = [record.getMessage() for record in caplog.records]
    assert any(message.startswith("Output:") for message in messages)
    assert any("#ff0000" in message for message in messages)

    caplog.clear()
    icon_service.generate(IconOptions(quiet=True))
    assert not caplog.records


def test_compose_icon_does_not_touch_disk(icon_service, downloads_dir) -> None:
    composited = icon_service.compose_icon(IconOptions(size=128, colors=("#00ff00",)))
    assert composited.image.size == (128, 128)
    assert list(downloads_dir.iterdir()) == []


def test_generate_parses_colors_once(icon_service, monkeypatch) -> None:
    import roundicon.services.icon_service as icon_module

    calls = []
    original = icon_module.parse_colors

    def counting(colors):
        calls.append(tuple(colors))
        return original(colors)

    monkeypatch.setattr(icon_module, "parse_colors", counting)
    icon_service.generate(IconOptions(colors=("#ff0000", "#0000ff"), quiet=True))
    assert calls == [("#ff0000", "#0000ff")]
