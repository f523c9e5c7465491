from __future__ import annotations

import pytest

from roundicon.errors import InvalidColor
from roundicon.models.icon_model import ParsedColor
from roundicon.services.color_service import parse_colors, split_color_argument, split_color_list


def test_parse_colors_keeps_order_and_is_case_insensitive() -> None:
    parsed = parse_colors(["#FF0000", "#00ff00", " #0000Ff "])
    assert parsed == (
        ParsedColor(255, 0, 0),
        ParsedColor(0, 255, 0),
        ParsedColor(0, 0, 255),
    )


def test_parse_colors_empty_list() -> None:
    assert parse_colors([]) == ()


def test_parse_colors_accepts_twenty() -> None:
    assert len(parse_colors(["#123456"] * 20)) == 20


def test_parse_colors_rejects_more_than_twenty() -> None:
    with pytest.raises(InvalidColor):
        parse_colors(["#123456"] * 21)


@pytest.mark.parametrize("value", ["", "   ", "ff0000", "#ff000", "#ff00000", "#gg0000", "red"])
def test_parse_colors_rejects_malformed(value: str) -> None:
    with pytest.raises(InvalidColor):
        parse_colors(["#000000", value])


def test_parsed_color_hex_round_trip() -> None:
    color = ParsedColor.from_hex("#EE4E04")
    assert color.rgb == (0xEE, 0x4E, 0x04)
    assert color.hex == "#ee4e04"


def test_split_color_list_handles_commas_and_spaces() -> None:
    assert split_color_list(" #ff0000, #00ff00;#0000ff  #ffffff ") == [
        "#ff0000",
        "#00ff00",
        "#0000ff",
        "#ffffff",
    ]
    assert split_color_list("") == []


def test_split_color_argument_keeps_empty_segments() -> None:
    assert split_color_argument("#ff0000, #00ff00") == ["#ff0000", "#00ff00"]
    assert split_color_argument("#ff0000,,") == ["#ff0000", "", ""]
    with pytest.raises(InvalidColor):
        parse_colors(split_color_argument("   "))
