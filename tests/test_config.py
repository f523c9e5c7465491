from __future__ import annotations

import pytest

from roundicon.config import ALLOWED_SIZES, IconOptions
from roundicon.errors import InvalidOption


@pytest.mark.parametrize("size", ALLOWED_SIZES)
def test_allowed_sizes_validate(size: int) -> None:
    assert IconOptions(size=size).validated().size == size


def test_validated_freezes_colors_to_tuple() -> None:
    options = IconOptions(colors=["#ffffff"]).validated()
    assert options.colors == ("#ffffff",)


def test_invalid_size_message_lists_allowed_sizes() -> None:
    with pytest.raises(InvalidOption) as excinfo:
        IconOptions(size=100).validated()
    assert "128" in str(excinfo.value)


@pytest.mark.parametrize(
    ("encode", "output_path", "expected"),
    [(False, None, True), (True, None, False), (True, "   ", False), (True, "out.png", True), (False, "out.png", True)],
)
def test_wants_file(encode, output_path, expected) -> None:
    assert IconOptions(encode=encode, output_path=output_path).wants_file is expected
