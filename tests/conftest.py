from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Optional, Tuple

import pytest
from PIL import Image

from roundicon.services.icon_service import IconService
from roundicon.services.path_service import PathResolver

ImageFactory = Callable[..., Path]


@pytest.fixture(autouse=True)
def _reset_roundicon_logger():
    """Let caplog see roundicon records even after the CLI configured its own handler."""
    logger = logging.getLogger("roundicon")
    yield
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def make_image(tmp_path: Path) -> ImageFactory:
    """Write a solid image to tmp_path and return its path."""

    def _make(
        name: str,
        size: Tuple[int, int] = (10, 6),
        mode: str = "RGB",
        color: object = (10, 200, 30),
        image_format: Optional[str] = None,
    ) -> Path:
        path = tmp_path / name
        Image.new(mode, size, color).save(path, format=image_format)
        return path

    return _make


@pytest.fixture
def downloads_dir(tmp_path_factory: pytest.TempPathFactory) -> Path:
    return tmp_path_factory.mktemp("downloads")


@pytest.fixture
def icon_service(downloads_dir: Path) -> IconService:
    return IconService(path_resolver=PathResolver(downloads_locator=lambda: downloads_dir))
