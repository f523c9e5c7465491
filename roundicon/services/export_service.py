"""Сохранение иконки в PNG-файл или кодирование в data URI.

Принципы:
- SRP: только запись и кодирование; путь уже разрешён `PathResolver`.
- Временный файл удаляется при любом выходе (успех, ошибка, прерывание).
"""
from __future__ import annotations

import base64
import contextlib
import os
import tempfile
from pathlib import Path
from typing import Optional, Union

from roundicon.config import DATA_URI_PREFIX
from roundicon.errors import EncodeOrWriteFailure, InvalidPath
from roundicon.logging import get_logger
from roundicon.models.icon_model import ResolvedPath
from roundicon.models.image_model import CompositedImage

logger = get_logger("export")


class ExportService:
    def export(
        self,
        image: CompositedImage,
        destination: Optional[ResolvedPath],
        want_encoded: bool = False,
    ) -> Union[Path, str]:
        """Записывает иконку по пути назначения либо возвращает её как data URI.

        Args:
            image: Готовая иконка.
            destination: Разрешённый путь или None.
            want_encoded: При отсутствии пути вернуть строку `data:image/png;base64,...`.

        Returns:
            Путь к записанному файлу или data URI.

        Raises:
            InvalidPath: нет ни пути, ни запроса на кодирование.
            EncodeOrWriteFailure: ошибка файловой системы или кодека.
        """
        if destination is not None:
            return self.write_png(image, destination.path)
        if not want_encoded:
            raise InvalidPath("Не указан путь сохранения, и кодирование в base64 не запрошено")
        return self.encode_data_uri(image)

    def write_png(self, image: CompositedImage, path: Path) -> Path:
        """Создаёт недостающие каталоги и пишет PNG; недописанный файл удаляется."""
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise EncodeOrWriteFailure(f"Не удалось создать каталог {path.parent}: {exc}") from exc
        try:
            image.image.save(path, format="PNG")
        except (OSError, ValueError) as exc:
            _remove_quietly(path)
            raise EncodeOrWriteFailure(f"Не удалось записать PNG {path}: {exc}") from exc
        logger.debug("Wrote %s", path)
        return path

    def encode_data_uri(self, image: CompositedImage) -> str:
        """Пишет PNG во временный файл, читает обратно и кодирует в base64."""
        handle, temp_name = tempfile.mkstemp(prefix="roundicon_", suffix=".png")
        os.close(handle)
        temp_path = Path(temp_name)
        try:
            self.write_png(image, temp_path)
            try:
                payload = temp_path.read_bytes()
            except OSError as exc:
                raise EncodeOrWriteFailure(f"Не удалось прочитать {temp_path}: {exc}") from exc
            return to_data_uri(payload)
        finally:
            _remove_quietly(temp_path)


def to_data_uri(payload: bytes) -> str:
    return DATA_URI_PREFIX + base64.b64encode(payload).decode("ascii")


def _remove_quietly(path: Path) -> None:
    with contextlib.suppress(OSError):
        path.unlink()
