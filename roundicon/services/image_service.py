"""Проверка и загрузка исходных изображений с диска.

Принципы:
- SRP: класс отвечает только за проверку файла и извлечение первого кадра.
- Проверки идут от дешёвых к дорогим: путь, размер, сигнатура, расширение, декодирование.
- Провал любой проверки вызывает исключение из `roundicon.errors`; предупреждения копятся в результате.
"""
from __future__ import annotations

from pathlib import Path
from typing import List, Tuple

from PIL import Image

from roundicon.config import HEADER_BYTES, MAX_FILE_BYTES, MAX_PIXELS
from roundicon.errors import (
    DecodeFailure,
    DimensionError,
    EmptyFile,
    ExtensionMismatch,
    FileNotFound,
    FileTooLarge,
    UnrecognizedFormat,
)
from roundicon.logging import get_logger
from roundicon.models.icon_model import ImageKind
from roundicon.models.image_model import ImageData, ValidationResult
from roundicon.services.format_sniffer import find_signature, read_header
from roundicon.services.path_service import clean_path_text

logger = get_logger("image")

CMYK_WARNING = "CMYK image detected: colors may not convert accurately"
ANIMATED_GIF_WARNING = "Animated GIF detected: only first frame will be used"

# PIL сообщает о повреждённых файлах разными типами исключений
_DECODE_ERRORS = (OSError, ValueError, SyntaxError)


class ImageService:
    def validate(self, file_path: str | Path, quiet: bool = False) -> ValidationResult:
        """Проверяет, что файл является поддерживаемым и декодируемым изображением.

        Args:
            file_path: Путь до файла изображения.
            quiet: Не выводить предупреждения в лог (на результат не влияет).

        Returns:
            `ValidationResult` с обнаруженным форматом и предупреждениями.

        Raises:
            InvalidPath, FileNotFound, FileTooLarge, EmptyFile, UnrecognizedFormat,
            ExtensionMismatch, DecodeFailure, DimensionError.
        """
        result, _rgba, _mode, _size = self._inspect(file_path, quiet, keep_pixels=False)
        return result

    def load_image(self, file_path: str | Path, quiet: bool = False) -> ImageData:
        """Проверяет изображение и возвращает его первый кадр вместе с метаданными.

        Returns:
            `ImageData` c `PIL.Image.Image` (в режиме RGBA), размерами, исходным режимом и размером файла.
        """
        result, rgba, mode, size_bytes = self._inspect(file_path, quiet, keep_pixels=True)
        width, height = rgba.size
        return ImageData(
            path=self._existing_file(file_path),
            pil_image=rgba,
            width=width,
            height=height,
            mode=mode,
            size_bytes=size_bytes,
            validation=result,
        )

    # ---- Helpers ----
    def _inspect(self, file_path: str | Path, quiet: bool, keep_pixels: bool):
        path = self._existing_file(file_path)
        size_bytes = self._check_file_size(path)
        kind = self._check_signature(path)

        warnings: List[str] = []
        try:
            with Image.open(path) as pil_image:
                self._check_dimensions(path, pil_image.size)
                mode = pil_image.mode
                if mode == "CMYK":
                    warnings.append(CMYK_WARNING)
                if path.suffix.lower() == ".gif" and getattr(pil_image, "n_frames", 1) > 1:
                    warnings.append(ANIMATED_GIF_WARNING)
                pil_image.seek(0)
                if keep_pixels:
                    rgba = pil_image.convert("RGBA")
                else:
                    pil_image.load()
                    rgba = None
        except DimensionError:
            raise
        except Image.DecompressionBombError as exc:
            raise DimensionError(f"Изображение слишком большое: {path}: {exc}") from exc
        except _DECODE_ERRORS as exc:
            raise DecodeFailure(f"Не удалось декодировать изображение {path}: {exc}") from exc

        if not quiet:
            for warning in warnings:
                logger.warning("%s (%s)", warning, path)
        result = ValidationResult(ok=True, kind=kind, warnings=tuple(warnings))
        return result, rgba, mode, size_bytes

    def _existing_file(self, file_path: str | Path) -> Path:
        path = Path(clean_path_text(str(file_path))).expanduser()
        if not path.exists() or not path.is_file():
            raise FileNotFound(f"Файл не найден: {path}")
        return path.absolute()

    def _check_file_size(self, path: Path) -> int:
        size_bytes = path.stat().st_size
        if size_bytes > MAX_FILE_BYTES:
            limit_mib = MAX_FILE_BYTES // (1024 * 1024)
            raise FileTooLarge(f"Файл больше {limit_mib} MiB ({size_bytes} байт): {path}")
        if size_bytes == 0:
            raise EmptyFile(f"Файл пуст: {path}")
        return size_bytes

    def _check_signature(self, path: Path) -> ImageKind:
        header = read_header(path, HEADER_BYTES)
        if len(header) < 2:
            raise UnrecognizedFormat(f"Не удалось прочитать заголовок файла: {path}")
        signature = find_signature(header)
        if signature is None:
            raise UnrecognizedFormat(f"Файл не является изображением поддерживаемого формата: {path}")
        extension = path.suffix.lower()
        if extension not in signature.extensions:
            expected = ", ".join(sorted(signature.extensions))
            raise ExtensionMismatch(
                f"Содержимое файла: {signature.kind.value}, но расширение '{path.suffix}' "
                f"(ожидается {expected}): {path}"
            )
        return signature.kind

    def _check_dimensions(self, path: Path, size: Tuple[int, int]) -> None:
        width, height = size
        if width == 0 or height == 0:
            raise DimensionError(f"Изображение имеет нулевой размер {width}x{height}: {path}")
        if width * height > MAX_PIXELS:
            raise DimensionError(
                f"Изображение слишком большое: {width}x{height} пикселей (максимум {MAX_PIXELS}): {path}"
            )
