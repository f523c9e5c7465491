"""Сквозной сценарий генерации иконки.

Порядок: проверка источника → разбор цветов → разрешение пути → построение → экспорт.
Любая ошибка проверки прерывает весь сценарий; предупреждения только выводятся.
"""
from __future__ import annotations

from pathlib import Path
from typing import Optional, Tuple

from roundicon.config import IconOptions
from roundicon.errors import EncodeOrWriteFailure
from roundicon.logging import get_logger
from roundicon.models.icon_model import CanvasSpec, ParsedColor
from roundicon.models.image_model import CompositedImage, IconResult, ImageData
from roundicon.services.color_service import parse_colors
from roundicon.services.compose_service import ComposeService
from roundicon.services.export_service import ExportService, to_data_uri
from roundicon.services.image_service import ImageService
from roundicon.services.path_service import PathResolver

logger = get_logger("icon")


class IconService:
    def __init__(
        self,
        image_service: Optional[ImageService] = None,
        path_resolver: Optional[PathResolver] = None,
        compose_service: Optional[ComposeService] = None,
        export_service: Optional[ExportService] = None,
    ) -> None:
        self._image_service = image_service or ImageService()
        self._path_resolver = path_resolver or PathResolver()
        self._compose_service = compose_service or ComposeService()
        self._export_service = export_service or ExportService()

    def load_source(self, options: IconOptions) -> Optional[ImageData]:
        """Проверяет и загружает исходное изображение; None, если путь не задан."""
        if not options.input_path or not options.input_path.strip():
            return None
        return self._image_service.load_image(options.input_path, quiet=options.quiet)

    def compose_icon(
        self,
        options: IconOptions,
        source: Optional[ImageData] = None,
        colors: Optional[Tuple[ParsedColor, ...]] = None,
    ) -> CompositedImage:
        """Строит иконку по параметрам без записи на диск (используется и для предпросмотра).

        `colors` передаётся, если цвета уже разобраны; иначе разбираются `options.colors`.
        """
        options = options.validated()
        if colors is None:
            colors = parse_colors(options.colors)
        canvas = CanvasSpec(size=options.size, border_width=options.border_width, color_count=len(colors))
        pil_image = source.pil_image if source is not None else None
        return self._compose_service.compose(canvas, pil_image, colors, options.border_width)

    def generate(self, options: IconOptions) -> IconResult:
        """Выполняет весь сценарий и возвращает путь и/или data URI."""
        options = options.validated()
        source = self.load_source(options)
        colors = parse_colors(options.colors)
        destination = None
        if options.wants_file:
            destination = self._path_resolver.resolve(options.output_path, quiet=options.quiet)
        composited = self.compose_icon(options, source, colors)

        output_path: Optional[Path] = None
        data_uri: Optional[str] = None
        if destination is not None:
            output_path = self._export_service.export(composited, destination)
            if options.encode:
                data_uri = self._encode_file(output_path)
        else:
            data_uri = self._export_service.export(composited, None, want_encoded=True)

        warnings = source.validation.warnings if source is not None else ()
        if not options.quiet:
            self._report(options, source, output_path, composited)
        return IconResult(composited=composited, output_path=output_path, data_uri=data_uri, warnings=warnings)

    # ---- Helpers ----
    def _encode_file(self, path: Path) -> str:
        try:
            return to_data_uri(path.read_bytes())
        except OSError as exc:
            raise EncodeOrWriteFailure(f"Не удалось прочитать {path}: {exc}") from exc

    def _report(
        self,
        options: IconOptions,
        source: Optional[ImageData],
        output_path: Optional[Path],
        composited: CompositedImage,
    ) -> None:
        logger.info("Input: %s", source.path if source is not None else "none (solid circle)")
        logger.info("Output: %s", output_path if output_path is not None else "base64 data URI")
        logger.info("Canvas: %dx%d px, border width %d px", composited.size, composited.size, options.border_width)
        logger.info("Colors: %s", ", ".join(options.colors) if options.colors else "none")
        if composited.geometry.degenerate:
            logger.warning("Rings do not fit the canvas; using minimal margin")
