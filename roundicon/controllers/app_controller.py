"""Контроллер приложения: оркестрация UI и сервиса генерации иконок.

SOLID:
- SRP: класс управляет связями между UI и сервисом (без геометрии и ввода-вывода).
- DIP: зависит от `IconService` как от роли; конкретная реализация инкапсулирована.
Clean Code:
- Обработчики компактны; ошибки сервиса показываются в строке состояния.
"""
from __future__ import annotations

from dataclasses import dataclass
from tkinter import filedialog, TclError
from typing import Optional, Tuple

import customtkinter as ctk

from roundicon.config import IconOptions
from roundicon.errors import IconError
from roundicon.logging import get_logger
from roundicon.models.image_model import ImageData
from roundicon.services.color_service import split_color_list
from roundicon.services.icon_service import IconService
from roundicon.ui.bottom_bar import BottomBar
from roundicon.ui.image_viewer import ImageViewer
from roundicon.ui.sidebar import Sidebar

logger = get_logger("gui")


@dataclass
class AppController:
    """Связывает элементы UI с прикладной логикой.

    Ответственности:
    - Инициализация и бинд событий (UI -> контроллер).
    - Загрузка и проверка исходного изображения через `IconService`.
    - Перестроение предпросмотра при изменении параметров.
    - Сохранение PNG и копирование data URI в буфер обмена.
    """
    viewer: ImageViewer
    sidebar: Sidebar
    bottom: BottomBar
    window: ctk.CTk

    _icon_service: IconService = IconService()
    _current_image: Optional[ImageData] = None

    def bind_events(self) -> None:
        """Регистрирует обработчики событий между UI-компонентами и рисует первый предпросмотр."""
        self.sidebar.on_open_file = self._handle_open_file
        self.sidebar.on_clear_image = self._handle_clear_image
        self.sidebar.on_settings_change = self._refresh_preview
        self.sidebar.on_save = self._handle_save
        self.sidebar.on_copy_data_uri = self._handle_copy_data_uri

        self.viewer.on_cursor_move = self._handle_cursor_move
        self.viewer.on_zoom_change = self._handle_viewer_zoom_changed

        self.bottom.on_zoom_change = self._handle_zoom_change
        self.bottom.on_zoom_preset = self._handle_zoom_change
        self.bottom.on_zoom_fit = self._handle_zoom_fit
        self.bottom.on_compare_mode_change = self._handle_compare_mode_change

        self.sidebar.set_image_info(None)
        self._refresh_preview()

    # ---- Handlers ----
    def _handle_open_file(self) -> None:
        try:
            file_path = filedialog.askopenfilename(
                title="Выберите изображение",
                filetypes=(
                    ("Images", "*.png *.jpg *.jpeg *.bmp *.gif *.tiff *.tif *.ico"),
                    ("All files", "*.*"),
                ),
            )
        except TclError:
            # Silent fail if dialog cannot open
            return

        if not file_path:
            return

        try:
            image_data = self._icon_service.load_source(IconOptions(input_path=file_path))
        except IconError as exc:
            self.bottom.set_status(str(exc), error=True)
            return
        self._current_image = image_data

        self.sidebar.set_image_info(image_data)
        self.viewer.set_source(image_data.pil_image)
        self._refresh_preview()

    def _handle_clear_image(self) -> None:
        self._current_image = None
        self.sidebar.set_image_info(None)
        self.viewer.set_source(None)
        self._refresh_preview()

    def _handle_save(self) -> None:
        options = self._collect_options(encode=False)
        if options is None:
            return
        try:
            result = self._icon_service.generate(options)
        except IconError as exc:
            self.bottom.set_status(str(exc), error=True)
            return
        self.bottom.set_status(f"Сохранено: {result.output_path}")

    def _handle_copy_data_uri(self) -> None:
        options = self._collect_options(encode=True, with_output=False)
        if options is None:
            return
        try:
            result = self._icon_service.generate(options)
        except IconError as exc:
            self.bottom.set_status(str(exc), error=True)
            return
        self.window.clipboard_clear()
        self.window.clipboard_append(result.data_uri)
        self.bottom.set_status(f"data URI скопирован ({len(result.data_uri)} символов)")

    def _handle_cursor_move(self, x: Optional[int], y: Optional[int], rgba: Optional[Tuple[int, int, int, int]]) -> None:
        self.sidebar.update_cursor_info(x, y, rgba)

    def _handle_zoom_change(self, zoom_percent: int) -> None:
        self.viewer.set_zoom_percent(zoom_percent)

    def _handle_viewer_zoom_changed(self, zoom_percent: int) -> None:
        # Sync bottom slider when user zooms with mouse wheel
        self.bottom.set_zoom_percent(zoom_percent)

    def _handle_zoom_fit(self) -> None:
        self.viewer.set_zoom_to_fit()
        self.bottom.set_zoom_percent(self.viewer.get_zoom_percent())

    def _handle_compare_mode_change(self, mode: str) -> None:
        self.viewer.set_compare_mode(mode)

    # ---- Helpers ----
    def _collect_options(self, encode: bool, with_output: bool = True) -> Optional[IconOptions]:
        """Собирает параметры из сайдбара; None, если панель ещё не готова."""
        try:
            colors = tuple(split_color_list(self.sidebar.get_colors_text()))
            return IconOptions(
                input_path=str(self._current_image.path) if self._current_image else None,
                colors=colors,
                border_width=self.sidebar.get_border_width(),
                size=self.sidebar.get_size(),
                output_path=self.sidebar.get_output_path() if with_output else None,
                encode=encode,
                quiet=False,
            )
        except (TclError, ValueError) as exc:
            self.bottom.set_status(f"Некорректные параметры: {exc}", error=True)
            return None

    def _refresh_preview(self) -> None:
        """Перестраивает иконку по текущим параметрам без записи на диск."""
        options = self._collect_options(encode=False, with_output=False)
        if options is None:
            return
        try:
            composited = self._icon_service.compose_icon(options, self._current_image)
        except IconError as exc:
            self.bottom.set_status(str(exc), error=True)
            return
        self.viewer.set_icon(composited.image)
        self.bottom.set_zoom_percent(self.viewer.get_zoom_percent())
        geometry = composited.geometry
        note = " (кольца не помещаются, минимальный отступ)" if geometry.degenerate else ""
        self.bottom.set_status(
            f"{composited.size}×{composited.size} px, колец: {len(geometry.drawn_rings)}{note}"
        )
        logger.debug("Preview refreshed: %s", geometry)
