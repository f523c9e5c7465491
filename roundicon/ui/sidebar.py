"""Боковая панель: исходное изображение, параметры иконки, курсор, экспорт.

Принципы:
- SRP: управляет только UI параметров, не содержит алгоритмов.
- ISP: выдаёт параметры через компактные методы `get_*`, события через `on_*`.
"""
from __future__ import annotations

from typing import Callable, Optional, Tuple

import customtkinter as ctk

from roundicon.config import ALLOWED_SIZES, DEFAULT_BORDER_WIDTH, DEFAULT_SIZE, MAX_BORDER_WIDTH, MIN_BORDER_WIDTH
from roundicon.models.image_model import ImageData


def _rgba_to_hex(rgba: Tuple[int, int, int, int]) -> str:
    """Преобразует RGBA в HEX (без альфа)."""
    r, g, b, _a = rgba
    return f"#{r:02X}{g:02X}{b:02X}"


class Sidebar(ctk.CTkFrame):
    """Панель инструментов с блоками: источник, иконка, курсор, экспорт."""
    def __init__(self, master: ctk.CTk, **kwargs) -> None:
        super().__init__(master, width=280, **kwargs)

        self.grid_columnconfigure(0, weight=1)

        # Callbacks
        self.on_open_file: Optional[Callable[[], None]] = None
        self.on_clear_image: Optional[Callable[[], None]] = None
        self.on_settings_change: Optional[Callable[[], None]] = None
        self.on_save: Optional[Callable[[], None]] = None
        self.on_copy_data_uri: Optional[Callable[[], None]] = None

        bold = ctk.CTkFont(size=16, weight="bold")

        # Source section
        self._title = ctk.CTkLabel(self, text="Источник", font=bold)
        self._title.grid(row=0, column=0, padx=8, pady=(8, 4), sticky="w")

        self._open_btn = ctk.CTkButton(self, text="Открыть изображение…", command=self._emit_open_file)
        self._open_btn.grid(row=1, column=0, padx=8, pady=(0, 4), sticky="ew")
        self._clear_btn = ctk.CTkButton(self, text="Без изображения", command=self._emit_clear_image)
        self._clear_btn.grid(row=2, column=0, padx=8, pady=(0, 8), sticky="ew")

        self._path_val = ctk.StringVar(value="—")
        self._size_val = ctk.StringVar(value="—")
        self._dims_val = ctk.StringVar(value="—")
        self._mode_val = ctk.StringVar(value="—")
        self._warn_val = ctk.StringVar(value="")

        self._info_path = ctk.CTkLabel(self, textvariable=self._path_val, wraplength=250, anchor="w", justify="left")
        self._info_size = ctk.CTkLabel(self, textvariable=self._size_val, anchor="w", justify="left")
        self._info_dims = ctk.CTkLabel(self, textvariable=self._dims_val, anchor="w", justify="left")
        self._info_mode = ctk.CTkLabel(self, textvariable=self._mode_val, anchor="w", justify="left")
        self._info_warn = ctk.CTkLabel(
            self, textvariable=self._warn_val, wraplength=250, anchor="w", justify="left", text_color="#d08000"
        )

        self._info_path.grid(row=3, column=0, padx=8, pady=(0, 2), sticky="ew")
        self._info_size.grid(row=4, column=0, padx=8, pady=(0, 2), sticky="ew")
        self._info_dims.grid(row=5, column=0, padx=8, pady=(0, 2), sticky="ew")
        self._info_mode.grid(row=6, column=0, padx=8, pady=(0, 2), sticky="ew")
        self._info_warn.grid(row=7, column=0, padx=8, pady=(0, 10), sticky="ew")

        # Icon section
        self._icon_title = ctk.CTkLabel(self, text="Иконка", font=bold)
        self._icon_title.grid(row=8, column=0, padx=8, pady=(8, 4), sticky="w")

        self._size_label = ctk.CTkLabel(self, text="Размер холста, px:")
        self._size_label.grid(row=9, column=0, padx=8, pady=(0, 2), sticky="w")
        self._size_menu = ctk.CTkOptionMenu(
            self, values=[str(s) for s in ALLOWED_SIZES], command=self._emit_settings_change
        )
        self._size_menu.set(str(DEFAULT_SIZE))
        self._size_menu.grid(row=10, column=0, padx=8, pady=(0, 6), sticky="w")

        self._border_val = ctk.StringVar(value=f"{DEFAULT_BORDER_WIDTH} px")
        self._border_label = ctk.CTkLabel(self, text="Толщина кольца:")
        self._border_slider = ctk.CTkSlider(
            self,
            from_=MIN_BORDER_WIDTH,
            to=MAX_BORDER_WIDTH,
            number_of_steps=MAX_BORDER_WIDTH - MIN_BORDER_WIDTH,
            command=self._on_border_change,
        )
        self._border_slider.set(DEFAULT_BORDER_WIDTH)
        self._border_value = ctk.CTkLabel(self, textvariable=self._border_val, width=48, anchor="w")
        self._border_label.grid(row=11, column=0, padx=8, pady=(0, 2), sticky="w")
        self._border_slider.grid(row=12, column=0, padx=8, pady=(0, 2), sticky="ew")
        self._border_value.grid(row=13, column=0, padx=8, pady=(0, 6), sticky="w")

        self._colors_label = ctk.CTkLabel(self, text="Цвета колец (через запятую):")
        self._colors_entry = ctk.CTkEntry(self, placeholder_text="#ff0000, #00ff00")
        self._colors_label.grid(row=14, column=0, padx=8, pady=(0, 2), sticky="w")
        self._colors_entry.grid(row=15, column=0, padx=8, pady=(0, 10), sticky="ew")
        self._colors_entry.bind("<FocusOut>", self._on_colors_commit)
        self._colors_entry.bind("<Return>", self._on_colors_commit)

        # Cursor section
        self._cursor_title = ctk.CTkLabel(self, text="Курсор", font=bold)
        self._cursor_title.grid(row=16, column=0, padx=8, pady=(8, 4), sticky="w")

        self._cursor_xy_val = ctk.StringVar(value="—")
        self._cursor_rgba_val = ctk.StringVar(value="—")
        self._cursor_hex_val = ctk.StringVar(value="—")

        self._cursor_xy = ctk.CTkLabel(self, textvariable=self._cursor_xy_val, anchor="w", justify="left")
        self._cursor_rgba = ctk.CTkLabel(self, textvariable=self._cursor_rgba_val, anchor="w", justify="left")
        self._cursor_hex = ctk.CTkLabel(self, textvariable=self._cursor_hex_val, anchor="w", justify="left")

        self._cursor_xy.grid(row=17, column=0, padx=8, pady=(0, 2), sticky="ew")
        self._cursor_rgba.grid(row=18, column=0, padx=8, pady=(0, 2), sticky="ew")
        self._cursor_hex.grid(row=19, column=0, padx=8, pady=(0, 2), sticky="ew")

        # filler
        self.grid_rowconfigure(29, weight=1)

        # Export section
        self._export_title = ctk.CTkLabel(self, text="Экспорт", font=bold)
        self._export_title.grid(row=30, column=0, padx=8, pady=(8, 4), sticky="w")
        self._output_entry = ctk.CTkEntry(self, placeholder_text="Папка загрузок")
        self._output_entry.grid(row=31, column=0, padx=8, pady=(0, 4), sticky="ew")
        self._save_btn = ctk.CTkButton(self, text="Сохранить PNG", command=self._emit_save)
        self._save_btn.grid(row=32, column=0, padx=8, pady=(0, 4), sticky="ew")
        self._copy_btn = ctk.CTkButton(self, text="Копировать data URI", command=self._emit_copy_data_uri)
        self._copy_btn.grid(row=33, column=0, padx=8, pady=(0, 8), sticky="ew")

    # ---- Public API ----
    def set_image_info(self, image_data: Optional[ImageData]) -> None:
        """Отображает метаданные загруженного изображения (None означает сплошной круг)."""
        if image_data is None:
            self._path_val.set("Без изображения: сплошной круг")
            self._size_val.set("—")
            self._dims_val.set("—")
            self._mode_val.set("—")
            self._warn_val.set("")
            return
        self._path_val.set(str(image_data.path))
        self._size_val.set(self._format_size(image_data.size_bytes))
        self._dims_val.set(f"{image_data.width} × {image_data.height} px")
        self._mode_val.set(f"{image_data.validation.kind.value}, {image_data.mode}")
        self._warn_val.set("\n".join(image_data.validation.warnings))

    def update_cursor_info(self, x: Optional[int], y: Optional[int], rgba: Optional[Tuple[int, int, int, int]]) -> None:
        """Обновляет информацию по курсору (координаты, RGBA, HEX)."""
        if x is None or y is None or rgba is None:
            self._cursor_xy_val.set("—")
            self._cursor_rgba_val.set("—")
            self._cursor_hex_val.set("—")
            return
        self._cursor_xy_val.set(f"({x}, {y})")
        r, g, b, a = rgba
        self._cursor_rgba_val.set(f"RGBA: {r}, {g}, {b}, {a}")
        self._cursor_hex_val.set(f"HEX: {_rgba_to_hex(rgba)}")

    def get_size(self) -> int:
        return int(self._size_menu.get())

    def get_border_width(self) -> int:
        return int(round(self._border_slider.get()))

    def get_colors_text(self) -> str:
        return self._colors_entry.get()

    def get_output_path(self) -> str:
        return self._output_entry.get()

    # ---- Events ----
    def _emit_open_file(self) -> None:
        if self.on_open_file:
            self.on_open_file()

    def _emit_clear_image(self) -> None:
        if self.on_clear_image:
            self.on_clear_image()

    def _emit_settings_change(self, _value: object | None = None) -> None:
        if self.on_settings_change:
            self.on_settings_change()

    def _emit_save(self) -> None:
        if self.on_save:
            self.on_save()

    def _emit_copy_data_uri(self) -> None:
        if self.on_copy_data_uri:
            self.on_copy_data_uri()

    def _on_border_change(self, value: float) -> None:
        self._border_val.set(f"{int(round(value))} px")
        self._emit_settings_change()

    def _on_colors_commit(self, _event: object) -> None:
        self._emit_settings_change()

    def _format_size(self, size_bytes: Optional[int]) -> str:
        if size_bytes is None:
            return "—"
        thresholds = [("Б", 1024), ("КБ", 1024**2), ("МБ", 1024**3)]
        for label, limit in thresholds:
            if size_bytes < limit:
                if label == "Б":
                    return f"{size_bytes} {label}"
                value = size_bytes / (limit // 1024)
                return f"{value:.1f} {label}"
        value = size_bytes / (1024**3)
        return f"{value:.1f} ГБ"
