"""Виджет предпросмотра иконки: увеличение, панорамирование и сравнение с источником.

Принципы:
- SRP: отвечает только за представление и интеракции с изображением.
- Чистый код: чёткое разделение публичного API и внутренних обработчиков событий.
"""
from __future__ import annotations

from typing import Callable, Optional, Tuple

import customtkinter as ctk
import tkinter as tk
from PIL import Image, ImageTk

MIN_SCALE = 1.0
MAX_SCALE = 16.0
GAP = 16


class ImageViewer(ctk.CTkFrame):
    """Канва с иконкой (пиксели без сглаживания при увеличении) и, по желанию, источником рядом."""
    def __init__(self, master: ctk.CTk | tk.Misc, **kwargs) -> None:
        super().__init__(master, **kwargs)
        self.grid_rowconfigure(0, weight=1)
        self.grid_columnconfigure(0, weight=1)

        self._canvas = tk.Canvas(self, highlightthickness=0, bg=self._get_canvas_bg())
        self._canvas.grid(row=0, column=0, sticky="nsew")

        self._icon_image: Optional[Image.Image] = None
        self._source_image: Optional[Image.Image] = None
        self._tk_icon: Optional[ImageTk.PhotoImage] = None
        self._tk_source: Optional[ImageTk.PhotoImage] = None

        self._scale_factor: float = 8.0
        self._fit_scale_factor: float = 8.0
        self._image_top_left: Optional[Tuple[int, int]] = None

        # panning state
        self._is_panning: bool = False
        self._pan_start_canvas_xy: Optional[Tuple[int, int]] = None
        self._pan_start_top_left: Optional[Tuple[int, int]] = None

        self.on_cursor_move: Optional[Callable[[Optional[int], Optional[int], Optional[Tuple[int, int, int, int]]], None]] = None
        self.on_zoom_change: Optional[Callable[[int], None]] = None

        # compare modes: "off" | "side_by_side"
        self._compare_mode: str = "off"

        self._canvas.bind("<Configure>", self._on_canvas_resize)
        self._canvas.bind("<Motion>", self._on_mouse_move)
        self._canvas.bind("<Leave>", self._on_mouse_leave)

        # Mouse wheel zoom (cross-platform)
        self._canvas.bind("<MouseWheel>", self._on_mouse_wheel)      # Windows/macOS
        self._canvas.bind("<Button-4>", self._on_mouse_wheel_linux)  # Linux scroll up
        self._canvas.bind("<Button-5>", self._on_mouse_wheel_linux)  # Linux scroll down

        # Panning with left mouse drag
        self._canvas.bind("<ButtonPress-1>", self._on_pan_start)
        self._canvas.bind("<B1-Motion>", self._on_pan_move)
        self._canvas.bind("<ButtonRelease-1>", self._on_pan_end)

    # ---- Public API ----
    def set_icon(self, image: Optional[Image.Image]) -> None:
        """Устанавливает готовую иконку; масштаб и положение сохраняются, если размер не изменился."""
        size_changed = (
            self._icon_image is None or image is None or self._icon_image.size != image.size
        )
        self._icon_image = image
        if size_changed:
            self._compute_fit_scale()
            self._scale_factor = self._fit_scale_factor
            self._image_top_left = None
        self._render_image()

    def set_source(self, image: Optional[Image.Image]) -> None:
        """Исходное изображение для режима «2-up» (может быть None)."""
        self._source_image = image
        self._render_image()

    def set_zoom_to_fit(self) -> None:
        """Масштабирует иконку так, чтобы она целиком помещалась в доступную область."""
        self._compute_fit_scale()
        self._scale_factor = self._fit_scale_factor
        self._image_top_left = None  # reset to center
        self._render_image()

    def set_zoom_percent(self, zoom_percent: int) -> None:
        """Устанавливает масштаб в процентах (100–1600%)."""
        self._scale_factor = max(MIN_SCALE, min(MAX_SCALE, zoom_percent / 100.0))
        self._render_image()

    def get_zoom_percent(self) -> int:
        """Возвращает текущий масштаб в процентах."""
        return int(round(self._scale_factor * 100))

    def set_compare_mode(self, mode: str) -> None:
        """Устанавливает режим сравнения: 'Нет' | '2-up'."""
        mapping = {"Нет": "off", "2-up": "side_by_side"}
        self._compare_mode = mapping.get(mode, "off")
        self._image_top_left = None  # recenter
        self._render_image()

    # ---- Internals ----
    def _on_canvas_resize(self, _event: tk.Event) -> None:
        if self._icon_image is None:
            return
        self._compute_fit_scale()
        self._render_image()

    def _render_image(self) -> None:
        self._canvas.delete("all")
        if self._icon_image is None:
            return

        canvas_w = int(self._canvas.winfo_width())
        canvas_h = int(self._canvas.winfo_height())

        icon_w, icon_h = self._icon_image.size
        scaled_w = max(1, int(icon_w * self._scale_factor))
        scaled_h = max(1, int(icon_h * self._scale_factor))
        resized_icon = self._icon_image.resize((scaled_w, scaled_h), Image.Resampling.NEAREST)

        show_source = self._compare_mode == "side_by_side" and self._source_image is not None
        content_w = scaled_w * 2 + GAP if show_source else scaled_w
        content_h = scaled_h

        # compute allowed top-left range
        if content_w <= canvas_w:
            min_x = max_x = (canvas_w - content_w) // 2
        else:
            min_x = canvas_w - content_w
            max_x = 0
        if content_h <= canvas_h:
            min_y = max_y = (canvas_h - content_h) // 2
        else:
            min_y = canvas_h - content_h
            max_y = 0

        if self._image_top_left is None:
            x = (canvas_w - content_w) // 2 if content_w <= canvas_w else 0
            y = (canvas_h - content_h) // 2 if content_h <= canvas_h else 0
            self._image_top_left = (x, y)
        else:
            ox, oy = self._image_top_left
            x = max(min_x, min(max_x, ox))
            y = max(min_y, min(max_y, oy))
            self._image_top_left = (x, y)

        ox, oy = self._image_top_left
        self._tk_icon = ImageTk.PhotoImage(resized_icon)
        self._canvas.create_image(ox, oy, image=self._tk_icon, anchor="nw")

        if show_source:
            preview = self._source_image.copy()
            preview.thumbnail((scaled_w, scaled_h), Image.Resampling.LANCZOS)
            self._tk_source = ImageTk.PhotoImage(preview)
            self._canvas.create_image(ox + scaled_w + GAP, oy, image=self._tk_source, anchor="nw")
        else:
            self._tk_source = None

    def _compute_fit_scale(self) -> None:
        if self._icon_image is None:
            self._fit_scale_factor = MIN_SCALE
            return
        canvas_w = max(1, int(self._canvas.winfo_width()))
        canvas_h = max(1, int(self._canvas.winfo_height()))
        icon_w, icon_h = self._icon_image.size
        if self._compare_mode == "side_by_side" and self._source_image is not None:
            canvas_w = max(1, (canvas_w - GAP) // 2)
        scale = min(canvas_w / icon_w, canvas_h / icon_h)
        # integer factors keep pixels square
        self._fit_scale_factor = max(MIN_SCALE, min(MAX_SCALE, float(int(scale))))

    def _on_mouse_move(self, event: tk.Event) -> None:
        if self._icon_image is None or self.on_cursor_move is None:
            return
        img_x, img_y = self._canvas_to_icon_coords(event.x, event.y)
        if img_x is None or img_y is None:
            self.on_cursor_move(None, None, None)
            return
        self.on_cursor_move(img_x, img_y, self._icon_image.getpixel((img_x, img_y)))

    def _on_mouse_leave(self, _event: tk.Event) -> None:
        if self.on_cursor_move:
            self.on_cursor_move(None, None, None)

    def _canvas_to_icon_coords(self, cx: int, cy: int) -> Tuple[Optional[int], Optional[int]]:
        if self._icon_image is None or self._image_top_left is None:
            return None, None
        ox, oy = self._image_top_left
        x = int((cx - ox) // self._scale_factor)
        y = int((cy - oy) // self._scale_factor)
        icon_w, icon_h = self._icon_image.size
        if 0 <= x < icon_w and 0 <= y < icon_h:
            return x, y
        return None, None

    def _get_canvas_bg(self) -> str:
        return "#1f1f1f" if ctk.get_appearance_mode().lower() == "dark" else "#f2f2f2"

    # ---- Mouse wheel zoom ----
    def _on_mouse_wheel(self, event: tk.Event) -> None:
        if self._icon_image is None or event.delta == 0:
            return
        factor = 2.0 if event.delta > 0 else 0.5
        self._zoom_at_point(event.x, event.y, factor)

    def _on_mouse_wheel_linux(self, event: tk.Event) -> None:
        # On X11, Button-4 is up, Button-5 is down
        if self._icon_image is None:
            return
        factor = 2.0 if getattr(event, "num", None) == 4 else 0.5
        self._zoom_at_point(event.x, event.y, factor)

    def _zoom_at_point(self, cx: int, cy: int, factor: float) -> None:
        if self._image_top_left is None:
            return
        old_scale = self._scale_factor
        new_scale = max(MIN_SCALE, min(MAX_SCALE, old_scale * factor))
        if abs(new_scale - old_scale) < 1e-6:
            return

        ox, oy = self._image_top_left
        ix = (cx - ox) / old_scale
        iy = (cy - oy) / old_scale
        self._scale_factor = new_scale

        # keep (ix, iy) under the cursor
        self._image_top_left = (int(round(cx - ix * new_scale)), int(round(cy - iy * new_scale)))
        self._render_image()

        if self.on_zoom_change:
            self.on_zoom_change(self.get_zoom_percent())

    # ---- Panning ----
    def _on_pan_start(self, event: tk.Event) -> None:
        if self._image_top_left is None:
            return
        self._canvas.focus_set()
        self._is_panning = True
        self._pan_start_canvas_xy = (event.x, event.y)
        self._pan_start_top_left = self._image_top_left

    def _on_pan_move(self, event: tk.Event) -> None:
        if not self._is_panning or self._pan_start_canvas_xy is None or self._pan_start_top_left is None:
            return
        sx, sy = self._pan_start_canvas_xy
        ox, oy = self._pan_start_top_left
        self._image_top_left = (ox + event.x - sx, oy + event.y - sy)
        self._render_image()

    def _on_pan_end(self, _event: tk.Event) -> None:
        self._is_panning = False
        self._pan_start_canvas_xy = None
        self._pan_start_top_left = None
