from __future__ import annotations

from typing import Callable, Optional

import customtkinter as ctk

ZOOM_MIN = 100
ZOOM_MAX = 1600


class BottomBar(ctk.CTkFrame):
    def __init__(self, master: ctk.CTk, **kwargs) -> None:
        super().__init__(master, height=64, **kwargs)

        # callbacks
        self.on_zoom_change: Optional[Callable[[int], None]] = None
        self.on_zoom_preset: Optional[Callable[[int], None]] = None
        self.on_zoom_fit: Optional[Callable[[], None]] = None
        self.on_compare_mode_change: Optional[Callable[[str], None]] = None

        # layout
        self.grid_rowconfigure(0, weight=1)
        self.grid_rowconfigure(1, weight=0)
        self.grid_columnconfigure(1, weight=1)  # slider stretches

        # Zoom controls
        self._zoom_label = ctk.CTkLabel(self, text="Масштаб")
        self._zoom_label.grid(row=0, column=0, padx=(10, 6), pady=8, sticky="w")

        self._zoom_value = ctk.StringVar(value="800%")
        self._zoom_slider = ctk.CTkSlider(
            self, from_=ZOOM_MIN, to=ZOOM_MAX, number_of_steps=(ZOOM_MAX - ZOOM_MIN) // 100, command=self._on_slider_change
        )
        self._zoom_slider.set(800)
        self._zoom_slider.grid(row=0, column=1, padx=6, pady=8, sticky="ew")
        self._zoom_value_label = ctk.CTkLabel(self, textvariable=self._zoom_value, width=56, anchor="w")
        self._zoom_value_label.grid(row=0, column=2, padx=(6, 12), pady=8, sticky="w")

        # Presets + Fit
        self._preset_buttons = ctk.CTkSegmentedButton(
            self,
            values=["Fit", "100%", "400%", "800%", "1600%"],
            command=self._on_preset_click,
        )
        self._preset_buttons.set("800%")
        self._preset_buttons.grid(row=0, column=3, padx=6, pady=8, sticky="w")

        # Compare: icon alone or next to the source
        self._compare_menu = ctk.CTkOptionMenu(self, values=["Нет", "2-up"], command=self._on_compare_mode)
        self._compare_menu.set("Нет")
        self._compare_menu.grid(row=0, column=4, padx=6, pady=8, sticky="w")

        # Status line
        self._status_value = ctk.StringVar(value="Готово")
        self._status_label = ctk.CTkLabel(self, textvariable=self._status_value, anchor="w")
        self._status_label.grid(row=1, column=0, columnspan=5, padx=10, pady=(0, 6), sticky="ew")
        self._default_text_color = self._status_label.cget("text_color")

    # public API (sync from controller)
    def set_zoom_percent(self, percent: int) -> None:
        self._zoom_slider.set(percent)
        self._zoom_value.set(f"{percent}%")
        if percent in (100, 400, 800, 1600):
            self._preset_buttons.set(f"{percent}%")
        else:
            cur = self._preset_buttons.get()
            if cur.endswith("%") and cur != f"{percent}%":
                self._preset_buttons.set("")

    def set_status(self, text: str, error: bool = False) -> None:
        self._status_value.set(text)
        self._status_label.configure(text_color="#d03030" if error else self._default_text_color)

    # events
    def _on_slider_change(self, value: float) -> None:
        percent = int(round(value))
        self._zoom_value.set(f"{percent}%")
        if self.on_zoom_change:
            self.on_zoom_change(percent)

    def _on_preset_click(self, value: str) -> None:
        if value == "Fit":
            if self.on_zoom_fit:
                self.on_zoom_fit()
            return
        if value.endswith("%"):
            try:
                percent = int(value[:-1])
            except ValueError:
                return
            if self.on_zoom_preset:
                self.on_zoom_preset(percent)

    def _on_compare_mode(self, value: str) -> None:
        if self.on_compare_mode_change:
            self.on_compare_mode_change(value)
