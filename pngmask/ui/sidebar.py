"""Боковая панель: загрузка масок, выбор маски, параметры формы, информация.

Принципы:
- SRP: управляет только UI параметров, не содержит алгоритмов.
- ISP: выдаёт параметры через компактные методы `get_*`, события через `on_*`.
"""
from __future__ import annotations

from typing import Callable, List, Optional, Tuple

import customtkinter as ctk

from pngmask.models.params_model import FitMode, GeometryParams
from pngmask.models.raster_model import RasterImage

_NO_MASK = "—"


def _rgba_to_hex(rgba: Tuple[int, int, int, int]) -> str:
    """Преобразует RGBA в HEX (без альфа)."""
    r, g, b, _a = rgba
    return f"#{r:02X}{g:02X}{b:02X}"


class Sidebar(ctk.CTkFrame):
    """Панель инструментов с блоками: маски, параметры, информация, курсор."""
    def __init__(self, master: ctk.CTk, **kwargs) -> None:
        super().__init__(master, width=280, **kwargs)

        self.grid_columnconfigure(0, weight=1)

        # Callbacks
        self.on_open_file: Optional[Callable[[], None]] = None
        self.on_load_url: Optional[Callable[[str, str], None]] = None
        self.on_mask_select: Optional[Callable[[str], None]] = None
        self.on_params_change: Optional[Callable[[GeometryParams], None]] = None

        # Masks section
        self._title = ctk.CTkLabel(self, text="Маски", font=ctk.CTkFont(size=16, weight="bold"))
        self._title.grid(row=0, column=0, padx=8, pady=(8, 4), sticky="w")

        self._open_btn = ctk.CTkButton(self, text="Открыть PNG…", command=self._emit_open_file)
        self._open_btn.grid(row=1, column=0, padx=8, pady=(0, 6), sticky="ew")

        self._url_entry = ctk.CTkEntry(self, placeholder_text="https://…/mask.png")
        self._url_name_entry = ctk.CTkEntry(self, placeholder_text="имя маски")
        self._url_btn = ctk.CTkButton(self, text="Загрузить по URL", command=self._emit_load_url)
        self._url_entry.grid(row=2, column=0, padx=8, pady=(0, 4), sticky="ew")
        self._url_name_entry.grid(row=3, column=0, padx=8, pady=(0, 4), sticky="ew")
        self._url_btn.grid(row=4, column=0, padx=8, pady=(0, 8), sticky="ew")

        self._mask_menu = ctk.CTkOptionMenu(self, values=[_NO_MASK], command=self._emit_mask_select)
        self._mask_menu.set(_NO_MASK)
        self._mask_menu.grid(row=5, column=0, padx=8, pady=(0, 10), sticky="ew")

        # Params section
        self._params_title = ctk.CTkLabel(self, text="Форма", font=ctk.CTkFont(size=16, weight="bold"))
        self._params_title.grid(row=6, column=0, padx=8, pady=(8, 4), sticky="w")

        self._size_val = ctk.StringVar(value="1.00")
        self._size_label = ctk.CTkLabel(self, text="Размер (size):")
        self._size_slider = ctk.CTkSlider(self, from_=0.05, to=2.0, number_of_steps=195, command=self._on_size_change)
        self._size_slider.set(1.0)
        self._size_value = ctk.CTkLabel(self, textvariable=self._size_val, width=48, anchor="w")
        self._size_label.grid(row=7, column=0, padx=8, pady=(0, 2), sticky="w")
        self._size_slider.grid(row=8, column=0, padx=8, pady=(0, 2), sticky="ew")
        self._size_value.grid(row=9, column=0, padx=8, pady=(0, 6), sticky="w")

        self._hard_val = ctk.StringVar(value="0.00")
        self._hard_label = ctk.CTkLabel(self, text="Жёсткость края (hardEdge):")
        self._hard_slider = ctk.CTkSlider(self, from_=0.0, to=1.0, number_of_steps=100, command=self._on_hard_change)
        self._hard_slider.set(0.0)
        self._hard_value = ctk.CTkLabel(self, textvariable=self._hard_val, width=48, anchor="w")
        self._hard_label.grid(row=10, column=0, padx=8, pady=(0, 2), sticky="w")
        self._hard_slider.grid(row=11, column=0, padx=8, pady=(0, 2), sticky="ew")
        self._hard_value.grid(row=12, column=0, padx=8, pady=(0, 6), sticky="w")

        self._aspect_val = ctk.BooleanVar(value=False)
        self._aspect_switch = ctk.CTkSwitch(
            self, text="Сохранять пропорции", variable=self._aspect_val, command=self._on_aspect_toggle
        )
        self._aspect_switch.grid(row=13, column=0, padx=8, pady=(4, 4), sticky="w")

        self._fit_menu = ctk.CTkOptionMenu(
            self, values=[m.value for m in FitMode], command=lambda _v: self._emit_params_change()
        )
        self._fit_menu.set(FitMode.CONTAIN.value)
        self._fit_menu.configure(state="disabled")
        self._fit_menu.grid(row=14, column=0, padx=8, pady=(0, 10), sticky="ew")

        # Info section
        self._info_title = ctk.CTkLabel(self, text="Информация", font=ctk.CTkFont(size=16, weight="bold"))
        self._info_title.grid(row=15, column=0, padx=8, pady=(8, 4), sticky="w")

        self._mask_dims_val = ctk.StringVar(value="—")
        self._out_dims_val = ctk.StringVar(value="—")
        self._residual_val = ctk.StringVar(value="—")
        self._info_mask = ctk.CTkLabel(self, textvariable=self._mask_dims_val, anchor="w", justify="left")
        self._info_out = ctk.CTkLabel(self, textvariable=self._out_dims_val, anchor="w", justify="left")
        self._info_residual = ctk.CTkLabel(self, textvariable=self._residual_val, anchor="w", justify="left")
        self._info_mask.grid(row=16, column=0, padx=8, pady=(0, 2), sticky="ew")
        self._info_out.grid(row=17, column=0, padx=8, pady=(0, 2), sticky="ew")
        self._info_residual.grid(row=18, column=0, padx=8, pady=(0, 10), sticky="ew")

        # Cursor section
        self._cursor_title = ctk.CTkLabel(self, text="Курсор", font=ctk.CTkFont(size=16, weight="bold"))
        self._cursor_title.grid(row=19, column=0, padx=8, pady=(8, 4), sticky="w")

        self._cursor_xy_val = ctk.StringVar(value="—")
        self._cursor_rgba_val = ctk.StringVar(value="—")
        self._cursor_hex_val = ctk.StringVar(value="—")
        self._cursor_xy = ctk.CTkLabel(self, textvariable=self._cursor_xy_val, anchor="w", justify="left")
        self._cursor_rgba = ctk.CTkLabel(self, textvariable=self._cursor_rgba_val, anchor="w", justify="left")
        self._cursor_hex = ctk.CTkLabel(self, textvariable=self._cursor_hex_val, anchor="w", justify="left")
        self._cursor_xy.grid(row=20, column=0, padx=8, pady=(0, 2), sticky="ew")
        self._cursor_rgba.grid(row=21, column=0, padx=8, pady=(0, 2), sticky="ew")
        self._cursor_hex.grid(row=22, column=0, padx=8, pady=(0, 2), sticky="ew")

        # filler
        self.grid_rowconfigure(99, weight=1)

    # ---- Public API ----
    def set_mask_names(self, names: List[str], selected: Optional[str] = None) -> None:
        """Обновляет список масок; `selected` становится текущей."""
        values = names or [_NO_MASK]
        self._mask_menu.configure(values=values)
        self._mask_menu.set(selected if selected in names else values[0])

    def get_params(self) -> GeometryParams:
        """Текущие параметры формы."""
        return GeometryParams(
            size=float(self._size_slider.get()),
            hard_edge=float(self._hard_slider.get()),
            preserve_aspect=bool(self._aspect_val.get()),
            fit_mode=FitMode.parse(self._fit_menu.get()),
        )

    def set_shape_info(self, mask: Optional[RasterImage], output: Optional[RasterImage], residual_scale: float) -> None:
        if mask is None or output is None:
            self._mask_dims_val.set("—")
            self._out_dims_val.set("—")
            self._residual_val.set("—")
            return
        self._mask_dims_val.set(f"Маска: {mask.width} × {mask.height} px")
        self._out_dims_val.set(f"Результат: {output.width} × {output.height} px")
        self._residual_val.set(f"Масштаб приёмника: {residual_scale:.2f}")

    def update_cursor_info(self, x: Optional[int], y: Optional[int], rgba: Optional[Tuple[int, int, int, int]]) -> None:
        if x is None or y is None or rgba is None:
            self._cursor_xy_val.set("—")
            self._cursor_rgba_val.set("—")
            self._cursor_hex_val.set("—")
            return
        self._cursor_xy_val.set(f"X: {x}, Y: {y}")
        self._cursor_rgba_val.set(f"RGBA: {rgba[0]}, {rgba[1]}, {rgba[2]}, {rgba[3]}")
        self._cursor_hex_val.set(f"HEX: {_rgba_to_hex(rgba)}")

    # ---- Events ----
    def _emit_open_file(self) -> None:
        if self.on_open_file:
            self.on_open_file()

    def _emit_load_url(self) -> None:
        url = self._url_entry.get().strip()
        name = self._url_name_entry.get().strip()
        if self.on_load_url:
            self.on_load_url(url, name)

    def _emit_mask_select(self, value: str) -> None:
        if value != _NO_MASK and self.on_mask_select:
            self.on_mask_select(value)

    def _emit_params_change(self) -> None:
        if self.on_params_change:
            self.on_params_change(self.get_params())

    def _on_size_change(self, value: float) -> None:
        self._size_val.set(f"{value:.2f}")
        self._emit_params_change()

    def _on_hard_change(self, value: float) -> None:
        self._hard_val.set(f"{value:.2f}")
        self._emit_params_change()

    def _on_aspect_toggle(self) -> None:
        self._fit_menu.configure(state="normal" if self._aspect_val.get() else "disabled")
        self._emit_params_change()
