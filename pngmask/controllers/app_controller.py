"""Контроллер приложения: оркестрация UI и сессии масок.

SOLID:
- SRP: класс управляет связями между UI и сервисами (без пиксельной логики).
- DIP: зависит от `MaskService` как от роли; просмотрщик передаётся сервису как приёмник рендера.
Clean Code:
- Обработчики компактны; тяжёлая логика вынесена в сервисы.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from tkinter import filedialog, TclError
from typing import Optional, Tuple

import customtkinter as ctk

from pngmask.models.errors import MaskError
from pngmask.models.params_model import GeometryParams
from pngmask.services.mask_service import MaskService, ShapeResult
from pngmask.services.render_sink import PngFileSink
from pngmask.ui.bottom_bar import BottomBar
from pngmask.ui.image_viewer import ImageViewer
from pngmask.ui.sidebar import Sidebar

logger = logging.getLogger(__name__)

WINDOW_TITLE = "PNG Mask Studio"


@dataclass
class AppController:
    """Связывает элементы UI с прикладной логикой.

    Ответственности:
    - Инициализация и бинд событий (UI -> контроллер).
    - Загрузка масок через `MaskService` (файл или URL).
    - Перестроение формы при изменении параметров и передача в просмотрщик.
    - Экспорт текущей формы в PNG.
    """
    viewer: ImageViewer
    sidebar: Sidebar
    bottom: BottomBar
    window: ctk.CTk

    masks: MaskService = field(default_factory=MaskService)
    _current_name: Optional[str] = None
    _last_result: Optional[ShapeResult] = None

    def bind_events(self) -> None:
        """Регистрирует обработчики событий между UI-компонентами."""
        self.sidebar.on_open_file = self._handle_open_file
        self.sidebar.on_load_url = self._handle_load_url
        self.sidebar.on_mask_select = self._handle_mask_select
        self.sidebar.on_params_change = self._handle_params_change

        self.viewer.on_cursor_move = self._handle_cursor_move
        self.viewer.on_zoom_change = self._handle_viewer_zoom_changed

        self.bottom.on_zoom_change = self._handle_zoom_change
        self.bottom.on_zoom_preset = self._handle_zoom_change
        self.bottom.on_zoom_fit = self._handle_zoom_fit
        self.bottom.on_export = self._handle_export

    # ---- Handlers ----
    def _handle_open_file(self) -> None:
        try:
            file_path = filedialog.askopenfilename(
                title="Выберите PNG с прозрачностью",
                filetypes=(
                    ("Images", "*.png *.webp *.gif *.tiff"),
                    ("All files", "*.*"),
                ),
            )
        except TclError:
            # Silent fail if dialog cannot open
            return
        if not file_path:
            return
        self._load(file_path, Path(file_path).stem)

    def _handle_load_url(self, url: str, name: str) -> None:
        if not name and url:
            name = Path(url.split("?", 1)[0]).stem
        self._load(url, name)

    def _handle_mask_select(self, name: str) -> None:
        self._select(name)
        self._apply_shape()

    def _handle_params_change(self, _params: GeometryParams) -> None:
        self._apply_shape()

    def _handle_cursor_move(self, x: Optional[int], y: Optional[int], rgba: Optional[Tuple[int, int, int, int]]) -> None:
        self.sidebar.update_cursor_info(x, y, rgba)

    def _handle_zoom_change(self, zoom_percent: int) -> None:
        self.viewer.set_zoom_percent(zoom_percent)

    def _handle_viewer_zoom_changed(self, zoom_percent: int) -> None:
        self.bottom.set_zoom_percent(zoom_percent)

    def _handle_zoom_fit(self) -> None:
        self.viewer.set_zoom_to_fit()
        self.bottom.set_zoom_percent(self.viewer.get_zoom_percent())

    def _handle_export(self) -> None:
        if self._last_result is None:
            return
        try:
            file_path = filedialog.asksaveasfilename(
                title="Сохранить маску",
                defaultextension=".png",
                initialfile=f"{self._current_name or 'mask'}.png",
                filetypes=(("PNG", "*.png"),),
            )
        except TclError:
            return
        if not file_path:
            return
        sink = PngFileSink(file_path, processor=self.masks.processor)
        try:
            sink.render(self._last_result.image, self._last_result.residual_scale)
        except OSError as exc:
            logger.warning("Mask export failed: %s", exc)
            self.bottom.set_status(f"Не удалось сохранить {file_path}: {exc}")
            return
        self.bottom.set_status(f"Сохранено: {file_path}")

    # ---- Helpers ----
    def _select(self, name: str) -> None:
        self._current_name = name
        self.window.title(f"{WINDOW_TITLE}: {name}")

    def _load(self, source: str, name: str) -> None:
        try:
            name = self.masks.load_mask(source, name)
        except MaskError as exc:
            logger.warning("Mask load failed: %s", exc)
            self.bottom.set_status(str(exc))
            return
        self._select(name)
        self.sidebar.set_mask_names(self.masks.list_names(), selected=name)
        self.bottom.set_status(f"Маска загружена: {name}")
        self._apply_shape()

    def _apply_shape(self) -> None:
        """Строит форму текущей маски по параметрам сайдбара и отдаёт её просмотрщику."""
        if self._current_name is None:
            return
        params = self.sidebar.get_params()
        try:
            result = self.masks.shape(
                self._current_name,
                size=params.size,
                hard_edge=params.hard_edge,
                preserve_aspect=params.preserve_aspect,
                fit_mode=params.fit_mode,
                sink=self.viewer,
            )
        except MaskError as exc:
            self.bottom.set_status(str(exc))
            return
        self._last_result = result
        self.sidebar.set_shape_info(self.masks.store.get(self._current_name), result.image, result.residual_scale)
        self.bottom.set_zoom_percent(self.viewer.get_zoom_percent())
