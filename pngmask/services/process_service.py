from __future__ import annotations

import math
from typing import Tuple, Union

import numpy as np
from PIL import Image

from pngmask.models.params_model import FitMode, clamp01
from pngmask.models.raster_model import RasterImage

# Сторона квадратного холста aspect_fit не меньше этого значения
MIN_CANVAS_SIZE = 1024
# Ниже этого масштаба маска перерисовывается уменьшенной на чёрном фоне
CENTER_SCALE_LIMIT = 0.9
# Окно, в котором center_scale считается тождественным
IDENTITY_SCALE_RANGE = (0.99, 1.01)

# треугольный фильтр без боковых лепестков: нет «звона» вокруг краёв маски
_RESAMPLE = Image.Resampling.BILINEAR

Rect = Tuple[float, float, float, float]


def _snap(value: float) -> int:
    # округление половины вверх: соседние края прямоугольника согласованы
    return int(math.floor(value + 0.5))


class ProcessService:
    # ---------- Вспомогательные функции ----------
    def _apply_threshold(self, arr: np.ndarray, hard: float) -> None:
        """
        Бинаризация на месте: яркость берётся из канала R, альфа = 255.
        `hard` уже приведён к (0, 1].
        """
        th = 128.0 * (1.0 - hard)
        out = np.where(arr[..., 0] > th, 255, 0).astype(np.uint8)
        arr[..., 0] = out
        arr[..., 1] = out
        arr[..., 2] = out
        arr[..., 3] = 255

    def _draw(self, canvas: Image.Image, source: Image.Image, rect: Rect) -> None:
        """
        Рисует `source` в прямоугольник (x, y, w, h) холста с качественной интерполяцией.
        Интерполируется только видимая часть: прямоугольник сначала обрезается по холсту,
        затем из исходника берётся соответствующая область (`box` в дробных координатах).
        """
        x, y, w, h = rect
        left, top = _snap(x), _snap(y)
        right, bottom = _snap(x + w), _snap(y + h)
        dw, dh = right - left, bottom - top
        if dw <= 0 or dh <= 0 or source.width == 0 or source.height == 0:
            return
        vis_left, vis_top = max(left, 0), max(top, 0)
        vis_right, vis_bottom = min(right, canvas.width), min(bottom, canvas.height)
        if vis_right <= vis_left or vis_bottom <= vis_top:
            return
        kx = source.width / dw
        ky = source.height / dh
        box = (
            (vis_left - left) * kx,
            (vis_top - top) * ky,
            (vis_right - left) * kx,
            (vis_bottom - top) * ky,
        )
        resized = source.resize((vis_right - vis_left, vis_bottom - vis_top), _RESAMPLE, box=box)
        # альфа исходника как маска: «source-over» поверх непрозрачного чёрного
        canvas.paste(resized, (vis_left, vis_top), resized)

    def _opaque(self, canvas: Image.Image) -> np.ndarray:
        arr = np.array(canvas, dtype=np.uint8)
        arr[..., 3] = 255
        return arr

    # ---------- 1) Альфа -> яркость ----------
    def extract_alpha(self, image: RasterImage) -> RasterImage:
        """
        R = G = B = исходная альфа, A = 255. Размеры сохраняются.
        """
        if image.is_empty:
            return RasterImage(width=image.width, height=image.height, pixels=b"")
        src = image.to_array()
        out = np.empty_like(src)
        out[..., :3] = src[..., 3:4]
        out[..., 3] = 255
        return RasterImage.from_array(out)

    # ---------- 2) Жёсткий край ----------
    def threshold(self, image: RasterImage, hard_edge: float) -> RasterImage:
        """
        Порог T = 128 * (1 - hard): пиксель с яркостью > T становится белым, иначе чёрным.
        При hard <= 0 возвращает вход без изменений.
        """
        hard = clamp01(hard_edge)
        if hard <= 0 or image.is_empty:
            return image
        arr = image.to_array()
        self._apply_threshold(arr, hard)
        return RasterImage.from_array(arr)

    # ---------- 3) Центрированное масштабирование ----------
    def center_scale(self, image: RasterImage, size: float) -> RasterImage:
        """
        Рисует маску, масштабированную на `size`, по центру чёрного холста того же размера.
        Около 1.0 (см. IDENTITY_SCALE_RANGE) возвращает вход как есть.
        """
        low, high = IDENTITY_SCALE_RANGE
        if low <= size <= high or image.is_empty:
            return image
        canvas = RasterImage.blank(image.width, image.height).to_pil()
        w = image.width * size
        h = image.height * size
        x = (image.width - w) / 2
        y = (image.height - h) / 2
        self._draw(canvas, image.to_pil(), (x, y, w, h))
        return RasterImage.from_array(self._opaque(canvas))

    # ---------- 4) Вписывание в квадрат ----------
    def output_size(self, image: RasterImage) -> int:
        return max(image.width, image.height, MIN_CANVAS_SIZE)

    def draw_rect(
        self,
        width: int,
        height: int,
        output_size: int,
        size: float,
        preserve_aspect: bool,
        fit_mode: Union[FitMode, str] = FitMode.CONTAIN,
    ) -> Rect:
        """
        Прямоугольник (x, y, w, h) на квадратном холсте стороны `output_size`.

        Без сохранения пропорций: при size < 0.9 квадрат стороны output_size*size по центру,
        иначе весь холст. С сохранением пропорций:
        - contain: длинная сторона = output_size*size, исходник виден целиком;
        - cover: короткая сторона = output_size*size, длинная выходит за холст;
        - stretch: квадрат output_size*size.
        """
        target = output_size * size
        if not preserve_aspect:
            if size < CENTER_SCALE_LIMIT:
                offset = (output_size - target) / 2
                return offset, offset, target, target
            return 0.0, 0.0, float(output_size), float(output_size)

        if width <= 0 or height <= 0:
            raise ValueError(f"Пропорции не определены для {width}x{height}")
        ratio = width / height
        mode = FitMode.parse(fit_mode)
        if mode is FitMode.COVER:
            if ratio > 1:
                draw_h = target
                draw_w = draw_h * ratio
            else:
                draw_w = target
                draw_h = draw_w / ratio
        elif mode is FitMode.STRETCH:
            draw_w = draw_h = target
        else:
            if ratio > 1:
                draw_w = target
                draw_h = draw_w / ratio
            else:
                draw_h = target
                draw_w = draw_h * ratio
        return (output_size - draw_w) / 2, (output_size - draw_h) / 2, draw_w, draw_h

    def aspect_fit(
        self,
        image: RasterImage,
        size: float,
        hard_edge: float = 0.0,
        preserve_aspect: bool = True,
        fit_mode: Union[FitMode, str] = FitMode.CONTAIN,
    ) -> RasterImage:
        """
        Квадратная композиция стороны max(w, h, 1024) на чёрном фоне.

        После отрисовки порог (если hard_edge > 0) применяется ко всему холсту;
        hard_edge приводится к [0, 1] так же, как в `threshold`.
        Пустой исходник даёт чёрный холст.
        """
        side = self.output_size(image)
        canvas = RasterImage.blank(side, side).to_pil()
        if not image.is_empty:
            rect = self.draw_rect(image.width, image.height, side, size, preserve_aspect, fit_mode)
            self._draw(canvas, image.to_pil(), rect)
        arr = self._opaque(canvas)
        hard = clamp01(hard_edge)
        if hard > 0:
            self._apply_threshold(arr, hard)
        return RasterImage.from_array(arr)
