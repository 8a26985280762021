"""Модель растрового изображения маски.

Принципы:
- SRP: только структура данных и конвертации, без логики обработки.
- Чистый код: неизменяемость (`frozen=True`) — этапы конвейера не мутируют вход.
"""
from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from PIL import Image


@dataclass(frozen=True)
class RasterImage:
    """Неизменяемый RGBA-буфер.

    Fields:
        width: Ширина, px.
        height: Высота, px.
        pixels: Байты RGBA построчно, длина `width * height * 4`.
    """
    width: int
    height: int
    pixels: bytes

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError(f"Отрицательный размер: {self.width}x{self.height}")
        expected = self.width * self.height * 4
        if len(self.pixels) != expected:
            raise ValueError(
                f"Размер буфера {len(self.pixels)} не соответствует {self.width}x{self.height} RGBA ({expected})"
            )

    @property
    def size(self) -> tuple[int, int]:
        return self.width, self.height

    @property
    def is_empty(self) -> bool:
        return self.width == 0 or self.height == 0

    # ---- Конвертации ----
    @classmethod
    def blank(cls, width: int, height: int) -> "RasterImage":
        """Непрозрачный чёрный холст заданного размера."""
        arr = np.zeros((height, width, 4), dtype=np.uint8)
        arr[..., 3] = 255
        return cls.from_array(arr)

    @classmethod
    def from_array(cls, arr: np.ndarray) -> "RasterImage":
        """Создаёт изображение из массива формы (H, W, 4), uint8."""
        if arr.ndim != 3 or arr.shape[2] != 4:
            raise ValueError(f"Ожидался массив (H, W, 4), получено {arr.shape}")
        height, width = arr.shape[:2]
        return cls(width=width, height=height, pixels=np.ascontiguousarray(arr, dtype=np.uint8).tobytes())

    def to_array(self) -> np.ndarray:
        """Копия пикселей как изменяемый numpy-массив (H, W, 4)."""
        return np.frombuffer(self.pixels, dtype=np.uint8).reshape(self.height, self.width, 4).copy()

    @classmethod
    def from_pil(cls, image: Image.Image) -> "RasterImage":
        rgba = image if image.mode == "RGBA" else image.convert("RGBA")
        width, height = rgba.size
        if width == 0 or height == 0:
            return cls(width=width, height=height, pixels=b"")
        return cls(width=width, height=height, pixels=rgba.tobytes())

    def to_pil(self) -> Image.Image:
        if self.is_empty:
            return Image.new("RGBA", self.size)
        return Image.frombytes("RGBA", self.size, self.pixels)
