"""Приёмники готовых масок (RenderSink).

Конвейер не знает, где окажется результат: окно предпросмотра, файл или
внешний рендерер. Любой объект с методом `render(image, scale)` подходит.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Protocol, runtime_checkable

from pngmask.models.errors import InvalidBuffer
from pngmask.models.raster_model import RasterImage
from pngmask.services.process_service import ProcessService

logger = logging.getLogger(__name__)


@runtime_checkable
class RenderSink(Protocol):
    def render(self, image: RasterImage, scale: float = 1.0) -> None:
        """Принимает композицию и остаточный масштаб, который нужно применить при показе."""


def render_to_sink(sink: object, image: RasterImage, scale: float = 1.0) -> None:
    """Передаёт изображение приёмнику, проверив контракт записи.

    Raises:
        InvalidBuffer: если у приёмника нет вызываемого `render`.
    """
    render = getattr(sink, "render", None)
    if not callable(render):
        raise InvalidBuffer(f"Приёмник {sink!r} не поддерживает render(image, scale)")
    render(image, scale)


class PngFileSink:
    """Записывает маску в PNG; остаточный масштаб применяется вокруг центра."""

    def __init__(self, path: str | Path, processor: Optional[ProcessService] = None) -> None:
        self.path = Path(path)
        self._processor = processor or ProcessService()

    def render(self, image: RasterImage, scale: float = 1.0) -> None:
        if scale != 1.0:
            image = self._processor.center_scale(image, scale)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        image.to_pil().save(self.path, format="PNG")
        logger.info("Mask written to %s (%dx%d)", self.path, image.width, image.height)
