"""Реестр масок: имя -> обработанное изображение.

Принципы:
- SRP: только хранение; обработка живёт в `ProcessService`.
- Запись под блокировкой: одновременная регистрация из нескольких потоков безопасна.
"""
from __future__ import annotations

import threading
from typing import Dict, List

from pngmask.models.errors import MaskNotFound
from pngmask.models.raster_model import RasterImage


class MaskStore:
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._masks: Dict[str, RasterImage] = {}

    def put(self, name: str, image: RasterImage) -> None:
        """Сохраняет маску; существующая запись с тем же именем заменяется (позиция сохраняется)."""
        with self._lock:
            self._masks[name] = image

    def get(self, name: str) -> RasterImage:
        with self._lock:
            try:
                return self._masks[name]
            except KeyError:
                raise MaskNotFound(name) from None

    def remove(self, name: str) -> None:
        with self._lock:
            if self._masks.pop(name, None) is None:
                raise MaskNotFound(name)

    def names(self) -> List[str]:
        """Имена в порядке первой регистрации."""
        with self._lock:
            return list(self._masks)

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._masks

    def __len__(self) -> int:
        with self._lock:
            return len(self._masks)
