"""Загрузка изображений с диска или по HTTP и упаковка в `RasterImage`.

Принципы:
- SRP: класс отвечает только за получение и декодирование; обработки здесь нет.
- OCP: новые источники добавляются отдельными методами, `fetch` лишь выбирает метод.
- Все сбои наружу выходят как `LoadFailed`; повторов нет.
"""
from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import Optional

import requests
from PIL import Image, UnidentifiedImageError

from pngmask.models.errors import LoadFailed
from pngmask.models.raster_model import RasterImage
from pngmask.settings import settings

logger = logging.getLogger(__name__)

_URL_SCHEMES = ("http://", "https://")


class ImageService:
    def __init__(self, timeout: Optional[float] = None, session: Optional[requests.Session] = None) -> None:
        self.timeout = settings.HTTP_TIMEOUT if timeout is None else timeout
        self._session = session

    def fetch(self, source: str | Path) -> RasterImage:
        """Загружает изображение по URL (http/https) или пути к файлу."""
        text = str(source)
        if text.lower().startswith(_URL_SCHEMES):
            return self.load_url(text)
        return self.load_image(source)

    def load_image(self, file_path: str | Path) -> RasterImage:
        """Загружает изображение с диска.

        Args:
            file_path: Путь до файла изображения.

        Returns:
            `RasterImage` в порядке RGBA.

        Raises:
            LoadFailed: если путь не существует или файл не распознан как изображение.
        """
        path = Path(file_path)
        if not path.exists() or not path.is_file():
            logger.warning("Mask source not found: %s", path)
            raise LoadFailed(str(path), "файл не найден")
        try:
            with Image.open(path) as pil_image:
                return RasterImage.from_pil(pil_image.convert("RGBA"))
        except (UnidentifiedImageError, OSError) as exc:
            logger.warning("Cannot decode %s: %s", path, exc)
            raise LoadFailed(str(path), "файл не является изображением") from exc

    def load_url(self, url: str) -> RasterImage:
        """Скачивает изображение и декодирует его.

        Raises:
            LoadFailed: сетевая ошибка, HTTP-статус не 2xx или данные не декодируются.
        """
        getter = self._session.get if self._session is not None else requests.get
        try:
            resp = getter(url, timeout=self.timeout)
            resp.raise_for_status()
        except requests.RequestException as exc:
            logger.warning("Mask download failed for %s: %s", url, exc)
            raise LoadFailed(url, str(exc)) from exc
        return self.decode_bytes(resp.content, source=url)

    def decode_bytes(self, data: bytes, source: str = "<bytes>") -> RasterImage:
        try:
            with Image.open(io.BytesIO(data)) as pil_image:
                return RasterImage.from_pil(pil_image.convert("RGBA"))
        except (UnidentifiedImageError, OSError) as exc:
            logger.warning("Cannot decode %s: %s", source, exc)
            raise LoadFailed(source, "данные не являются изображением") from exc
