"""Оркестратор масок: регистрация и выдача формы по имени.

Принципы:
- SRP: маршрутизация между реестром, загрузчиком и конвейером; пиксельной логики нет.
- DIP: реестр, загрузчик, конвейер и приёмник передаются извне, у сессии нет глобального состояния.
"""
from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Mapping, Optional, Tuple, Union

from pngmask.models.errors import InvalidRegistration
from pngmask.models.params_model import FitMode, GeometryParams
from pngmask.models.raster_model import RasterImage
from pngmask.services.image_service import ImageService
from pngmask.services.mask_store import MaskStore
from pngmask.services.process_service import CENTER_SCALE_LIMIT, ProcessService
from pngmask.services.render_sink import render_to_sink
from pngmask.settings import settings

logger = logging.getLogger(__name__)

Source = Union[str, Path]
MaskDefs = Union[Mapping[str, Source], Iterable[Tuple[str, Source]]]


@dataclass(frozen=True)
class ShapeResult:
    """Результат `shape`.

    Fields:
        image: Готовая композиция.
        residual_scale: Масштаб, который приёмник должен применить сам (1.0 — ничего).
    """
    image: RasterImage
    residual_scale: float = 1.0


class MaskService:
    def __init__(
        self,
        store: Optional[MaskStore] = None,
        loader: Optional[ImageService] = None,
        processor: Optional[ProcessService] = None,
    ) -> None:
        self.store = store if store is not None else MaskStore()
        self.loader = loader if loader is not None else ImageService()
        self.processor = processor if processor is not None else ProcessService()

    # ---- Регистрация ----
    def register(self, name: str, image: Optional[RasterImage]) -> str:
        """Извлекает альфу и сохраняет маску под именем `name` (перезаписывая прежнюю).

        Raises:
            InvalidRegistration: если не указаны имя или изображение.
        """
        if not name or image is None:
            raise InvalidRegistration("register(name, image) требует оба параметра")
        processed = self.processor.extract_alpha(image)
        self.store.put(name, processed)
        logger.info("Mask loaded: %s (%dx%d)", name, processed.width, processed.height)
        return name

    def load_mask(self, source: Optional[Source], name: str) -> str:
        """Загружает изображение через загрузчик и регистрирует его.

        Ошибка загрузчика (`LoadFailed`) передаётся вызывающему без изменений.
        """
        if not source or not name:
            raise InvalidRegistration("load_mask(source, name) требует оба параметра")
        image = self.loader.fetch(source)
        return self.register(name, image)

    def load_masks(self, defs: MaskDefs) -> List[str]:
        """Загружает несколько масок параллельно: словарь имя->источник или пары (имя, источник).

        Имена возвращаются в порядке `defs`; первая ошибка прерывает вызов.
        """
        entries = list(defs.items()) if isinstance(defs, Mapping) else [tuple(e) for e in defs]
        if not entries:
            return []
        workers = min(settings.LOAD_WORKERS, len(entries))
        with ThreadPoolExecutor(max_workers=workers) as pool:
            futures = [pool.submit(self.load_mask, source, name) for name, source in entries]
            return [f.result() for f in futures]

    def reload_mask(self, name: str, source: Source) -> str:
        """То же имя — запись заменяется."""
        return self.load_mask(source, name)

    def list_names(self) -> List[str]:
        return self.store.names()

    # ---- Выдача ----
    def use_mask(self, name: str, sink: Optional[object] = None) -> RasterImage:
        """Возвращает сохранённую маску без преобразований."""
        image = self.store.get(name)
        if sink is not None:
            render_to_sink(sink, image)
        return image

    def shape(
        self,
        name: str,
        size: float = 1.0,
        hard_edge: float = 0.0,
        preserve_aspect: bool = False,
        fit_mode: Union[FitMode, str] = FitMode.CONTAIN,
        sink: Optional[object] = None,
    ) -> ShapeResult:
        """Строит форму маски по параметрам.

        - без пропорций, size < 0.9: уменьшение по центру на чёрном фоне, затем порог;
        - без пропорций, size >= 0.9: только порог, масштаб `size` остаётся приёмнику;
        - с пропорциями: квадратная композиция `aspect_fit`.

        Raises:
            MaskNotFound: если имя не зарегистрировано.
        """
        mask = self.store.get(name)
        params = GeometryParams(size=size, hard_edge=hard_edge, preserve_aspect=preserve_aspect, fit_mode=fit_mode)
        result = self._dispatch(mask, params)
        if sink is not None:
            render_to_sink(sink, result.image, result.residual_scale)
        return result

    def _dispatch(self, mask: RasterImage, params: GeometryParams) -> ShapeResult:
        proc = self.processor
        if params.preserve_aspect:
            image = proc.aspect_fit(mask, params.size, params.hard_edge, True, params.fit_mode)
            return ShapeResult(image=image)
        if params.size < CENTER_SCALE_LIMIT:
            image = proc.threshold(proc.center_scale(mask, params.size), params.hard_edge)
            return ShapeResult(image=image)
        return ShapeResult(image=proc.threshold(mask, params.hard_edge), residual_scale=params.size)
