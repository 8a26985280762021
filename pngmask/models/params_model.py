"""Параметры геометрии маски: масштаб, жёсткость края, режим вписывания."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union


def clamp01(x: Optional[float]) -> float:
    """Ограничивает значение диапазоном [0, 1]; None трактуется как 0."""
    return max(0.0, min(1.0, float(x or 0.0)))


class FitMode(str, Enum):
    CONTAIN = "contain"
    COVER = "cover"
    STRETCH = "stretch"

    @classmethod
    def parse(cls, value: Union["FitMode", str, None]) -> "FitMode":
        """Неизвестные и пустые значения трактуются как `contain`."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.CONTAIN


@dataclass(frozen=True)
class GeometryParams:
    """Параметры запроса формы.

    Fields:
        size: Масштаб (> 0), 1.0 — исходный размер.
        hard_edge: Жёсткость края, приводится к [0, 1].
        preserve_aspect: Сохранять ли пропорции исходника.
        fit_mode: Стратегия вписывания при `preserve_aspect`.
    """
    size: float = 1.0
    hard_edge: float = 0.0
    preserve_aspect: bool = False
    fit_mode: FitMode = field(default=FitMode.CONTAIN)

    def __post_init__(self) -> None:
        if not self.size > 0:
            raise ValueError(f"size должен быть > 0, получено {self.size}")
        object.__setattr__(self, "size", float(self.size))
        object.__setattr__(self, "hard_edge", clamp01(self.hard_edge))
        object.__setattr__(self, "preserve_aspect", bool(self.preserve_aspect))
        object.__setattr__(self, "fit_mode", FitMode.parse(self.fit_mode))
