"""Ошибки предметной области.

Любая ошибка завершает вызов целиком: частичное изображение не возвращается.
"""
from __future__ import annotations


class MaskError(Exception):
    """Базовая ошибка работы с масками."""


class InvalidRegistration(MaskError):
    """Регистрация без имени или без источника."""


class MaskNotFound(MaskError, KeyError):
    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"Маска не найдена: {self.name}"


class LoadFailed(MaskError):
    """Загрузчик не смог получить или декодировать изображение."""

    def __init__(self, source: str, reason: str) -> None:
        super().__init__(f"Не удалось загрузить {source}: {reason}")
        self.source = source
        self.reason = reason


class InvalidBuffer(MaskError):
    """Приёмник рендера не поддерживает ожидаемый контракт записи."""
