"""
Value capability — маркер допустимых типов значений блоков.

Value — любой тип, который может проходить через Source/Sink/Transfer.
Контракт: value semantics (копия не разделяет изменяемое состояние с
оригиналом), без identity кроме самих данных.

Допустимые типы регистрируются явно:
- скаляры: bool, int, float, str и скалярные типы NumPy
- контейнеры ядра: Vector, Matrix (наследуют IsValue)
- пользовательские типы: наследование от IsValue или IsValue.register(T)
"""

import copy
from abc import ABC
from typing import Any, TypeVar

import numpy as np

from ctblocks.core.model.errors import ValueTypeError


class IsValue(ABC):
    """
    Маркер Value capability (без операций).

    Используется как граница generic-параметров блоков и как
    runtime-проверка в конструкторах блоков (ensure_value).
    """

    __slots__ = ()


# Скаляры: неизменяемые, копирование тривиально
for _scalar_type in (bool, int, float, str, np.integer, np.floating, np.bool_):
    IsValue.register(_scalar_type)

del _scalar_type


V = TypeVar("V", bound=IsValue)
Vi = TypeVar("Vi", bound=IsValue)
Vo = TypeVar("Vo", bound=IsValue)


def is_value(obj: Any) -> bool:
    """True если obj поддерживает Value capability."""
    return isinstance(obj, IsValue)


def ensure_value(obj: Any, name: str = "value") -> Any:
    """
    Проверить Value capability на границе блока.

    Args:
        obj: Проверяемый объект
        name: Имя параметра (для сообщения об ошибке)

    Returns:
        obj без изменений

    Raises:
        ValueTypeError: Если тип obj не зарегистрирован как Value
    """
    if not is_value(obj):
        raise ValueTypeError(
            f"{name} must be a Value (scalar, Vector, Matrix or a type registered "
            f"with IsValue), got {type(obj).__name__}"
        )
    return obj


def clone_value(value: Any) -> Any:
    """
    Копия значения без aliasing.

    Контейнеры ядра предоставляют copy(); для скаляров возвращается
    сам объект (они неизменяемы); остальные копируются через copy.copy.
    """
    if hasattr(value, "copy") and callable(value.copy):
        return value.copy()
    if isinstance(value, (bool, int, float, str, np.generic)):
        return value
    return copy.copy(value)
