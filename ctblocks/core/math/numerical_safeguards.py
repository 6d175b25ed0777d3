"""
Numerical Safeguards — численные проверки для ядра Vector/Matrix и блоков

Модуль обеспечивает общие численные примитивы блоков и контейнеров:
- Ограничение значения диапазоном (clamp) для Saturation
- Валидация параметров (размерности, NaN в границах)

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. clamp никогда не расширяет диапазон: bottom <= clamp(x) <= top
2. NaN на входе clamp пропагирует как NaN (не маскируется границей)
"""

import math

# =============================================================================
# ОГРАНИЧЕНИЕ ДИАПАЗОНОМ
# =============================================================================


def clamp(
    value: float,
    min_value: float | None = None,
    max_value: float | None = None,
) -> float:
    """
    Ограничение значения в заданном диапазоне.

    NaN на входе возвращается как NaN: сравнения с NaN ложны,
    поэтому ни одна из границ не применяется.

    Args:
        value: Исходное значение
        min_value: Минимальное допустимое значение (optional)
        max_value: Максимальное допустимое значение (optional)

    Returns:
        Значение, ограниченное диапазоном [min_value, max_value]

    Examples:
        >>> clamp(5.0, 0.0, 10.0)
        5.0
        >>> clamp(-1.0, 0.0, 10.0)
        0.0
        >>> clamp(15.0, 0.0, 10.0)
        10.0
    """
    result = value

    if min_value is not None and result < min_value:
        result = min_value

    if max_value is not None and result > max_value:
        result = max_value

    return result


# =============================================================================
# ВАЛИДАЦИЯ И ПРОВЕРКИ
# =============================================================================


def validate_dimension(value: int, name: str) -> None:
    """
    Валидация размерности контейнера (целое, неотрицательное).

    Raises:
        TypeError: Если value не целое (bool тоже отклоняется)
        ValueError: Если value < 0
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an int, got {type(value).__name__}")

    if value < 0:
        raise ValueError(f"{name} must be non-negative, got {value}")


def validate_not_nan(value: float, name: str) -> None:
    """
    Валидация, что значение не NaN (Inf допускается).

    Raises:
        ValueError: Если value is NaN
    """
    if math.isnan(value):
        raise ValueError(f"{name} must not be NaN")
