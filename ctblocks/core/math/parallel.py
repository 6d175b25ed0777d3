"""
Parallel — data-parallel примитивы для ядра Vector/Matrix

Элементные операции Vector/Matrix делятся на непрерывные чанки и выполняются
в пуле потоков joblib. Каждый чанк пишет только в свой срез, поэтому операции
race-free по построению. NumPy ufuncs отпускают GIL, потоки реально работают
параллельно.

Редукции (sum, norm_sq, Matrix.sum) выполняются как fold по чанкам с
последующей попарной (tree) редукцией частичных результатов. Общего
аккумулятора под lock нет.

Маленькие контейнеры (меньше порога из ParallelConfig) обрабатываются
последовательно в вызывающем потоке.
"""

import contextlib
import logging
import os
from functools import reduce
from typing import Any, Callable, Iterator, Sequence, TypeVar

import numpy as np
from joblib import Parallel, delayed
from pydantic import BaseModel, Field, field_validator

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")


# =============================================================================
# КОНФИГУРАЦИЯ
# =============================================================================


class ParallelConfig(BaseModel):
    """
    Конфигурация data-parallel исполнения.

    Immutable модель (frozen=True). Для изменения используйте
    set_parallel_config() или override_parallel_config().
    """

    n_jobs: int = Field(
        default=-1,
        description="Число потоков joblib (-1 = все ядра, 1 = последовательно)",
    )
    min_parallel_size: int = Field(
        default=65536,
        gt=0,
        description="Минимальное число элементов для разбиения на чанки",
    )
    min_parallel_rows: int = Field(
        default=64,
        gt=0,
        description="Минимальное число строк Matrix для row-wise fan-out",
    )

    model_config = {"frozen": True}

    @field_validator("n_jobs")
    @classmethod
    def validate_n_jobs(cls, v: int) -> int:
        """n_jobs == 0 не имеет смысла для joblib."""
        if v == 0:
            raise ValueError("n_jobs must be non-zero (1 = serial, -1 = all cores)")
        return v

    def effective_workers(self) -> int:
        """
        Фактическое число воркеров.

        Отрицательные значения трактуются как в joblib:
        -1 → все ядра, -2 → все кроме одного и т.д.
        """
        if self.n_jobs > 0:
            return self.n_jobs
        cpu_count = os.cpu_count() or 1
        return max(1, cpu_count + 1 + self.n_jobs)


_current_config = ParallelConfig()


def get_parallel_config() -> ParallelConfig:
    """Текущая process-wide конфигурация."""
    return _current_config


def set_parallel_config(config: ParallelConfig) -> None:
    """Установить process-wide конфигурацию."""
    global _current_config

    if not isinstance(config, ParallelConfig):
        raise TypeError(f"config must be a ParallelConfig, got {type(config).__name__}")

    _current_config = config
    logger.debug("Parallel config set: %s", config)


@contextlib.contextmanager
def override_parallel_config(**overrides: Any) -> Iterator[ParallelConfig]:
    """
    Временно заменить конфигурацию (значения валидируются заново).

    Examples:
        >>> with override_parallel_config(n_jobs=1):
        ...     ...  # всё исполняется последовательно
    """
    previous = get_parallel_config()
    config = ParallelConfig(**{**previous.model_dump(), **overrides})
    set_parallel_config(config)
    try:
        yield config
    finally:
        set_parallel_config(previous)


# =============================================================================
# РАЗБИЕНИЕ НА ЧАНКИ
# =============================================================================


def chunk_bounds(n: int, parts: int) -> list[tuple[int, int]]:
    """
    Разбить диапазон [0, n) на не более чем parts непрерывных чанков.

    Размеры чанков отличаются не более чем на 1.

    Examples:
        >>> chunk_bounds(10, 3)
        [(0, 4), (4, 7), (7, 10)]
        >>> chunk_bounds(0, 4)
        []
    """
    if n <= 0:
        return []

    parts = max(1, min(parts, n))
    step, extra = divmod(n, parts)

    bounds = []
    lo = 0
    for i in range(parts):
        hi = lo + step + (1 if i < extra else 0)
        bounds.append((lo, hi))
        lo = hi

    return bounds


def _split_plan(n: int, min_size: int, config: ParallelConfig) -> list[tuple[int, int]] | None:
    """Чанки для параллельного исполнения или None, если выгоднее последовательно."""
    workers = config.effective_workers()
    if workers <= 1 or n < min_size:
        return None
    return chunk_bounds(n, workers)


# =============================================================================
# ELEMENTWISE
# =============================================================================


def elementwise(
    func: Callable[..., np.ndarray],
    *arrays: np.ndarray,
    out: np.ndarray | None = None,
) -> np.ndarray:
    """
    Применить векторизованную func к выровненным срезам arrays.

    func получает срезы всех arrays одного диапазона и возвращает массив
    той же длины, который записывается в соответствующий срез out.
    out может совпадать с одним из arrays (in-place операция).

    Деление на ноль и переполнение дают IEEE-754 inf/nan без warnings.

    Args:
        func: Векторизованная функция над срезами
        arrays: Входные массивы одинаковой длины (минимум один)
        out: Выходной массив (по умолчанию новый float64)

    Returns:
        out
    """
    if not arrays:
        raise ValueError("elementwise() requires at least one input array")

    n = len(arrays[0])
    if out is None:
        out = np.empty(n, dtype=np.float64)

    def _apply(lo: int, hi: int) -> None:
        with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
            out[lo:hi] = func(*(a[lo:hi] for a in arrays))

    config = get_parallel_config()
    plan = _split_plan(n, config.min_parallel_size, config)
    if plan is None:
        _apply(0, n)
        return out

    Parallel(n_jobs=len(plan), require="sharedmem")(
        delayed(_apply)(lo, hi) for lo, hi in plan
    )
    return out


def parallel_sum(values: np.ndarray) -> float:
    """
    Сумма элементов: частичные суммы по чанкам + tree-редукция.

    Порядок суммирования float зависит от разбиения, поэтому
    побитовая воспроизводимость между конфигурациями не гарантируется.
    """
    config = get_parallel_config()
    plan = _split_plan(len(values), config.min_parallel_size, config)
    if plan is None:
        return float(np.sum(values))

    partials = Parallel(n_jobs=len(plan), prefer="threads")(
        delayed(np.sum)(values[lo:hi]) for lo, hi in plan
    )
    return float(tree_reduce(lambda a, b: a + b, partials))


# =============================================================================
# MAP / REDUCE НАД ПОСЛЕДОВАТЕЛЬНОСТЯМИ
# =============================================================================


def parallel_map(
    func: Callable[[T], R],
    items: Sequence[T],
    *,
    min_size: int | None = None,
) -> list[R]:
    """
    Упорядоченный map: чанки items обрабатываются в пуле потоков.

    Args:
        func: Функция без побочных эффектов
        items: Входная последовательность
        min_size: Порог распараллеливания (default: min_parallel_size)

    Returns:
        Список результатов в порядке items
    """
    config = get_parallel_config()
    threshold = config.min_parallel_size if min_size is None else min_size
    plan = _split_plan(len(items), threshold, config)
    if plan is None:
        return [func(item) for item in items]

    def _map_chunk(lo: int, hi: int) -> list[R]:
        return [func(items[i]) for i in range(lo, hi)]

    chunks = Parallel(n_jobs=len(plan), prefer="threads")(
        delayed(_map_chunk)(lo, hi) for lo, hi in plan
    )
    return [result for chunk in chunks for result in chunk]


def tree_reduce(op: Callable[[T, T], T], items: Sequence[T]) -> T:
    """
    Попарная (tree) редукция: ((a op b) op (c op d)) ...

    Raises:
        ValueError: Если items пустая
    """
    if len(items) == 0:
        raise ValueError("tree_reduce() of empty sequence")

    level = list(items)
    while len(level) > 1:
        paired = [op(level[i], level[i + 1]) for i in range(0, len(level) - 1, 2)]
        if len(level) % 2:
            paired.append(level[-1])
        level = paired

    return level[0]


def parallel_reduce(
    op: Callable[[T, T], T],
    items: Sequence[T],
    initial: T,
    *,
    min_size: int | None = None,
) -> T:
    """
    Ассоциативная редукция без общего изменяемого состояния.

    Каждый воркер сворачивает свой чанк, частичные результаты
    объединяются tree_reduce. op не должна мутировать аргументы.

    Args:
        op: Ассоциативная бинарная операция
        items: Входная последовательность
        initial: Результат для пустой последовательности и левый операнд свёртки
        min_size: Порог распараллеливания (default: min_parallel_size)
    """
    if len(items) == 0:
        return initial

    config = get_parallel_config()
    threshold = config.min_parallel_size if min_size is None else min_size
    plan = _split_plan(len(items), threshold, config)
    if plan is None:
        return reduce(op, items, initial)

    def _fold_chunk(lo: int, hi: int) -> T:
        return reduce(op, (items[i] for i in range(lo + 1, hi)), items[lo])

    partials = Parallel(n_jobs=len(plan), prefer="threads")(
        delayed(_fold_chunk)(lo, hi) for lo, hi in plan
    )
    return op(initial, tree_reduce(op, partials))
