"""
Vector — плотный вектор float64 фиксированной размерности.

Инварианты:
1. len(data) == dim на всё время жизни объекта
2. Любая операция между двумя Vector требует равных dim (DimensionMismatchError)
3. Value semantics: конструктор и copy() никогда не разделяют буфер

Элементные операции и редукции выполняются через ctblocks.core.math.parallel.
Деление на ноль в элементной арифметике даёт IEEE-754 inf/nan.
"""

import math
import operator
from numbers import Real
from typing import TYPE_CHECKING, Any, Callable, Iterable, Iterator

import numpy as np

from ctblocks.core.math.numerical_safeguards import validate_dimension
from ctblocks.core.math.parallel import elementwise, parallel_sum
from ctblocks.core.model.errors import (
    DegenerateComparisonError,
    DimensionMismatchError,
    DivisionByZeroError,
)
from ctblocks.core.model.value import IsValue

if TYPE_CHECKING:
    from ctblocks.core.model.matrix import Matrix


class Vector(IsValue):
    """
    Упорядоченная последовательность float64 фиксированной длины.

    Создание:
        Vector([1.0, 2.0, 3.0])   # из последовательности (копия)
        Vector.new(3)             # нули
        Vector.ones(3)            # единицы

    Индексация:
        v[i]                      # float (чтение и запись)
        v[a:b]                    # read-only np.ndarray view, не Vector:
                                  # семантика NumPy (== поэлементно)
    """

    __slots__ = ("_data",)

    # Изменяемый контейнер: не хешируется
    __hash__ = None  # type: ignore[assignment]

    # NumPy не должен перехватывать арифметику (np.float64 * Vector → Vector)
    __array_ufunc__ = None

    def __init__(self, data: Iterable[float] = ()):
        if isinstance(data, Vector):
            array = data._data.copy()
        else:
            if not isinstance(data, (np.ndarray, list, tuple)):
                data = list(data)
            array = np.array(data, dtype=np.float64)

        if array.ndim != 1:
            raise ValueError(
                f"Vector data must be one-dimensional, got shape {array.shape} "
                f"(use Vector.new(dim) for a zero vector)"
            )

        self._data = array

    @classmethod
    def _wrap(cls, array: np.ndarray) -> "Vector":
        """Обернуть массив без копирования (только для свежих буферов)."""
        vector = cls.__new__(cls)
        vector._data = array
        return vector

    # =========================================================================
    # КОНСТРУКТОРЫ
    # =========================================================================

    @classmethod
    def new(cls, dim: int) -> "Vector":
        """Нулевой вектор размерности dim (dim = 0 допустим)."""
        validate_dimension(dim, "dim")
        return cls._wrap(np.zeros(dim, dtype=np.float64))

    @classmethod
    def zero(cls, dim: int) -> "Vector":
        """Синоним new()."""
        return cls.new(dim)

    @classmethod
    def ones(cls, dim: int) -> "Vector":
        """Вектор из единиц размерности dim."""
        vector = cls.new(dim)
        vector.fill(1.0)
        return vector

    def zero_like(self) -> "Vector":
        return Vector.new(self.dim)

    def ones_like(self) -> "Vector":
        return Vector.ones(self.dim)

    def copy(self) -> "Vector":
        return Vector._wrap(self._data.copy())

    def __copy__(self) -> "Vector":
        return self.copy()

    def __deepcopy__(self, memo: dict) -> "Vector":
        return self.copy()

    # =========================================================================
    # АТРИБУТЫ
    # =========================================================================

    @property
    def dim(self) -> int:
        return len(self._data)

    @property
    def data(self) -> np.ndarray:
        """Read-only view данных (без копирования)."""
        view = self._data.view()
        view.flags.writeable = False
        return view

    def to_list(self) -> list[float]:
        return self._data.tolist()

    def dim_eq(self, other: "Vector") -> bool:
        return self.dim == other.dim

    def _check_dim(self, other: "Vector") -> None:
        if not self.dim_eq(other):
            raise DimensionMismatchError(
                f"Vector dimension mismatch: {self.dim} != {other.dim}",
                expected=self.dim,
                actual=other.dim,
            )

    # =========================================================================
    # РЕДУКЦИИ
    # =========================================================================

    def norm_sq(self) -> float:
        """Сумма квадратов компонент (параллельная редукция)."""
        return parallel_sum(elementwise(np.square, self._data))

    def norm(self) -> float:
        """Евклидова норма."""
        return math.sqrt(self.norm_sq())

    def normalize(self) -> "Vector":
        """
        Новый вектор единичной нормы.

        Raises:
            DivisionByZeroError: Если norm() == 0
        """
        norm = self.norm()
        if norm == 0.0:
            raise DivisionByZeroError("cannot normalize a zero-norm Vector")
        return self / norm

    def dot(self, other: "Vector") -> float:
        """Скалярное произведение (требует равных dim)."""
        self._check_dim(other)
        return parallel_sum(elementwise(np.multiply, self._data, other._data))

    def cross(self, other: "Vector") -> "Vector":
        """
        Векторное произведение 3-D векторов.

        Raises:
            DimensionMismatchError: Если dim любого операнда != 3
        """
        if self.dim != 3 or other.dim != 3:
            raise DimensionMismatchError(
                f"cross() requires two 3-dimensional vectors, got {self.dim} and {other.dim}",
                expected=3,
                actual=(self.dim, other.dim),
            )

        a, b = self._data, other._data
        return Vector(
            [
                a[1] * b[2] - a[2] * b[1],
                a[2] * b[0] - a[0] * b[2],
                a[0] * b[1] - a[1] * b[0],
            ]
        )

    def max(self) -> float:
        """
        Максимальная компонента; NaN пропускаются.

        Returns:
            NaN только если все компоненты NaN

        Raises:
            ValueError: Для пустого вектора
        """
        if self.dim == 0:
            raise ValueError("max() of an empty Vector")
        if np.isnan(self._data).all():
            return math.nan
        return float(np.nanmax(self._data))

    def min(self) -> float:
        """Минимальная компонента; NaN пропускаются (см. max())."""
        if self.dim == 0:
            raise ValueError("min() of an empty Vector")
        if np.isnan(self._data).all():
            return math.nan
        return float(np.nanmin(self._data))

    # =========================================================================
    # СОРТИРОВКА
    # =========================================================================

    def _check_comparable(self, operation: str) -> None:
        if np.isnan(self._data).any():
            raise DegenerateComparisonError(f"{operation}() of a Vector containing NaN")

    def sort(self) -> None:
        """
        In-place сортировка по возрастанию.

        Raises:
            DegenerateComparisonError: Если есть NaN
        """
        self._check_comparable("sort")
        self._data.sort(kind="stable")

    def arg_sort(self) -> list[int]:
        """
        Перестановка индексов, сортирующая вектор (вектор не меняется).

        Raises:
            DegenerateComparisonError: Если есть NaN
        """
        self._check_comparable("arg_sort")
        return np.argsort(self._data, kind="stable").tolist()

    def zip_sort(self, matrix: "Matrix") -> "Matrix":
        """
        Совместная сортировка: вектор — ключ, строки matrix переставляются так же.

        Вектор сортируется in-place. NaN-ключи уходят в конец (порядок
        устойчивый). Возвращается новая Matrix с переставленными копиями строк.

        Examples:
            >>> v = Vector([2.0, 1.0, 3.0])
            >>> m = Matrix([[1, 2, 3], [3, 4, 5], [5, 6, 7]])
            >>> v.zip_sort(m).to_list()
            [[3.0, 4.0, 5.0], [1.0, 2.0, 3.0], [5.0, 6.0, 7.0]]
            >>> v.to_list()
            [1.0, 2.0, 3.0]

        Raises:
            DimensionMismatchError: Если matrix.dim != self.dim
        """
        if matrix.dim != self.dim:
            raise DimensionMismatchError(
                f"zip_sort() requires one matrix row per component: {self.dim} != {matrix.dim}",
                expected=self.dim,
                actual=matrix.dim,
            )

        order = np.argsort(self._data, kind="stable")
        self._data[:] = self._data[order]
        return matrix.take_rows(order.tolist())

    # =========================================================================
    # ЭЛЕМЕНТНЫЕ ПРЕОБРАЗОВАНИЯ
    # =========================================================================

    def fill(self, value: float) -> None:
        """In-place: все компоненты = value."""
        value = float(value)
        elementwise(lambda a: np.full(len(a), value), self._data, out=self._data)

    def abs(self) -> "Vector":
        return Vector._wrap(elementwise(np.abs, self._data))

    def map(self, func: Callable[[float], float]) -> "Vector":
        """
        Новый вектор func(x) для каждой компоненты.

        func должна быть без побочных эффектов: чанки обрабатываются
        в разных потоках в произвольном порядке.
        """

        def _map_chunk(chunk: np.ndarray) -> np.ndarray:
            return np.fromiter(
                (func(float(x)) for x in chunk), dtype=np.float64, count=len(chunk)
            )

        return Vector._wrap(elementwise(_map_chunk, self._data))

    # =========================================================================
    # АРИФМЕТИКА
    # =========================================================================

    def _binary(self, other: Any, op: Callable[[Any, Any], np.ndarray]) -> "Vector":
        if isinstance(other, Vector):
            self._check_dim(other)
            return Vector._wrap(elementwise(op, self._data, other._data))
        if isinstance(other, Real):
            value = float(other)
            return Vector._wrap(elementwise(lambda a: op(a, value), self._data))
        return NotImplemented

    def _reflected(self, other: Any, op: Callable[[Any, Any], np.ndarray]) -> "Vector":
        if isinstance(other, Real):
            value = float(other)
            return Vector._wrap(elementwise(lambda a: op(value, a), self._data))
        return NotImplemented

    def _inplace(self, other: Any, op: Callable[[Any, Any], np.ndarray]) -> "Vector":
        if isinstance(other, Vector):
            self._check_dim(other)
            elementwise(op, self._data, other._data, out=self._data)
            return self
        if isinstance(other, Real):
            value = float(other)
            elementwise(lambda a: op(a, value), self._data, out=self._data)
            return self
        return NotImplemented

    def __add__(self, other: Any) -> "Vector":
        return self._binary(other, np.add)

    def __radd__(self, other: Any) -> "Vector":
        return self._reflected(other, np.add)

    def __iadd__(self, other: Any) -> "Vector":
        return self._inplace(other, np.add)

    def __sub__(self, other: Any) -> "Vector":
        return self._binary(other, np.subtract)

    def __rsub__(self, other: Any) -> "Vector":
        return self._reflected(other, np.subtract)

    def __isub__(self, other: Any) -> "Vector":
        return self._inplace(other, np.subtract)

    def __mul__(self, other: Any) -> "Vector":
        return self._binary(other, np.multiply)

    def __rmul__(self, other: Any) -> "Vector":
        return self._reflected(other, np.multiply)

    def __imul__(self, other: Any) -> "Vector":
        return self._inplace(other, np.multiply)

    def __truediv__(self, other: Any) -> "Vector":
        return self._binary(other, np.divide)

    def __rtruediv__(self, other: Any) -> "Vector":
        return self._reflected(other, np.divide)

    def __itruediv__(self, other: Any) -> "Vector":
        return self._inplace(other, np.divide)

    def __neg__(self) -> "Vector":
        return Vector._wrap(elementwise(np.negative, self._data))

    # =========================================================================
    # ПРОТОКОЛЫ КОНТЕЙНЕРА
    # =========================================================================

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vector):
            return NotImplemented
        return self.dim == other.dim and bool(np.array_equal(self._data, other._data))

    def __len__(self) -> int:
        return self.dim

    def __iter__(self) -> Iterator[float]:
        return iter(self._data.tolist())

    def __getitem__(self, index: int | slice) -> Any:
        if isinstance(index, slice):
            view = self._data[index]
            view.flags.writeable = False
            return view
        return float(self._data[operator.index(index)])

    def __setitem__(self, index: int, value: float) -> None:
        if isinstance(index, slice):
            raise TypeError("Vector range views are read-only")
        self._data[operator.index(index)] = float(value)

    def __repr__(self) -> str:
        return f"Vector({self._data.tolist()!r})"
