"""
Matrix — row-major контейнер из dim строк Vector одинаковой ширины.

Инварианты:
1. Все строки имеют ширину width (проверяется при построении и присваивании строки)
2. shape == (dim, width); width хранится явно, поэтому Matrix без строк
   сохраняет число столбцов: Matrix.new((0, 3)).shape == (0, 3)
3. Value semantics: конструктор копирует переданные строки

Row-wise операции распределяются по строкам через parallel_map,
sum() — редукция без общего аккумулятора (parallel_reduce).
"""

import operator
from numbers import Real
from typing import Any, Callable, Iterable, Iterator, Sequence

import numpy as np

from ctblocks.core.math.numerical_safeguards import validate_dimension
from ctblocks.core.math.parallel import get_parallel_config, parallel_map, parallel_reduce
from ctblocks.core.model.errors import DimensionMismatchError, DivisionByZeroError
from ctblocks.core.model.value import IsValue
from ctblocks.core.model.vector import Vector


def _row_map(func: Callable[[Any], Any], items: Sequence[Any]) -> list[Any]:
    return parallel_map(func, items, min_size=get_parallel_config().min_parallel_rows)


class Matrix(IsValue):
    """
    Плотная матрица float64 как последовательность строк Vector.

    Создание:
        Matrix([[1, 2], [3, 4]])           # из вложенных последовательностей
        Matrix([Vector([1, 2]), ...])      # из Vector (строки копируются)
        Matrix.new((2, 3))                 # нули
        Matrix.ones((2, 3))                # единицы
    """

    __slots__ = ("_rows", "_width")

    __hash__ = None  # type: ignore[assignment]
    __array_ufunc__ = None

    def __init__(
        self,
        rows: Iterable[Vector | Iterable[float]] = (),
        width: int | None = None,
    ):
        rows = list(rows)
        converted = _row_map(Vector, rows)

        if converted:
            expected = converted[0].dim if width is None else width
            for i, row in enumerate(converted):
                if row.dim != expected:
                    raise DimensionMismatchError(
                        f"Matrix row {i} has width {row.dim}, expected {expected}",
                        expected=expected,
                        actual=row.dim,
                    )
            width = expected
        elif width is None:
            width = 0
        else:
            validate_dimension(width, "width")

        self._rows: list[Vector] = converted
        self._width: int = width

    @classmethod
    def _wrap(cls, rows: list[Vector], width: int) -> "Matrix":
        """Обернуть список свежих строк без копирования и проверок."""
        matrix = cls.__new__(cls)
        matrix._rows = rows
        matrix._width = width
        return matrix

    # =========================================================================
    # КОНСТРУКТОРЫ
    # =========================================================================

    @classmethod
    def new(cls, shape: tuple[int, int]) -> "Matrix":
        """Нулевая матрица shape = (rows, cols); строки независимы."""
        n_rows, n_cols = shape
        validate_dimension(n_rows, "rows")
        validate_dimension(n_cols, "cols")
        return cls._wrap([Vector.new(n_cols) for _ in range(n_rows)], n_cols)

    @classmethod
    def zero(cls, shape: tuple[int, int]) -> "Matrix":
        """Синоним new()."""
        return cls.new(shape)

    @classmethod
    def ones(cls, shape: tuple[int, int]) -> "Matrix":
        matrix = cls.new(shape)
        matrix.fill(1.0)
        return matrix

    @classmethod
    def linespace(cls, start: Vector, end: Vector, n: int) -> "Matrix":
        """
        n строк, линейно интерполированных от start до end включительно.

        Шаг i / (n - 1): первая строка равна start, последняя — end
        (последняя строка копируется из end, без ошибки округления).
        n == 1 → [start], n == 0 → матрица без строк ширины start.dim.

        Raises:
            DimensionMismatchError: Если start.dim != end.dim
        """
        if not start.dim_eq(end):
            raise DimensionMismatchError(
                f"linespace() endpoints differ in dimension: {start.dim} != {end.dim}",
                expected=start.dim,
                actual=end.dim,
            )
        validate_dimension(n, "n")

        if n == 0:
            return cls._wrap([], start.dim)
        if n == 1:
            return cls._wrap([start.copy()], start.dim)

        delta = end - start
        rows = _row_map(lambda i: start + delta * (i / (n - 1)), range(n - 1))
        rows.append(end.copy())
        return cls._wrap(rows, start.dim)

    def zero_like(self) -> "Matrix":
        return Matrix.new(self.shape)

    def ones_like(self) -> "Matrix":
        return Matrix.ones(self.shape)

    def copy(self) -> "Matrix":
        return Matrix._wrap([row.copy() for row in self._rows], self._width)

    def __copy__(self) -> "Matrix":
        return self.copy()

    def __deepcopy__(self, memo: dict) -> "Matrix":
        return self.copy()

    # =========================================================================
    # АТРИБУТЫ
    # =========================================================================

    @property
    def dim(self) -> int:
        """Число строк."""
        return len(self._rows)

    @property
    def data(self) -> tuple[Vector, ...]:
        """Строки (по ссылке; сам список строк не изменяется)."""
        return tuple(self._rows)

    @property
    def shape(self) -> tuple[int, int]:
        return (len(self._rows), self._width)

    def dim_eq(self, other: "Matrix") -> bool:
        return self.dim == other.dim

    def shape_eq(self, other: "Matrix") -> bool:
        return self.shape == other.shape

    def to_list(self) -> list[list[float]]:
        return [row.to_list() for row in self._rows]

    def _check_shape(self, other: "Matrix") -> None:
        if not self.shape_eq(other):
            raise DimensionMismatchError(
                f"Matrix shape mismatch: {self.shape} != {other.shape}",
                expected=self.shape,
                actual=other.shape,
            )

    def _check_row_width(self, vector: Vector) -> None:
        if vector.dim != self._width:
            raise DimensionMismatchError(
                f"Row-broadcast requires vector of width {self._width}, got {vector.dim}",
                expected=self._width,
                actual=vector.dim,
            )

    # =========================================================================
    # ОПЕРАЦИИ
    # =========================================================================

    def fill(self, value: float) -> None:
        """In-place: все элементы = value."""
        _row_map(lambda row: row.fill(value), self._rows)

    def ravel(self) -> Vector:
        """Все строки подряд в один Vector."""
        if not self._rows:
            return Vector.new(0)
        return Vector(np.concatenate([row.data for row in self._rows]))

    def sum(self) -> Vector:
        """Сумма строк (Vector ширины width); для матрицы без строк — нули."""
        return parallel_reduce(
            operator.add,
            self._rows,
            Vector.new(self._width),
            min_size=get_parallel_config().min_parallel_rows,
        )

    def mean(self) -> Vector:
        """
        Среднее по строкам: sum() / dim.

        Raises:
            DivisionByZeroError: Если строк нет
        """
        if self.dim == 0:
            raise DivisionByZeroError("mean() of a Matrix with no rows")
        return self.sum() / self.dim

    def last(self) -> Vector | None:
        """Копия последней строки или None."""
        if not self._rows:
            return None
        return self._rows[-1].copy()

    def take_rows(self, indices: Iterable[int]) -> "Matrix":
        """Новая матрица из копий строк с указанными индексами (в их порядке)."""
        return Matrix._wrap([self._rows[operator.index(i)].copy() for i in indices], self._width)

    # =========================================================================
    # АРИФМЕТИКА
    # =========================================================================

    def _binary(self, other: Any, op: Callable[[Any, Any], Any]) -> "Matrix":
        if isinstance(other, Matrix):
            self._check_shape(other)
            pairs = list(zip(self._rows, other._rows))
            return Matrix._wrap(_row_map(lambda pair: op(pair[0], pair[1]), pairs), self._width)
        if isinstance(other, Vector):
            self._check_row_width(other)
            return Matrix._wrap(_row_map(lambda row: op(row, other), self._rows), self._width)
        return NotImplemented

    def _inplace(self, other: Any, op: Callable[[Any, Any], Any]) -> "Matrix":
        if isinstance(other, Matrix):
            self._check_shape(other)
            pairs = list(zip(self._rows, other._rows))
            _row_map(lambda pair: op(pair[0], pair[1]), pairs)
            return self
        if isinstance(other, Vector):
            self._check_row_width(other)
            # other может быть строкой self (m -= m[0])
            other = other.copy()
            _row_map(lambda row: op(row, other), self._rows)
            return self
        return NotImplemented

    def _scaled(self, other: Any, op: Callable[[Any, Any], Any]) -> "Matrix":
        if not isinstance(other, Real):
            return NotImplemented
        value = float(other)
        return Matrix._wrap(_row_map(lambda row: op(row, value), self._rows), self._width)

    def _scaled_inplace(self, other: Any, op: Callable[[Any, Any], Any]) -> "Matrix":
        if not isinstance(other, Real):
            return NotImplemented
        value = float(other)
        _row_map(lambda row: op(row, value), self._rows)
        return self

    def __add__(self, other: Any) -> "Matrix":
        return self._binary(other, operator.add)

    def __iadd__(self, other: Any) -> "Matrix":
        return self._inplace(other, operator.iadd)

    def __sub__(self, other: Any) -> "Matrix":
        return self._binary(other, operator.sub)

    def __isub__(self, other: Any) -> "Matrix":
        return self._inplace(other, operator.isub)

    def __mul__(self, other: Any) -> "Matrix":
        return self._scaled(other, operator.mul)

    def __rmul__(self, other: Any) -> "Matrix":
        return self._scaled(other, operator.mul)

    def __imul__(self, other: Any) -> "Matrix":
        return self._scaled_inplace(other, operator.imul)

    def __truediv__(self, other: Any) -> "Matrix":
        return self._scaled(other, operator.truediv)

    def __itruediv__(self, other: Any) -> "Matrix":
        return self._scaled_inplace(other, operator.itruediv)

    def __neg__(self) -> "Matrix":
        return Matrix._wrap(_row_map(operator.neg, self._rows), self._width)

    # =========================================================================
    # ПРОТОКОЛЫ КОНТЕЙНЕРА
    # =========================================================================

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.shape == other.shape and self._rows == other._rows

    def __len__(self) -> int:
        return self.dim

    def __iter__(self) -> Iterator[Vector]:
        return iter(self._rows)

    def __getitem__(self, index: int | tuple[int, int] | slice) -> Any:
        if isinstance(index, tuple):
            if len(index) != 2:
                raise IndexError(f"Matrix index must be (row, col), got {index!r}")
            row, col = index
            return self._rows[operator.index(row)][col]
        if isinstance(index, slice):
            return tuple(self._rows[index])
        return self._rows[operator.index(index)]

    def __setitem__(self, index: int | tuple[int, int], value: Any) -> None:
        if isinstance(index, tuple):
            if len(index) != 2:
                raise IndexError(f"Matrix index must be (row, col), got {index!r}")
            row, col = index
            self._rows[operator.index(row)][col] = value
            return
        if isinstance(index, slice):
            raise TypeError("Matrix row ranges are read-only")

        row_vector = Vector(value)
        if row_vector.dim != self._width:
            raise DimensionMismatchError(
                f"Row assignment requires width {self._width}, got {row_vector.dim}",
                expected=self._width,
                actual=row_vector.dim,
            )
        self._rows[operator.index(index)] = row_vector

    def __repr__(self) -> str:
        return f"Matrix({self.to_list()!r})"
