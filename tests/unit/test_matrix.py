"""Тесты для Matrix.

Coverage:
- Конструкторы, shape, проверка ширины строк
- sum / mean / ravel / last / linespace
- Арифметика Matrix/Matrix, Matrix/Vector (row-broadcast), Matrix/scalar
- Индексация по строке, (row, col) и диапазону строк
"""

import copy

import pytest

from ctblocks.core.math.parallel import override_parallel_config
from ctblocks.core.model import (
    DimensionMismatchError,
    DivisionByZeroError,
    Matrix,
    Vector,
)


@pytest.fixture
def forced_parallel():
    with override_parallel_config(n_jobs=3, min_parallel_size=1, min_parallel_rows=1):
        yield


# =============================================================================
# КОНСТРУКТОРЫ
# =============================================================================


class TestMatrixConstruction:
    """Создание Matrix."""

    def test_new_is_zero_filled(self):
        matrix = Matrix.new((2, 3))
        assert matrix.shape == (2, 3)
        assert matrix.dim == 2
        assert matrix.to_list() == [[0.0, 0.0, 0.0], [0.0, 0.0, 0.0]]

    def test_rows_are_independent(self):
        matrix = Matrix.zero((2, 2))
        matrix[0, 0] = 1.0
        assert matrix[1, 0] == 0.0

    def test_ones(self):
        assert Matrix.ones((2, 2)).to_list() == [[1.0, 1.0], [1.0, 1.0]]

    def test_zero_rows_keeps_width(self):
        matrix = Matrix.new((0, 3))
        assert matrix.shape == (0, 3)
        assert matrix.sum() == Vector.new(3)

    def test_empty_matrix(self):
        matrix = Matrix()
        assert matrix.shape == (0, 0)
        assert matrix.last() is None

    def test_from_nested_sequences(self):
        matrix = Matrix([[1, 2], [3, 4]])
        assert matrix.shape == (2, 2)
        assert matrix[1].to_list() == [3.0, 4.0]

    def test_from_vectors_copies_rows(self):
        row = Vector([1.0, 2.0])
        matrix = Matrix([row, Vector([3.0, 4.0])])
        row[0] = 100.0
        assert matrix[0, 0] == 1.0

    def test_ragged_rows_rejected(self):
        with pytest.raises(DimensionMismatchError, match="row 1 has width 1, expected 2"):
            Matrix([[1.0, 2.0], [3.0]])

    def test_explicit_width_checked(self):
        with pytest.raises(DimensionMismatchError):
            Matrix([[1.0, 2.0]], width=3)

    def test_like_constructors(self):
        matrix = Matrix([[5.0, 6.0, 7.0]])
        assert matrix.zero_like() == Matrix.new((1, 3))
        assert matrix.ones_like() == Matrix.ones((1, 3))

    def test_copy_is_deep(self):
        matrix = Matrix([[1.0, 2.0]])
        for clone in (matrix.copy(), copy.copy(matrix), copy.deepcopy(matrix)):
            clone[0, 1] = 9.0
            assert matrix[0, 1] == 2.0

    def test_shape_helpers(self):
        a = Matrix.new((2, 3))
        assert a.dim_eq(Matrix.new((2, 5)))
        assert not a.shape_eq(Matrix.new((2, 5)))
        assert a.shape_eq(Matrix.ones((2, 3)))


# =============================================================================
# РЕДУКЦИИ И ХЕЛПЕРЫ
# =============================================================================


class TestMatrixReductions:
    """sum, mean, ravel, last, fill."""

    def test_sum_and_mean(self):
        matrix = Matrix([[1.0, 2.0], [3.0, 4.0]])
        assert matrix.sum() == Vector([4.0, 6.0])
        assert matrix.mean() == Vector([2.0, 3.0])

    def test_sum_does_not_mutate_rows(self):
        matrix = Matrix([[1.0, 2.0], [3.0, 4.0]])
        matrix.sum()
        assert matrix.to_list() == [[1.0, 2.0], [3.0, 4.0]]

    def test_sum_parallel(self, forced_parallel):
        rows = [[float(i), float(2 * i)] for i in range(50)]
        matrix = Matrix(rows)
        total = sum(range(50))
        assert matrix.sum().to_list() == pytest.approx([total, 2 * total])
        assert matrix.to_list() == rows

    def test_mean_of_empty_raises(self):
        with pytest.raises(DivisionByZeroError, match="no rows"):
            Matrix.new((0, 2)).mean()

    def test_ravel(self):
        matrix = Matrix([[1.0, 2.0], [3.0, 4.0], [5.0, 6.0]])
        assert matrix.ravel() == Vector([1.0, 2.0, 3.0, 4.0, 5.0, 6.0])
        assert Matrix().ravel() == Vector.new(0)

    def test_last(self):
        matrix = Matrix([[1.0], [2.0]])
        last = matrix.last()
        assert last == Vector([2.0])
        last[0] = 10.0
        assert matrix[1, 0] == 2.0

    def test_fill_in_place(self):
        matrix = Matrix.new((2, 2))
        matrix.fill(3.5)
        assert matrix.to_list() == [[3.5, 3.5], [3.5, 3.5]]

    def test_take_rows(self):
        matrix = Matrix([[1.0], [2.0], [3.0]])
        assert matrix.take_rows([2, 0]).to_list() == [[3.0], [1.0]]


class TestLinespace:
    """Matrix.linespace."""

    def test_endpoints_included(self):
        start = Vector([0.0, 10.0])
        end = Vector([1.0, 20.0])
        matrix = Matrix.linespace(start, end, 5)

        assert matrix.shape == (5, 2)
        assert matrix[0] == start
        assert matrix[4] == end
        assert matrix[2].to_list() == pytest.approx([0.5, 15.0])

    def test_last_row_is_exact(self):
        start = Vector([0.1])
        end = Vector([0.3])
        assert Matrix.linespace(start, end, 3)[2] == end

    def test_single_and_zero_rows(self):
        start = Vector([1.0, 2.0])
        end = Vector([3.0, 4.0])
        assert Matrix.linespace(start, end, 1).to_list() == [[1.0, 2.0]]
        assert Matrix.linespace(start, end, 0).shape == (0, 2)

    def test_endpoint_dimension_mismatch(self):
        with pytest.raises(DimensionMismatchError):
            Matrix.linespace(Vector([0.0]), Vector([1.0, 2.0]), 3)


# =============================================================================
# АРИФМЕТИКА
# =============================================================================


class TestMatrixArithmetic:
    """Row-wise арифметика."""

    def test_matrix_add_sub(self):
        a = Matrix([[1.0, 2.0], [3.0, 4.0]])
        b = Matrix([[10.0, 20.0], [30.0, 40.0]])
        assert (a + b).to_list() == [[11.0, 22.0], [33.0, 44.0]]
        assert (b - a).to_list() == [[9.0, 18.0], [27.0, 36.0]]

    def test_row_broadcast(self):
        matrix = Matrix([[1.0, 2.0], [3.0, 4.0]])
        vector = Vector([1.0, -1.0])
        assert (matrix + vector).to_list() == [[2.0, 1.0], [4.0, 3.0]]
        assert (matrix - vector).to_list() == [[0.0, 3.0], [2.0, 5.0]]

    def test_row_broadcast_width_mismatch(self):
        with pytest.raises(DimensionMismatchError, match="width 2, got 3"):
            Matrix.new((2, 2)) + Vector([1.0, 2.0, 3.0])

    def test_shape_mismatch(self):
        with pytest.raises(DimensionMismatchError, match="shape mismatch"):
            Matrix.new((2, 2)) + Matrix.new((3, 2))
        with pytest.raises(DimensionMismatchError):
            Matrix.new((2, 2)) - Matrix.new((2, 3))

    def test_scalar_mul_div(self):
        matrix = Matrix([[1.0, 2.0], [3.0, 4.0]])
        assert (matrix * 2).to_list() == [[2.0, 4.0], [6.0, 8.0]]
        assert (2 * matrix).to_list() == [[2.0, 4.0], [6.0, 8.0]]
        assert (matrix / 2).to_list() == [[0.5, 1.0], [1.5, 2.0]]
        assert (-matrix).to_list() == [[-1.0, -2.0], [-3.0, -4.0]]

    def test_scalar_add_not_supported(self):
        with pytest.raises(TypeError):
            Matrix.new((1, 1)) + 1.0  # type: ignore[operator]

    def test_in_place_ops(self, forced_parallel):
        matrix = Matrix([[1.0, 2.0], [3.0, 4.0]])
        alias = matrix
        rows_before = matrix.data

        matrix += Matrix.ones((2, 2))
        matrix -= Vector([1.0, 0.0])
        matrix *= 2
        matrix /= 4

        assert matrix is alias
        assert matrix.data[0] is rows_before[0]
        assert matrix.to_list() == [[0.5, 1.5], [1.5, 2.5]]

    @pytest.mark.parametrize("parallel", [False, True])
    def test_in_place_broadcast_of_own_row(self, parallel):
        """m += m[0] / m -= m[0]: строка-операнд читается до изменения"""
        overrides = {"n_jobs": 3, "min_parallel_size": 1, "min_parallel_rows": 1}
        with override_parallel_config(**(overrides if parallel else {"n_jobs": 1})):
            added = Matrix([[1.0, 2.0], [3.0, 4.0]])
            added += added[0]
            assert added.to_list() == [[2.0, 4.0], [4.0, 6.0]]

            centred = Matrix([[1.0, 2.0], [3.0, 4.0], [5.0, 8.0]])
            centred -= centred[0]
            assert centred.to_list() == [[0.0, 0.0], [2.0, 2.0], [4.0, 6.0]]

            last = Matrix([[1.0, 1.0], [2.0, 5.0]])
            last -= last[1]
            assert last.to_list() == [[-1.0, -4.0], [0.0, 0.0]]

    def test_binary_ops_do_not_mutate_operands(self):
        a = Matrix([[1.0]])
        b = Matrix([[2.0]])
        _ = a + b
        _ = a * 3
        assert a.to_list() == [[1.0]]
        assert b.to_list() == [[2.0]]

    def test_equality(self):
        assert Matrix([[1.0, 2.0]]) == Matrix([[1.0, 2.0]])
        assert Matrix([[1.0, 2.0]]) != Matrix([[1.0, 3.0]])
        assert Matrix.new((0, 2)) != Matrix.new((0, 3))


# =============================================================================
# ИНДЕКСАЦИЯ
# =============================================================================


class TestMatrixIndexing:
    """Доступ по строке, по (row, col) и по диапазону строк."""

    def test_row_by_reference(self):
        matrix = Matrix([[1.0, 2.0], [3.0, 4.0]])
        row = matrix[1]
        row[0] = 30.0
        assert matrix[1, 0] == 30.0

    def test_element_get_set(self):
        matrix = Matrix.new((2, 2))
        matrix[0, 1] = 7.0
        assert matrix[0, 1] == 7.0
        assert matrix.to_list() == [[0.0, 7.0], [0.0, 0.0]]

    def test_row_assignment(self):
        matrix = Matrix.new((2, 2))
        matrix[0] = [1.0, 2.0]
        assert matrix[0] == Vector([1.0, 2.0])

    def test_row_assignment_width_checked(self):
        matrix = Matrix.new((2, 2))
        with pytest.raises(DimensionMismatchError):
            matrix[0] = Vector([1.0])

    def test_row_range(self):
        matrix = Matrix([[1.0], [2.0], [3.0]])
        rows = matrix[1:]
        assert isinstance(rows, tuple)
        assert [row.to_list() for row in rows] == [[2.0], [3.0]]
        assert [row.to_list() for row in matrix[:1]] == [[1.0]]

    def test_row_range_assignment_rejected(self):
        with pytest.raises(TypeError, match="read-only"):
            Matrix.new((2, 1))[0:1] = [Vector([1.0])]  # type: ignore[index]

    def test_out_of_range(self):
        matrix = Matrix.new((1, 1))
        with pytest.raises(IndexError):
            matrix[1]
        with pytest.raises(IndexError):
            matrix[0, 1]
        with pytest.raises(IndexError):
            matrix[0, 0, 0]  # type: ignore[index]

    def test_iteration_and_repr(self):
        matrix = Matrix([[1.0], [2.0]])
        assert [row[0] for row in matrix] == [1.0, 2.0]
        assert len(matrix) == 2
        assert repr(matrix) == "Matrix([[1.0], [2.0]])"
