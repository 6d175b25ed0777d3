"""
Исключения ядра Vector/Matrix и блоков.

Все исключения наследуют встроенные типы (ValueError, ZeroDivisionError,
TypeError), поэтому вызывающий код может ловить их как обычные ошибки Python.
"""


class DimensionMismatchError(ValueError):
    """
    Несовпадение размерностей операндов.

    Возникает при арифметике Vector/Vector, Matrix/Matrix, Matrix/Vector
    (row-broadcast), при cross() не для 3-D векторов и при построении
    Matrix из строк разной ширины.
    """

    def __init__(self, message: str, expected: object = None, actual: object = None):
        super().__init__(message)
        self.expected = expected
        self.actual = actual


class DegenerateComparisonError(ValueError):
    """
    NaN в операции, требующей полного порядка (sort, arg_sort).

    NaN несравним с другими float, поэтому сортировка отклоняется,
    а не даёт неопределённый порядок.
    """


class DivisionByZeroError(ZeroDivisionError):
    """
    Вырожденный знаменатель в операции ядра или блока.

    normalize() нулевого вектора, mean() матрицы без строк,
    Differentiator при повторной временной метке.
    """


class ValueTypeError(TypeError):
    """Объект не поддерживает Value capability (см. IsValue)."""
