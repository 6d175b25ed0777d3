"""
Numeric model: Value capability и контейнеры ядра (Vector, Matrix).
"""

from ctblocks.core.model.errors import (
    DegenerateComparisonError,
    DimensionMismatchError,
    DivisionByZeroError,
    ValueTypeError,
)
from ctblocks.core.model.value import (
    IsValue,
    V,
    Vi,
    Vo,
    clone_value,
    ensure_value,
    is_value,
)
from ctblocks.core.model.vector import Vector
from ctblocks.core.model.matrix import Matrix

__all__ = [
    # Value capability
    "IsValue",
    "V",
    "Vi",
    "Vo",
    "clone_value",
    "ensure_value",
    "is_value",
    # Containers
    "Vector",
    "Matrix",
    # Exceptions
    "DegenerateComparisonError",
    "DimensionMismatchError",
    "DivisionByZeroError",
    "ValueTypeError",
]
