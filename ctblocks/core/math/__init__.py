"""
Core math modules для ctblocks

Численные примитивы и data-parallel исполнение для ядра Vector/Matrix.
"""

# Numerical Safeguards
from ctblocks.core.math.numerical_safeguards import (
    # Utilities
    clamp,
    # Validation
    validate_dimension,
    validate_not_nan,
)

# Parallel execution
from ctblocks.core.math.parallel import (
    ParallelConfig,
    chunk_bounds,
    elementwise,
    get_parallel_config,
    override_parallel_config,
    parallel_map,
    parallel_reduce,
    parallel_sum,
    set_parallel_config,
    tree_reduce,
)

__all__ = [
    # Numerical Safeguards — Utilities
    "clamp",
    # Numerical Safeguards — Validation
    "validate_dimension",
    "validate_not_nan",
    # Parallel — Config
    "ParallelConfig",
    "get_parallel_config",
    "set_parallel_config",
    "override_parallel_config",
    # Parallel — Functions
    "chunk_bounds",
    "elementwise",
    "parallel_map",
    "parallel_reduce",
    "parallel_sum",
    "tree_reduce",
]
