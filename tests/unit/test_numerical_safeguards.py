"""
Тесты для модуля Numerical Safeguards

Проверяет:
1. clamp как правило Saturation: [bottom, top], односторонние пределы, NaN
2. validate_dimension как проверку размерностей Vector/Matrix
3. validate_not_nan как проверку границ SaturationLimits
"""

import math

import pytest

from ctblocks.core.math.numerical_safeguards import (
    clamp,
    validate_dimension,
    validate_not_nan,
)

# =============================================================================
# ТЕСТЫ CLAMP
# =============================================================================


class TestClamp:
    """clamp(x, bottom, top)"""

    @pytest.mark.parametrize(
        "x, expected",
        [
            (-3.0, -1.0),
            (-1.0, -1.0),
            (0.5, 0.5),
            (2.0, 2.0),
            (7.0, 2.0),
        ],
    )
    def test_symmetric_band(self, x: float, expected: float) -> None:
        """Сигнал прижимается к ближайшей границе [-1, 2]"""
        assert clamp(x, -1.0, 2.0) == expected

    def test_never_widens_band(self) -> None:
        """Результат всегда внутри [bottom, top]"""
        for x in (-1e308, -2.5, 0.0, 3.75, 1e308):
            assert -2.0 <= clamp(x, -2.0, 3.0) <= 3.0

    def test_degenerate_band(self) -> None:
        """bottom == top: выход постоянен"""
        assert clamp(-4.0, 1.5, 1.5) == 1.5
        assert clamp(9.0, 1.5, 1.5) == 1.5

    def test_one_sided(self) -> None:
        """Отсутствующий предел не применяется"""
        assert clamp(-0.25, min_value=0.0) == 0.0
        assert clamp(1e9, min_value=0.0) == 1e9
        assert clamp(0.75, max_value=0.5) == 0.5
        assert clamp(-1e9, max_value=0.5) == -1e9
        assert clamp(-7.0) == -7.0

    def test_infinite_limits(self) -> None:
        """inf-границы эквивалентны отсутствию предела"""
        assert clamp(-1e300, -math.inf, 0.0) == -1e300
        assert clamp(math.inf, 0.0, math.inf) == math.inf

    def test_nan_propagates(self) -> None:
        """NaN не маскируется границей"""
        assert math.isnan(clamp(math.nan, -1.0, 1.0))
        assert math.isnan(clamp(math.nan, min_value=0.0))


# =============================================================================
# ТЕСТЫ ВАЛИДАЦИИ
# =============================================================================


class TestValidateDimension:
    """Тесты для validate_dimension"""

    @pytest.mark.parametrize("dim", [0, 1, 4096])
    def test_valid_dimensions(self, dim: int) -> None:
        validate_dimension(dim, "dim")

    def test_negative_raises(self) -> None:
        with pytest.raises(ValueError, match="rows must be non-negative, got -2"):
            validate_dimension(-2, "rows")

    @pytest.mark.parametrize("bad", [3.0, "3", None, True])
    def test_non_int_raises(self, bad: object) -> None:
        with pytest.raises(TypeError, match="cols must be an int"):
            validate_dimension(bad, "cols")  # type: ignore[arg-type]


class TestValidateNotNan:
    """Тесты для validate_not_nan"""

    @pytest.mark.parametrize("value", [0.0, -2.5, math.inf, -math.inf])
    def test_non_nan_accepted(self, value: float) -> None:
        validate_not_nan(value, "top")

    def test_nan_raises_with_field_name(self) -> None:
        with pytest.raises(ValueError, match="bottom must not be NaN"):
            validate_not_nan(math.nan, "bottom")
