"""Discontinuous blocks — Saturation.

Saturation ограничивает скалярный вход диапазоном [bottom, top]:
    y = min(top, max(bottom, x))
NaN на входе проходит без изменений.
"""

from numbers import Real

from ctblocks.blocks.contracts import Transfer
from ctblocks.core.domain.block_params import SaturationLimits
from ctblocks.core.math.numerical_safeguards import clamp
from ctblocks.core.model.errors import ValueTypeError


class Saturation(Transfer[float, float]):
    """Ограничитель скалярного сигнала (stateless)."""

    def __init__(self, top: float, bottom: float):
        """
        Args:
            top: верхняя граница (может быть +inf)
            bottom: нижняя граница (может быть -inf), bottom <= top

        Raises:
            pydantic.ValidationError: NaN-граница или bottom > top
        """
        self._limits = SaturationLimits(top=top, bottom=bottom)

    @property
    def top(self) -> float:
        return self._limits.top

    @property
    def bottom(self) -> float:
        return self._limits.bottom

    @property
    def limits(self) -> SaturationLimits:
        return self._limits

    def saturate(self, x: float) -> float:
        return clamp(float(x), min_value=self._limits.bottom, max_value=self._limits.top)

    def transfer(self, t: float, value: float) -> float:
        if not isinstance(value, Real):
            raise ValueTypeError(f"Saturation is scalar-only, got {type(value).__name__}")
        return self.saturate(value)

    def __repr__(self) -> str:
        return f"Saturation(top={self.top}, bottom={self.bottom})"
