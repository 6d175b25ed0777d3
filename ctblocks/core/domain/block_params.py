"""
Block Params — валидируемые параметры блоков

Immutable Pydantic модели и перечисления, задающие конфигурацию блоков
при построении. Проверки выполняются один раз в конструкторе блока,
а не на каждом шаге transfer.
"""

from enum import Enum

from pydantic import BaseModel, Field, ValidationInfo, field_validator, model_validator

from ctblocks.core.math.numerical_safeguards import validate_not_nan


# =============================================================================
# ENUMS
# =============================================================================


class IntegratorMode(str, Enum):
    """
    Режим накопления Integrator (фиксируется при построении).

    TRAPEZOIDAL: past += (t - last_time) * (v + last_value) / 2
    DERIVATIVE_ADD: past += v * (t - last_time)  (прямоугольное накопление входа)
    """

    TRAPEZOIDAL = "trapezoidal"
    DERIVATIVE_ADD = "derivative_add"

    @classmethod
    def from_flag(cls, is_derivative: bool) -> "IntegratorMode":
        """Режим по булевому флагу is_derivative."""
        return cls.DERIVATIVE_ADD if is_derivative else cls.TRAPEZOIDAL


# =============================================================================
# SATURATION LIMITS
# =============================================================================


class SaturationLimits(BaseModel):
    """
    Границы Saturation: bottom <= top.

    Бесконечные границы допустимы (одностороннее ограничение),
    NaN — нет.
    """

    top: float = Field(..., description="Верхняя граница")
    bottom: float = Field(..., description="Нижняя граница")

    model_config = {"frozen": True}

    @field_validator("top", "bottom")
    @classmethod
    def validate_limit(cls, v: float, info: ValidationInfo) -> float:
        """Граница не может быть NaN (сравнения с NaN всегда ложны)."""
        validate_not_nan(v, info.field_name)
        return v

    @model_validator(mode="after")
    def validate_order(self) -> "SaturationLimits":
        """bottom не может превышать top."""
        if self.bottom > self.top:
            raise ValueError(
                f"bottom ({self.bottom}) must not exceed top ({self.top})"
            )
        return self
