"""Continuous blocks — Integrator и Differentiator.

Stateful блоки: каждый экземпляр владеет одной записью состояния
(last_time, last_value и аккумулятор past у Integrator) и продвигает её
при каждом вызове transfer_mut.

Контракт вызывающего:
- t не убывает между вызовами (меньшее t не отклоняется, только логируется)
- первый вызов после построения или reset() использует last_time = 0
  как базу, т.е. интегрирует/дифференцирует на отрезке [0, t]
- один экземпляр — один владелец; внутренней синхронизации нет

Значения: float, Vector или Matrix. Тип входа должен совпадать с типом
init, размерности проверяет ядро (DimensionMismatchError).
"""

import logging
from dataclasses import dataclass
from numbers import Real
from typing import Any, Optional

from ctblocks.blocks.contracts import TransferMut
from ctblocks.core.domain.block_params import IntegratorMode
from ctblocks.core.model.errors import DivisionByZeroError, ValueTypeError
from ctblocks.core.model.matrix import Matrix
from ctblocks.core.model.value import clone_value, ensure_value
from ctblocks.core.model.vector import Vector

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TransferState:
    """Снапшот состояния stateful блока (значения скопированы)."""

    last_time: float
    last_value: Any
    # Аккумулятор Integrator; None для Differentiator
    past: Optional[Any] = None


# =============================================================================
# ЧИСЛОВЫЕ ЗНАЧЕНИЯ БЛОКОВ
# =============================================================================


def _numeric_init(value: Any, name: str = "init") -> Any:
    """Начальное значение блока: float, Vector или Matrix (копия)."""
    ensure_value(value, name)

    if isinstance(value, (Vector, Matrix)):
        return value.copy()
    if isinstance(value, Real):
        return float(value)

    raise ValueTypeError(
        f"{name} must be a number, Vector or Matrix, got {type(value).__name__}"
    )


def _coerce_input(init: Any, value: Any) -> Any:
    """Вход блока того же вида, что и init (копия для контейнеров)."""
    if isinstance(init, float):
        if not isinstance(value, Real):
            raise ValueTypeError(f"expected a number, got {type(value).__name__}")
        return float(value)

    if not isinstance(value, type(init)):
        raise ValueTypeError(
            f"expected {type(init).__name__}, got {type(value).__name__}"
        )
    return value.copy()


# =============================================================================
# INTEGRATOR
# =============================================================================


class Integrator(TransferMut[Any, Any]):
    """Накопитель входа по времени.

    Режимы (фиксируются при построении):
    - TRAPEZOIDAL: past += (t - last_time) * (v + last_value) / 2
    - DERIVATIVE_ADD: past += v * (t - last_time)

    Пример (трапеции, вход v(t) = t):
        >>> integrator = Integrator(0.0)
        >>> for k in range(1, 1001):
        ...     t = k / 1000
        ...     past = integrator.transfer_mut(t, t)
        >>> round(past, 6)
        0.5
    """

    def __init__(
        self,
        init: Any = 0.0,
        is_derivative: bool = False,
        mode: IntegratorMode | str | None = None,
    ):
        """
        Args:
            init: начальное значение аккумулятора и last_value
            is_derivative: True → режим DERIVATIVE_ADD
            mode: явный режим (приоритетнее is_derivative, не должен ему противоречить)
        """
        if mode is None:
            mode = IntegratorMode.from_flag(is_derivative)
        else:
            mode = IntegratorMode(mode)
            if is_derivative and mode is not IntegratorMode.DERIVATIVE_ADD:
                raise ValueError(f"is_derivative=True conflicts with mode={mode.value!r}")

        self._init = _numeric_init(init)
        self._mode = mode

        self._last_time = 0.0
        self._last_value = clone_value(self._init)
        self._past = clone_value(self._init)

    @property
    def mode(self) -> IntegratorMode:
        return self._mode

    @property
    def is_derivative(self) -> bool:
        return self._mode is IntegratorMode.DERIVATIVE_ADD

    @property
    def init(self) -> Any:
        return clone_value(self._init)

    @property
    def past(self) -> Any:
        """Накопленное значение."""
        return clone_value(self._past)

    def state(self) -> TransferState:
        return TransferState(
            last_time=self._last_time,
            last_value=clone_value(self._last_value),
            past=clone_value(self._past),
        )

    def transfer_mut(self, t: float, value: Any) -> Any:
        t = float(t)
        value = _coerce_input(self._init, value)

        if t < self._last_time:
            logger.warning(
                "Integrator driven backwards in time: t=%s < last_time=%s", t, self._last_time
            )

        dt = t - self._last_time
        if self._mode is IntegratorMode.TRAPEZOIDAL:
            self._past = self._past + (value + self._last_value) * (dt * 0.5)
        else:
            self._past = self._past + value * dt

        self._last_value = value
        self._last_time = t
        return clone_value(self._past)

    def reset(self) -> None:
        """Вернуть состояние к только что построенному (режим не меняется)."""
        self._last_value = clone_value(self._init)
        self._past = clone_value(self._init)
        self._last_time = 0.0
        logger.debug("Integrator reset (mode=%s)", self._mode.value)

    def __repr__(self) -> str:
        return (
            f"Integrator(mode={self._mode.value}, last_time={self._last_time}, "
            f"past={self._past!r})"
        )


# =============================================================================
# DIFFERENTIATOR
# =============================================================================


class Differentiator(TransferMut[Any, Any]):
    """Обратная конечная разность: (v - last_value) / (t - last_time)."""

    def __init__(self, init: Any = 0.0):
        self._init = _numeric_init(init)
        self._last_value = clone_value(self._init)
        self._last_time = 0.0

    @property
    def init(self) -> Any:
        return clone_value(self._init)

    def state(self) -> TransferState:
        return TransferState(
            last_time=self._last_time,
            last_value=clone_value(self._last_value),
        )

    def differentiate(self, t: float, value: Any) -> Any:
        """
        Производная по предыдущему отсчёту; затем last_value = value, last_time = t.

        Raises:
            DivisionByZeroError: Если t == last_time (состояние не меняется)
        """
        t = float(t)
        value = _coerce_input(self._init, value)

        dt = t - self._last_time
        if dt == 0.0:
            raise DivisionByZeroError(
                f"Differentiator driven twice at the same time t={t}"
            )
        if dt < 0.0:
            logger.warning(
                "Differentiator driven backwards in time: t=%s < last_time=%s",
                t,
                self._last_time,
            )

        result = (value - self._last_value) / dt
        self._last_value = value
        self._last_time = t
        return result

    def transfer_mut(self, t: float, value: Any) -> Any:
        return self.differentiate(t, value)

    def reset(self) -> None:
        """last_value = init, last_time = 0."""
        self._last_value = clone_value(self._init)
        self._last_time = 0.0
        logger.debug("Differentiator reset")

    def __repr__(self) -> str:
        return f"Differentiator(last_time={self._last_time}, last_value={self._last_value!r})"
