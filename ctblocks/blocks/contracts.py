"""Block contracts — Source, Sink, Transfer.

Три семейства блоков, каждое в двух вариантах:
- pure (immutable): Source.output, Sink.input, Transfer.transfer
- mutating: SourceMut.output_mut, SinkMut.input_mut, TransferMut.transfer_mut

Pure-вариант наследует mutating и реализует его по умолчанию простым
вызовом pure-операции: любой stateless блок автоматически пригоден там,
где ожидается mutating-контракт. Stateful блоки (Integrator, Differentiator)
реализуют TransferMut напрямую.
"""

from abc import ABC, abstractmethod
from typing import Generic

from ctblocks.core.model.value import V, Vi, Vo


# =============================================================================
# SOURCE: time → value
# =============================================================================


class SourceMut(ABC, Generic[V]):
    """Источник значения, который может менять своё состояние."""

    @abstractmethod
    def output_mut(self, t: float) -> V:
        """Значение в момент t."""


class Source(SourceMut[V]):
    """Источник: чистая функция времени, без состояния."""

    @abstractmethod
    def output(self, t: float) -> V:
        """Значение в момент t."""

    def output_mut(self, t: float) -> V:
        return self.output(t)


# =============================================================================
# SINK: (time, value) → effect
# =============================================================================


class SinkMut(ABC, Generic[V]):
    """Потребитель значения, который может менять своё состояние."""

    @abstractmethod
    def input_mut(self, t: float, value: V) -> None:
        """Принять value в момент t."""


class Sink(SinkMut[V]):
    """Потребитель: наблюдение без возвращаемого значения."""

    @abstractmethod
    def input(self, t: float, value: V) -> None:
        """Принять value в момент t."""

    def input_mut(self, t: float, value: V) -> None:
        self.input(t, value)


# =============================================================================
# TRANSFER: (time, input) → output
# =============================================================================


class TransferMut(ABC, Generic[Vi, Vo]):
    """Преобразователь, выход которого зависит от накопленной истории."""

    @abstractmethod
    def transfer_mut(self, t: float, value: Vi) -> Vo:
        """Выход в момент t для входа value (обновляет состояние)."""


class Transfer(TransferMut[Vi, Vo]):
    """Преобразователь без состояния."""

    @abstractmethod
    def transfer(self, t: float, value: Vi) -> Vo:
        """Выход в момент t для входа value."""

    def transfer_mut(self, t: float, value: Vi) -> Vo:
        return self.transfer(t, value)
