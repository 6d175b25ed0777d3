"""Sources — блоки-источники без состояния."""

from ctblocks.blocks.contracts import Source
from ctblocks.core.model.value import V, clone_value, ensure_value


class Step(Source[V]):
    """
    Ступенька: init при t < step_time, end при t >= step_time.

    init и end — любые Value (скаляры, Vector, Matrix); выход — копия.
    """

    def __init__(self, init: V, end: V, step_time: float):
        self._init = clone_value(ensure_value(init, "init"))
        self._end = clone_value(ensure_value(end, "end"))
        self._step_time = float(step_time)

    @property
    def init(self) -> V:
        return clone_value(self._init)

    @property
    def end(self) -> V:
        return clone_value(self._end)

    @property
    def step_time(self) -> float:
        return self._step_time

    def output(self, t: float) -> V:
        if t < self._step_time:
            return clone_value(self._init)
        return clone_value(self._end)

    def __repr__(self) -> str:
        return f"Step(init={self._init!r}, end={self._end!r}, step_time={self._step_time})"
