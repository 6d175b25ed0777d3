"""Sinks — блоки-потребители."""

import logging

from ctblocks.blocks.contracts import Sink
from ctblocks.core.model.value import V, ensure_value
from ctblocks.utils.logger import resolve_level


class LogSink(Sink[V]):
    """
    Пишет каждое наблюдение (t, value) в logging с заданным уровнем.

    Побочный эффект — только запись в logger; состояние блока не меняется.
    """

    def __init__(self, level: int | str = logging.INFO, name: str = "ctblocks.sink"):
        self._level = resolve_level(level)
        self._logger = logging.getLogger(name)

    @property
    def level(self) -> int:
        return self._level

    def input(self, t: float, value: V) -> None:
        ensure_value(value)
        self._logger.log(self._level, "t=%s value=%r", t, value)
