"""Blocks — контракты Source/Sink/Transfer и блоки непрерывного времени.

Блоки зависят от ядра (ctblocks.core.model) и Value capability;
ядро о блоках не знает.
"""

from .contracts import (
    Sink,
    SinkMut,
    Source,
    SourceMut,
    Transfer,
    TransferMut,
)
from .continuous import Differentiator, Integrator, TransferState
from .discontinuous import Saturation
from .sink import LogSink
from .source import Step

__all__ = [
    # Contracts
    "Source",
    "SourceMut",
    "Sink",
    "SinkMut",
    "Transfer",
    "TransferMut",
    # Continuous
    "Integrator",
    "Differentiator",
    "TransferState",
    # Discontinuous
    "Saturation",
    # Sources / Sinks
    "Step",
    "LogSink",
]
