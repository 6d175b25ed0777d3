"""
Validated block parameter models.
"""

from ctblocks.core.domain.block_params import IntegratorMode, SaturationLimits

__all__ = [
    "IntegratorMode",
    "SaturationLimits",
]
