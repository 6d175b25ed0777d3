"""
Utilities: logging facility.
"""

from ctblocks.utils.logger import init_logging, log_output, resolve_level

__all__ = [
    "init_logging",
    "log_output",
    "resolve_level",
]
