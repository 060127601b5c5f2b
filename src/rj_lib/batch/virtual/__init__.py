# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Virtual Scheduler: a scripted stand-in for Grid Engine used in tests.
Select it by setting `RJ_BATCH_SYSTEM=VBS`.
"""

from .rjvirtual import RJVirtual
from .system import VirtualJob, VirtualScheduler, VirtualSchedulerError

__all__ = [
    "RJVirtual",
    "VirtualJob",
    "VirtualScheduler",
    "VirtualSchedulerError",
]
