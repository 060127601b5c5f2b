# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Abstractions for integrating rj with batch scheduling systems.

- `BatchInterface`: the narrow interface through which rj submits jobs,
  lists a user's jobs, describes a job, and reads job output files.

- `BatchJobInterface`: a snapshot of one job as reported by the scheduler.

- `BatchMeta`: a metaclass that registers available batch-system backends
  and selects one from an environment variable or by probing availability.
  The `@batch_system` decorator registers implementations.
"""

from .interface import BatchInterface
from .job import BatchJobInterface
from .meta import BatchMeta, batch_system

__all__ = [
    "BatchInterface",
    "BatchJobInterface",
    "BatchMeta",
    "batch_system",
]
