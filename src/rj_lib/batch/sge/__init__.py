# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Grid Engine backend for rj: job submission and parsing of `qstat` output.

- `SGE`: the batch-system backend calling `qsub` and `qstat`.
- `SGEJob`: one job parsed from the output of `qstat -r`.
"""

from .job import SGEJob
from .sge import SGE

__all__ = [
    "SGE",
    "SGEJob",
]
