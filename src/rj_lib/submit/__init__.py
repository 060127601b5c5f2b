# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Submission of notebook server jobs on the head node of the cluster.

- `Submitter`: builds the qsub command line, reuses an existing job with the
  same name, and waits until the job runs and the server announces its URL.
- `submit`: the `rj submit` command.
"""

from .cli import submit
from .submitter import Submitter

__all__ = [
    "Submitter",
    "submit",
]
