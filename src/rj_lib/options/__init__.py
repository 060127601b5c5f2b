# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Command line options of rj and their translation into qsub options.

- `OptionParser` turns the qsub-style command line into `ParsedArgs`.
- `JobOptions` stores qsub options in a stable order.
- `construct_job_name` derives the deterministic job name.
- `DefaultsFile` wraps the per-user file with default qsub options.
"""

from .defaults import DefaultsFile
from .job_options import FlagArity, JobOptions, OptionEntry
from .naming import (
    abbreviate_runtime,
    construct_job_name,
    ensure_runtime_limit,
    job_name_from_options,
    sanitize_job_name,
)
from .parser import OptionParser, ParsedArgs

__all__ = [
    "DefaultsFile",
    "FlagArity",
    "JobOptions",
    "OptionEntry",
    "OptionParser",
    "ParsedArgs",
    "abbreviate_runtime",
    "construct_job_name",
    "ensure_runtime_limit",
    "job_name_from_options",
    "sanitize_job_name",
]
