# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Exception types used throughout rj.

Each exception carries the exit code the rj commands report when it
reaches them. Errors that mean "definitely broken" exit with the default
code; `RJNotReadyError` signals that the job merely is not ready yet and the
command can be run again later.
"""

from .config import CFG


class RJError(Exception):
    """Common exception type for all recoverable rj errors."""

    exit_code = CFG.exit_codes.default


class RJDuplicateJobsError(RJError):
    """Raised when more than one job with the same name exists for the user."""

    pass


class RJJobVanishedError(RJError):
    """Raised when a polled job disappears from the scheduler listing."""

    pass


class RJNotReadyError(RJError):
    """
    Raised when a polling budget is exhausted.

    The job may still start or finish loading later.
    """

    exit_code = CFG.exit_codes.not_ready
