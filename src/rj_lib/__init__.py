# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Core implementation of the rj command-line tool.

rj starts a Jupyter server as a Grid Engine job on a shared cluster and opens
an ssh tunnel to it. `rj submit` runs on the head node: it translates
qsub-style options into a submission, derives a deterministic job name so that
an existing server is reused, and waits until the server is reachable.
`rj launch` runs on a personal machine: it calls `rj submit` over ssh and
forwards a local port to the server.
"""

from .rj import __version__, cli

__all__ = [
    "__version__",
    "cli",
    "batch",
    "core",
    "launch",
    "options",
    "properties",
    "submit",
]
