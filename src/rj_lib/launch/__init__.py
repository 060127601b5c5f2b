# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Connecting to a notebook server from a personal machine.

- `Launcher`: runs `rj submit` over ssh and opens a tunnel to the server.
- `launch`: the `rj launch` command.
"""

from .cli import launch
from .launcher import Launcher

__all__ = [
    "Launcher",
    "launch",
]
