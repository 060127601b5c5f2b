# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

# import the backends so that they register themselves in BatchMeta
from .sge import SGE
from .virtual import RJVirtual

__all__ = [
    "SGE",
    "RJVirtual",
]
