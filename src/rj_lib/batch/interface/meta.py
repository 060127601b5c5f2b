# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab


import os
from abc import ABCMeta

from rj_lib.batch.interface.interface import BatchInterface
from rj_lib.core.config import CFG
from rj_lib.core.error import RJError
from rj_lib.core.logger import get_logger

logger = get_logger(__name__)


class BatchMeta(ABCMeta):
    """
    Metaclass for batch system classes.
    """

    # registry of supported batch systems
    _registry: dict[str, type[BatchInterface]] = {}

    def __str__(cls: type[BatchInterface]):
        """
        Get the string representation of the batch system class.
        """
        return cls.envName()

    @classmethod
    def register(cls, batch_cls: type[BatchInterface]):
        """
        Register a batch system class in the metaclass registry.

        Args:
            batch_cls: Subclass of BatchInterface to register.
        """
        cls._registry[batch_cls.envName()] = batch_cls

    @classmethod
    def fromStr(mcs, name: str) -> type[BatchInterface]:
        """
        Return the batch system class registered with the given name.

        Raises:
            RJError: If no class is registered for the given name.
        """
        try:
            return mcs._registry[name]
        except KeyError as e:
            raise RJError(f"No batch system registered as '{name}'.") from e

    @classmethod
    def guess(mcs) -> type[BatchInterface]:
        """
        Return the first registered batch system that reports itself as available.

        Raises:
            RJError: If no available batch system is found among the registered ones.
        """
        for BatchSystem in mcs._registry.values():
            if BatchSystem.isAvailable():
                logger.debug(f"Guessed batch system: {str(BatchSystem)}.")
                return BatchSystem

        raise RJError(
            "Could not guess a batch system. Is this the head node of the cluster?"
        )

    @classmethod
    def fromEnvVarOrGuess(mcs) -> type[BatchInterface]:
        """
        Select a batch system based on the environment variable or by guessing.

        Returns:
            type[BatchInterface]: The selected batch system class.

        Raises:
            RJError: If the environment variable is set to an unknown batch system name,
                    or if no available batch system can be guessed.
        """
        if name := os.environ.get(CFG.env_vars.batch_system):
            logger.debug(
                f"Using batch system name from an environment variable: {name}."
            )
            return BatchMeta.fromStr(name)

        return BatchMeta.guess()


def batch_system(cls):
    """
    Class decorator registering a batch system implementation in `BatchMeta`.
    """
    BatchMeta.register(cls)
    return cls
