# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab


from abc import ABC, abstractmethod

from rj_lib.properties.states import BatchState


class BatchJobInterface(ABC):
    """
    Abstract base class for job information reported by a batch scheduling system.

    Job information is a snapshot: it is reconstructed every time the batch
    system is queried and never updated in place.
    """

    @abstractmethod
    def getId(self) -> str:
        """
        Return the ID of the job.

        Returns:
            str: The ID of the job.
        """
        pass

    @abstractmethod
    def getName(self) -> str:
        """
        Return the full name of the job.

        Returns:
            str: The name of the job.
        """
        pass

    @abstractmethod
    def getUser(self) -> str:
        """
        Return the owner of the job.

        Returns:
            str: Name of the user who submitted the job.
        """
        pass

    @abstractmethod
    def getState(self) -> BatchState:
        """
        Return the current state of the job as reported by the batch system.

        Returns:
            BatchState: The job state according to the batch system.
        """
        pass

    @abstractmethod
    def getNode(self) -> str | None:
        """
        Return the node on which the job is running.

        Returns:
            str | None: Hostname of the node or None if the job
            has not been assigned a node yet.
        """
        pass

    @abstractmethod
    def getRow(self) -> str:
        """
        Return the raw text describing the job in the batch system's listing.

        Returns:
            str: The listing row(s) of the job.
        """
        pass

    def isRunning(self) -> bool:
        """Check whether the job is running."""
        return self.getState() == BatchState.RUNNING
