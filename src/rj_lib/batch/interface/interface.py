# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab


from abc import ABC
from pathlib import Path
from typing import Generic, TypeVar

from rj_lib.core.error import RJError
from rj_lib.core.logger import get_logger

from .job import BatchJobInterface

logger = get_logger(__name__)

TBatchJob = TypeVar("TBatchJob", bound=BatchJobInterface)


class BatchInterface(ABC, Generic[TBatchJob]):
    """
    Abstract base class for batch system integrations.

    This is the only place where rj talks to the scheduler: submitting
    jobs, listing jobs, describing jobs, and accessing their output files.
    Concrete batch system classes must implement these methods; every
    method should raise RJError when encountering an error.
    """

    @staticmethod
    def envName() -> str:
        """
        Return the name of the batch system environment.

        Returns:
            str: The batch system name.
        """
        raise NotImplementedError(
            "envName method is not implemented for this batch system implementation"
        )

    @staticmethod
    def isAvailable() -> bool:
        """
        Determine whether the batch system is available on the current host.

        Returns:
            bool: True if the batch system is available, False otherwise.
        """
        raise NotImplementedError(
            "isAvailable method is not implemented for this batch system implementation"
        )

    @staticmethod
    def jobSubmit(options: list[str], script: str) -> str:
        """
        Submit a job to the batch system.

        Args:
            options (list[str]): Submission options as command line tokens.
            script (str): Text of the job script.

        Returns:
            str: Unique ID of the submitted job.

        Raises:
            RJError: If the job submission fails.
        """
        raise NotImplementedError(
            "jobSubmit method is not implemented for this batch system implementation"
        )

    @staticmethod
    def getUnfinishedBatchJobs(user: str) -> list[TBatchJob]:
        """
        Retrieve information about all unfinished jobs submitted by `user`.

        Args:
            user (str): Username for which to fetch unfinished jobs.

        Returns:
            list[TBatchJob]: A list of job info objects representing the user's unfinished jobs.

        Raises:
            RJError: If the batch system cannot be queried.
        """
        raise NotImplementedError(
            "getUnfinishedBatchJobs method is not implemented for this batch system implementation"
        )

    @staticmethod
    def getOutputPath(job_id: str) -> Path | None:
        """
        Return the standard output path recorded for the job by the batch system.

        The path may point to a directory, in which case the batch system
        chooses the name of the file.

        Args:
            job_id (str): Unique identifier of the job.

        Returns:
            Path | None: The recorded path or None if it is not available.
        """
        raise NotImplementedError(
            "getOutputPath method is not implemented for this batch system implementation"
        )

    @staticmethod
    def getDefaultOutputName(job_name: str, job_id: str) -> str:
        """
        Return the name of the output file created by the batch system
        when the output path of the job is a directory.

        Args:
            job_name (str): Name of the job.
            job_id (str): Unique identifier of the job.

        Returns:
            str: Name of the output file.
        """
        raise NotImplementedError(
            "getDefaultOutputName method is not implemented for this batch system implementation"
        )

    @staticmethod
    def readOutputFile(file: Path) -> str | None:
        """
        Read an output file of a job.

        The default implementation reads the file from the shared filesystem.

        Args:
            file (Path): Path to the file.

        Returns:
            str | None: Content of the file or None if the file does not exist (yet).

        Raises:
            RJError: If the file exists but cannot be read.
        """
        if not file.is_file():
            return None

        try:
            return file.read_text(errors="replace")
        except OSError as e:
            raise RJError(f"Could not read file '{file}': {e}.") from e

    @staticmethod
    def removeOutputFile(file: Path) -> None:
        """
        Remove a stale output file. Nothing happens if the file does not exist.

        Args:
            file (Path): Path to the file.

        Raises:
            RJError: If the file exists but cannot be removed.
        """
        if not file.is_file():
            return

        logger.debug(f"Removing stale output file '{file}'.")
        try:
            file.unlink()
        except OSError as e:
            raise RJError(f"Could not remove stale output file '{file}': {e}.") from e
