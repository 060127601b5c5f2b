# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab


import getpass
from pathlib import Path

from rj_lib.batch.interface import BatchInterface, BatchMeta, batch_system
from rj_lib.batch.sge.common import parse_qstat_listing
from rj_lib.batch.sge.job import SGEJob
from rj_lib.core.error import RJError

from .system import VirtualScheduler, VirtualSchedulerError


@batch_system
class RJVirtual(BatchInterface[SGEJob], metaclass=BatchMeta):
    """
    Implementation of BatchInterface for the Virtual Scheduler.

    Listings are rendered in the `qstat -r` format and parsed with the
    Grid Engine parser, so only the scheduler itself is replaced.
    """

    _scheduler = VirtualScheduler()

    def envName() -> str:
        return "VBS"

    def isAvailable() -> bool:
        # never guessed; select it explicitly using the environment variable
        return False

    def jobSubmit(options: list[str], script: str) -> str:
        name = options[options.index("-N") + 1] if "-N" in options else "STDIN"
        try:
            return RJVirtual._scheduler.submitJob(
                name, getpass.getuser(), options, script
            )
        except VirtualSchedulerError as e:
            raise RJError(f"Failed to submit the job: {e}.") from e

    def getUnfinishedBatchJobs(user: str) -> list[SGEJob]:
        listing = RJVirtual._scheduler.renderListing(user)
        return [SGEJob.fromDict(data) for data in parse_qstat_listing(listing)]

    def getOutputPath(job_id: str) -> Path | None:
        if not (job := RJVirtual._scheduler.jobs.get(job_id)):
            return None
        return job.output

    def getDefaultOutputName(job_name: str, job_id: str) -> str:
        return f"{job_name}.o{job_id}"

    def readOutputFile(file: Path) -> str | None:
        return RJVirtual._scheduler.readFile(file)

    def removeOutputFile(file: Path) -> None:
        RJVirtual._scheduler.removeFile(file)
