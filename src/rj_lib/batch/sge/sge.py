# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab


import shlex
import shutil
import subprocess
from pathlib import Path

from rj_lib.batch.interface import BatchInterface, BatchMeta, batch_system
from rj_lib.core.config import CFG
from rj_lib.core.error import RJError
from rj_lib.core.logger import get_logger

from .common import parse_path_list, parse_qstat_description, parse_qstat_listing
from .job import SGEJob

logger = get_logger(__name__)


@batch_system
class SGE(BatchInterface[SGEJob], metaclass=BatchMeta):
    """
    Implementation of BatchInterface for Grid Engine (SGE, UGE, OGE).
    """

    def envName() -> str:
        return "SGE"

    def isAvailable() -> bool:
        return shutil.which(CFG.scheduler.submit) is not None

    def jobSubmit(options: list[str], script: str) -> str:
        command = SGE._translateSubmit(options)
        logger.debug(shlex.join(command))

        # the job script is read from the standard input
        result = subprocess.run(
            command,
            input=script,
            text=True,
            check=False,
            capture_output=True,
            errors="replace",
        )

        if result.returncode != 0:
            raise RJError(f"Failed to submit the job: {result.stderr.strip()}.")

        if not (lines := result.stdout.strip().splitlines()):
            raise RJError("Failed to submit the job: qsub did not report a job ID.")

        # array jobs are reported as '<id>.<range>'
        return lines[0].split(".", 1)[0].strip()

    def getUnfinishedBatchJobs(user: str) -> list[SGEJob]:
        command = f"{CFG.scheduler.status} -r -u {shlex.quote(user)}"
        logger.debug(command)

        result = subprocess.run(
            ["bash"],
            input=command,
            text=True,
            check=False,
            capture_output=True,
            errors="replace",
        )

        if result.returncode != 0:
            raise RJError(
                f"Could not retrieve information about jobs of user '{user}': {result.stderr.strip()}."
            )

        return [SGEJob.fromDict(data) for data in parse_qstat_listing(result.stdout)]

    def getOutputPath(job_id: str) -> Path | None:
        command = f"{CFG.scheduler.status} -j {shlex.quote(job_id)}"
        logger.debug(command)

        result = subprocess.run(
            ["bash"],
            input=command,
            text=True,
            check=False,
            capture_output=True,
            errors="replace",
        )

        if result.returncode != 0:
            # the job may have just finished; the caller falls back to the requested path
            logger.debug(
                f"Could not describe job '{job_id}': {result.stderr.strip()}."
            )
            return None

        description = parse_qstat_description(result.stdout)
        if not (path_list := description.get("stdout_path_list")):
            return None

        if not (path := parse_path_list(path_list)):
            return None

        return Path(path)

    def getDefaultOutputName(job_name: str, job_id: str) -> str:
        return f"{job_name}.o{job_id}"

    @staticmethod
    def _translateSubmit(options: list[str]) -> list[str]:
        """
        Construct the qsub command line.

        `-terse` makes qsub print only the ID of the submitted job.

        Args:
            options (list[str]): Submission options as command line tokens.

        Returns:
            list[str]: Command suitable for `subprocess.run`.
        """
        return [CFG.scheduler.submit, "-terse", *options]
