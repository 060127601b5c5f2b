# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

import getpass
import re
from pathlib import Path
from urllib.parse import urlsplit

from rj_lib.batch.interface import BatchInterface, BatchJobInterface
from rj_lib.core.config import CFG
from rj_lib.core.error import RJDuplicateJobsError, RJError
from rj_lib.core.logger import get_logger
from rj_lib.core.poller import Poller
from rj_lib.options import (
    DefaultsFile,
    ParsedArgs,
    ensure_runtime_limit,
    job_name_from_options,
)
from rj_lib.properties.connection import ConnectionInfo
from rj_lib.properties.states import BatchState

logger = get_logger(__name__, show_time=True)


class Submitter:
    """
    Class to submit a notebook server job and wait until it can be connected to.

    Responsibilities:
        - Combine built-in options, the defaults file, and the command line
          into a qsub command line.
        - Derive the job name and reuse an unfinished job with the same name.
        - Wait until the job runs and the server announces its URL.
    """

    def __init__(
        self,
        batch_system: type[BatchInterface],
        args: ParsedArgs,
        user: str | None = None,
    ):
        """
        Initialize a Submitter instance.

        Creates the defaults file if it does not exist and adds the default
        runtime limit to the job options if no runtime limit is requested.

        Args:
            batch_system (type[BatchInterface]): The batch system used for submission.
            args (ParsedArgs): Parsed command line of `rj submit`.
            user (str | None): Owner of the job. Defaults to the current user.

        Raises:
            RJError: If the defaults file cannot be created or read.
        """
        self._batch_system = batch_system
        self._args = args
        self._options = args.options
        self._user = user or getpass.getuser()
        self._port = args.getPort()

        self._defaults = DefaultsFile(args.getDefaultsFile())
        self._defaults.ensureExists()
        ensure_runtime_limit(self._options, self._defaults.setsRuntimeLimit())

        self._job_name = job_name_from_options(args.getName(), self._options)
        self._output = self._getRequestedOutput()
        self._job: BatchJobInterface | None = None

        logger.debug(f"Job name: '{self._job_name}', output: '{self._output}'.")

    def getJobName(self) -> str:
        """Get the derived name of the job."""
        return self._job_name

    def getOutput(self) -> Path:
        """Get the requested output path of the job (a file or a directory)."""
        return self._output

    def getPort(self) -> int:
        """Get the port requested for the notebook server."""
        return self._port

    def run(self) -> ConnectionInfo:
        """
        Submit the job (unless it already exists) and wait until it is ready.

        Returns:
            ConnectionInfo: Job ID, port, node, and URL of the notebook server.

        Raises:
            RJError: If the submission fails or duplicate jobs are detected.
            RJJobVanishedError: If the job disappears while waiting for it.
            RJNotReadyError: If the job does not start or load in time.
        """
        job_id = self.submit()

        job = self.waitRunning(job_id)
        if not job.getNode():
            raise RJError(f"Could not determine the node of job '{job_id}'.")
        logger.info(f"Job '{job_id}' is running on '{job.getNode()}'.")

        log_file = self.resolveLogFile(job_id)
        url = self.waitLoaded(job_id, log_file)
        logger.info(f"Notebook server is available at '{url}'.")

        return ConnectionInfo(job_id, self._getPortFromUrl(url), job.getNode(), url)

    def submit(self) -> str:
        """
        Submit the job unless an unfinished job with the same name exists.

        Returns:
            str: The ID of the submitted or reused job.

        Raises:
            RJError: If the submission fails.
            RJDuplicateJobsError: If more than one job with the name exists.
        """
        if jobs := self.findJobs():
            logger.info(
                f"Job '{self._job_name}' already exists (ID '{jobs[0].getId()}'). Reusing it."
            )
        else:
            if not self._output.is_dir():
                self._batch_system.removeOutputFile(self._output)

            job_id = self._batch_system.jobSubmit(
                self.buildSubmitOptions(), self.buildScript()
            )
            logger.info(f"Job '{self._job_name}' submitted successfully (ID '{job_id}').")

            # the job may not be listed yet; polling will find out
            if not (jobs := self.findJobs()):
                return job_id

        if len(jobs) > 1:
            rows = "\n".join(job.getRow() for job in jobs)
            raise RJDuplicateJobsError(
                f"Found {len(jobs)} jobs named '{self._job_name}'. "
                f"There should never be more than one:\n{rows}"
            )

        return jobs[0].getId()

    def findJobs(self) -> list[BatchJobInterface]:
        """
        Return the user's unfinished jobs named as this job.
        """
        return [
            job
            for job in self._batch_system.getUnfinishedBatchJobs(self._user)
            if job.getName() == self._job_name and job.getUser() == self._user
        ]

    def buildSubmitOptions(self) -> list[str]:
        """
        Construct the qsub options.

        Built-in options come first, followed by the defaults file and the
        options from the command line, so that later options take precedence.
        The job name and output path always come last.

        Returns:
            list[str]: qsub options as command line tokens.
        """
        return [
            *CFG.scheduler.builtin_options,
            "-@",
            str(self._defaults.getPath()),
            *self._options.toArgs(),
            "-N",
            self._job_name,
            "-o",
            str(self._output),
        ]

    def buildScript(self) -> str:
        """
        Construct the job script starting the notebook server.

        The server listens on the compute node's hostname and never opens a browser.
        """
        return (
            "#!/bin/bash\n"
            f'exec {CFG.notebook.command} --ip="$(hostname)" '
            f"--port={self._port} --no-browser\n"
        )

    def waitRunning(self, job_id: str) -> BatchJobInterface:
        """
        Wait until the job is running.

        Returns:
            BatchJobInterface: Snapshot of the running job.

        Raises:
            RJJobVanishedError: If the job disappears from the listing.
            RJError: If the job enters an error state.
            RJNotReadyError: If the job is not running in time.
        """
        return Poller(
            self._isRunning,
            lambda: self._refresh(job_id),
            max_tries=CFG.poll.run_tries,
            wait_seconds=CFG.poll.wait_seconds,
            description=f"job '{job_id}' to start running",
        ).run()

    def waitLoaded(self, job_id: str, log_file: Path) -> str:
        """
        Wait until the notebook server announces its URL in the log file.

        Returns:
            str: The URL of the notebook server.

        Raises:
            RJJobVanishedError: If the job disappears from the listing.
            RJNotReadyError: If the URL does not appear in time.
        """
        return Poller(
            lambda: self._readUrl(log_file),
            lambda: self._refresh(job_id),
            max_tries=CFG.poll.load_tries,
            wait_seconds=CFG.poll.wait_seconds,
            description=f"the notebook server to write its URL into '{log_file}'",
        ).run()

    def resolveLogFile(self, job_id: str) -> Path:
        """
        Get the path to the log file of the job.

        The output path recorded by the batch system is preferred (the job may
        have been submitted earlier with different options). If the output path
        is a directory, the batch system's file naming is used.
        """
        output = self._batch_system.getOutputPath(job_id) or self._output
        if output.is_dir():
            return output / self._batch_system.getDefaultOutputName(
                self._job_name, job_id
            )
        return output

    def _refresh(self, job_id: str) -> bool:
        """Fetch a new snapshot of the job. Returns False if the job no longer exists."""
        self._job = next(
            (job for job in self.findJobs() if job.getId() == job_id), None
        )
        return self._job is not None

    def _isRunning(self) -> BatchJobInterface | None:
        if not self._job:
            return None

        if self._job.isRunning():
            return self._job

        if (state := self._job.getState()) == BatchState.FAILED:
            raise RJError(
                f"Job '{self._job.getId()}' is in an error state:\n{self._job.getRow()}"
            )

        logger.debug(f"Job '{self._job.getId()}' is {state}.")
        return None

    def _readUrl(self, log_file: Path) -> str | None:
        if (content := self._batch_system.readOutputFile(log_file)) is None:
            logger.debug(f"Log file '{log_file}' does not exist yet.")
            return None

        pattern = re.compile(CFG.notebook.ready_pattern)
        for line in content.splitlines():
            if m := pattern.search(line):
                return m.group(1)

        return None

    def _getRequestedOutput(self) -> Path:
        if not self._args.output:
            return Path(
                CFG.defaults.output.format(job_name=self._job_name)
            ).expanduser()

        output = Path(self._args.output).expanduser()
        if output.is_absolute():
            return output
        return self._getJobWorkingDirectory() / output

    def _getJobWorkingDirectory(self) -> Path:
        """
        Get the directory qsub resolves relative paths of the job against:
        the `-wd` directory, the current directory with `-cwd`, or the home directory.
        """
        if (wd := self._options.get("-wd")) is not None:
            return Path.cwd() / Path(wd).expanduser()
        if self._options.has("-cwd"):
            return Path.cwd()
        return Path.home()

    def _getPortFromUrl(self, url: str) -> int:
        try:
            if port := urlsplit(url).port:
                return port
        except ValueError:
            logger.debug(f"Could not get the port from '{url}'.")
        return self._port
