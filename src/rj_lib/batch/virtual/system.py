# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab


from dataclasses import dataclass, field
from pathlib import Path


class VirtualSchedulerError(Exception):
    """Common exception type for Virtual Scheduler errors."""

    pass


@dataclass
class VirtualJob:
    job_id: str
    name: str
    user: str
    # state codes reported by consecutive listings; the last one sticks
    states: list[str] = field(default_factory=lambda: ["qw"])
    node: str | None = None
    queue: str = "all.q"
    output: Path | None = None

    def currentState(self) -> str:
        return self.states[0]

    def advance(self) -> None:
        """Move to the next scripted state."""
        if len(self.states) > 1:
            self.states.pop(0)


class VirtualScheduler:
    """
    A scripted scheduler for testing purposes.

    Jobs are stored in a dictionary and advance through their scripted
    states every time the jobs are listed. Output files are scripted as
    sequences of contents returned by consecutive reads; None means that
    the file does not exist (yet).
    """

    def __init__(self):
        """Initialize the Virtual Scheduler instance."""
        self.jobs: dict[str, VirtualJob] = {}
        self.files: dict[Path, list[str | None]] = {}
        self.submitted: list[tuple[list[str], str]] = []
        self.removed: list[Path] = []
        self.submit_error: str | None = None
        # states and node given to jobs created by `submitJob`
        self.next_states: list[str] = ["qw", "r"]
        self.next_node: str = "node1"
        self.listings = 0
        self._next_id = 1000

    def clear(self) -> None:
        """Remove all jobs, files, and records."""
        self.__init__()

    def addJob(
        self,
        name: str,
        user: str,
        states: list[str] | None = None,
        node: str | None = None,
        output: Path | None = None,
    ) -> str:
        """Register a job as if it had been submitted earlier."""
        job_id = str(self._next_id)
        self._next_id += 1
        self.jobs[job_id] = VirtualJob(
            job_id, name, user, list(states or ["qw"]), node, output=output
        )
        return job_id

    def removeJob(self, job_id: str) -> None:
        """Remove a job as if it had finished."""
        if job_id not in self.jobs:
            raise VirtualSchedulerError(f"Job '{job_id}' does not exist.")
        del self.jobs[job_id]

    def scriptFile(self, path: Path, contents: list[str | None]) -> None:
        """Set the contents returned by consecutive reads of a file."""
        self.files[path] = list(contents)

    def submitJob(self, name: str, user: str, options: list[str], script: str) -> str:
        """Register a new job using the `next_states` and `next_node` settings."""
        if self.submit_error:
            raise VirtualSchedulerError(self.submit_error)

        self.submitted.append((list(options), script))
        return self.addJob(name, user, self.next_states, self.next_node)

    def readFile(self, path: Path) -> str | None:
        """Return the next scripted content of the file."""
        contents = self.files.get(path)
        if not contents:
            return None

        content = contents[0]
        if len(contents) > 1:
            contents.pop(0)
        return content

    def removeFile(self, path: Path) -> None:
        self.removed.append(path)
        self.files.pop(path, None)

    def renderListing(self, user: str) -> str:
        """
        Render the user's jobs in the format of `qstat -r` and advance their states.
        """
        self.listings += 1
        lines = [
            "job-ID  prior   name       user         state submit/start at     queue                          slots ja-task-ID",
            "-" * 113,
        ]
        for job in self.jobs.values():
            if job.user != user:
                continue

            state = job.currentState()
            queue = f"{job.queue}@{job.node}" if job.node and "r" in state else ""
            lines.append(
                f"{job.job_id:>7} 0.50500 {job.name[:10]:<10} {job.user:<12} {state:<5} "
                f"10/18/2026 10:00:00 {queue:<30} 1"
            )
            lines.append(f"       Full jobname:     {job.name}")
            job.advance()

        return "\n".join(lines) + "\n"
