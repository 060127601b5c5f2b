# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

from typing import Self

from rj_lib.batch.interface import BatchJobInterface
from rj_lib.properties.states import BatchState


class SGEJob(BatchJobInterface):
    """
    Implementation of BatchJobInterface for Grid Engine.
    Stores one job parsed from the output of `qstat -r`.
    """

    def __init__(
        self, job_id: str, name: str, user: str, state: str, queue: str, row: str
    ):
        self._job_id = job_id
        self._name = name
        self._user = user
        self._state = state
        self._queue = queue
        self._row = row

    @classmethod
    def fromDict(cls, data: dict[str, str]) -> Self:
        """
        Construct the job from a dictionary produced by `parse_qstat_listing`.
        """
        return cls(
            data["id"],
            data["name"],
            data["user"],
            data["state"],
            data.get("queue", ""),
            data.get("row", ""),
        )

    def getId(self) -> str:
        return self._job_id

    def getName(self) -> str:
        return self._name

    def getUser(self) -> str:
        return self._user

    def getState(self) -> BatchState:
        return BatchState.fromCode(self._state)

    def getQueue(self) -> str | None:
        """Return the queue instance (e.g. 'all.q@node1') the job is assigned to."""
        return self._queue or None

    def getNode(self) -> str | None:
        if not (queue := self.getQueue()) or "@" not in queue:
            return None
        return queue.split("@", 1)[1]

    def getRow(self) -> str:
        return self._row

    def __repr__(self) -> str:
        return (
            f"SGEJob(id={self._job_id!r}, name={self._name!r}, user={self._user!r}, "
            f"state={self._state!r}, queue={self._queue!r})"
        )
