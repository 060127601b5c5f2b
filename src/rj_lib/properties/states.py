# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

from enum import Enum
from typing import Self


class BatchState(Enum):
    """
    State of the job according to Grid Engine.
    """

    RUNNING = 1
    QUEUED = 2
    HELD = 3
    MOVING = 4
    SUSPENDED = 5
    EXITING = 6
    FAILED = 7
    UNKNOWN = 8

    def __str__(self) -> str:
        """
        Return the lowercase string representation of the enum variant.

        Returns:
            str: The name of the batch state in lowercase.
        """
        return self.name.lower()

    @classmethod
    def _letterToState(cls) -> list[tuple[str, str]]:
        """
        Internal mapping from state letters to batch state names.

        Grid Engine reports states as combinations of letters (e.g. 'qw', 'hqw', 'Eqw', 'dr', 'Rq').
        The first matching letter in this list decides the state. 'R' (restarted) and
        'h' (hold) only modify the state given by the other letters, except that a
        pending job with a hold is held.

        Returns:
            list[tuple[str, str]]: Pairs of letters and batch state names.
        """
        return [
            ("E", "failed"),
            ("d", "exiting"),
            ("s", "suspended"),
            ("S", "suspended"),
            ("T", "suspended"),
            ("t", "moving"),
            ("q", "queued"),
            ("w", "queued"),
            ("r", "running"),
            ("h", "held"),
        ]

    @classmethod
    def fromCode(cls, code: str) -> Self:
        """
        Convert a Grid Engine state code to a BatchState enum variant.

        Args:
            code (str): State code as printed by qstat (e.g. 'r', 'qw').

        Returns:
            BatchState: Corresponding enum variant, or UNKNOWN if the code is not recognized.
        """
        for letter, name in cls._letterToState():
            if letter not in code:
                continue

            if name == "queued" and "h" in code:
                return cls.HELD
            return cls[name.upper()]

        return cls.UNKNOWN
