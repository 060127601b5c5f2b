# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

from collections.abc import Callable
from time import sleep
from typing import Any

from .error import RJJobVanishedError, RJNotReadyError
from .logger import get_logger

logger = get_logger(__name__)


class Poller:
    """
    Poller repeatedly evaluates a predicate until it returns a truthy value
    or the maximum number of attempts is reached.

    Before each evaluation of the predicate, a guard is checked. If the guard
    returns False, the polled object no longer exists and waiting for it is
    pointless.

    Attributes:
        predicate (Callable[[], Any]): Returns a truthy value on success.
        guard (Callable[[], bool] | None): Returns False if polling should be aborted.
        max_tries (int): Maximum number of attempts.
        wait_seconds (float): Time to wait between attempts.
        description (str): Human-readable description of what is being waited for.
    """

    def __init__(
        self,
        predicate: Callable[[], Any],
        guard: Callable[[], bool] | None = None,
        *,
        max_tries: int,
        wait_seconds: float,
        description: str = "condition",
    ):
        self._predicate = predicate
        self._guard = guard
        self._max_tries = max_tries
        self._wait_seconds = wait_seconds
        self._description = description

    def run(self) -> Any:
        """
        Poll until the predicate succeeds.

        Returns:
            Any: The first truthy value returned by the predicate.

        Raises:
            RJJobVanishedError: If the guard fails during any attempt.
            RJNotReadyError: If all attempts are exhausted.
        """
        for attempt in range(1, self._max_tries + 1):
            if self._guard is not None and not self._guard():
                raise RJJobVanishedError(
                    f"Job quit unexpectedly while waiting for {self._description}."
                )

            if result := self._predicate():
                logger.debug(
                    f"Polling for {self._description} succeeded on attempt {attempt}."
                )
                return result

            if attempt < self._max_tries:
                logger.debug(
                    f"Still waiting for {self._description} (attempt {attempt} of {self._max_tries})."
                )
                sleep(self._wait_seconds)

        raise RJNotReadyError(
            f"Gave up waiting for {self._description} after {self._max_tries} attempts "
            f"({self._max_tries * self._wait_seconds:g} seconds). Try again later."
        )
