"""
Username Availability Checker
Debounced background lookups where only the latest request may update form state
"""

import asyncio
import logging
from typing import Callable, Optional, Set

from stockroom.models.account import UsernameAvailability
from stockroom.models.errors import StoreError

logger = logging.getLogger(__name__)

DEFAULT_DEBOUNCE_SECONDS = 0.3


class UsernameAvailabilityChecker:
    """
    Each call to request_check() supersedes the previous one. A check waits
    out the debounce interval, skips the lookup if it has been superseded, and
    drops its result if a newer check was requested while the lookup was in
    flight. Results are advisory and never gate submission.
    """

    def __init__(
        self,
        profiles,
        on_result: Callable[[UsernameAvailability], None],
        debounce: float = DEFAULT_DEBOUNCE_SECONDS
    ):
        self.profiles = profiles
        self.on_result = on_result
        self.debounce = debounce
        self._sequence = 0
        self._tasks: Set[asyncio.Task] = set()
        self.latest: Optional[UsernameAvailability] = None

    def request_check(self, username: str) -> asyncio.Task:
        """Schedule a check for the current field value"""
        self._sequence += 1
        task = asyncio.create_task(self._check(self._sequence, username.strip()))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    def _is_current(self, sequence: int) -> bool:
        return sequence == self._sequence

    async def _check(self, sequence: int, username: str):
        if self.debounce:
            await asyncio.sleep(self.debounce)
        if not self._is_current(sequence):
            return

        if not username:
            result = UsernameAvailability(username=username, available=None)
        else:
            try:
                available = await self.profiles.is_username_available(username)
                result = UsernameAvailability(username=username, available=available)
            except StoreError as e:
                logger.warning(f"Username availability check failed for {username}: {e.message}")
                result = UsernameAvailability(username=username, available=None, error=e.message)

        if not self._is_current(sequence):
            logger.debug(f"Discarding stale availability result for {username}")
            return

        self.latest = result
        self.on_result(result)

    async def wait(self):
        """Wait for every scheduled check to settle"""
        if self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    def cancel(self):
        """Drop pending checks, e.g. when the form is torn down"""
        self._sequence += 1
        for task in list(self._tasks):
            task.cancel()
