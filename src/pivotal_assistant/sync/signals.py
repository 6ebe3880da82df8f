"""ChangeEventSource - One wake-up per loop iteration from the first trigger to fire."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from pivotal_assistant.sync.exceptions import SyncError
from pivotal_assistant.sync.models import ChangeTrigger

logger = logging.getLogger(__name__)

DEFAULT_IDLE_TIMEOUT = 120.0  # seconds
DEFAULT_POLL_INTERVAL = 1.0  # seconds

FileSignature = tuple[int, int, int]


class ChangeEventSource:
    """Races a file watch, a manual trigger and an idle timer.

    Only one wait may be outstanding. The manual trigger slot exists only
    for the duration of a wait; triggering outside of one does nothing.
    """

    def __init__(
        self,
        watch_path: str | Path,
        idle_timeout: float = DEFAULT_IDLE_TIMEOUT,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
    ) -> None:
        """Initialize the event source.

        Args:
            watch_path: File whose modification wakes the loop.
            idle_timeout: Seconds after which the loop wakes regardless.
            poll_interval: Seconds between checks of the watched file.
        """
        self.watch_path = Path(watch_path)
        self.idle_timeout = idle_timeout
        self.poll_interval = poll_interval
        self._manual: asyncio.Event | None = None

    @property
    def waiting(self) -> bool:
        """Whether a wait is in progress."""
        return self._manual is not None

    def trigger(self) -> None:
        """Signal that data may have changed now."""
        if self._manual is None:
            logger.debug("Manual trigger outside of a wait, ignored")
            return
        self._manual.set()

    async def wait(self) -> ChangeTrigger:
        """Wait for the first trigger and tear down the others.

        Returns:
            The trigger that fired.

        Raises:
            SyncError: If another wait is already in progress.
        """
        if self._manual is not None:
            raise SyncError("A change wait is already in progress")

        manual = asyncio.Event()
        self._manual = manual
        # Insertion order is the tie-break order when several finish together
        racers = {
            asyncio.create_task(manual.wait()): ChangeTrigger.MANUAL,
            asyncio.create_task(self._watch_file()): ChangeTrigger.FILESYSTEM,
            asyncio.create_task(asyncio.sleep(self.idle_timeout)): ChangeTrigger.IDLE_TIMEOUT,
        }
        try:
            done, _ = await asyncio.wait(set(racers), return_when=asyncio.FIRST_COMPLETED)
        finally:
            self._manual = None
            for task in racers:
                task.cancel()
            await asyncio.gather(*racers, return_exceptions=True)

        for task, trigger in racers.items():
            if task in done:
                task.result()
                logger.debug("Change signal from %s", trigger.value)
                return trigger
        raise SyncError("Change wait finished without a trigger")

    async def _watch_file(self) -> None:
        """Return once the watched file's signature changes."""
        baseline = self._signature()
        while True:
            await asyncio.sleep(self.poll_interval)
            if self._signature() != baseline:
                logger.debug("%s modified", self.watch_path)
                return

    def _signature(self) -> FileSignature | None:
        try:
            stat = self.watch_path.stat()
        except OSError:
            return None
        return (stat.st_mtime_ns, stat.st_size, stat.st_ino)
