"""Best-effort background writes.

Services change their local state first and then hand the matching write to
an ``EventualWriter``. A failed write is logged and dropped; local state is
never rolled back.
"""

import asyncio
from typing import Awaitable, Callable

from loguru import logger

WriteFactory = Callable[[], Awaitable[object]]


class EventualWriter:
    """Runs submitted writes in the background and can be flushed."""

    def __init__(self):
        self._queued: list[tuple[str, WriteFactory]] = []
        self._tasks: set[asyncio.Task] = set()
        self.failures = 0

    def submit(self, description: str, factory: WriteFactory) -> None:
        """Schedule a write.

        Inside a running event loop the write starts right away as a task;
        otherwise it waits for the next ``flush()``.
        """
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            self._queued.append((description, factory))
            return

        task = loop.create_task(self._run(description, factory))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    @property
    def pending(self) -> int:
        return len(self._queued) + len(self._tasks)

    async def _run(self, description: str, factory: WriteFactory) -> None:
        try:
            await factory()
            logger.debug(f"Persisted {description}")
        except Exception:
            self.failures += 1
            logger.exception(f"Failed to persist {description}")

    async def flush(self) -> None:
        """Wait for every queued and running write to settle."""
        queued, self._queued = self._queued, []
        for description, factory in queued:
            await self._run(description, factory)
        if self._tasks:
            await asyncio.gather(*list(self._tasks))
