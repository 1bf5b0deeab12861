"""Clock and callback scheduling used by the live session engine."""

import asyncio
import heapq
import itertools
from typing import Any, Callable, Protocol

FRAME_INTERVAL_SEC = 1 / 60


class Scheduler(Protocol):
    """Time source plus cancellable one-shot callbacks."""

    def now(self) -> float:
        """Current time in seconds (monotonic)."""
        ...

    def schedule_tick(self, callback: Callable[[], None]) -> Any:
        """Run ``callback`` on the next frame."""
        ...

    def call_later(self, delay: float, callback: Callable[[], None]) -> Any:
        """Run ``callback`` after ``delay`` seconds."""
        ...

    def cancel(self, handle: Any) -> None:
        """Cancel a pending callback. Unknown or fired handles are ignored."""
        ...


class AsyncioScheduler:
    """Scheduler on top of a running asyncio event loop."""

    def __init__(
        self,
        loop: asyncio.AbstractEventLoop | None = None,
        frame_interval: float = FRAME_INTERVAL_SEC,
    ):
        self._loop = loop or asyncio.get_running_loop()
        self.frame_interval = frame_interval

    def now(self) -> float:
        return self._loop.time()

    def schedule_tick(self, callback: Callable[[], None]) -> asyncio.TimerHandle:
        return self._loop.call_later(self.frame_interval, callback)

    def call_later(self, delay: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        return self._loop.call_later(delay, callback)

    def cancel(self, handle: asyncio.TimerHandle | None) -> None:
        if handle is not None:
            handle.cancel()


class _Timer:
    """Handle for a callback queued on a ``VirtualScheduler``."""

    __slots__ = ("due_ms", "callback", "cancelled")

    def __init__(self, due_ms: int, callback: Callable[[], None]):
        self.due_ms = due_ms
        self.callback = callback
        self.cancelled = False


class VirtualScheduler:
    """Deterministic scheduler driven by ``advance()``.

    Time is kept in whole milliseconds so deadlines land exactly on frame
    boundaries.
    """

    def __init__(self, frame_ms: int = 10, start: float = 0.0):
        self.frame_ms = frame_ms
        self._now_ms = int(round(start * 1000))
        self._queue: list[tuple[int, int, _Timer]] = []
        self._seq = itertools.count()

    def now(self) -> float:
        return self._now_ms / 1000

    def _push(self, delay_ms: int, callback: Callable[[], None]) -> _Timer:
        timer = _Timer(self._now_ms + max(0, delay_ms), callback)
        heapq.heappush(self._queue, (timer.due_ms, next(self._seq), timer))
        return timer

    def schedule_tick(self, callback: Callable[[], None]) -> _Timer:
        return self._push(self.frame_ms, callback)

    def call_later(self, delay: float, callback: Callable[[], None]) -> _Timer:
        return self._push(int(round(delay * 1000)), callback)

    def cancel(self, handle: _Timer | None) -> None:
        if handle is not None:
            handle.cancelled = True

    @property
    def pending(self) -> int:
        """Number of callbacks still waiting to fire."""
        return sum(1 for _, _, timer in self._queue if not timer.cancelled)

    def _fire_until(self, end_ms: int) -> None:
        while self._queue and self._queue[0][0] <= end_ms:
            _, _, timer = heapq.heappop(self._queue)
            if timer.cancelled:
                continue
            self._now_ms = timer.due_ms
            timer.callback()

    def advance(self, seconds: float) -> None:
        """Move the clock forward, firing every callback that falls due."""
        target_ms = self._now_ms + int(round(seconds * 1000))
        self._fire_until(target_ms)
        self._now_ms = target_ms

    def run_until_idle(self, limit: float = 24 * 3600) -> None:
        """Fire callbacks until nothing is pending (bounded by ``limit`` seconds)."""
        self._fire_until(self._now_ms + int(round(limit * 1000)))
