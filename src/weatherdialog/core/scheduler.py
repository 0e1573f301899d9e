"""Cancellable delayed calls and a millisecond clock.

Everything time-based in the dialog (long-press timers, delayed advances,
simulated speech) goes through a Scheduler so that the controller never
touches the event loop directly and tests can drive time by hand.
"""

import asyncio
import heapq
import itertools
import logging
from collections.abc import Callable
from typing import Protocol, runtime_checkable

logger = logging.getLogger(__name__)


@runtime_checkable
class TimerHandle(Protocol):
    """Handle returned by ``Scheduler.call_later``."""

    def cancel(self) -> None:
        """Prevent the callback from running. Safe to call more than once."""
        ...


@runtime_checkable
class Scheduler(Protocol):
    """Clock and one-shot timer facility."""

    def now(self) -> float:
        """Current time in milliseconds (monotonic)."""
        ...

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> TimerHandle:
        """Run ``callback`` once after ``delay_ms`` milliseconds."""
        ...


class LoopScheduler:
    """
    Scheduler backed by an asyncio event loop.

    All callbacks run on the loop thread. ``call_soon_threadsafe`` is the
    entry point for other threads (MIDI input) that need to reach the
    controller.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop):
        self._loop = loop

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        return self._loop

    def now(self) -> float:
        return self._loop.time() * 1000.0

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        return self._loop.call_later(max(delay_ms, 0) / 1000.0, callback)

    def call_soon_threadsafe(self, callback: Callable[..., None], *args) -> None:
        """Schedule ``callback(*args)`` on the loop from any thread."""
        if self._loop.is_closed():
            logger.debug("Event loop closed, dropping cross-thread call")
            return
        self._loop.call_soon_threadsafe(callback, *args)


class _VirtualHandle:
    def __init__(self, when: float, callback: Callable[[], None]):
        self.when = when
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class VirtualScheduler:
    """
    Deterministic scheduler for tests and offline runs.

    Time only moves when ``advance()`` is called; due callbacks run in
    deadline order, ties in scheduling order. Callbacks may schedule further
    calls, which also run if they fall due within the same advance.
    """

    def __init__(self, start_ms: float = 0.0):
        self._now = start_ms
        self._queue: list[tuple[float, int, _VirtualHandle]] = []
        self._sequence = itertools.count()

    def now(self) -> float:
        return self._now

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> _VirtualHandle:
        handle = _VirtualHandle(self._now + max(delay_ms, 0), callback)
        heapq.heappush(self._queue, (handle.when, next(self._sequence), handle))
        return handle

    def call_soon_threadsafe(self, callback: Callable[..., None], *args) -> None:
        self.call_later(0, lambda: callback(*args))

    def advance(self, delay_ms: float = 0.0) -> None:
        """
        Move the clock forward and run every callback that falls due.

        Args:
            delay_ms: Milliseconds to advance; 0 runs callbacks already due
        """
        target = self._now + delay_ms
        while self._queue and self._queue[0][0] <= target:
            when, _, handle = heapq.heappop(self._queue)
            if handle.cancelled:
                continue
            self._now = when
            handle.callback()
        self._now = target

    @property
    def pending(self) -> int:
        """Number of callbacks still waiting to run."""
        return sum(1 for _, _, handle in self._queue if not handle.cancelled)
