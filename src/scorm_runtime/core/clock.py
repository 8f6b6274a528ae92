"""Timer loop abstraction for deferred commits.

Any ``asyncio`` event loop satisfies ``ITimerLoop``.  ``ManualTimerLoop``
fires callbacks only when time is advanced explicitly, which keeps the
autocommit scheduler deterministic in tests and usable from hosts that
drive their own loop.
"""

from __future__ import annotations

import heapq
import itertools
from collections.abc import Callable
from typing import Protocol


class ITimerHandle(Protocol):
    def cancel(self) -> None: ...


class ITimerLoop(Protocol):
    """One-shot timer interface used by the commit scheduler."""

    def call_later(
        self, delay: float, callback: Callable[[], object]
    ) -> ITimerHandle:
        """Run ``callback`` once after ``delay`` seconds."""
        ...


class ManualTimerHandle:
    def __init__(self, deadline_ms: int, callback: Callable[[], object]) -> None:
        self.deadline_ms = deadline_ms
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualTimerLoop:
    """Cooperative timer loop advanced by the host.

    Time starts at zero and only moves forward through ``advance_ms``.
    """

    def __init__(self) -> None:
        self._now_ms = 0
        self._seq = itertools.count()
        self._queue: list[tuple[int, int, ManualTimerHandle]] = []

    @property
    def now_ms(self) -> int:
        return self._now_ms

    def call_later(
        self, delay: float, callback: Callable[[], object]
    ) -> ManualTimerHandle:
        handle = ManualTimerHandle(self._now_ms + int(delay * 1000), callback)
        heapq.heappush(self._queue, (handle.deadline_ms, next(self._seq), handle))
        return handle

    def pending(self) -> int:
        """Number of scheduled, not-yet-cancelled callbacks."""
        return sum(1 for _, _, h in self._queue if not h.cancelled)

    def advance_ms(self, ms: int) -> int:
        """Advance time and run every callback that has come due.

        Returns the number of callbacks executed.
        """
        if ms < 0:
            raise ValueError(f"ManualTimerLoop cannot go backwards: {ms}")
        target = self._now_ms + ms
        fired = 0
        while self._queue and self._queue[0][0] <= target:
            deadline, _, handle = heapq.heappop(self._queue)
            self._now_ms = deadline
            if handle.cancelled:
                continue
            handle.callback()
            fired += 1
        self._now_ms = target
        return fired
