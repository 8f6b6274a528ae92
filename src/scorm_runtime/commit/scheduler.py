"""Autocommit scheduler.

Holds at most one pending one-shot timer per session.  The timer runs on
the session's timer loop (the running asyncio loop by default) and invokes
the commit callback unless it was cancelled first.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

from scorm_runtime.core.clock import ITimerHandle, ITimerLoop
from scorm_runtime.core.enums import SchedulerState

logger = logging.getLogger(__name__)


class ScheduledCommit:
    """One armed timer wrapping the commit callback."""

    def __init__(
        self,
        loop: ITimerLoop,
        delay_seconds: float,
        callback: Callable[[], object],
    ) -> None:
        self.delay_seconds = delay_seconds
        self._callback = callback
        self._cancelled = False
        self._handle: ITimerHandle = loop.call_later(delay_seconds, self._fire)

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        self._cancelled = True
        self._handle.cancel()

    def _fire(self) -> None:
        if not self._cancelled:
            self._callback()


class CommitScheduler:
    """Single pending-trigger slot for deferred commits.

    ``arm`` is a no-op while a trigger is pending; ``cancel`` is idempotent.
    """

    def __init__(
        self,
        on_fire: Callable[[], object],
        loop: ITimerLoop | None = None,
    ) -> None:
        self._on_fire = on_fire
        self._loop = loop
        self._pending: ScheduledCommit | None = None
        self._state = SchedulerState.IDLE
        self.fired_count = 0

    @property
    def state(self) -> SchedulerState:
        return self._state

    @property
    def pending(self) -> bool:
        return self._pending is not None

    def arm(self, delay_seconds: float) -> bool:
        """Schedule a commit unless one is already pending."""
        if self._pending is not None:
            return False

        loop = self._resolve_loop()
        if loop is None:
            logger.warning(
                "Autocommit requested but no event loop is running; "
                "commit not scheduled"
            )
            return False

        self._pending = ScheduledCommit(loop, delay_seconds, self._fire)
        self._state = SchedulerState.ARMED
        logger.debug("Commit scheduled in %.3fs", delay_seconds)
        return True

    def cancel(self) -> None:
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None
            self._state = SchedulerState.IDLE

    def _fire(self) -> None:
        self._pending = None
        self._state = SchedulerState.FIRED
        self.fired_count += 1
        self._on_fire()

    def _resolve_loop(self) -> ITimerLoop | None:
        if self._loop is not None:
            return self._loop
        try:
            return asyncio.get_running_loop()
        except RuntimeError:
            return None
