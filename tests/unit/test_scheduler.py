"""Test ManualTimerLoop and CommitScheduler single-slot semantics."""

import asyncio

import pytest

from scorm_runtime.commit.scheduler import CommitScheduler
from scorm_runtime.core.clock import ManualTimerLoop
from scorm_runtime.core.enums import SchedulerState


class TestManualTimerLoop:
    def test_fires_when_due(self, manual_loop):
        calls = []
        manual_loop.call_later(1.0, lambda: calls.append(manual_loop.now_ms))

        assert manual_loop.advance_ms(999) == 0
        assert manual_loop.advance_ms(1) == 1
        assert calls == [1000]

    def test_fires_in_deadline_order(self, manual_loop):
        calls = []
        manual_loop.call_later(2.0, lambda: calls.append("late"))
        manual_loop.call_later(1.0, lambda: calls.append("early"))
        manual_loop.advance_ms(5000)
        assert calls == ["early", "late"]
        assert manual_loop.now_ms == 5000

    def test_cancelled_handle_skipped(self, manual_loop):
        calls = []
        handle = manual_loop.call_later(0.5, lambda: calls.append(1))
        handle.cancel()
        assert manual_loop.pending() == 0
        assert manual_loop.advance_ms(1000) == 0
        assert calls == []

    def test_cannot_go_backwards(self, manual_loop):
        with pytest.raises(ValueError):
            manual_loop.advance_ms(-1)


class TestCommitScheduler:
    def test_arm_then_fire(self, manual_loop):
        fired = []
        scheduler = CommitScheduler(lambda: fired.append(1), loop=manual_loop)

        assert scheduler.arm(1.0) is True
        assert scheduler.state is SchedulerState.ARMED
        assert scheduler.pending

        manual_loop.advance_ms(1000)
        assert fired == [1]
        assert scheduler.state is SchedulerState.FIRED
        assert not scheduler.pending
        assert scheduler.fired_count == 1

    def test_arm_while_pending_is_noop(self, manual_loop):
        fired = []
        scheduler = CommitScheduler(lambda: fired.append(1), loop=manual_loop)
        scheduler.arm(1.0)
        manual_loop.advance_ms(500)

        assert scheduler.arm(1.0) is False
        assert manual_loop.pending() == 1

        # The original deadline still holds.
        manual_loop.advance_ms(500)
        assert fired == [1]

    def test_cancel_prevents_fire(self, manual_loop):
        fired = []
        scheduler = CommitScheduler(lambda: fired.append(1), loop=manual_loop)
        scheduler.arm(1.0)
        scheduler.cancel()
        scheduler.cancel()

        manual_loop.advance_ms(2000)
        assert fired == []
        assert scheduler.state is SchedulerState.IDLE

    def test_rearm_after_fire(self, manual_loop):
        scheduler = CommitScheduler(lambda: None, loop=manual_loop)
        scheduler.arm(1.0)
        manual_loop.advance_ms(1000)
        assert scheduler.arm(1.0) is True

    def test_no_running_loop(self):
        scheduler = CommitScheduler(lambda: None)
        assert scheduler.arm(1.0) is False
        assert scheduler.state is SchedulerState.IDLE

    async def test_uses_running_asyncio_loop(self):
        fired = asyncio.Event()
        scheduler = CommitScheduler(fired.set)

        assert scheduler.arm(0.01) is True
        await asyncio.wait_for(fired.wait(), timeout=1.0)
        assert scheduler.fired_count == 1
