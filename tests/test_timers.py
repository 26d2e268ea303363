"""Tests for the cancellable scheduled task."""

import threading

from skai_prompts.timers import ScheduledTask


class TestScheduledTask:
    def test_fires_once_scheduled(self, timers):
        calls = []
        task = ScheduledTask(0.15, lambda: calls.append(1), timers)
        task.schedule()
        assert task.pending
        assert timers.last.interval == 0.15
        assert timers.last.daemon is True
        assert timers.last.started
        timers.last.fire()
        assert calls == [1]
        assert not task.pending

    def test_cancel_prevents_late_fire(self, timers):
        calls = []
        task = ScheduledTask(0.15, lambda: calls.append(1), timers)
        task.schedule()
        timer = timers.last
        task.cancel()
        assert timer.cancelled
        # The thread was already past its wait when cancel ran
        timer.fire()
        assert calls == []

    def test_reschedule_replaces_pending_run(self, timers):
        calls = []
        task = ScheduledTask(0.15, lambda: calls.append(1), timers)
        task.schedule()
        first = timers.last
        task.schedule()
        assert first.cancelled
        first.fire()
        assert calls == []
        timers.last.fire()
        assert calls == [1]

    def test_cancel_without_pending_is_noop(self, timers):
        task = ScheduledTask(0.15, lambda: None, timers)
        task.cancel()
        task.cancel()
        assert not task.pending
        assert timers.created == []

    def test_real_timer(self):
        fired = threading.Event()
        task = ScheduledTask(0.01, fired.set)
        task.schedule()
        assert fired.wait(2)
