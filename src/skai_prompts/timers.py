"""Cancellable one-shot scheduled task.

Used for the brief clear-search acknowledgement. Cancelling invalidates the
pending run synchronously, so a timer that already started firing on another
thread still becomes a no-op.
"""

from __future__ import annotations

import threading
from typing import Callable

TimerFactory = Callable[..., "threading.Timer"]


class ScheduledTask:
    """Run ``callback`` once after ``delay`` seconds unless cancelled first.

    Args:
        delay: Seconds to wait before running.
        callback: Zero-argument callable.
        timer_factory: Factory with the ``threading.Timer`` signature.
    """

    def __init__(
        self,
        delay: float,
        callback: Callable[[], None],
        timer_factory: TimerFactory | None = None,
    ):
        self.delay = delay
        self.callback = callback
        self._timer_factory = timer_factory or threading.Timer
        self._timer = None
        self._generation = 0
        self._lock = threading.Lock()

    @property
    def pending(self) -> bool:
        return self._timer is not None

    def schedule(self) -> None:
        """(Re)start the countdown, replacing any pending run."""
        with self._lock:
            self._cancel_locked()
            generation = self._generation
            timer = self._timer_factory(self.delay, self._fire, args=(generation,))
            timer.daemon = True
            self._timer = timer
        timer.start()

    def cancel(self) -> None:
        """Cancel a pending run. No-op when nothing is pending."""
        with self._lock:
            self._cancel_locked()

    def _cancel_locked(self) -> None:
        self._generation += 1
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _fire(self, generation: int) -> None:
        with self._lock:
            if generation != self._generation:
                return
            self._timer = None
        self.callback()
