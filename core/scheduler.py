# core/scheduler.py

"""
Trailing-edge debouncing for slow or synchronous side effects.

A `DebouncedTask` wraps a zero-argument callable. Every `schedule()` call cancels the pending
run (if any) and starts a fresh countdown, so a burst of calls collapses into one run that
happens only after the burst goes quiet. `flush()` runs the callable immediately on the
calling thread and discards any pending run; teardown paths use it instead of waiting on a
timer that may never fire.
"""

from __future__ import annotations

import threading
from typing import Any, Callable, Protocol


class TimerHandle(Protocol):
    def start(self) -> None: ...

    def cancel(self) -> None: ...


TimerFactory = Callable[[float, Callable[[], None]], TimerHandle]


def daemon_timer(interval: float, function: Callable[[], None]) -> TimerHandle:
    timer = threading.Timer(interval, function)
    # a pending write must never keep the interpreter alive
    timer.daemon = True
    return timer


class DebouncedTask:

    def __init__(
        self,
        func: Callable[[], Any],
        delay: float,
        timer_factory: TimerFactory = daemon_timer,
    ):
        if delay < 0:
            raise ValueError("Debounce delay cannot be negative.")

        self._func = func
        self._delay = delay
        self._timer_factory = timer_factory
        self._timer: TimerHandle | None = None
        # incremented on every schedule/cancel so a stale timer firing late is ignored
        self._generation = 0
        self._lock = threading.Lock()

    # === properties ===

    @property
    def delay(self) -> float:
        return self._delay

    @property
    def pending(self) -> bool:
        with self._lock:
            return self._timer is not None

    # === public methods ===

    def schedule(self) -> None:
        with self._lock:
            self._cancel_locked()
            generation = self._generation
            self._timer = self._timer_factory(
                self._delay, lambda: self._fire(generation)
            )
            self._timer.start()

    def cancel(self) -> bool:
        """
        Cancels the pending run, if any.

        Returns:
            True if a pending run was discarded, False if nothing was scheduled.
        """
        with self._lock:
            return self._cancel_locked()

    def flush(self) -> Any:
        """
        Discards any pending run and invokes the callable synchronously.

        Returns:
            Whatever the wrapped callable returns.
        """
        self.cancel()
        return self._func()

    # === private helpers ===

    def _cancel_locked(self) -> bool:
        self._generation += 1

        if self._timer is None:
            return False

        self._timer.cancel()
        self._timer = None
        return True

    def _fire(self, generation: int) -> None:
        with self._lock:
            if generation != self._generation:
                return
            self._timer = None

        self._func()
