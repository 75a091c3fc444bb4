from __future__ import annotations

import threading
from typing import Any, Callable, List, Optional, Protocol


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    def call_later(self, delay_s: float, callback: Callable[[], None]) -> TimerHandle: ...


def _call_now(fn: Callable[[], None]) -> None:
    fn()


class ThreadingScheduler:
    """
    Delayed callbacks on daemon threading.Timer threads.

    post decides which thread finally runs the callback; by default it runs on
    the timer thread itself.
    """

    def __init__(self, post: Callable[[Callable[[], None]], None] = _call_now):
        self._post = post

    def call_later(self, delay_s: float, callback: Callable[[], None]) -> TimerHandle:
        timer = threading.Timer(delay_s, lambda: self._post(callback))
        timer.daemon = True
        timer.start()
        return timer


class _TkHandle:
    def __init__(self, widget: Any, after_id: str):
        self._widget = widget
        self._after_id: Optional[str] = after_id

    def cancel(self) -> None:
        if self._after_id is not None:
            self._widget.after_cancel(self._after_id)
            self._after_id = None


class TkScheduler:
    """Delayed callbacks on the Tk event loop via widget.after()."""

    def __init__(self, widget: Any):
        self._widget = widget

    def call_later(self, delay_s: float, callback: Callable[[], None]) -> TimerHandle:
        return _TkHandle(self._widget, self._widget.after(int(delay_s * 1000), callback))


class NarrationTimers:
    """
    The cosmetic status updates of one enhancement attempt.

    Once cancel_all() has returned, no callback scheduled here runs or is
    still running: a callback executes under the set's lock, so cancel_all()
    waits for one already in progress. Usable as a context manager that
    cancels on exit.
    """

    def __init__(self, scheduler: Scheduler):
        self._scheduler = scheduler
        self._handles: List[TimerHandle] = []
        # reentrant: a callback may end the run that owns these timers
        self._lock = threading.RLock()
        self._cancelled = False

    def schedule(self, delay_s: float, callback: Callable[[], None]) -> None:
        def guarded() -> None:
            with self._lock:
                if self._cancelled:
                    return
                callback()

        with self._lock:
            if self._cancelled:
                return
            self._handles.append(self._scheduler.call_later(delay_s, guarded))

    def cancel_all(self) -> None:
        with self._lock:
            self._cancelled = True
            handles, self._handles = self._handles, []
        for h in handles:
            h.cancel()

    def __enter__(self) -> "NarrationTimers":
        return self

    def __exit__(self, *exc: object) -> None:
        self.cancel_all()
