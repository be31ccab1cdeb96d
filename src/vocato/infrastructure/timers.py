"""TaskScheduler backed by threading.Timer."""

import threading
from collections.abc import Callable

from vocato.domain.ports import ScheduledTask, TaskScheduler


class _TimerTask(ScheduledTask):
    def __init__(self, timer: threading.Timer):
        self._timer = timer

    def cancel(self) -> None:
        self._timer.cancel()


class ThreadingTaskScheduler(TaskScheduler):
    """
    Runs each callback on its own daemon timer thread.

    Callers are responsible for serialising the callbacks with their own
    state; AutoPlayController does so with a lock.
    """

    def schedule(self, delay: float, callback: Callable[[], None]) -> ScheduledTask:
        timer = threading.Timer(delay, callback)
        timer.daemon = True
        timer.start()
        return _TimerTask(timer)
