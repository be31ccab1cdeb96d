import threading

from vocato.infrastructure.timers import ThreadingTaskScheduler


def test_callback_fires():
    fired = threading.Event()
    ThreadingTaskScheduler().schedule(0.01, fired.set)
    assert fired.wait(timeout=2.0)


def test_cancelled_callback_does_not_fire():
    fired = threading.Event()
    task = ThreadingTaskScheduler().schedule(0.2, fired.set)
    task.cancel()
    assert not fired.wait(timeout=0.4)
