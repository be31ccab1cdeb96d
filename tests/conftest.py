import itertools
from datetime import datetime, timedelta, timezone

import pytest

from vocato.domain.models import Word
from vocato.domain.ports import ScheduledTask, SpeechPlayer, TaskScheduler
from vocato.infrastructure.adapters import (
    InMemoryKeyValueStore,
    InMemoryWordStore,
    KeyValueProgressStore,
)

FIXED_NOW = datetime(2026, 10, 19, 9, 30, tzinfo=timezone.utc)


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, now: datetime = FIXED_NOW):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


class FakeTask(ScheduledTask):
    def __init__(self, due: float, callback):
        self.due = due
        self.callback = callback
        self.cancelled = False
        self.done = False

    def cancel(self) -> None:
        self.cancelled = True


class FakeTaskScheduler(TaskScheduler):
    """Deterministic scheduler driven by advance(seconds)."""

    def __init__(self):
        self.now = 0.0
        self.tasks: list[FakeTask] = []

    def schedule(self, delay, callback) -> FakeTask:
        task = FakeTask(self.now + delay, callback)
        self.tasks.append(task)
        return task

    @property
    def pending(self) -> list[FakeTask]:
        return [t for t in self.tasks if not t.cancelled and not t.done]

    def advance(self, seconds: float) -> None:
        end = self.now + seconds
        while True:
            ready = [t for t in self.pending if t.due <= end + 1e-9]
            if not ready:
                break
            task = min(ready, key=lambda t: t.due)
            self.now = max(self.now, task.due)
            task.done = True
            task.callback()
        self.now = end


class RecordingSpeechPlayer(SpeechPlayer):
    def __init__(self):
        self.spoken: list[tuple[str, str]] = []
        self.stops = 0

    def speak(self, text, language_code):
        self.spoken.append((text, language_code))

    def stop(self):
        self.stops += 1


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def make_word(clock):
    """Factory for words created at increasing times before the fixed clock."""
    counter = itertools.count(1)

    def _make(**overrides) -> Word:
        n = next(counter)
        values = {
            "id": f"w{n}",
            "term": f"term{n}",
            "meaning": f"meaning{n}",
            "created_at": clock.now - timedelta(days=30) + timedelta(minutes=n),
        }
        values.update(overrides)
        return Word(**values)

    return _make


@pytest.fixture
def store():
    return InMemoryWordStore()


@pytest.fixture
def kv():
    return InMemoryKeyValueStore()


@pytest.fixture
def progress(kv):
    return KeyValueProgressStore(kv)


@pytest.fixture
def task_scheduler():
    return FakeTaskScheduler()


@pytest.fixture
def player():
    return RecordingSpeechPlayer()
