import pytest

from vocato.application.auto_advance import FlashcardAutoAdvance
from vocato.application.session import StudySession


@pytest.fixture
def session(store, progress, clock, make_word):
    for _ in range(3):
        store.save(make_word())
    return StudySession(store, progress, clock)


def test_advances_every_speed_seconds(session, task_scheduler):
    flipper = FlashcardAutoAdvance(session, task_scheduler, speed=2.0)
    flipper.start()

    task_scheduler.advance(1.9)
    assert session.cursor == 0
    task_scheduler.advance(0.1)
    assert session.cursor == 1
    task_scheduler.advance(2.0)
    assert session.cursor == 2


def test_cards_are_not_graded(session, task_scheduler):
    FlashcardAutoAdvance(session, task_scheduler, speed=1.0).start()
    task_scheduler.advance(5.0)
    assert all(w.correct_count == 0 and w.wrong_count == 0 for w in session.queue)
    assert all(w.next_review_date is None for w in session.queue)


def test_stops_itself_at_the_end(session, task_scheduler):
    flipper = FlashcardAutoAdvance(session, task_scheduler, speed=1.0)
    flipper.start()

    task_scheduler.advance(3.0)

    assert session.is_finished
    assert not flipper.is_running
    assert task_scheduler.pending == []


def test_stop_cancels_timer(session, task_scheduler):
    with FlashcardAutoAdvance(session, task_scheduler) as flipper:
        flipper.start()
        flipper.start()
        task_scheduler.advance(1.0)
    assert task_scheduler.pending == []
    task_scheduler.advance(10.0)
    assert session.cursor == 0


@pytest.mark.parametrize("speed,expected", [(0.2, 1.0), (2.5, 2.5), (9.0, 5.0)])
def test_speed_is_clamped(session, task_scheduler, speed, expected):
    assert FlashcardAutoAdvance(session, task_scheduler, speed=speed).speed == expected
