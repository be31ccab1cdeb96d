"""Tests for the auto-play controller state machine and tick sequence."""

import pytest

from vocato.application.autoplay import AutoPlayController, AutoPlayState
from vocato.application.session import StudySession
from vocato.application.speech import SpeechService
from vocato.domain.models import AutoPlayMode


@pytest.fixture
def words(make_word, store):
    created = [make_word() for _ in range(3)]
    for w in created:
        store.save(w)
    return created


@pytest.fixture
def session(store, progress, clock, words):
    return StudySession(store, progress, clock)


@pytest.fixture
def make_controller(session, player, task_scheduler):
    def _make(mode=AutoPlayMode.BOTH, interval=3.0):
        return AutoPlayController(
            session, SpeechService(player), task_scheduler, mode=mode, interval=interval
        )

    return _make


def spoken_texts(player):
    return [text for text, _ in player.spoken]


class TestTickSequence:
    def test_both_speaks_term_then_meaning_then_advances(
        self, make_controller, session, player, task_scheduler
    ):
        controller = make_controller(AutoPlayMode.BOTH)
        controller.start()

        task_scheduler.advance(2.9)
        assert player.spoken == []

        task_scheduler.advance(0.1)
        assert player.spoken == [("term1", "en-US")]
        assert session.cursor == 0

        task_scheduler.advance(1.0)
        assert player.spoken == [("term1", "en-US"), ("meaning1", "ko-KR")]
        assert session.cursor == 0

        task_scheduler.advance(1.0)
        assert session.cursor == 1

    @pytest.mark.parametrize(
        "mode,expected",
        [
            (AutoPlayMode.MEANING_ONLY, ["meaning1"]),
            (AutoPlayMode.TERM_ONLY, ["term1"]),
            (AutoPlayMode.NONE, []),
        ],
    )
    def test_single_modes_advance_after_one_second(
        self, make_controller, session, player, task_scheduler, mode, expected
    ):
        controller = make_controller(mode)
        controller.start()

        task_scheduler.advance(3.0)
        assert spoken_texts(player) == expected
        assert session.cursor == 0

        task_scheduler.advance(1.0)
        assert session.cursor == 1

    def test_repeats_at_interval_until_end(self, make_controller, session, task_scheduler):
        controller = make_controller(AutoPlayMode.TERM_ONLY, interval=2.0)
        controller.start()

        task_scheduler.advance(20.0)

        assert session.cursor == 2
        assert session.is_finished
        # Still ticking; the caller decides when to stop.
        assert controller.state == AutoPlayState.PLAYING
        controller.stop()

    def test_short_interval_never_overlaps_ticks(
        self, make_controller, session, player, task_scheduler
    ):
        controller = make_controller(AutoPlayMode.BOTH, interval=1.0)
        controller.start()

        task_scheduler.advance(6.0)

        terms = [text for text, voice in player.spoken if voice == "en-US"]
        assert terms == ["term1", "term2", "term3"]
        assert spoken_texts(player) == [
            "term1", "meaning1", "term2", "meaning2", "term3", "meaning3"
        ]
        assert session.cursor == 2

    def test_next_tick_waits_for_advance(self, make_controller, session, task_scheduler):
        controller = make_controller(AutoPlayMode.BOTH, interval=1.0)
        controller.start()
        task_scheduler.advance(2.5)

        # Term spoken at 1s, meaning at 2s, advance still pending at 3s.
        assert controller.tick_count == 1
        assert session.cursor == 0

    def test_interval_is_clamped(self, make_controller):
        assert make_controller(interval=0.2).interval == 1.0
        assert make_controller(interval=60).interval == 10.0

    def test_empty_queue_ticks_without_effect(self, store, progress, clock, player, task_scheduler):
        empty = StudySession(store, progress, clock)
        controller = AutoPlayController(empty, SpeechService(player), task_scheduler)
        controller.start()

        task_scheduler.advance(10.0)

        assert player.spoken == []
        assert controller.state == AutoPlayState.PLAYING
        assert empty.cursor == 0


class TestStateMachine:
    def test_initially_stopped(self, make_controller):
        assert make_controller().state == AutoPlayState.STOPPED

    def test_pause_gives_zero_tick_window(self, make_controller, session, player, task_scheduler):
        controller = make_controller(AutoPlayMode.BOTH)
        controller.start()
        task_scheduler.advance(3.0)
        assert controller.tick_count == 1

        controller.pause()
        assert controller.state == AutoPlayState.PAUSED
        assert task_scheduler.pending == []

        task_scheduler.advance(100.0)
        assert controller.tick_count == 1
        assert player.spoken == [("term1", "en-US")]
        assert session.cursor == 0

    def test_resume_restarts_from_zero(self, make_controller, task_scheduler):
        controller = make_controller(interval=3.0)
        controller.start()
        task_scheduler.advance(2.0)
        controller.pause()

        controller.resume()
        task_scheduler.advance(1.5)
        assert controller.tick_count == 0

        task_scheduler.advance(1.5)
        assert controller.tick_count == 1

    def test_stop_cancels_everything(self, make_controller, session, player, task_scheduler):
        controller = make_controller()
        controller.start()
        task_scheduler.advance(3.0)

        controller.stop()

        assert controller.state == AutoPlayState.STOPPED
        assert task_scheduler.pending == []
        assert player.stops == 1
        task_scheduler.advance(30.0)
        assert session.cursor == 0

    def test_start_from_paused(self, make_controller, task_scheduler):
        controller = make_controller()
        controller.start()
        controller.pause()
        controller.start()
        assert controller.is_playing
        task_scheduler.advance(3.0)
        assert controller.tick_count == 1

    def test_start_twice_keeps_one_timer(self, make_controller, task_scheduler):
        controller = make_controller()
        controller.start()
        controller.start()
        task_scheduler.advance(3.0)
        assert controller.tick_count == 1

    def test_resume_only_from_paused(self, make_controller):
        controller = make_controller()
        controller.resume()
        assert controller.state == AutoPlayState.STOPPED

    def test_toggle(self, make_controller):
        controller = make_controller()
        controller.toggle()
        assert controller.state == AutoPlayState.PLAYING
        controller.toggle()
        assert controller.state == AutoPlayState.PAUSED
        controller.toggle()
        assert controller.state == AutoPlayState.PLAYING

    def test_context_manager_stops(self, make_controller, task_scheduler):
        with make_controller() as controller:
            controller.start()
        assert controller.state == AutoPlayState.STOPPED
        assert task_scheduler.pending == []


class TestApplySettings:
    def test_restart_while_playing(self, make_controller, player, task_scheduler):
        controller = make_controller(AutoPlayMode.BOTH, interval=3.0)
        controller.start()
        task_scheduler.advance(2.0)

        controller.apply_settings(mode=AutoPlayMode.MEANING_ONLY, interval=5.0)

        assert controller.is_playing
        task_scheduler.advance(4.9)
        assert controller.tick_count == 0
        task_scheduler.advance(0.1)
        assert spoken_texts(player) == ["meaning1"]

    def test_settings_while_stopped_do_not_start(self, make_controller, task_scheduler):
        controller = make_controller()
        controller.apply_settings(interval=2.0)
        assert controller.state == AutoPlayState.STOPPED
        assert controller.interval == 2.0
        assert task_scheduler.pending == []
