"""
Review scheduler for the fixed-stage spaced-repetition heuristic.

This is a pure computation module with no I/O.
"""

from datetime import datetime, timedelta

from vocato.domain.constants import MAX_SRS_STAGE, MIN_SRS_STAGE, STAGE_INTERVAL_DAYS


def next_stage(current: int, correct: bool) -> int:
    """
    Stage reached after answering.

    A correct answer moves one stage up (capped at the top stage); a wrong
    answer resets to stage 0 with no partial credit.
    """
    if not correct:
        return MIN_SRS_STAGE
    return min(current + 1, MAX_SRS_STAGE)


def interval_days(stage: int) -> int:
    """Days until the next review for a word sitting at `stage`."""
    index = min(max(stage, 0), len(STAGE_INTERVAL_DAYS) - 1)
    return STAGE_INTERVAL_DAYS[index]


def next_review_date(stage: int, now: datetime) -> datetime:
    """
    Due date for a word that has just reached `stage`.

    Always measured from `now`, never from the previous due date, so
    intervals do not compound across reviews.
    """
    return now + timedelta(days=interval_days(stage))
