"""Per-quiz-mode answer policies and dictation helpers."""

import random
from dataclasses import dataclass
from enum import Enum

from vocato.domain.models import QuizMode, Word


@dataclass(frozen=True)
class QuizPolicy:
    """
    How a quiz mode turns an answer into counter updates.

    Attributes:
        credit_accuracy: Correct answers count towards the daily accuracy tally.
        bump_importance_on_wrong: Wrong or unknown answers raise importance.
        records_answer: Answers move the SRS stage and review date. When False
            the mode only advances the cursor.
    """

    credit_accuracy: bool
    bump_importance_on_wrong: bool
    records_answer: bool


FLASHCARDS_POLICY = QuizPolicy(credit_accuracy=True, bump_importance_on_wrong=True, records_answer=True)
MULTIPLE_CHOICE_POLICY = QuizPolicy(
    credit_accuracy=True, bump_importance_on_wrong=True, records_answer=True
)
# Dictation never credits accuracy nor reschedules; it only flags difficulty.
DICTATION_POLICY = QuizPolicy(credit_accuracy=False, bump_importance_on_wrong=True, records_answer=False)
AUTO_PLAY_POLICY = QuizPolicy(credit_accuracy=False, bump_importance_on_wrong=False, records_answer=False)

_POLICIES = {
    QuizMode.FLASHCARDS: FLASHCARDS_POLICY,
    QuizMode.MULTIPLE_CHOICE: MULTIPLE_CHOICE_POLICY,
    QuizMode.DICTATION: DICTATION_POLICY,
    QuizMode.AUTO_PLAY: AUTO_PLAY_POLICY,
}


def policy_for(mode: QuizMode) -> QuizPolicy:
    return _POLICIES[QuizMode(mode)]


class QuizDirection(str, Enum):
    TERM_TO_MEANING = "term_to_meaning"
    MEANING_TO_TERM = "meaning_to_term"


def choose_direction(rng: random.Random) -> QuizDirection:
    """Pick which side of the word is shown, with equal odds."""
    return QuizDirection.TERM_TO_MEANING if rng.random() < 0.5 else QuizDirection.MEANING_TO_TERM


@dataclass(frozen=True)
class DictationPrompt:
    """One dictation question: show one side of a word, expect the other."""

    word: Word
    direction: QuizDirection

    @property
    def shown(self) -> str:
        if self.direction == QuizDirection.TERM_TO_MEANING:
            return self.word.term
        return self.word.meaning

    @property
    def expected(self) -> str:
        if self.direction == QuizDirection.TERM_TO_MEANING:
            return self.word.meaning
        return self.word.term

    def check(self, user_input: str) -> bool:
        return check_dictation(user_input, self.expected)


def normalize_answer(text: str) -> str:
    return text.strip().lower()


def check_dictation(user_input: str, expected: str) -> bool:
    """Compare a typed answer ignoring case and surrounding whitespace."""
    return normalize_answer(user_input) == normalize_answer(expected)
