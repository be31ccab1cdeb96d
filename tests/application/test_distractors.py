import random
from unittest.mock import MagicMock

import pytest

from vocato.application.distractors import DistractorSampler
from vocato.domain.errors import QueryFailure
from vocato.infrastructure.adapters import InMemoryWordStore


@pytest.fixture
def pool(make_word):
    return [make_word() for _ in range(10)]


def test_includes_correct_meaning_once(pool):
    sampler = DistractorSampler(InMemoryWordStore(pool), random.Random(7))
    correct = pool[0]

    for _ in range(20):
        options = sampler.options(correct)
        assert len(options) == 4
        assert options.count(correct.meaning) == 1
        assert len(set(options)) == len(options)


def test_duplicate_meanings_are_skipped(make_word):
    correct = make_word(meaning="dog")
    pool = [correct, make_word(meaning="dog"), make_word(meaning="cat"), make_word(meaning="cat")]
    sampler = DistractorSampler(InMemoryWordStore(), random.Random(1))

    options = sampler.options(correct, pool=pool)

    assert sorted(options) == ["cat", "dog"]


def test_case_sensitive_dedup(make_word):
    correct = make_word(meaning="Run")
    pool = [make_word(meaning="run")]
    options = DistractorSampler(InMemoryWordStore(), random.Random(1)).options(correct, pool=pool)
    assert sorted(options) == ["Run", "run"]


def test_short_pool_returns_fewer_options(make_word):
    correct = make_word()
    options = DistractorSampler(InMemoryWordStore(), random.Random(3)).options(
        correct, pool=[correct, make_word()]
    )
    assert len(options) == 2


def test_empty_correct_meaning_not_seeded(make_word, pool):
    correct = make_word(meaning="")
    options = DistractorSampler(InMemoryWordStore(), random.Random(3)).options(correct, pool=pool)
    assert "" not in options
    assert len(options) == 4


def test_seeded_rng_is_reproducible(pool):
    a = DistractorSampler(InMemoryWordStore(pool), random.Random(42)).options(pool[3])
    b = DistractorSampler(InMemoryWordStore(pool), random.Random(42)).options(pool[3])
    assert a == b


def test_correct_answer_position_varies(pool):
    sampler = DistractorSampler(InMemoryWordStore(pool), random.Random(0))
    positions = {sampler.options(pool[0]).index(pool[0].meaning) for _ in range(50)}
    assert len(positions) > 1


def test_pool_failure_degrades(make_word):
    store = MagicMock()
    store.fetch.side_effect = QueryFailure("locked")
    correct = make_word()

    assert DistractorSampler(store, random.Random(0)).options(correct) == [correct.meaning]


def test_invalid_count(make_word):
    with pytest.raises(ValueError):
        DistractorSampler(InMemoryWordStore()).options(make_word(), count=0)
