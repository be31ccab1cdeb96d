from datetime import date, timedelta
from unittest.mock import patch

import pytest
import yaml

from vocato.domain.errors import PersistFailure, QueryFailure
from vocato.domain.models import SortKey
from vocato.infrastructure.adapters import YamlWordStore


@pytest.fixture
def path(tmp_path):
    return tmp_path / "data" / "words.yaml"


def test_missing_file_is_empty(path):
    assert YamlWordStore(path).fetch() == []


def test_round_trip_through_file(path, make_word, clock):
    word = make_word(
        memo="note",
        srs_stage=2,
        next_review_date=clock.now + timedelta(days=7),
        last_accuracy_date=date(2026, 10, 18),
        is_favorite=True,
    )
    YamlWordStore(path).save(word)

    loaded = YamlWordStore(path).fetch()

    assert loaded == [word]
    assert loaded[0].next_review_date.tzinfo is not None


def test_file_layout(path, make_word):
    YamlWordStore(path).save(make_word(term="café"))
    document = yaml.safe_load(path.read_text(encoding="utf-8"))
    assert document["words"][0]["term"] == "café"
    assert document["words"][0]["id"] == "w1"


def test_fetch_returns_cached_instances(path, make_word):
    store = YamlWordStore(path)
    store.save(make_word())
    first = store.fetch()[0]
    first.importance_count = 4
    assert store.fetch()[0] is first


def test_query_and_delete(path, make_word):
    store = YamlWordStore(path)
    a, b, c = make_word(importance_count=1), make_word(importance_count=3), make_word()
    for w in (a, b, c):
        store.save(w)

    top = store.fetch(
        predicate=lambda w: w.importance_count > 0,
        sort=[SortKey("importance_count", descending=True)],
        limit=1,
    )
    assert top == [b]

    store.delete(b)
    assert [w.id for w in YamlWordStore(path).fetch()] == [a.id, c.id]


def test_corrupt_file(path, make_word):
    path.parent.mkdir(parents=True)
    path.write_text("words: [ {id: 1", encoding="utf-8")
    store = YamlWordStore(path)

    with pytest.raises(QueryFailure):
        store.fetch()
    with pytest.raises(PersistFailure):
        store.save(make_word())
    assert path.read_text(encoding="utf-8") == "words: [ {id: 1"


def test_record_missing_fields(path):
    path.parent.mkdir(parents=True)
    path.write_text("words:\n  - id: w1\n", encoding="utf-8")
    with pytest.raises(QueryFailure):
        YamlWordStore(path).fetch()


def test_failed_write_leaves_no_temp_file(path, make_word):
    store = YamlWordStore(path)
    store.save(make_word())

    with patch(
        "vocato.infrastructure.adapters.yaml_store.yaml.safe_dump",
        side_effect=yaml.YAMLError("boom"),
    ):
        with pytest.raises(PersistFailure):
            store.save(make_word())

    assert [p.name for p in path.parent.iterdir()] == ["words.yaml"]
    assert len(YamlWordStore(path).fetch()) == 1
