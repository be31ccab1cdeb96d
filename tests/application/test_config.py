from pathlib import Path

import pytest
from pydantic import ValidationError

from vocato.application.config import AppConfig, resolve_config
from vocato.domain.models import AutoPlayMode, QuizMode, WordGroup


@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    monkeypatch.setattr("vocato.application.config.CONFIG_FILES", [tmp_path / "config.toml"])
    for var in (
        "VOCATO_QUESTION_COUNT",
        "VOCATO_AUTO_PLAY_INTERVAL",
        "VOCATO_AUTO_ADVANCE_SPEED",
        "VOCATO_DATA_DIR",
    ):
        monkeypatch.delenv(var, raising=False)
    return tmp_path


def test_defaults(isolated_home):
    config = resolve_config({"data_dir": isolated_home})
    assert config.question_count == 10
    assert config.auto_play_mode == AutoPlayMode.BOTH
    assert config.words_path == isolated_home / "words.yaml"
    assert config.state_path == isolated_home / "state.json"


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("VOCATO_QUESTION_COUNT", "25")
    assert resolve_config().question_count == 25


def test_cli_overrides_win_and_none_ignored(monkeypatch):
    monkeypatch.setenv("VOCATO_QUESTION_COUNT", "25")
    config = resolve_config({"question_count": 5, "learning_language": None})
    assert config.question_count == 5
    assert config.learning_language == "en"


def test_toml_file(isolated_home):
    (isolated_home / "config.toml").write_text('system_language = "ja"\nquestion_count = 7\n')
    config = resolve_config()
    assert config.system_language == "ja"
    assert config.question_count == 7


def test_interval_clamped():
    assert AppConfig(auto_play_interval=30).auto_play_interval == 10.0
    assert AppConfig(auto_play_interval=0).auto_play_interval == 1.0


def test_invalid_values_fail_fast():
    with pytest.raises(ValidationError):
        AppConfig(question_count=-3)
    with pytest.raises(ValidationError):
        AppConfig(notification_hour=24)


def test_data_dir_expanded():
    config = AppConfig(data_dir="~/vocab")
    assert config.data_dir == (Path.home() / "vocab").resolve()


def test_study_settings_from_config():
    config = AppConfig(question_count=4, auto_play_interval=5)
    settings = config.study_settings(word_group=WordGroup.DIFFICULT, quiz_mode=QuizMode.DICTATION)
    assert settings.question_count == 4
    assert settings.word_group == WordGroup.DIFFICULT
    assert settings.quiz_mode == QuizMode.DICTATION
    assert settings.auto_play_interval == 5.0


def test_auto_advance_speed(monkeypatch):
    assert AppConfig().auto_advance_speed == 2.0
    assert AppConfig(auto_advance_speed=0.5).auto_advance_speed == 1.0
    monkeypatch.setenv("VOCATO_AUTO_ADVANCE_SPEED", "8")
    assert resolve_config().auto_advance_speed == 5.0
