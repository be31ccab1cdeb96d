from pathlib import Path
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from vocato.domain.constants import (
    DEFAULT_AUTO_ADVANCE_SPEED,
    DEFAULT_AUTO_PLAY_INTERVAL,
    DEFAULT_LEARNING_LANGUAGE,
    DEFAULT_QUESTION_COUNT,
    DEFAULT_SYSTEM_LANGUAGE,
)
from vocato.domain.models import (
    AutoPlayMode,
    StudySettings,
    WordGroup,
    clamp_advance_speed,
    clamp_interval,
)

CONFIG_FILES = [
    Path.home() / ".config/vocato/config.toml",
    Path.home() / ".vocato.toml",
]


class AppConfig(BaseSettings):
    """
    Configuration model for vocato.
    Supports loading from:
    1. Environment variables (VOCATO_*)
    2. Config file (~/.config/vocato/config.toml)
    3. Manual overrides (CLI)
    """

    model_config = SettingsConfigDict(
        env_prefix="VOCATO_",
        toml_file=CONFIG_FILES,
        extra="ignore",
    )

    # Storage
    data_dir: Path = Field(default_factory=lambda: Path.home() / ".local/share/vocato")
    words_file: str = "words.yaml"
    state_file: str = "state.json"

    # Study defaults
    question_count: int = Field(default=DEFAULT_QUESTION_COUNT, ge=0)
    auto_play_mode: AutoPlayMode = AutoPlayMode.BOTH
    auto_play_interval: float = DEFAULT_AUTO_PLAY_INTERVAL
    auto_advance_speed: float = DEFAULT_AUTO_ADVANCE_SPEED

    # Speech
    learning_language: str = DEFAULT_LEARNING_LANGUAGE
    system_language: str = DEFAULT_SYSTEM_LANGUAGE
    speech_command: str | None = None

    # Reminders
    notifications_enabled: bool = False
    notification_hour: int = Field(default=20, ge=0, le=23)
    notification_minute: int = Field(default=0, ge=0, le=59)

    verbose: int = 1

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        from pydantic_settings import TomlConfigSettingsSource

        # Find the first existing file
        toml_file = next((f for f in CONFIG_FILES if f.exists()), None)

        # Earlier sources win: CLI overrides, then env, then the file.
        if toml_file:
            return (
                init_settings,
                env_settings,
                TomlConfigSettingsSource(settings_cls, toml_file=toml_file),
            )
        return (init_settings, env_settings)

    @field_validator("data_dir", mode="before")
    @classmethod
    def resolve_data_dir(cls, v: Any) -> Path:
        return Path(v).expanduser().resolve()

    @field_validator("auto_play_interval")
    @classmethod
    def clamp_auto_play_interval(cls, v: float) -> float:
        return clamp_interval(v)

    @field_validator("auto_advance_speed")
    @classmethod
    def clamp_auto_advance_speed(cls, v: float) -> float:
        return clamp_advance_speed(v)

    @property
    def words_path(self) -> Path:
        return self.data_dir / self.words_file

    @property
    def state_path(self) -> Path:
        return self.data_dir / self.state_file

    def study_settings(self, **overrides: Any) -> StudySettings:
        """StudySettings seeded from the configured defaults."""
        values: dict[str, Any] = {
            "word_group": WordGroup.ALL,
            "question_count": self.question_count,
            "auto_play_mode": self.auto_play_mode,
            "auto_play_interval": self.auto_play_interval,
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return StudySettings(**values)


def resolve_config(cli_overrides: dict[str, Any] | None = None) -> AppConfig:
    """
    Multi-layered configuration resolution.
    1. Defaults in AppConfig
    2. ~/.config/vocato/config.toml (if exists)
    3. Environment variables (VOCATO_*)
    4. cli_overrides (passed from Typer)
    """
    # Typer passes None for options the user did not give.
    overrides = {k: v for k, v in (cli_overrides or {}).items() if v is not None}
    return AppConfig(**overrides)
