from datetime import date
from pathlib import Path
from typing import Any

from pydantic import field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from leitner.domain.constants import CONFIG_FILE_NAMES, ENV_PREFIX
from leitner.domain.errors import InvalidDayError


class AppConfig(BaseSettings):
    """
    Configuration model for leitner.
    Supports loading from:
    1. Manual overrides (CLI)
    2. Environment variables (LEITNER_*)
    3. Config file (~/.config/leitner/config.toml or ~/.leitner.toml)
    """

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        extra="ignore",
    )

    # Paths
    deck_path: Path | None = None

    # Scheduling
    start_date: date | None = None  # day 0 of learning

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

        # Use the first config file that exists
        toml_file = None
        for name in CONFIG_FILE_NAMES:
            candidate = Path.home() / name
            if candidate.exists():
                toml_file = candidate
                break

        if toml_file:
            return (
                init_settings,
                env_settings,
                TomlConfigSettingsSource(settings_cls, toml_file=toml_file),
            )
        return (init_settings, env_settings)

    @field_validator("deck_path", mode="before")
    @classmethod
    def resolve_deck_path(cls, v: Any) -> Path | None:
        if v is None:
            return None
        return Path(v).expanduser().resolve()


def resolve_config(cli_overrides: dict[str, Any] | None = None) -> AppConfig:
    """
    Multi-layered configuration resolution.
    1. Defaults in AppConfig
    2. ~/.config/leitner/config.toml (if exists)
    3. Environment variables (LEITNER_*)
    4. cli_overrides (passed from Typer, None values ignored)
    """
    overrides = {k: v for k, v in (cli_overrides or {}).items() if v is not None}
    return AppConfig(**overrides)


def day_number(start_date: date, today: date | None = None) -> int:
    """
    Days elapsed since start_date; the start date itself is day 0.

    Raises:
        InvalidDayError: If start_date is after today.
    """
    today = today or date.today()
    days = (today - start_date).days
    if days < 0:
        raise InvalidDayError(f"Start date {start_date.isoformat()} is in the future")
    return days
