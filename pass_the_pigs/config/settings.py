"""
Pass the Pigs - Application Settings

Loads configuration from environment variables (prefixed ``PIGS_``) and an
optional ``.env`` file using Pydantic Settings.
"""

import logging
from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from pass_the_pigs.engine.base import (
    DEFAULT_TARGET_SCORE,
    MIN_PLAYERS,
    MIN_TARGET_SCORE,
    GameConfig,
)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    debug: bool = False
    log_level: str = "INFO"

    # Match defaults
    default_target_score: int = Field(default=DEFAULT_TARGET_SCORE, ge=MIN_TARGET_SCORE)
    default_players: int = Field(default=MIN_PLAYERS, ge=MIN_PLAYERS)

    # Snapshot persistence
    snapshot_path: Path = Path("pass-the-pigs-v1.json")
    autosave: bool = True

    model_config = SettingsConfigDict(
        env_prefix="PIGS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    def game_config(self) -> GameConfig:
        """Config for a fresh match built from the defaults above."""
        return GameConfig.with_player_count(
            self.default_players,
            target_score=self.default_target_score,
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Cached singleton settings instance."""
    return Settings()


def configure_logging(settings: Settings | None = None) -> None:
    """Set the root log level and format from settings.

    ``debug`` forces DEBUG regardless of ``log_level``.
    """
    settings = settings or get_settings()
    level = logging.DEBUG if settings.debug else getattr(
        logging, settings.log_level.upper(), logging.INFO
    )
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger("pass_the_pigs").setLevel(level)
