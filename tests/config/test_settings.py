"""
Pass the Pigs - Settings Tests
"""

import logging
from pathlib import Path

import pytest
from pydantic import ValidationError

from pass_the_pigs.config import Settings, configure_logging, get_settings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Isolate settings from the real environment and any local .env file."""
    for key in ("PIGS_DEBUG", "PIGS_LOG_LEVEL", "PIGS_DEFAULT_TARGET_SCORE",
                "PIGS_DEFAULT_PLAYERS", "PIGS_SNAPSHOT_PATH", "PIGS_AUTOSAVE"):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class TestSettings:

    def test_defaults(self):
        settings = Settings()
        assert settings.debug is False
        assert settings.log_level == "INFO"
        assert settings.default_target_score == 100
        assert settings.default_players == 2
        assert settings.snapshot_path == Path("pass-the-pigs-v1.json")
        assert settings.autosave is True

    def test_reads_prefixed_environment(self, monkeypatch):
        monkeypatch.setenv("PIGS_DEFAULT_TARGET_SCORE", "250")
        monkeypatch.setenv("PIGS_AUTOSAVE", "false")
        settings = Settings()
        assert settings.default_target_score == 250
        assert settings.autosave is False

    def test_reads_env_file(self, tmp_path):
        (tmp_path / ".env").write_text("PIGS_DEFAULT_PLAYERS=4\n", encoding="utf-8")
        assert Settings().default_players == 4

    def test_target_below_minimum_rejected(self, monkeypatch):
        monkeypatch.setenv("PIGS_DEFAULT_TARGET_SCORE", "5")
        with pytest.raises(ValidationError):
            Settings()

    def test_single_player_rejected(self):
        with pytest.raises(ValidationError):
            Settings(default_players=1)

    def test_game_config(self):
        config = Settings(default_target_score=60, default_players=3).game_config()
        assert config.target_score == 60
        assert config.player_names == ("Player 1", "Player 2", "Player 3")

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()


class TestConfigureLogging:

    @pytest.fixture(autouse=True)
    def restore_level(self):
        logger = logging.getLogger("pass_the_pigs")
        level = logger.level
        yield
        logger.setLevel(level)

    def test_uses_log_level(self):
        configure_logging(Settings(log_level="warning"))
        assert logging.getLogger("pass_the_pigs").level == logging.WARNING

    def test_debug_overrides_level(self):
        configure_logging(Settings(debug=True, log_level="ERROR"))
        assert logging.getLogger("pass_the_pigs").level == logging.DEBUG

    def test_unknown_level_falls_back_to_info(self):
        configure_logging(Settings(log_level="chatty"))
        assert logging.getLogger("pass_the_pigs").level == logging.INFO
