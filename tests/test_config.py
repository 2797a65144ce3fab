"""Tests for application configuration."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from slideclaw.config import Environment, Settings, get_settings


@pytest.fixture
def clean_env(monkeypatch):
    """Remove slideclaw-related variables so defaults are observable."""
    for name in (
        "ENVIRONMENT",
        "DEBUG",
        "DATA_DIR",
        "PORT",
        "SLIDECLAW_URL",
        "SERVER_URL",
        "LLM_API_KEY",
        "GEMINI_API_KEY",
        "LLM_BASE_URL",
        "LLM_MODEL",
        "AGENT_MAX_ITERATIONS",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(Path(__file__).parent)
    return monkeypatch


class TestSettings:
    """Test Settings model and validation."""

    def test_defaults(self, clean_env):
        settings = Settings()

        assert settings.environment == Environment.DEV
        assert settings.debug is True  # Auto-set from DEV environment
        assert settings.port == 3001
        assert settings.server_url == "http://localhost:3001"
        assert settings.llm_model == "gemini/gemini-2.5-flash"
        assert settings.llm_api_key is None
        assert settings.agent_max_iterations == 30
        assert (settings.slide_width, settings.slide_height) == (1280, 720)
        assert settings.data_dir == Path.home() / ".slideclaw"

    def test_gemini_key_accepted(self, clean_env):
        clean_env.setenv("GEMINI_API_KEY", "g-123")
        settings = Settings()
        assert settings.llm_api_key.get_secret_value() == "g-123"

    def test_api_key_is_not_printed(self, clean_env):
        clean_env.setenv("LLM_API_KEY", "sk-very-secret")
        assert "sk-very-secret" not in repr(Settings())

    def test_slideclaw_url_env(self, clean_env):
        clean_env.setenv("SLIDECLAW_URL", "http://decks.internal:8080")
        assert Settings().server_url == "http://decks.internal:8080"

    def test_is_dev_property_returns_true_for_test(self):
        settings = Settings(environment=Environment.TEST)
        assert settings.is_dev is True
        assert settings.is_prod is False

    def test_is_prod_property_returns_true_for_prod(self, clean_env):
        settings = Settings(environment=Environment.PROD)
        assert settings.is_prod is True
        assert settings.is_dev is False
        assert settings.debug is False

    def test_environment_enum_values(self):
        assert Environment.DEV == "dev"
        assert Environment.PROD == "prod"
        assert Environment.TEST == "test"

    @pytest.mark.parametrize(
        "field,value",
        [("port", 0), ("agent_max_iterations", 0), ("llm_temperature", 3.0)],
    )
    def test_out_of_range_rejected(self, field, value):
        with pytest.raises(ValidationError):
            Settings(**{field: value})


class TestGetSettings:
    def test_cached_singleton(self):
        get_settings.cache_clear()
        try:
            assert get_settings() is get_settings()
        finally:
            get_settings.cache_clear()
