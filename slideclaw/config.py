"""
Application configuration via pydantic-settings.

All settings are loaded from environment variables (or a .env file in dev).
This is the single source of truth for configuration - nothing is hardcoded
elsewhere.
"""

from __future__ import annotations

from enum import StrEnum
from functools import lru_cache
from pathlib import Path

from pydantic import AliasChoices, Field, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(StrEnum):
    DEV = "dev"
    PROD = "prod"
    TEST = "test"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ------------------------------------------------------------------ #
    # Application
    # ------------------------------------------------------------------ #
    environment: Environment = Environment.DEV
    debug: bool = False

    # ------------------------------------------------------------------ #
    # Storage
    # ------------------------------------------------------------------ #
    data_dir: Path = Field(
        default=Path.home() / ".slideclaw",
        description="Directory holding presentations/ and design-config.json",
    )

    # ------------------------------------------------------------------ #
    # Server / clients
    # ------------------------------------------------------------------ #
    host: str = Field(default="0.0.0.0", description="Interface the API server binds to")
    port: int = Field(default=3001, ge=1, le=65535, description="API server listen port")
    server_url: str = Field(
        default="http://localhost:3001",
        validation_alias=AliasChoices("slideclaw_url", "server_url"),
        description="Base URL the CLI and plugin use to reach the API server",
    )
    web_url: str = Field(
        default="http://localhost:5173",
        description="URL of the browser editor opened by `slideclaw open`",
    )
    cors_allowed_origins: list[str] = Field(
        default=["http://localhost:5173", "http://localhost:3000"],
        description="Allowed CORS origins for the browser editor",
    )

    # ------------------------------------------------------------------ #
    # LiteLLM
    # ------------------------------------------------------------------ #
    llm_api_key: SecretStr | None = Field(
        default=None,
        validation_alias=AliasChoices("llm_api_key", "gemini_api_key"),
        description="Credential for the generative model service (required by the agent)",
    )
    llm_base_url: str | None = Field(
        default=None,
        description="Optional LiteLLM proxy base URL. Unset calls the provider directly.",
    )
    llm_model: str = Field(
        default="gemini/gemini-2.5-flash",
        description="Model identifier (LiteLLM format)",
    )
    llm_temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    llm_max_tokens: int = Field(default=16384, ge=256)

    # ------------------------------------------------------------------ #
    # Agent
    # ------------------------------------------------------------------ #
    agent_max_iterations: int = Field(
        default=30,
        ge=1,
        description="Model turns before the agent loop gives up without finish()",
    )

    # ------------------------------------------------------------------ #
    # Slide canvas / export
    # ------------------------------------------------------------------ #
    slide_width: int = Field(default=1280, ge=1)
    slide_height: int = Field(default=720, ge=1)
    export_navigation_timeout_ms: float = Field(
        default=30_000,
        gt=0,
        description="Playwright navigation timeout per slide",
    )

    # ------------------------------------------------------------------ #
    # Derived / Computed
    # ------------------------------------------------------------------ #
    @model_validator(mode="after")
    def _set_debug_from_env(self) -> Settings:
        if self.environment == Environment.DEV:
            self.debug = True
        return self

    @property
    def is_dev(self) -> bool:
        return self.environment in (Environment.DEV, Environment.TEST)

    @property
    def is_prod(self) -> bool:
        return self.environment == Environment.PROD


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings singleton.

    Use FastAPI dependency injection via Depends(get_settings) in endpoints,
    or call directly in non-request contexts (startup, CLI).
    """
    return Settings()
