"""
Shared test fixtures for pytest.

Provides common fixtures for all test modules:
- fake_settings: Test configuration pointing at a per-test data directory
- store: PresentationStore over that directory
- presentation_service, design_service: services over the store
- tool_context: ToolContext for agent tool tests
- test_app: FastAPI app built with fake_settings
- client: Async HTTP client for testing the FastAPI app
- png_bytes: factory for small solid-colour PNG screenshots
"""

import io
from typing import AsyncGenerator, Callable

import httpx
import pytest
from fastapi import FastAPI
from PIL import Image

from slideclaw.agent.tools import ToolContext
from slideclaw.config import Environment, Settings, get_settings
from slideclaw.services import DesignConfigService, PresentationService
from slideclaw.storage import PresentationStore


# ------------------------------------------------------------------ #
# Session-scoped: clear settings cache between test sessions
# ------------------------------------------------------------------ #

@pytest.fixture(autouse=True, scope="session")
def _clear_settings_cache():
    """Clear the lru_cache on get_settings so test overrides take effect."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


# ------------------------------------------------------------------ #
# Settings & Services
# ------------------------------------------------------------------ #

@pytest.fixture
def fake_settings(tmp_path) -> Settings:
    """Test environment settings with safe defaults."""
    return Settings(
        environment=Environment.TEST,
        data_dir=tmp_path / "slideclaw",
        server_url="http://testserver",
        web_url="http://localhost:5173",
        llm_api_key="sk-test-key",
        llm_model="gemini/gemini-2.5-flash",
        agent_max_iterations=30,
    )


@pytest.fixture
def store(fake_settings: Settings) -> PresentationStore:
    return PresentationStore(fake_settings.data_dir)


@pytest.fixture
def presentation_service(store: PresentationStore) -> PresentationService:
    return PresentationService(store)


@pytest.fixture
def design_service(store: PresentationStore) -> DesignConfigService:
    return DesignConfigService(store)


@pytest.fixture
def tool_context(
    presentation_service: PresentationService,
    design_service: DesignConfigService,
) -> ToolContext:
    return ToolContext(presentations=presentation_service, design=design_service)


# ------------------------------------------------------------------ #
# App & HTTP Client Fixtures
# ------------------------------------------------------------------ #

@pytest.fixture
def test_app(fake_settings: Settings) -> FastAPI:
    """FastAPI app wired to the per-test data directory."""
    from slideclaw.main import create_app

    return create_app(fake_settings)


@pytest.fixture
async def client(test_app: FastAPI) -> AsyncGenerator[httpx.AsyncClient, None]:
    """Async HTTP client for testing the FastAPI application.

    Uses httpx.AsyncClient with ASGITransport to test the app without
    spinning up a real HTTP server.
    """
    transport = httpx.ASGITransport(app=test_app)
    async with httpx.AsyncClient(
        transport=transport,
        base_url="http://testserver",
    ) as ac:
        yield ac


# ------------------------------------------------------------------ #
# Export helpers
# ------------------------------------------------------------------ #

@pytest.fixture
def png_bytes() -> Callable[..., bytes]:
    def make(color: str = "navy", size: tuple[int, int] = (1280, 720)) -> bytes:
        buffer = io.BytesIO()
        Image.new("RGB", size, color).save(buffer, format="PNG")
        return buffer.getvalue()

    return make
