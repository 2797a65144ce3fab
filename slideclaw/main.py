"""FastAPI application entrypoint.

Application startup order:
1. Load settings (from environment)
2. Build the store and services, keep them on app.state
3. Register middleware (CORS, request id)
4. Include all routers

Logging is configured in the lifespan, before the first request.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from slideclaw import __version__
from slideclaw.api.router import api_router, public_router
from slideclaw.config import Settings, get_settings
from slideclaw.export import ExportService, renderer_factory_from_settings
from slideclaw.services import DesignConfigService, PresentationService
from slideclaw.storage import PresentationStore
from slideclaw.telemetry.logging import RequestIdMiddleware, configure_logging

log = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan: startup and shutdown."""
    settings: Settings = app.state.settings

    configure_logging(
        json_logs=settings.is_prod,
        log_level="DEBUG" if settings.debug else "INFO",
    )

    log.info(
        "app.starting",
        environment=settings.environment,
        data_dir=str(settings.data_dir),
        model=settings.llm_model,
    )
    if settings.llm_api_key is None and not settings.llm_base_url:
        log.warning("app.llm_credential_missing", hint="set LLM_API_KEY or GEMINI_API_KEY")

    log.info("app.ready")
    yield
    log.info("app.shutdown")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Application factory."""
    settings = settings or get_settings()

    app = FastAPI(
        title="slideClaw",
        description="Agent-generated HTML slide decks with PDF and PPTX export.",
        version=__version__,
        docs_url="/docs" if settings.is_dev else None,
        redoc_url="/redoc" if settings.is_dev else None,
        openapi_url="/openapi.json" if settings.is_dev else None,
        lifespan=lifespan,
    )

    store = PresentationStore(settings.data_dir)
    presentation_service = PresentationService(store)
    app.state.settings = settings
    app.state.presentation_service = presentation_service
    app.state.design_service = DesignConfigService(store)
    app.state.export_service = ExportService(
        presentation_service,
        renderer_factory_from_settings(settings),
        canvas=(settings.slide_width, settings.slide_height),
    )

    # ------------------------------------------------------------------ #
    # Middleware (added in reverse order - last added = first executed)
    # ------------------------------------------------------------------ #
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allowed_origins,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["Content-Type"],
    )
    app.add_middleware(RequestIdMiddleware)

    # ------------------------------------------------------------------ #
    # Routers
    # ------------------------------------------------------------------ #
    app.include_router(public_router)
    app.include_router(api_router)

    # ------------------------------------------------------------------ #
    # Global exception handlers
    # ------------------------------------------------------------------ #

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        log.error(
            "app.unhandled_exception",
            path=request.url.path,
            method=request.method,
            error=str(exc),
            exc_info=True,
        )
        return JSONResponse(
            status_code=500,
            content={"detail": "Internal server error"},
        )

    return app


def run(host: str | None = None, port: int | None = None) -> None:
    """Serve the API with uvicorn (blocking)."""
    settings = get_settings()
    uvicorn.run(
        "slideclaw.main:app",
        host=host or settings.host,
        port=port or settings.port,
        log_config=None,
    )


# Module-level app instance for uvicorn
app = create_app()
