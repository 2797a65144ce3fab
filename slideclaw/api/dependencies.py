"""FastAPI dependencies.

Services are built once per application in ``create_app`` and kept on
``app.state``; the presentation service holds the per-id locks, so it must
be shared by every request. The agent is cheap and built per request.
"""

from __future__ import annotations

from fastapi import Request

from slideclaw.agent import SlideAgent, ToolContext
from slideclaw.config import Settings
from slideclaw.export import ExportService
from slideclaw.services import DesignConfigService, PresentationService


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_presentation_service(request: Request) -> PresentationService:
    return request.app.state.presentation_service


def get_design_service(request: Request) -> DesignConfigService:
    return request.app.state.design_service


def get_export_service(request: Request) -> ExportService:
    return request.app.state.export_service


def get_agent(request: Request) -> SlideAgent:
    context = ToolContext(
        presentations=request.app.state.presentation_service,
        design=request.app.state.design_service,
    )
    return SlideAgent(context, settings=request.app.state.settings)
