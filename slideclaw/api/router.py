"""Main API router - aggregates all sub-routers.

Everything lives under /api except the health check.
"""

from __future__ import annotations

from fastapi import APIRouter

from slideclaw.api import agent, design, exports, health, presentations

public_router = APIRouter()
public_router.include_router(health.router)

api_router = APIRouter(prefix="/api")
api_router.include_router(presentations.router)
api_router.include_router(exports.router)
api_router.include_router(agent.router)
api_router.include_router(design.router)
