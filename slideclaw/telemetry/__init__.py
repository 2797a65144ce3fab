"""Telemetry package: structured logging with request correlation."""

from __future__ import annotations

from slideclaw.telemetry.logging import (
    RequestIdMiddleware,
    bind_presentation_context,
    clear_context,
    configure_logging,
)

__all__ = [
    "RequestIdMiddleware",
    "bind_presentation_context",
    "clear_context",
    "configure_logging",
]
