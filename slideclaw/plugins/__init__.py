"""Adapters that expose slideclaw to third-party hosts."""

from __future__ import annotations

from slideclaw.plugins.gateway import SlideclawGatewayPlugin, register

__all__ = ["SlideclawGatewayPlugin", "register"]
