"""Design preference service.

The preference is global (not per presentation). It is loaded from the store
on every call instead of being cached, so a change made through the API is
seen by the next agent turn.
"""

from __future__ import annotations

import asyncio
from typing import Any

import structlog

from slideclaw.design_catalog import (
    DesignLibrary,
    catalog_as_dicts,
    get_catalog_entry,
    valid_library_keys,
)
from slideclaw.models import DesignConfig
from slideclaw.services.errors import ValidationError
from slideclaw.storage import PresentationStore

log = structlog.get_logger(__name__)


class DesignConfigService:
    def __init__(self, store: PresentationStore) -> None:
        self._store = store

    async def get_config(self) -> DesignConfig:
        return await asyncio.to_thread(self._store.get_design_config)

    async def set_library(self, library: str | None) -> DesignConfig:
        """Replace the stored preference.

        Raises:
            ValidationError: If *library* is not a catalog key. ``auto`` is only
                the initial default and cannot be set.
        """
        entry = get_catalog_entry(library) if isinstance(library, str) else None
        if entry is None:
            valid = valid_library_keys()
            raise ValidationError(f"Invalid library. Valid values: {', '.join(valid)}")

        config = DesignConfig(library=entry.key)
        await asyncio.to_thread(self._store.save_design_config, config)
        log.info("design_config.updated", library=library)
        return config

    async def agent_guidance(self) -> dict[str, Any]:
        """Preference, instructions and catalog, as handed to the agent."""
        config = await self.get_config()
        if config.library == DesignLibrary.AUTO:
            instructions = "Choose the most appropriate library for the slide content and design."
        else:
            instructions = (
                f'Use the "{config.library}" library. '
                "Include its CDN tag in every slide's <head>."
            )
        return {
            "currentLibrary": str(config.library),
            "instructions": instructions,
            "availableLibraries": catalog_as_dicts(),
        }
