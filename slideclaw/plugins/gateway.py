"""Gateway plugin - exposes slideclaw operations as remote-procedure methods.

A host application (a chat gateway, an assistant runtime) loads the plugin
and hands it an object with ``register_gateway_method(name, handler)``. Each
handler is an async callable taking a params dict. Handlers forward to a
running slideclaw server over HTTP; the server URL comes from the host's
``slideclaw.serverUrl`` config key when present.

Registered methods::

    slideclaw.generate            {prompt, presentationId?}
    slideclaw.listPresentations   {}
    slideclaw.getPresentation     {id}
    slideclaw.createPresentation  {title, description?}
    slideclaw.deletePresentation  {id}
    slideclaw.exportPdf           {id}  -> {url}
    slideclaw.exportPptx          {id}  -> {url}
    slideclaw.addSlide            {presentationId, title, html, notes?}
    slideclaw.updateSlide         {presentationId, slideId, title?, html?, notes?}
    slideclaw.deleteSlide         {presentationId, slideId}
    slideclaw.reorderSlides       {presentationId, slideIds}
    slideclaw.getDesignConfig     {}
    slideclaw.setDesignConfig     {library}
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any, Protocol

import structlog

from slideclaw import __version__
from slideclaw.client import SlideclawClient
from slideclaw.config import get_settings

log = structlog.get_logger(__name__)

Handler = Callable[[dict[str, Any]], Awaitable[Any]]
ClientFactory = Callable[[str], SlideclawClient]

SERVER_URL_KEY = "slideclaw.serverUrl"


class GatewayHost(Protocol):
    def register_gateway_method(self, name: str, handler: Handler) -> None: ...


@dataclass
class PluginMetadata:
    """Identification the host may display or log."""

    name: str
    version: str
    description: str
    methods: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Plugin name cannot be empty")
        if not self.version:
            raise ValueError("Plugin version cannot be empty")


class SlideclawGatewayPlugin:
    """Registers the slideclaw methods on a gateway host."""

    def __init__(self, client_factory: ClientFactory = SlideclawClient) -> None:
        self._client_factory = client_factory
        self._host: GatewayHost | None = None
        self.metadata = PluginMetadata(
            name="slideclaw",
            version=__version__,
            description="Generate, edit and export HTML slide presentations",
        )

    def server_url(self) -> str:
        config = getattr(self._host, "config", None)
        if config is not None:
            url = config.get(SERVER_URL_KEY)
            if isinstance(url, str) and url:
                return url
        return get_settings().server_url

    async def _call(self, operation: Callable[[SlideclawClient], Awaitable[Any]]) -> Any:
        async with self._client_factory(self.server_url()) as client:
            return await operation(client)

    def _handlers(self) -> dict[str, Handler]:
        async def generate(params: dict[str, Any]) -> Any:
            return await self._call(
                lambda c: c.generate(params["prompt"], params.get("presentationId"))
            )

        async def list_presentations(params: dict[str, Any]) -> Any:
            return await self._call(lambda c: c.list_presentations())

        async def get_presentation(params: dict[str, Any]) -> Any:
            return await self._call(lambda c: c.get_presentation(params["id"]))

        async def create_presentation(params: dict[str, Any]) -> Any:
            return await self._call(
                lambda c: c.create_presentation(params["title"], params.get("description"))
            )

        async def delete_presentation(params: dict[str, Any]) -> Any:
            return await self._call(lambda c: c.delete_presentation(params["id"]))

        async def export_pdf(params: dict[str, Any]) -> Any:
            return {"url": self._export_url(params["id"], "pdf")}

        async def export_pptx(params: dict[str, Any]) -> Any:
            return {"url": self._export_url(params["id"], "pptx")}

        async def add_slide(params: dict[str, Any]) -> Any:
            return await self._call(
                lambda c: c.add_slide(
                    params["presentationId"],
                    params["title"],
                    params["html"],
                    params.get("notes"),
                )
            )

        async def update_slide(params: dict[str, Any]) -> Any:
            updates = {k: params[k] for k in ("title", "html", "notes") if k in params}
            return await self._call(
                lambda c: c.update_slide(params["presentationId"], params["slideId"], **updates)
            )

        async def delete_slide(params: dict[str, Any]) -> Any:
            return await self._call(
                lambda c: c.delete_slide(params["presentationId"], params["slideId"])
            )

        async def reorder_slides(params: dict[str, Any]) -> Any:
            return await self._call(
                lambda c: c.reorder_slides(params["presentationId"], list(params["slideIds"]))
            )

        async def get_design_config(params: dict[str, Any]) -> Any:
            return await self._call(lambda c: c.get_design_config())

        async def set_design_config(params: dict[str, Any]) -> Any:
            return await self._call(lambda c: c.set_design_config(params["library"]))

        return {
            "slideclaw.generate": generate,
            "slideclaw.listPresentations": list_presentations,
            "slideclaw.getPresentation": get_presentation,
            "slideclaw.createPresentation": create_presentation,
            "slideclaw.deletePresentation": delete_presentation,
            "slideclaw.exportPdf": export_pdf,
            "slideclaw.exportPptx": export_pptx,
            "slideclaw.addSlide": add_slide,
            "slideclaw.updateSlide": update_slide,
            "slideclaw.deleteSlide": delete_slide,
            "slideclaw.reorderSlides": reorder_slides,
            "slideclaw.getDesignConfig": get_design_config,
            "slideclaw.setDesignConfig": set_design_config,
        }

    def _export_url(self, presentation_id: str, fmt: str) -> str:
        return f"{self.server_url().rstrip('/')}/api/presentations/{presentation_id}/export/{fmt}"

    def register(self, host: GatewayHost) -> None:
        self._host = host
        handlers = self._handlers()
        for name, handler in handlers.items():
            host.register_gateway_method(name, handler)
        self.metadata.methods = list(handlers)
        log.info("plugin.registered", plugin=self.metadata.name, methods=len(handlers))


def register(host: GatewayHost) -> SlideclawGatewayPlugin:
    """Entry point for hosts that load plugins by module."""
    plugin = SlideclawGatewayPlugin()
    plugin.register(host)
    return plugin
