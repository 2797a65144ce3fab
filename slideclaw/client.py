"""Async HTTP client for the slideclaw API.

Used by the CLI and the gateway plugin. Every non-2xx response raises
SlideclawAPIError carrying the server's ``detail`` message.

Usage::

    async with SlideclawClient("http://localhost:3001") as client:
        deck = await client.create_presentation("Quarterly review")
"""

from __future__ import annotations

from types import TracebackType
from typing import Any

import httpx

# Agent runs make many sequential model calls; exports launch a browser.
DEFAULT_TIMEOUT = httpx.Timeout(600.0, connect=10.0)


class SlideclawAPIError(Exception):
    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message


class SlideclawClient:
    def __init__(
        self,
        base_url: str,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: httpx.Timeout | float = DEFAULT_TIMEOUT,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._http = httpx.AsyncClient(
            base_url=f"{self.base_url}/api",
            transport=transport,
            timeout=timeout,
        )

    async def __aenter__(self) -> SlideclawClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def _request(self, method: str, path: str, json: Any = None) -> httpx.Response:
        response = await self._http.request(method, path, json=json)
        if response.is_error:
            try:
                message = response.json().get("detail", response.reason_phrase)
            except (ValueError, AttributeError):
                message = response.reason_phrase
            raise SlideclawAPIError(response.status_code, str(message))
        return response

    async def _json(self, method: str, path: str, json: Any = None) -> Any:
        return (await self._request(method, path, json=json)).json()

    # ------------------------------------------------------------------ #
    # Presentations
    # ------------------------------------------------------------------ #

    async def list_presentations(self) -> list[dict[str, Any]]:
        return await self._json("GET", "/presentations")

    async def get_presentation(self, presentation_id: str) -> dict[str, Any]:
        return await self._json("GET", f"/presentations/{presentation_id}")

    async def create_presentation(
        self, title: str, description: str | None = None
    ) -> dict[str, Any]:
        return await self._json(
            "POST", "/presentations", {"title": title, "description": description}
        )

    async def delete_presentation(self, presentation_id: str) -> dict[str, Any]:
        return await self._json("DELETE", f"/presentations/{presentation_id}")

    # ------------------------------------------------------------------ #
    # Slides
    # ------------------------------------------------------------------ #

    async def add_slide(
        self,
        presentation_id: str,
        title: str,
        html: str,
        notes: str | None = None,
    ) -> dict[str, Any]:
        return await self._json(
            "POST",
            f"/presentations/{presentation_id}/slides",
            {"title": title, "html": html, "notes": notes},
        )

    async def update_slide(
        self, presentation_id: str, slide_id: str, **fields: str | None
    ) -> dict[str, Any]:
        updates = {k: v for k, v in fields.items() if k in ("title", "html", "notes")}
        return await self._json(
            "PUT", f"/presentations/{presentation_id}/slides/{slide_id}", updates
        )

    async def delete_slide(self, presentation_id: str, slide_id: str) -> dict[str, Any]:
        return await self._json("DELETE", f"/presentations/{presentation_id}/slides/{slide_id}")

    async def reorder_slides(self, presentation_id: str, slide_ids: list[str]) -> dict[str, Any]:
        return await self._json(
            "PUT",
            f"/presentations/{presentation_id}/slides/reorder",
            {"slideIds": slide_ids},
        )

    # ------------------------------------------------------------------ #
    # Agent / export / design
    # ------------------------------------------------------------------ #

    async def generate(self, prompt: str, presentation_id: str | None = None) -> dict[str, Any]:
        return await self._json(
            "POST", "/agent/generate", {"prompt": prompt, "presentationId": presentation_id}
        )

    def export_url(self, presentation_id: str, fmt: str) -> str:
        return f"{self.base_url}/api/presentations/{presentation_id}/export/{fmt}"

    async def export(self, presentation_id: str, fmt: str) -> bytes:
        response = await self._request("GET", f"/presentations/{presentation_id}/export/{fmt}")
        return response.content

    async def get_design_config(self) -> dict[str, Any]:
        return await self._json("GET", "/design-config")

    async def set_design_config(self, library: str) -> dict[str, Any]:
        return await self._json("PUT", "/design-config", {"library": library})
