"""Headless Chromium rasterizer for slide documents.

One browser and one page are shared across all slides of an export. Each
slide's HTML is written to a temporary file and loaded over file:// so that
relative behaviour matches opening the slide directly. The browser and the
temporary directory are released on exit, including when rendering fails.

Usage::

    async with SlideRenderer(width=1280, height=720) as renderer:
        png = await renderer.render(slide)
"""

from __future__ import annotations

import tempfile
from pathlib import Path
from types import TracebackType

import structlog
from playwright.async_api import Browser, Page, Playwright, async_playwright

from slideclaw.models import Slide

log = structlog.get_logger(__name__)


class SlideRenderer:
    def __init__(
        self,
        *,
        width: int = 1280,
        height: int = 720,
        navigation_timeout_ms: float = 30_000,
    ) -> None:
        self._width = width
        self._height = height
        self._timeout = navigation_timeout_ms
        self._playwright: Playwright | None = None
        self._browser: Browser | None = None
        self._page: Page | None = None
        self._tmp: tempfile.TemporaryDirectory[str] | None = None

    async def __aenter__(self) -> SlideRenderer:
        self._tmp = tempfile.TemporaryDirectory(prefix="slideclaw-")
        try:
            self._playwright = await async_playwright().start()
            self._browser = await self._playwright.chromium.launch(headless=True)
            self._page = await self._browser.new_page(
                viewport={"width": self._width, "height": self._height}
            )
        except BaseException:
            await self._close()
            raise
        log.debug("export.browser_started", width=self._width, height=self._height)
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self._close()

    async def _close(self) -> None:
        try:
            if self._browser is not None:
                await self._browser.close()
            if self._playwright is not None:
                await self._playwright.stop()
        finally:
            self._browser = None
            self._playwright = None
            self._page = None
            if self._tmp is not None:
                self._tmp.cleanup()
                self._tmp = None

    async def render(self, slide: Slide) -> bytes:
        """Return a PNG screenshot of *slide* at the canvas size."""
        if self._page is None or self._tmp is None:
            raise RuntimeError("SlideRenderer must be used as an async context manager")

        path = Path(self._tmp.name) / f"slide-{slide.id}.html"
        path.write_text(slide.html, encoding="utf-8")
        await self._page.goto(path.as_uri(), wait_until="networkidle", timeout=self._timeout)
        return await self._page.screenshot(type="png", full_page=False)
