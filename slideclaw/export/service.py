"""Export service - presentation to PDF/PPTX bytes.

Pipeline: load the presentation (missing -> PresentationNotFoundError before
any browser starts), sort slides by ``order``, rasterize each slide with one
shared renderer, then assemble the document. A rendering failure aborts the
whole export; nothing partial is returned and nothing is retried.
"""

from __future__ import annotations

from collections.abc import Callable
from contextlib import AbstractAsyncContextManager
from dataclasses import dataclass
from enum import StrEnum
from typing import Protocol

import structlog
from playwright.async_api import Error as PlaywrightError

from slideclaw.config import Settings
from slideclaw.export.pdf import build_pdf
from slideclaw.export.pptx import build_pptx
from slideclaw.export.renderer import SlideRenderer
from slideclaw.models import Slide
from slideclaw.services import ExportError, PresentationService, ValidationError

log = structlog.get_logger(__name__)


class ExportFormat(StrEnum):
    PDF = "pdf"
    PPTX = "pptx"

    @property
    def media_type(self) -> str:
        if self is ExportFormat.PDF:
            return "application/pdf"
        return "application/vnd.openxmlformats-officedocument.presentationml.presentation"


class Renderer(Protocol):
    async def render(self, slide: Slide) -> bytes: ...


RendererFactory = Callable[[], AbstractAsyncContextManager[Renderer]]


@dataclass
class ExportResult:
    content: bytes
    media_type: str
    filename: str
    page_count: int


def renderer_factory_from_settings(settings: Settings) -> RendererFactory:
    def factory() -> SlideRenderer:
        return SlideRenderer(
            width=settings.slide_width,
            height=settings.slide_height,
            navigation_timeout_ms=settings.export_navigation_timeout_ms,
        )

    return factory


class ExportService:
    def __init__(
        self,
        presentations: PresentationService,
        renderer_factory: RendererFactory,
        canvas: tuple[int, int] = (1280, 720),
    ) -> None:
        self._presentations = presentations
        self._renderer_factory = renderer_factory
        self._canvas = canvas

    async def export(self, presentation_id: str, fmt: ExportFormat) -> ExportResult:
        """Render and assemble one presentation.

        Raises:
            PresentationNotFoundError: Unknown presentation id
            ValidationError: PDF export of a presentation without slides
            ExportError: Browser or document assembly failure
        """
        presentation = await self._presentations.get_presentation(presentation_id)
        slides = presentation.sorted_slides()
        if fmt is ExportFormat.PDF and not slides:
            raise ValidationError("Presentation has no slides to export")

        log.info(
            "export.started",
            presentation_id=presentation_id,
            format=str(fmt),
            slide_count=len(slides),
        )

        try:
            images: list[bytes] = []
            if slides:
                async with self._renderer_factory() as renderer:
                    for slide in slides:
                        images.append(await renderer.render(slide))

            if fmt is ExportFormat.PDF:
                content = build_pdf(images, self._canvas)
            else:
                content = build_pptx(slides, images)
        except (PlaywrightError, OSError, ValueError) as exc:
            log.error("export.failed", presentation_id=presentation_id, error=str(exc))
            raise ExportError(f"Export failed: {exc}") from exc
        except Exception as exc:
            log.error(
                "export.failed", presentation_id=presentation_id, error=str(exc), exc_info=True
            )
            raise ExportError(f"Export failed: {exc}") from exc

        log.info("export.done", presentation_id=presentation_id, bytes=len(content))
        return ExportResult(
            content=content,
            media_type=fmt.media_type,
            filename=f"presentation-{presentation_id}.{fmt}",
            page_count=len(slides),
        )
