"""Tests for ExportService and the PDF/PPTX assemblers.

The browser is replaced by a fake renderer that returns solid-colour PNGs;
the real Playwright renderer needs an installed Chromium and is not
exercised here.
"""

from __future__ import annotations

import io
from unittest.mock import AsyncMock

import pytest
from playwright.async_api import Error as PlaywrightError
from pptx import Presentation as PptxPresentation
from pypdf import PdfReader

from slideclaw.export import ExportFormat, ExportService
from slideclaw.export.pdf import build_pdf
from slideclaw.export.pptx import SLIDE_HEIGHT, SLIDE_WIDTH, build_pptx
from slideclaw.models import Slide
from slideclaw.services import ExportError, PresentationNotFoundError, ValidationError

HTML = "<html><head></head><body><h1>{}</h1></body></html>"
COLOURS = ["red", "green", "blue", "orange"]


class FakeRenderer:
    def __init__(self, png_bytes, fail_on: str | None = None) -> None:
        self._png_bytes = png_bytes
        self._fail_on = fail_on
        self.entered = 0
        self.closed = 0
        self.rendered: list[str] = []

    def __call__(self):
        return self

    async def __aenter__(self):
        self.entered += 1
        return self

    async def __aexit__(self, *exc_info):
        self.closed += 1
        return False

    async def render(self, slide: Slide) -> bytes:
        if slide.title == self._fail_on:
            raise PlaywrightError("net::ERR_NAME_NOT_RESOLVED")
        self.rendered.append(slide.title)
        return self._png_bytes(COLOURS[len(self.rendered) % len(COLOURS)])


@pytest.fixture
def renderer(png_bytes) -> FakeRenderer:
    return FakeRenderer(png_bytes)


@pytest.fixture
def export_service(presentation_service, renderer) -> ExportService:
    return ExportService(presentation_service, renderer)


async def _deck(presentation_service, titles, notes=None):
    presentation = await presentation_service.create_presentation("Deck")
    for title in titles:
        await presentation_service.add_slide(
            presentation.id, title, HTML.format(title), (notes or {}).get(title)
        )
    return presentation


class TestExportService:
    async def test_pdf_one_page_per_slide(self, export_service, presentation_service, renderer):
        deck = await _deck(presentation_service, ["A", "B", "C"])

        result = await export_service.export(deck.id, ExportFormat.PDF)

        reader = PdfReader(io.BytesIO(result.content))
        assert len(reader.pages) == 3
        assert float(reader.pages[0].mediabox.width) == pytest.approx(1280)
        assert float(reader.pages[0].mediabox.height) == pytest.approx(720)
        assert result.media_type == "application/pdf"
        assert result.filename == f"presentation-{deck.id}.pdf"
        assert result.page_count == 3
        assert renderer.entered == renderer.closed == 1

    async def test_renders_in_slide_order(self, export_service, presentation_service, renderer):
        deck = await _deck(presentation_service, ["A", "B", "C"])
        stored = await presentation_service.get_presentation(deck.id)
        ids = [s.id for s in stored.sorted_slides()]
        await presentation_service.reorder_slides(deck.id, [ids[2], ids[0], ids[1]])

        await export_service.export(deck.id, ExportFormat.PDF)

        assert renderer.rendered == ["C", "A", "B"]

    async def test_pptx_slides_and_notes(self, export_service, presentation_service):
        deck = await _deck(presentation_service, ["A", "B"], notes={"B": "Mention the budget"})

        result = await export_service.export(deck.id, ExportFormat.PPTX)

        prs = PptxPresentation(io.BytesIO(result.content))
        assert prs.slide_width == SLIDE_WIDTH
        assert prs.slide_height == SLIDE_HEIGHT
        slides = list(prs.slides)
        assert len(slides) == 2
        assert not slides[0].has_notes_slide
        assert slides[1].notes_slide.notes_text_frame.text == "Mention the budget"
        assert result.filename.endswith(".pptx")
        assert "presentationml" in result.media_type

    async def test_unknown_presentation_never_starts_browser(self, export_service, renderer):
        with pytest.raises(PresentationNotFoundError):
            await export_service.export("missing", ExportFormat.PDF)
        assert renderer.entered == 0

    async def test_empty_pdf_rejected(self, export_service, presentation_service, renderer):
        deck = await _deck(presentation_service, [])
        with pytest.raises(ValidationError):
            await export_service.export(deck.id, ExportFormat.PDF)
        assert renderer.entered == 0

    async def test_empty_pptx_is_empty_deck(self, export_service, presentation_service, renderer):
        deck = await _deck(presentation_service, [])

        result = await export_service.export(deck.id, ExportFormat.PPTX)

        assert len(PptxPresentation(io.BytesIO(result.content)).slides) == 0
        assert renderer.entered == 0

    async def test_render_failure_aborts_export(self, presentation_service, png_bytes):
        renderer = FakeRenderer(png_bytes, fail_on="B")
        service = ExportService(presentation_service, renderer)
        deck = await _deck(presentation_service, ["A", "B", "C"])

        with pytest.raises(ExportError, match="ERR_NAME_NOT_RESOLVED"):
            await service.export(deck.id, ExportFormat.PDF)

        assert renderer.rendered == ["A"]
        assert renderer.closed == 1

    async def test_unexpected_render_error_wrapped(self, presentation_service, png_bytes):
        renderer = FakeRenderer(png_bytes)
        renderer.render = AsyncMock(side_effect=RuntimeError("Target page has been closed"))
        service = ExportService(presentation_service, renderer)
        deck = await _deck(presentation_service, ["A"])

        with pytest.raises(ExportError, match="Export failed: Target page has been closed"):
            await service.export(deck.id, ExportFormat.PPTX)

        assert renderer.closed == 1

    async def test_browser_launch_failure_wrapped(self, presentation_service):
        class NoBrowser:
            async def __aenter__(self):
                raise RuntimeError("Executable doesn't exist")

            async def __aexit__(self, *exc_info):
                return False

        service = ExportService(presentation_service, NoBrowser)
        deck = await _deck(presentation_service, ["A"])

        with pytest.raises(ExportError, match="Executable doesn't exist"):
            await service.export(deck.id, ExportFormat.PDF)


class TestAssemblers:
    def test_pdf_requires_pages(self):
        with pytest.raises(ValueError):
            build_pdf([])

    def test_pdf_resizes_odd_screenshots(self, png_bytes):
        content = build_pdf([png_bytes("white", (640, 360))], size=(1280, 720))
        page = PdfReader(io.BytesIO(content)).pages[0]
        assert float(page.mediabox.width) == pytest.approx(1280)

    def test_pptx_needs_matching_images(self):
        slide = Slide(title="A", html=HTML.format("A"))
        with pytest.raises(ValueError):
            build_pptx([slide], [])
