"""Assemble slide screenshots into a widescreen PowerPoint deck.

Every slide becomes a single full-bleed picture on a blank layout. Speaker
notes travel with their slide.
"""

from __future__ import annotations

import io
from collections.abc import Sequence

from pptx import Presentation as PptxPresentation
from pptx.util import Inches

from slideclaw.models import Slide

# 16:9 "wide" layout
SLIDE_WIDTH = Inches(13.333)
SLIDE_HEIGHT = Inches(7.5)

_BLANK_LAYOUT = 6


def build_pptx(slides: Sequence[Slide], images: Sequence[bytes]) -> bytes:
    """Return PPTX bytes with one picture slide per (slide, image) pair."""
    if len(slides) != len(images):
        raise ValueError("Each slide needs exactly one image")

    prs = PptxPresentation()
    prs.slide_width = SLIDE_WIDTH
    prs.slide_height = SLIDE_HEIGHT
    layout = prs.slide_layouts[_BLANK_LAYOUT]

    for slide, png in zip(slides, images):
        pptx_slide = prs.slides.add_slide(layout)
        pptx_slide.shapes.add_picture(
            io.BytesIO(png), 0, 0, width=SLIDE_WIDTH, height=SLIDE_HEIGHT
        )
        if slide.notes:
            pptx_slide.notes_slide.notes_text_frame.text = slide.notes

    buffer = io.BytesIO()
    prs.save(buffer)
    return buffer.getvalue()
