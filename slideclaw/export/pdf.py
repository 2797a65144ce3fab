"""Assemble slide screenshots into a PDF, one fixed-size page per slide."""

from __future__ import annotations

import io
from collections.abc import Sequence

from PIL import Image

# At 72 dpi one pixel maps to one PDF point, so a 1280x720 screenshot
# becomes a 1280x720pt page.
_PDF_RESOLUTION = 72.0


def build_pdf(images: Sequence[bytes], size: tuple[int, int] = (1280, 720)) -> bytes:
    """Return PDF bytes with one page per PNG in *images*, in order."""
    if not images:
        raise ValueError("A PDF needs at least one page")

    pages = []
    for png in images:
        with Image.open(io.BytesIO(png)) as image:
            page = image.convert("RGB")
        if page.size != size:
            page = page.resize(size)
        pages.append(page)

    buffer = io.BytesIO()
    pages[0].save(
        buffer,
        format="PDF",
        save_all=True,
        append_images=pages[1:],
        resolution=_PDF_RESOLUTION,
    )
    return buffer.getvalue()
