"""Domain exceptions shared by the HTTP routes, agent tools and exporters."""

from __future__ import annotations


class SlideclawError(Exception):
    """Base exception for all domain failures."""


class NotFoundError(SlideclawError):
    """A presentation or slide does not exist."""


class PresentationNotFoundError(NotFoundError):
    def __init__(self, presentation_id: str) -> None:
        super().__init__("Presentation not found")
        self.presentation_id = presentation_id


class SlideNotFoundError(NotFoundError):
    def __init__(self, slide_id: str) -> None:
        super().__init__(f"Slide {slide_id} not found")
        self.slide_id = slide_id


class ValidationError(SlideclawError):
    """Missing required field or invalid value."""


class ExportError(SlideclawError):
    """Rendering or document assembly failed."""
