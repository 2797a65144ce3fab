from slideclaw.services.design import DesignConfigService
from slideclaw.services.errors import (
    ExportError,
    NotFoundError,
    PresentationNotFoundError,
    SlideclawError,
    SlideNotFoundError,
    ValidationError,
)
from slideclaw.services.presentations import PresentationService

__all__ = [
    "DesignConfigService",
    "ExportError",
    "NotFoundError",
    "PresentationNotFoundError",
    "PresentationService",
    "SlideNotFoundError",
    "SlideclawError",
    "ValidationError",
]
