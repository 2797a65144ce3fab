from slideclaw.models.presentation import (
    DesignConfig,
    Presentation,
    PresentationSummary,
    Slide,
    new_id,
    now,
)

__all__ = [
    "DesignConfig",
    "Presentation",
    "PresentationSummary",
    "Slide",
    "new_id",
    "now",
]
