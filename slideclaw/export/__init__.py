from slideclaw.export.service import (
    ExportFormat,
    ExportResult,
    ExportService,
    renderer_factory_from_settings,
)

__all__ = [
    "ExportFormat",
    "ExportResult",
    "ExportService",
    "renderer_factory_from_settings",
]
