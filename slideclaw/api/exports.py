"""Export endpoints.

GET /api/presentations/{id}/export/pdf   - PDF, one page per slide
GET /api/presentations/{id}/export/pptx  - Widescreen PPTX, one picture per slide
"""

from __future__ import annotations

import structlog
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import Response

from slideclaw.api.dependencies import get_export_service
from slideclaw.export import ExportFormat, ExportService
from slideclaw.services import ExportError, NotFoundError, ValidationError
from slideclaw.telemetry import bind_presentation_context

log = structlog.get_logger(__name__)

router = APIRouter(prefix="/presentations", tags=["export"])


@router.get("/{presentation_id}/export/{fmt}")
async def export_presentation(
    presentation_id: str,
    fmt: ExportFormat,
    service: ExportService = Depends(get_export_service),
) -> Response:
    bind_presentation_context(presentation_id)
    try:
        result = await service.export(presentation_id, fmt)
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except ValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except ExportError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(exc),
        ) from exc

    return Response(
        content=result.content,
        media_type=result.media_type,
        headers={"Content-Disposition": f'attachment; filename="{result.filename}"'},
    )
