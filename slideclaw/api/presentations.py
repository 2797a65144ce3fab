"""Presentation and slide endpoints.

GET    /api/presentations                              - List (summaries, creation order)
POST   /api/presentations                              - Create
GET    /api/presentations/{id}                         - Get with slides
DELETE /api/presentations/{id}                         - Delete permanently
POST   /api/presentations/{id}/slides                  - Append slide
PUT    /api/presentations/{id}/slides/reorder          - Reorder (every slide id once)
PUT    /api/presentations/{id}/slides/{slide_id}       - Partial update
DELETE /api/presentations/{id}/slides/{slide_id}       - Delete and renumber
GET    /api/presentations/{id}/slides/{slide_id}/html  - Raw slide document
"""

from __future__ import annotations

from typing import Any

import structlog
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import HTMLResponse
from pydantic import Field

from slideclaw.api.dependencies import get_presentation_service
from slideclaw.models import Presentation, PresentationSummary, Slide
from slideclaw.models.presentation import CamelModel
from slideclaw.services import (
    NotFoundError,
    PresentationNotFoundError,
    PresentationService,
    ValidationError,
)

log = structlog.get_logger(__name__)

router = APIRouter(prefix="/presentations", tags=["presentations"])


# ------------------------------------------------------------------ #
# Request Models
# ------------------------------------------------------------------ #


class CreatePresentationRequest(CamelModel):
    title: str | None = Field(None, description="Presentation title (required)")
    description: str | None = None


class AddSlideRequest(CamelModel):
    title: str | None = None
    html: str | None = Field(None, description="Complete standalone HTML document")
    notes: str | None = None


class UpdateSlideRequest(CamelModel):
    title: str | None = None
    html: str | None = None
    notes: str | None = None


class ReorderSlidesRequest(CamelModel):
    slide_ids: list[str] = Field(..., description="Every slide id, in the new order")


def _http_error(exc: Exception) -> HTTPException:
    if isinstance(exc, NotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))


# ------------------------------------------------------------------ #
# Presentations
# ------------------------------------------------------------------ #


@router.get("", response_model=list[PresentationSummary])
async def list_presentations(
    service: PresentationService = Depends(get_presentation_service),
) -> list[PresentationSummary]:
    result = await service.list_presentations()
    return [p.summary() for p in result.presentations]


@router.post("", response_model=Presentation, status_code=status.HTTP_201_CREATED)
async def create_presentation(
    body: CreatePresentationRequest,
    service: PresentationService = Depends(get_presentation_service),
) -> Presentation:
    try:
        return await service.create_presentation(body.title, body.description)
    except ValidationError as exc:
        raise _http_error(exc) from exc


@router.get("/{presentation_id}", response_model=Presentation)
async def get_presentation(
    presentation_id: str,
    service: PresentationService = Depends(get_presentation_service),
) -> Presentation:
    try:
        return await service.get_presentation(presentation_id)
    except PresentationNotFoundError as exc:
        raise _http_error(exc) from exc


@router.delete("/{presentation_id}")
async def delete_presentation(
    presentation_id: str,
    service: PresentationService = Depends(get_presentation_service),
) -> dict[str, Any]:
    try:
        await service.delete_presentation(presentation_id)
    except PresentationNotFoundError as exc:
        raise _http_error(exc) from exc
    return {"success": True}


# ------------------------------------------------------------------ #
# Slides
# ------------------------------------------------------------------ #


@router.post(
    "/{presentation_id}/slides",
    response_model=Slide,
    status_code=status.HTTP_201_CREATED,
)
async def add_slide(
    presentation_id: str,
    body: AddSlideRequest,
    service: PresentationService = Depends(get_presentation_service),
) -> Slide:
    try:
        return await service.add_slide(presentation_id, body.title, body.html, body.notes)
    except (NotFoundError, ValidationError) as exc:
        raise _http_error(exc) from exc


# Declared before /{slide_id} so "reorder" is not taken for a slide id.
@router.put("/{presentation_id}/slides/reorder", response_model=Presentation)
async def reorder_slides(
    presentation_id: str,
    body: ReorderSlidesRequest,
    service: PresentationService = Depends(get_presentation_service),
) -> Presentation:
    try:
        return await service.reorder_slides(presentation_id, body.slide_ids)
    except (NotFoundError, ValidationError) as exc:
        raise _http_error(exc) from exc


@router.put("/{presentation_id}/slides/{slide_id}", response_model=Slide)
async def update_slide(
    presentation_id: str,
    slide_id: str,
    body: UpdateSlideRequest,
    service: PresentationService = Depends(get_presentation_service),
) -> Slide:
    try:
        return await service.update_slide(
            presentation_id,
            slide_id,
            title=body.title,
            html=body.html,
            notes=body.notes,
        )
    except (NotFoundError, ValidationError) as exc:
        raise _http_error(exc) from exc


@router.delete("/{presentation_id}/slides/{slide_id}")
async def delete_slide(
    presentation_id: str,
    slide_id: str,
    service: PresentationService = Depends(get_presentation_service),
) -> dict[str, Any]:
    try:
        await service.delete_slide(presentation_id, slide_id)
    except NotFoundError as exc:
        raise _http_error(exc) from exc
    return {"success": True}


@router.get("/{presentation_id}/slides/{slide_id}/html", response_class=HTMLResponse)
async def get_slide_html(
    presentation_id: str,
    slide_id: str,
    service: PresentationService = Depends(get_presentation_service),
) -> HTMLResponse:
    """Serve a slide's document as-is, for preview frames."""
    try:
        presentation = await service.get_presentation(presentation_id)
    except PresentationNotFoundError as exc:
        raise _http_error(exc) from exc
    slide = presentation.find_slide(slide_id)
    if slide is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Slide not found")
    return HTMLResponse(content=slide.html)
