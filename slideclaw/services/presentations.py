"""Presentation service - CRUD over presentations and their slides.

The HTTP routes and the agent tools both go through this service, so
validation and the slide ordering rules live in one place.

Store calls are blocking file I/O and run in a worker thread. Mutations of
one presentation are serialized with a per-id lock so that two requests in
this process cannot interleave their read-modify-write cycles. Separate
processes sharing a data directory still race (last write wins).
"""

from __future__ import annotations

import asyncio
import weakref
from collections.abc import Sequence

import structlog
from pydantic import ValidationError as PydanticValidationError

from slideclaw.models import Presentation, Slide, now
from slideclaw.services.errors import (
    PresentationNotFoundError,
    SlideNotFoundError,
    ValidationError,
)
from slideclaw.storage import ListResult, PresentationStore

log = structlog.get_logger(__name__)


def _invalid_fields(exc: PydanticValidationError) -> ValidationError:
    error = exc.errors()[0]
    field = ".".join(str(part) for part in error["loc"]) or "slide"
    return ValidationError(f"Invalid {field}: {error['msg']}")


class PresentationService:
    """Service for managing presentations and slides."""

    def __init__(self, store: PresentationStore) -> None:
        self._store = store
        # Entries live only while a caller holds or waits on the lock.
        self._locks: weakref.WeakValueDictionary[str, asyncio.Lock] = weakref.WeakValueDictionary()

    def _lock(self, presentation_id: str) -> asyncio.Lock:
        lock = self._locks.get(presentation_id)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[presentation_id] = lock
        return lock

    # ------------------------------------------------------------------ #
    # Presentations
    # ------------------------------------------------------------------ #

    async def list_presentations(self) -> ListResult:
        result = await asyncio.to_thread(self._store.list_presentations)
        if result.skipped:
            log.warning("presentations.corrupt_records", skipped=result.skipped)
        return result

    async def get_presentation(self, presentation_id: str) -> Presentation:
        presentation = await asyncio.to_thread(self._store.get_presentation, presentation_id)
        if presentation is None:
            raise PresentationNotFoundError(presentation_id)
        return presentation

    async def create_presentation(
        self,
        title: str | None,
        description: str | None = None,
    ) -> Presentation:
        """Create an empty presentation.

        Raises:
            ValidationError: If title is missing or blank
        """
        if not title or not title.strip():
            raise ValidationError("title is required")

        timestamp = now()
        presentation = Presentation(
            title=title,
            description=description,
            created_at=timestamp,
            updated_at=timestamp,
        )
        await asyncio.to_thread(self._store.save_presentation, presentation)
        log.info("presentations.created", presentation_id=presentation.id, title=title)
        return presentation

    async def delete_presentation(self, presentation_id: str) -> None:
        async with self._lock(presentation_id):
            deleted = await asyncio.to_thread(self._store.delete_presentation, presentation_id)
        if not deleted:
            raise PresentationNotFoundError(presentation_id)
        log.info("presentations.deleted", presentation_id=presentation_id)

    # ------------------------------------------------------------------ #
    # Slides
    # ------------------------------------------------------------------ #

    async def add_slide(
        self,
        presentation_id: str,
        title: str | None,
        html: str | None,
        notes: str | None = None,
    ) -> Slide:
        """Append a slide at the end of the deck.

        Raises:
            PresentationNotFoundError: Unknown presentation id
            ValidationError: If title or html is missing
        """
        async with self._lock(presentation_id):
            presentation = await self.get_presentation(presentation_id)
            if not title or not html:
                raise ValidationError("title and html are required")

            timestamp = now()
            try:
                slide = Slide(
                    title=title, html=html, notes=notes, created_at=timestamp, updated_at=timestamp
                )
            except PydanticValidationError as exc:
                raise _invalid_fields(exc) from exc
            presentation.append_slide(slide)
            await asyncio.to_thread(self._store.save_presentation, presentation)

        log.info(
            "presentations.slide_added",
            presentation_id=presentation_id,
            slide_id=slide.id,
            order=slide.order,
        )
        return slide

    async def update_slide(
        self,
        presentation_id: str,
        slide_id: str,
        *,
        title: str | None = None,
        html: str | None = None,
        notes: str | None = None,
    ) -> Slide:
        """Overwrite only the fields that were supplied (non-None).

        Raises:
            PresentationNotFoundError: Unknown presentation id
            SlideNotFoundError: Unknown slide id
            ValidationError: A supplied field has the wrong type; nothing is saved
        """
        async with self._lock(presentation_id):
            presentation = await self.get_presentation(presentation_id)
            slide = presentation.find_slide(slide_id)
            if slide is None:
                raise SlideNotFoundError(slide_id)

            try:
                if title is not None:
                    slide.title = title
                if html is not None:
                    slide.html = html
                if notes is not None:
                    slide.notes = notes
            except PydanticValidationError as exc:
                raise _invalid_fields(exc) from exc
            slide.updated_at = now()
            presentation.updated_at = slide.updated_at
            await asyncio.to_thread(self._store.save_presentation, presentation)

        log.info("presentations.slide_updated", presentation_id=presentation_id, slide_id=slide_id)
        return slide

    async def delete_slide(self, presentation_id: str, slide_id: str) -> Presentation:
        async with self._lock(presentation_id):
            presentation = await self.get_presentation(presentation_id)
            if presentation.remove_slide(slide_id) is None:
                raise SlideNotFoundError(slide_id)
            await asyncio.to_thread(self._store.save_presentation, presentation)

        log.info("presentations.slide_deleted", presentation_id=presentation_id, slide_id=slide_id)
        return presentation

    async def reorder_slides(
        self,
        presentation_id: str,
        slide_ids: Sequence[str],
    ) -> Presentation:
        """Put the slides in exactly the order of *slide_ids*.

        Every existing slide id must appear exactly once. The check runs
        before anything is touched, so a rejected reorder leaves both the
        stored record and the returned state unchanged.

        Raises:
            PresentationNotFoundError: Unknown presentation id
            SlideNotFoundError: An id does not belong to this presentation
            ValidationError: Duplicate ids, or existing slides left out
        """
        async with self._lock(presentation_id):
            presentation = await self.get_presentation(presentation_id)
            existing = {s.id for s in presentation.slides}

            for slide_id in slide_ids:
                if slide_id not in existing:
                    raise SlideNotFoundError(slide_id)
            if len(set(slide_ids)) != len(slide_ids):
                raise ValidationError("slideIds must not contain duplicates")
            if len(slide_ids) != len(existing):
                raise ValidationError("slideIds must list every slide in the presentation")

            presentation.apply_order(list(slide_ids))
            await asyncio.to_thread(self._store.save_presentation, presentation)

        log.info(
            "presentations.slides_reordered",
            presentation_id=presentation_id,
            slide_count=len(slide_ids),
        )
        return presentation
