"""Presentation and slide records.

Records are persisted as JSON with camelCase keys (``createdAt``,
``updatedAt``) and the same shape is served over HTTP, so one set of models
covers storage and the wire.

Slide ordering invariant: after every mutation the ``order`` values of a
presentation's slides are exactly ``0..n-1``. Mutating helpers here keep the
list position and ``order`` in step; callers never assign ``order`` directly.
"""

from __future__ import annotations

import secrets
from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from slideclaw.design_catalog import DesignLibrary


def new_id() -> str:
    """Opaque URL-safe identifier, unique per call."""
    return secrets.token_urlsafe(12)


def now() -> str:
    """ISO-8601 UTC timestamp; lexical order equals chronological order."""
    return datetime.now(UTC).isoformat(timespec="microseconds").replace("+00:00", "Z")


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        validate_assignment=True,
    )


class Slide(CamelModel):
    id: str = Field(default_factory=new_id)
    title: str
    html: str
    notes: str | None = None
    order: int = Field(default=0, ge=0)
    created_at: str = Field(default_factory=now)
    updated_at: str = Field(default_factory=now)


class PresentationSummary(CamelModel):
    id: str
    title: str
    description: str | None = None
    slide_count: int
    created_at: str
    updated_at: str


class Presentation(CamelModel):
    id: str = Field(default_factory=new_id)
    title: str = Field(..., min_length=1)
    description: str | None = None
    slides: list[Slide] = Field(default_factory=list)
    created_at: str = Field(default_factory=now)
    updated_at: str = Field(default_factory=now)

    def touch(self) -> None:
        self.updated_at = now()

    def sorted_slides(self) -> list[Slide]:
        return sorted(self.slides, key=lambda s: s.order)

    def find_slide(self, slide_id: str) -> Slide | None:
        return next((s for s in self.slides if s.id == slide_id), None)

    def renumber(self) -> None:
        """Reassign ``order`` from list position."""
        for index, slide in enumerate(self.slides):
            slide.order = index

    def append_slide(self, slide: Slide) -> Slide:
        slide.order = len(self.slides)
        self.slides.append(slide)
        self.touch()
        return slide

    def remove_slide(self, slide_id: str) -> Slide | None:
        slide = self.find_slide(slide_id)
        if slide is None:
            return None
        self.slides = [s for s in self.slides if s.id != slide_id]
        self.renumber()
        self.touch()
        return slide

    def apply_order(self, slide_ids: list[str]) -> None:
        """Rearrange slides to match *slide_ids*.

        The caller must have checked that *slide_ids* is a permutation of
        the current slide ids.
        """
        by_id = {s.id: s for s in self.slides}
        self.slides = [by_id[slide_id] for slide_id in slide_ids]
        self.renumber()
        self.touch()

    def summary(self) -> PresentationSummary:
        return PresentationSummary(
            id=self.id,
            title=self.title,
            description=self.description,
            slide_count=len(self.slides),
            created_at=self.created_at,
            updated_at=self.updated_at,
        )


class DesignConfig(CamelModel):
    library: DesignLibrary = DesignLibrary.AUTO
