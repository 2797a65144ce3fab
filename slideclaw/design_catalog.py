"""Catalog of CSS libraries the agent may build slides with.

The catalog is static and in-memory. The user's preferred entry is stored
separately as a DesignConfig (see slideclaw.storage); ``auto`` means the
agent picks whichever entry fits the content best.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import StrEnum
from typing import Any


class DesignLibrary(StrEnum):
    AUTO = "auto"
    TAILWIND = "tailwind"
    BOOTSTRAP = "bootstrap"
    BULMA = "bulma"
    PICO = "pico"
    NONE = "none"


@dataclass(frozen=True)
class LibraryEntry:
    """One selectable CSS library."""

    key: DesignLibrary
    name: str
    # HTML tag(s) pasted into <head>; empty for "none"
    cdn_tag: str
    description: str
    accessibility: str
    use_cases: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        return {
            "key": str(self.key),
            "name": data["name"],
            "cdnTag": data["cdn_tag"],
            "description": data["description"],
            "accessibility": data["accessibility"],
            "useCases": data["use_cases"],
        }


LIBRARY_CATALOG: tuple[LibraryEntry, ...] = (
    LibraryEntry(
        key=DesignLibrary.TAILWIND,
        name="Tailwind CSS",
        cdn_tag='<script src="https://cdn.tailwindcss.com"></script>',
        description=(
            "Utility-first CSS framework. Precise control over every spacing, "
            "color, and layout decision."
        ),
        accessibility=(
            "Neutral: accessibility comes from your HTML markup and aria attributes."
        ),
        use_cases=[
            "Custom layouts",
            "Precise typography",
            "Complex multi-column designs",
            "Dark/light themes",
        ],
    ),
    LibraryEntry(
        key=DesignLibrary.BOOTSTRAP,
        name="Bootstrap 5",
        cdn_tag=(
            '<link rel="stylesheet" '
            'href="https://cdn.jsdelivr.net/npm/bootstrap@5.3/dist/css/bootstrap.min.css">'
        ),
        description="Full component library: grid, cards, badges, tables, alerts, and more.",
        accessibility=(
            "Excellent: components ship with ARIA roles and keyboard navigation support."
        ),
        use_cases=["Tables and data", "Cards and panels", "Badges and pills", "Structured content"],
    ),
    LibraryEntry(
        key=DesignLibrary.BULMA,
        name="Bulma",
        cdn_tag=(
            '<link rel="stylesheet" '
            'href="https://cdn.jsdelivr.net/npm/bulma@1.0/css/bulma.min.css">'
        ),
        description="Modern Flexbox-based framework. Clean and minimal look with layout utilities.",
        accessibility="Good: semantic class names encourage proper HTML structure.",
        use_cases=["Professional slides", "Columns", "Notification boxes", "Tags and labels"],
    ),
    LibraryEntry(
        key=DesignLibrary.PICO,
        name="Pico CSS",
        cdn_tag=(
            '<link rel="stylesheet" '
            'href="https://cdn.jsdelivr.net/npm/@picocss/pico@2/css/pico.classless.min.css">'
        ),
        description="Minimal semantic CSS. Styles HTML elements directly, no classes needed.",
        accessibility="Accessibility-first. Best for readable, content-heavy slides.",
        use_cases=["Text-heavy slides", "Quote slides", "Readable content", "Minimal styling"],
    ),
    LibraryEntry(
        key=DesignLibrary.NONE,
        name="No framework (inline styles only)",
        cdn_tag="",
        description=(
            "Full creative freedom with raw CSS. Best combined with Three.js, "
            "Canvas, or heavy animations."
        ),
        accessibility="You are fully responsible for accessibility in your markup.",
        use_cases=[
            "Artistic slides",
            "Animations with anime.js",
            "3D with Three.js",
            "Canvas-based slides",
        ],
    ),
)


def get_catalog_entry(key: str) -> LibraryEntry | None:
    """Return the catalog entry for *key*, or None (also for ``auto``)."""
    for entry in LIBRARY_CATALOG:
        if entry.key == key:
            return entry
    return None


def valid_library_keys() -> list[str]:
    """Keys accepted as a design preference."""
    return [str(entry.key) for entry in LIBRARY_CATALOG]


def catalog_as_dicts() -> list[dict[str, Any]]:
    return [entry.to_dict() for entry in LIBRARY_CATALOG]
