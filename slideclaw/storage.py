"""JSON file persistence for presentations and the design preference.

Layout under ``data_dir``::

    presentations/<id>.json   one document per presentation
    design-config.json        the global DesignConfig

There is no index, no locking and no transaction log. Saves overwrite the
whole document (last writer wins). A crash mid-write can leave a truncated
file, which reads back as "not found" and is skipped (and counted) when
listing.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path

import structlog
from pydantic import ValidationError as PydanticValidationError

from slideclaw.models import DesignConfig, Presentation

log = structlog.get_logger(__name__)

# Ids produced by new_id() only ever contain these characters.
_SAFE_ID = re.compile(r"^[A-Za-z0-9_-]+$")


@dataclass
class ListResult:
    """Presentations in creation order, plus how many records were unreadable."""

    presentations: list[Presentation] = field(default_factory=list)
    skipped: int = 0


class PresentationStore:
    """Synchronous file store. Wrap calls in a thread when used from async code."""

    def __init__(self, data_dir: Path | str) -> None:
        data_dir = Path(data_dir).expanduser()
        self.presentations_dir = data_dir / "presentations"
        self.design_config_path = data_dir / "design-config.json"

    def _path_for(self, presentation_id: str) -> Path | None:
        if not _SAFE_ID.match(presentation_id):
            return None
        return self.presentations_dir / f"{presentation_id}.json"

    # ------------------------------------------------------------------ #
    # Presentations
    # ------------------------------------------------------------------ #

    def list_presentations(self) -> ListResult:
        result = ListResult()
        if not self.presentations_dir.is_dir():
            return result

        for path in sorted(self.presentations_dir.glob("*.json")):
            try:
                presentation = Presentation.model_validate_json(path.read_text(encoding="utf-8"))
            except (OSError, UnicodeDecodeError, PydanticValidationError) as exc:
                result.skipped += 1
                log.warning("storage.record_skipped", path=str(path), error=str(exc))
                continue
            result.presentations.append(presentation)

        result.presentations.sort(key=lambda p: p.created_at)
        return result

    def get_presentation(self, presentation_id: str) -> Presentation | None:
        path = self._path_for(presentation_id)
        if path is None:
            return None
        try:
            return Presentation.model_validate_json(path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError, PydanticValidationError) as exc:
            log.warning("storage.record_unreadable", path=str(path), error=str(exc))
            return None

    def save_presentation(self, presentation: Presentation) -> Presentation:
        path = self._path_for(presentation.id)
        if path is None:
            raise ValueError(f"Invalid presentation id: {presentation.id!r}")
        self.presentations_dir.mkdir(parents=True, exist_ok=True)
        path.write_text(presentation.model_dump_json(by_alias=True, indent=2), encoding="utf-8")
        log.debug("storage.presentation_saved", presentation_id=presentation.id)
        return presentation

    def delete_presentation(self, presentation_id: str) -> bool:
        path = self._path_for(presentation_id)
        if path is None:
            return False
        try:
            path.unlink()
        except FileNotFoundError:
            return False
        log.debug("storage.presentation_deleted", presentation_id=presentation_id)
        return True

    # ------------------------------------------------------------------ #
    # Design config
    # ------------------------------------------------------------------ #

    def get_design_config(self) -> DesignConfig:
        try:
            return DesignConfig.model_validate_json(
                self.design_config_path.read_text(encoding="utf-8")
            )
        except FileNotFoundError:
            return DesignConfig()
        except (OSError, UnicodeDecodeError, PydanticValidationError) as exc:
            log.warning("storage.design_config_unreadable", error=str(exc))
            return DesignConfig()

    def save_design_config(self, config: DesignConfig) -> DesignConfig:
        self.design_config_path.parent.mkdir(parents=True, exist_ok=True)
        self.design_config_path.write_text(
            config.model_dump_json(by_alias=True, indent=2), encoding="utf-8"
        )
        return config
