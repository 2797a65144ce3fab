"""Design preference endpoints.

GET /api/design-config  - Current preference and the library catalog
PUT /api/design-config  - Replace the preference (catalog key or "auto")
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, status

from slideclaw.api.dependencies import get_design_service
from slideclaw.design_catalog import catalog_as_dicts
from slideclaw.models import DesignConfig
from slideclaw.models.presentation import CamelModel
from slideclaw.services import DesignConfigService, ValidationError

router = APIRouter(prefix="/design-config", tags=["design"])


class UpdateDesignConfigRequest(CamelModel):
    library: str | None = None


@router.get("")
async def get_design_config(
    service: DesignConfigService = Depends(get_design_service),
) -> dict[str, Any]:
    config = await service.get_config()
    return {"config": config.model_dump(by_alias=True), "catalog": catalog_as_dicts()}


@router.put("", response_model=DesignConfig)
async def update_design_config(
    body: UpdateDesignConfigRequest,
    service: DesignConfigService = Depends(get_design_service),
) -> DesignConfig:
    try:
        return await service.set_library(body.library)
    except ValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
