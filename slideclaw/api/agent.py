"""Agent endpoint.

POST /api/agent/generate - Run the authoring agent on a prompt

The request blocks until the agent finishes, stops on its own, or hits its
iteration cap. A client disconnecting does not stop the run.
"""

from __future__ import annotations

import structlog
from fastapi import APIRouter, Depends, HTTPException, status

from slideclaw.agent import LLMError, SlideAgent
from slideclaw.api.dependencies import get_agent
from slideclaw.models.presentation import CamelModel
from slideclaw.telemetry import bind_presentation_context

log = structlog.get_logger(__name__)

router = APIRouter(prefix="/agent", tags=["agent"])


class GenerateRequest(CamelModel):
    prompt: str | None = None
    presentation_id: str | None = None


class GenerateResponse(CamelModel):
    presentation_id: str | None
    message: str


@router.post("/generate", response_model=GenerateResponse)
async def generate(
    body: GenerateRequest,
    agent: SlideAgent = Depends(get_agent),
) -> GenerateResponse:
    if not body.prompt or not body.prompt.strip():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="prompt is required")
    if body.presentation_id:
        bind_presentation_context(body.presentation_id)

    try:
        result = await agent.run(body.prompt, body.presentation_id)
    except LLMError as exc:
        log.error("agent.run_failed", error=str(exc))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(exc),
        ) from exc

    log.info(
        "agent.generate_completed",
        presentation_id=result.presentation_id,
        status=str(result.status),
        turns=result.turns,
    )
    return GenerateResponse(presentation_id=result.presentation_id, message=result.message)
