"""Agent runtime - the bounded tool-calling loop that builds presentations.

One run of the loop:
1. Seed the conversation with the system instruction and the user prompt
   (prefixed with the presentation id when editing)
2. Ask the model for the next step
3. No tool calls in the reply: stop (``done``) with the reply text
4. Otherwise execute the calls one after another, in the order returned,
   and append each result as a tool message
5. ``finish`` stops immediately, even if later calls in the same batch
   have not run yet (``finished``)
6. After ``agent_max_iterations`` turns without finishing, stop with the
   best-known result (``exhausted``); this is not an error

Tool failures are data fed back to the model. Only failures reaching the
model service (LLMError) abort a run.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

import structlog

from slideclaw.agent.llm import LLMClient, LLMError
from slideclaw.agent.prompts import build_system_prompt, build_user_message
from slideclaw.agent.tools import ToolContext, ToolName, ToolRegistry, ToolResult
from slideclaw.config import Settings, get_settings

log = structlog.get_logger(__name__)

DEFAULT_FINISH_MESSAGE = "Presentation generated successfully"
EXHAUSTED_MESSAGE = "Agent completed"


class AgentConfigurationError(LLMError):
    """The agent cannot reach the model service with the current settings."""


class AgentStatus(StrEnum):
    FINISHED = "finished"
    DONE = "done"
    EXHAUSTED = "exhausted"


@dataclass
class AgentResult:
    presentation_id: str | None
    message: str
    status: AgentStatus
    turns: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {"presentationId": self.presentation_id, "message": self.message}


@dataclass
class _ToolCall:
    id: str
    name: str
    arguments: str


def _extract_message(response: Any) -> Any | None:
    try:
        return response.choices[0].message
    except (AttributeError, IndexError, KeyError, TypeError):
        return None


def _extract_tool_calls(message: Any) -> list[_ToolCall]:
    calls = []
    for index, raw in enumerate(getattr(message, "tool_calls", None) or []):
        function = raw.function
        calls.append(
            _ToolCall(
                id=getattr(raw, "id", None) or f"call_{index}",
                name=function.name,
                arguments=function.arguments or "{}",
            )
        )
    return calls


def _parse_arguments(raw: str) -> dict[str, Any] | None:
    try:
        parsed = json.loads(raw)
    except (TypeError, ValueError):
        return None
    return parsed if isinstance(parsed, dict) else None


class SlideAgent:
    """Drives presentation edits from a natural-language prompt."""

    def __init__(
        self,
        context: ToolContext,
        settings: Settings | None = None,
        llm_client: LLMClient | None = None,
        registry: ToolRegistry | None = None,
    ) -> None:
        self._context = context
        self._settings = settings or get_settings()
        self._llm = llm_client
        self._registry = registry or ToolRegistry()

    def _client(self) -> LLMClient:
        if self._llm is None:
            if self._settings.llm_api_key is None and not self._settings.llm_base_url:
                raise AgentConfigurationError(
                    "LLM_API_KEY (or GEMINI_API_KEY) environment variable is required"
                )
            self._llm = LLMClient(self._settings)
        return self._llm

    async def run(self, prompt: str, presentation_id: str | None = None) -> AgentResult:
        llm = self._client()
        max_iterations = self._settings.agent_max_iterations
        tools = self._registry.specs()

        messages: list[dict[str, Any]] = [
            {
                "role": "system",
                "content": build_system_prompt(
                    self._settings.slide_width, self._settings.slide_height
                ),
            },
            {"role": "user", "content": build_user_message(prompt, presentation_id)},
        ]
        current_id = presentation_id

        log.info("agent.run_started", presentation_id=presentation_id, max_iterations=max_iterations)

        for turn in range(1, max_iterations + 1):
            response = await llm.complete(messages=messages, tools=tools)
            message = _extract_message(response)
            if message is None:
                log.warning("agent.empty_response", turn=turn)
                return AgentResult(current_id, EXHAUSTED_MESSAGE, AgentStatus.DONE, turn)

            calls = _extract_tool_calls(message)
            log.debug("agent.turn", turn=turn, tool_calls=len(calls))
            if not calls:
                text = getattr(message, "content", None) or ""
                log.info("agent.run_done", turn=turn, presentation_id=current_id)
                return AgentResult(current_id, text, AgentStatus.DONE, turn)

            messages.append(
                {
                    "role": "assistant",
                    "content": getattr(message, "content", None),
                    "tool_calls": [
                        {
                            "id": call.id,
                            "type": "function",
                            "function": {"name": call.name, "arguments": call.arguments},
                        }
                        for call in calls
                    ],
                }
            )

            for call in calls:
                params = _parse_arguments(call.arguments)
                if params is None:
                    result = ToolResult(
                        success=False,
                        error=f"Invalid JSON arguments for tool {call.name}",
                    )
                else:
                    result = await self._registry.execute(call.name, params, self._context)

                if call.name == ToolName.FINISH:
                    data = result.data or {}
                    final_id = data.get("presentationId") or current_id
                    final_message = data.get("message") or DEFAULT_FINISH_MESSAGE
                    log.info("agent.run_finished", turn=turn, presentation_id=final_id)
                    return AgentResult(final_id, final_message, AgentStatus.FINISHED, turn)

                if call.name == ToolName.CREATE_PRESENTATION and result.success:
                    current_id = result.data["id"]

                messages.append(
                    {
                        "role": "tool",
                        "tool_call_id": call.id,
                        "name": call.name,
                        "content": json.dumps(result.to_content(), default=str),
                    }
                )

        log.warning("agent.run_exhausted", turns=max_iterations, presentation_id=current_id)
        return AgentResult(current_id, EXHAUSTED_MESSAGE, AgentStatus.EXHAUSTED, max_iterations)
