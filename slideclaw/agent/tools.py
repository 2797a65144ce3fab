"""Agent tools - the closed set of operations the model may invoke.

Each tool is a class with:
  - name: ToolName - tool identifier (used in the LLM function-calling schema)
  - description: str - description for the LLM
  - parameters_schema: dict - JSON Schema for the arguments
  - execute(params, context) -> ToolResult

The ToolRegistry maps every ToolName to exactly one tool. Names outside the
set resolve to an explicit "Unknown tool" error result. Failures never
escape ``ToolRegistry.execute``: they come back as ``{"error": message}`` so
the model can read them and try again.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

import structlog

from slideclaw.services import DesignConfigService, PresentationService, SlideclawError

log = structlog.get_logger(__name__)


class ToolName(StrEnum):
    CREATE_PRESENTATION = "create_presentation"
    ADD_SLIDE = "add_slide"
    UPDATE_SLIDE = "update_slide"
    DELETE_SLIDE = "delete_slide"
    REORDER_SLIDES = "reorder_slides"
    GET_PRESENTATION = "get_presentation"
    LIST_PRESENTATIONS = "list_presentations"
    GET_DESIGN_CONFIG = "get_design_config"
    FINISH = "finish"


@dataclass
class ToolContext:
    """Services a tool may call."""
    presentations: PresentationService
    design: DesignConfigService


@dataclass
class ToolResult:
    """Result from a tool execution."""
    success: bool
    data: Any = None
    error: str | None = None

    def to_content(self) -> Any:
        """Payload fed back to the model."""
        if self.success:
            return self.data
        return {"error": self.error}


class BaseTool(ABC):
    """Abstract base class for all tools."""

    name: ToolName
    description: str
    parameters_schema: dict[str, Any]

    def spec(self) -> dict[str, Any]:
        """OpenAI function-calling declaration for this tool."""
        return {
            "type": "function",
            "function": {
                "name": str(self.name),
                "description": self.description,
                "parameters": self.parameters_schema,
            },
        }

    def missing_arguments(self, params: dict[str, Any]) -> list[str]:
        required = self.parameters_schema.get("required", [])
        return [key for key in required if params.get(key) is None]

    @abstractmethod
    async def execute(self, params: dict[str, Any], context: ToolContext) -> ToolResult:
        """Execute the tool with validated parameters."""


def _string(description: str) -> dict[str, Any]:
    return {"type": "string", "description": description}


_PRESENTATION_ID = _string("ID of the presentation")


class CreatePresentationTool(BaseTool):
    name = ToolName.CREATE_PRESENTATION
    description = "Create a new presentation"
    parameters_schema = {
        "type": "object",
        "properties": {
            "title": _string("Title of the presentation"),
            "description": _string("Optional description"),
        },
        "required": ["title"],
    }

    async def execute(self, params: dict[str, Any], context: ToolContext) -> ToolResult:
        presentation = await context.presentations.create_presentation(
            params["title"], params.get("description")
        )
        return ToolResult(success=True, data={"id": presentation.id, "title": presentation.title})


class AddSlideTool(BaseTool):
    name = ToolName.ADD_SLIDE
    description = "Add a new slide to the end of a presentation"
    parameters_schema = {
        "type": "object",
        "properties": {
            "presentationId": _PRESENTATION_ID,
            "title": _string("Title of the slide"),
            "html": _string("Complete standalone HTML document for the slide"),
            "notes": _string("Optional speaker notes"),
        },
        "required": ["presentationId", "title", "html"],
    }

    async def execute(self, params: dict[str, Any], context: ToolContext) -> ToolResult:
        slide = await context.presentations.add_slide(
            params["presentationId"],
            params["title"],
            params["html"],
            params.get("notes"),
        )
        return ToolResult(
            success=True,
            data={"id": slide.id, "title": slide.title, "order": slide.order},
        )


class UpdateSlideTool(BaseTool):
    name = ToolName.UPDATE_SLIDE
    description = "Update an existing slide. Only the fields given are changed."
    parameters_schema = {
        "type": "object",
        "properties": {
            "presentationId": _PRESENTATION_ID,
            "slideId": _string("ID of the slide to update"),
            "title": _string("New title (optional)"),
            "html": _string("New HTML content (optional)"),
            "notes": _string("New speaker notes (optional)"),
        },
        "required": ["presentationId", "slideId"],
    }

    async def execute(self, params: dict[str, Any], context: ToolContext) -> ToolResult:
        slide = await context.presentations.update_slide(
            params["presentationId"],
            params["slideId"],
            title=params.get("title"),
            html=params.get("html"),
            notes=params.get("notes"),
        )
        return ToolResult(success=True, data={"id": slide.id, "title": slide.title})


class DeleteSlideTool(BaseTool):
    name = ToolName.DELETE_SLIDE
    description = "Delete a slide from a presentation"
    parameters_schema = {
        "type": "object",
        "properties": {
            "presentationId": _PRESENTATION_ID,
            "slideId": _string("ID of the slide to delete"),
        },
        "required": ["presentationId", "slideId"],
    }

    async def execute(self, params: dict[str, Any], context: ToolContext) -> ToolResult:
        await context.presentations.delete_slide(params["presentationId"], params["slideId"])
        return ToolResult(success=True, data={"success": True})


class ReorderSlidesTool(BaseTool):
    name = ToolName.REORDER_SLIDES
    description = "Reorder slides in a presentation. List every slide ID exactly once."
    parameters_schema = {
        "type": "object",
        "properties": {
            "presentationId": _PRESENTATION_ID,
            "slideIds": {
                "type": "array",
                "description": "Array of slide IDs in the new order",
                "items": {"type": "string"},
            },
        },
        "required": ["presentationId", "slideIds"],
    }

    async def execute(self, params: dict[str, Any], context: ToolContext) -> ToolResult:
        slide_ids = params["slideIds"]
        if not isinstance(slide_ids, list):
            return ToolResult(success=False, error="slideIds must be an array")
        await context.presentations.reorder_slides(params["presentationId"], slide_ids)
        return ToolResult(success=True, data={"success": True})


class GetPresentationTool(BaseTool):
    name = ToolName.GET_PRESENTATION
    description = "Get a presentation, including all of its slides, by ID"
    parameters_schema = {
        "type": "object",
        "properties": {"presentationId": _PRESENTATION_ID},
        "required": ["presentationId"],
    }

    async def execute(self, params: dict[str, Any], context: ToolContext) -> ToolResult:
        presentation = await context.presentations.get_presentation(params["presentationId"])
        return ToolResult(success=True, data=presentation.model_dump(by_alias=True))


class ListPresentationsTool(BaseTool):
    name = ToolName.LIST_PRESENTATIONS
    description = "List all presentations"
    parameters_schema = {"type": "object", "properties": {}}

    async def execute(self, params: dict[str, Any], context: ToolContext) -> ToolResult:
        result = await context.presentations.list_presentations()
        return ToolResult(
            success=True,
            data=[
                {
                    "id": p.id,
                    "title": p.title,
                    "slideCount": len(p.slides),
                    "createdAt": p.created_at,
                }
                for p in result.presentations
            ],
        )


class GetDesignConfigTool(BaseTool):
    name = ToolName.GET_DESIGN_CONFIG
    description = (
        "Get the user's preferred CSS library and the full catalog of available "
        "libraries with their CDN tags. Call this before generating slides."
    )
    parameters_schema = {"type": "object", "properties": {}}

    async def execute(self, params: dict[str, Any], context: ToolContext) -> ToolResult:
        return ToolResult(success=True, data=await context.design.agent_guidance())


class FinishTool(BaseTool):
    name = ToolName.FINISH
    description = "Signal that the task is complete"
    parameters_schema = {
        "type": "object",
        "properties": {
            "presentationId": _string("ID of the final presentation"),
            "message": _string("Summary of what was done"),
        },
        "required": ["presentationId"],
    }

    async def execute(self, params: dict[str, Any], context: ToolContext) -> ToolResult:
        return ToolResult(
            success=True,
            data={
                "done": True,
                "presentationId": params.get("presentationId"),
                "message": params.get("message"),
            },
        )


class ToolRegistry:
    """Total mapping from ToolName to tool instance."""

    def __init__(self, tools: list[BaseTool] | None = None) -> None:
        tools = tools if tools is not None else default_tools()
        self._tools: dict[str, BaseTool] = {str(t.name): t for t in tools}

    def get(self, name: str) -> BaseTool | None:
        return self._tools.get(name)

    def specs(self) -> list[dict[str, Any]]:
        return [tool.spec() for tool in self._tools.values()]

    async def execute(
        self,
        name: str,
        params: dict[str, Any],
        context: ToolContext,
    ) -> ToolResult:
        """Run one tool call. Never raises; failures become error results."""
        tool = self.get(name)
        if tool is None:
            log.warning("agent.unknown_tool", tool=name)
            return ToolResult(success=False, error=f"Unknown tool: {name}")

        missing = tool.missing_arguments(params)
        if missing and tool.name != ToolName.FINISH:
            return ToolResult(
                success=False,
                error=f"Missing required argument(s): {', '.join(missing)}",
            )

        try:
            result = await tool.execute(params, context)
        except SlideclawError as exc:
            result = ToolResult(success=False, error=str(exc))
        except Exception as exc:
            log.error("agent.tool_failed", tool=name, error=str(exc), exc_info=True)
            result = ToolResult(success=False, error=str(exc))

        log.info("agent.tool_executed", tool=name, success=result.success, error=result.error)
        return result


def default_tools() -> list[BaseTool]:
    return [
        CreatePresentationTool(),
        AddSlideTool(),
        UpdateSlideTool(),
        DeleteSlideTool(),
        ReorderSlidesTool(),
        GetPresentationTool(),
        ListPresentationsTool(),
        GetDesignConfigTool(),
        FinishTool(),
    ]
