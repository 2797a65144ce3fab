from slideclaw.agent.llm import LLMClient, LLMError
from slideclaw.agent.runtime import AgentConfigurationError, AgentResult, AgentStatus, SlideAgent
from slideclaw.agent.tools import ToolContext, ToolName, ToolRegistry

__all__ = [
    "AgentConfigurationError",
    "AgentResult",
    "AgentStatus",
    "LLMClient",
    "LLMError",
    "SlideAgent",
    "ToolContext",
    "ToolName",
    "ToolRegistry",
]
