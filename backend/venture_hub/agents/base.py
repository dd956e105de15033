"""Agent request/response types and the Agent protocol.

Every handler implements ``execute(context, options) -> AgentResponse`` and
switches on ``context.current_task``, falling back to a general greeting.
"""

from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

from pydantic import BaseModel, Field

from venture_hub.store.models import UserType


class AgentRequest(BaseModel):
    user_id: str
    user_type: UserType = UserType.ENTREPRENEUR
    message: str
    task_type: str = "general"
    context: dict[str, Any] = Field(default_factory=dict)
    streaming: bool = False


class AgentResponse(BaseModel):
    content: str
    suggestions: list[str] = Field(default_factory=list)
    actions: list[dict[str, Any]] = Field(default_factory=list)
    insights: list[dict[str, Any]] = Field(default_factory=list)
    confidence: float | None = None


@dataclass
class AgentContext:
    user_id: str
    user_type: UserType
    current_task: str
    conversation_history: list[dict[str, str]] = field(default_factory=list)
    relevant_data: dict[str, Any] = field(default_factory=dict)
    permissions: list[str] = field(default_factory=list)

    @property
    def last_message(self) -> str:
        """Content of the most recent turn, or "" for an empty history."""
        if not self.conversation_history:
            return ""
        return self.conversation_history[-1].get("content") or ""


@dataclass
class AgentOptions:
    tools: list[str] = field(default_factory=list)
    memory: list[dict[str, str]] = field(default_factory=list)
    streaming: bool = False
    extra: dict[str, Any] = field(default_factory=dict)


@runtime_checkable
class Agent(Protocol):
    async def execute(self, context: AgentContext, options: AgentOptions) -> AgentResponse:
        ...


class ScriptedAgent:
    """Answers each task from a fixed script.

    Subclasses set ``script`` (task -> response) and ``default``. Tasks that
    need computed content are handled by overriding ``execute`` and deferring
    to ``super().execute`` for the rest.
    """

    script: dict[str, AgentResponse] = {}
    default: AgentResponse

    def __init__(self, ai: Any = None):
        self.ai = ai

    async def execute(self, context: AgentContext, options: AgentOptions) -> AgentResponse:
        response = self.script.get(context.current_task, self.default)
        return response.model_copy(deep=True)


def action(action_type: str, label: str, **data: Any) -> dict[str, Any]:
    """Build a client action descriptor."""
    return {"type": action_type, "label": label, **data}


def insight(insight_type: str, value: Any) -> dict[str, Any]:
    return {"type": insight_type, "value": value}
