"""Co-founder request bodies.

Clients may send ``dueDate`` / ``conversationHistory`` in camelCase; both
spellings are accepted.
"""

from typing import Literal

from pydantic import AliasChoices, AwareDatetime, BaseModel, ConfigDict, Field

from venture_hub.store.models import CommitmentStatus, GoalPriority, GoalStatus


class GoalCreate(BaseModel):
    description: str = Field(min_length=1)
    due_date: AwareDatetime = Field(validation_alias=AliasChoices("due_date", "dueDate"))
    priority: GoalPriority


class GoalUpdate(BaseModel):
    description: str | None = Field(default=None, min_length=1)
    due_date: AwareDatetime | None = Field(default=None, validation_alias=AliasChoices("due_date", "dueDate"))
    priority: GoalPriority | None = None
    status: GoalStatus | None = None
    progress: int | None = Field(default=None, ge=0, le=100)


class CommitmentCreate(BaseModel):
    description: str = Field(min_length=1)
    due_date: AwareDatetime = Field(validation_alias=AliasChoices("due_date", "dueDate"))


class CommitmentUpdate(BaseModel):
    description: str | None = Field(default=None, min_length=1)
    due_date: AwareDatetime | None = Field(default=None, validation_alias=AliasChoices("due_date", "dueDate"))
    status: CommitmentStatus | None = None


class HistoryMessage(BaseModel):
    model_config = ConfigDict(extra="ignore")

    role: Literal["user", "assistant"]
    content: str
    timestamp: str | None = None
    mode: str | None = None


class ChatRequest(BaseModel):
    message: str = Field(min_length=1)
    mode: str | None = None
    conversation_history: list[HistoryMessage] | None = Field(
        default=None, validation_alias=AliasChoices("conversation_history", "conversationHistory")
    )


class DecisionRequest(BaseModel):
    decision: str = Field(min_length=1)
    options: list[str] | None = None


class DecisionTopic(BaseModel):
    decision: str = Field(min_length=1)
