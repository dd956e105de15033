from typing import Any

from pydantic import AliasChoices, BaseModel, Field

from venture_hub.store.models import UserType


class ChatMessageRequest(BaseModel):
    message: str = Field(min_length=1)
    task_type: str = Field(default="general", validation_alias=AliasChoices("task_type", "taskType"))
    streaming: bool = False
    context: dict[str, Any] = Field(default_factory=dict)


class SuggestionsRequest(BaseModel):
    context: dict[str, Any] = Field(default_factory=dict)
    user_type: UserType | None = Field(default=None, validation_alias=AliasChoices("user_type", "userType"))


class AutomateRequest(BaseModel):
    task: str = Field(min_length=1)
    parameters: dict[str, Any] = Field(default_factory=dict)
