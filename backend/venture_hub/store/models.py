"""Entity models held by the in-memory store."""

from datetime import datetime, timezone
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class UserType(StrEnum):
    ENTREPRENEUR = "entrepreneur"
    INVESTOR = "investor"
    LENDER = "lender"
    GRANTOR = "grantor"
    PARTNER = "partner"
    TEAM_MEMBER = "team_member"
    ADMIN = "admin"


class Visibility(StrEnum):
    PRIVATE = "private"
    SHARED = "shared"
    PUBLIC = "public"


class GoalPriority(StrEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class GoalStatus(StrEnum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    OVERDUE = "overdue"


class CommitmentStatus(StrEnum):
    PENDING = "pending"
    COMPLETED = "completed"
    OVERDUE = "overdue"


class MessageRole(StrEnum):
    USER = "user"
    ASSISTANT = "assistant"


class Record(BaseModel):
    """Common fields for every stored entity."""

    id: str
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)


class User(Record):
    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    profile_image_url: str | None = None
    user_type: UserType = UserType.ENTREPRENEUR
    user_subtype: str | None = None
    role: str | None = None
    preferences: dict[str, Any] = Field(default_factory=dict)
    metrics: dict[str, Any] = Field(default_factory=dict)
    verified: bool = False
    onboarding_completed: bool = False


class Organization(Record):
    name: str
    description: str | None = None
    organization_type: UserType
    owner_id: str
    industry: str | None = None
    size: str | None = None
    location: str | None = None
    website: str | None = None
    logo_url: str | None = None
    verified: bool = False


class Membership(Record):
    organization_id: str
    user_id: str
    role: str = "member"
    joined_at: datetime = Field(default_factory=utc_now)


class BusinessPlan(Record):
    user_id: str
    name: str
    content: str = ""
    description: str | None = None
    industry: str | None = None
    stage: str | None = None
    funding_goal: float | None = None
    team_size: int | None = None
    target_market: str | None = None
    competitive_advantage: str | None = None
    revenue_model: str | None = None
    visibility: Visibility = Visibility.PRIVATE


class CoFounderGoal(Record):
    user_id: str
    description: str
    due_date: datetime
    priority: GoalPriority = GoalPriority.MEDIUM
    status: GoalStatus = GoalStatus.PENDING
    progress: int = Field(default=0, ge=0, le=100)


class CoFounderCommitment(Record):
    user_id: str
    description: str
    due_date: datetime
    status: CommitmentStatus = CommitmentStatus.PENDING
    completed_at: datetime | None = None


class ConversationMessage(Record):
    user_id: str
    role: MessageRole
    content: str
    task_type: str | None = None
    timestamp: datetime = Field(default_factory=utc_now)
