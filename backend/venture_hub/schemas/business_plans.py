from pydantic import BaseModel, Field

from venture_hub.store.models import Visibility


class BusinessPlanCreate(BaseModel):
    name: str = Field(min_length=1)
    content: str = ""
    description: str | None = None
    industry: str | None = None
    stage: str | None = None
    funding_goal: float | None = Field(default=None, ge=0)
    team_size: int | None = Field(default=None, ge=0)
    target_market: str | None = None
    competitive_advantage: str | None = None
    revenue_model: str | None = None
    visibility: Visibility = Visibility.PRIVATE


class BusinessPlanUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1)
    content: str | None = None
    description: str | None = None
    industry: str | None = None
    stage: str | None = None
    funding_goal: float | None = Field(default=None, ge=0)
    team_size: int | None = Field(default=None, ge=0)
    target_market: str | None = None
    competitive_advantage: str | None = None
    revenue_model: str | None = None
    visibility: Visibility | None = None
