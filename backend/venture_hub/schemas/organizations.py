from pydantic import BaseModel, Field

from venture_hub.store.models import UserType


class OrganizationCreate(BaseModel):
    name: str = Field(min_length=1)
    description: str | None = None
    organization_type: UserType
    industry: str | None = None
    size: str | None = None
    location: str | None = None
    website: str | None = None
    logo_url: str | None = None


class OrganizationUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1)
    description: str | None = None
    organization_type: UserType | None = None
    industry: str | None = None
    size: str | None = None
    location: str | None = None
    website: str | None = None
    logo_url: str | None = None


class MemberAdd(BaseModel):
    user_id: str = Field(min_length=1)
    role: str = "member"
