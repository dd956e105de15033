from typing import Any

from pydantic import BaseModel

from venture_hub.store.models import UserType


class UserUpdate(BaseModel):
    first_name: str | None = None
    last_name: str | None = None
    profile_image_url: str | None = None
    user_type: UserType | None = None
    user_subtype: str | None = None
    role: str | None = None
    preferences: dict[str, Any] | None = None
    onboarding_completed: bool | None = None
