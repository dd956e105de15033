from fastapi import APIRouter, Depends

from venture_hub.api.deps import get_current_profile, get_store
from venture_hub.repositories import OrganizationRepository, UserRepository
from venture_hub.schemas.users import UserUpdate
from venture_hub.store.memory import InMemoryStore
from venture_hub.store.models import User

router = APIRouter()


@router.get("/me")
async def get_me(profile: User = Depends(get_current_profile)):
    return profile.model_dump(mode="json")


@router.patch("/me")
async def update_me(
    body: UserUpdate,
    profile: User = Depends(get_current_profile),
    store: InMemoryStore = Depends(get_store),
):
    """Update the caller's profile. Only supplied fields change."""
    changes = body.model_dump(exclude_unset=True, exclude_none=True)
    updated = UserRepository(store).update(profile.id, changes) if changes else profile
    return updated.model_dump(mode="json")


@router.get("/organizations")
async def my_organizations(
    profile: User = Depends(get_current_profile),
    store: InMemoryStore = Depends(get_store),
):
    orgs = OrganizationRepository(store).for_user(profile.id)
    return [o.model_dump(mode="json") for o in orgs]
