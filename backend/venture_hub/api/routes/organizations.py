"""Organization CRUD and membership.

Reads are open to any signed-in user; mutations are owner-only.
"""

import structlog
from fastapi import APIRouter, Depends, Query, Response

from venture_hub.api.deps import get_store
from venture_hub.core.auth import AuthenticatedUser, require_auth
from venture_hub.core.exceptions import ConflictError, ForbiddenError, NotFoundError
from venture_hub.repositories import OrganizationRepository, UserRepository
from venture_hub.schemas.organizations import MemberAdd, OrganizationCreate, OrganizationUpdate
from venture_hub.store.memory import InMemoryStore
from venture_hub.store.models import Organization, UserType

logger = structlog.get_logger(__name__)

router = APIRouter()


def _get_owned(repo: OrganizationRepository, org_id: str, user_id: str) -> Organization:
    org = repo.get(org_id)
    if org is None:
        raise NotFoundError("Organization")
    if org.owner_id != user_id:
        raise ForbiddenError("Only the organization owner can modify it")
    return org


@router.get("")
async def list_organizations(
    organization_type: UserType | None = Query(default=None, alias="type"),
    q: str | None = None,
    offset: int = Query(default=0, ge=0),
    limit: int | None = Query(default=None, ge=1),
    user: AuthenticatedUser = Depends(require_auth),
    store: InMemoryStore = Depends(get_store),
):
    orgs = OrganizationRepository(store).list(organization_type, q, offset, limit)
    return [o.model_dump(mode="json") for o in orgs]


@router.post("", status_code=201)
async def create_organization(
    body: OrganizationCreate,
    user: AuthenticatedUser = Depends(require_auth),
    store: InMemoryStore = Depends(get_store),
):
    org = OrganizationRepository(store).create({**body.model_dump(), "owner_id": user.user_id})
    logger.info("organization_created", organization_id=org.id, user_id=user.user_id)
    return org.model_dump(mode="json")


@router.get("/{org_id}")
async def get_organization(
    org_id: str,
    user: AuthenticatedUser = Depends(require_auth),
    store: InMemoryStore = Depends(get_store),
):
    org = OrganizationRepository(store).get(org_id)
    if org is None:
        raise NotFoundError("Organization")
    return org.model_dump(mode="json")


@router.patch("/{org_id}")
async def update_organization(
    org_id: str,
    body: OrganizationUpdate,
    user: AuthenticatedUser = Depends(require_auth),
    store: InMemoryStore = Depends(get_store),
):
    repo = OrganizationRepository(store)
    org = _get_owned(repo, org_id, user.user_id)
    changes = body.model_dump(exclude_unset=True, exclude_none=True)
    if changes:
        org = repo.update(org_id, changes)
    return org.model_dump(mode="json")


@router.delete("/{org_id}", status_code=204)
async def delete_organization(
    org_id: str,
    user: AuthenticatedUser = Depends(require_auth),
    store: InMemoryStore = Depends(get_store),
):
    repo = OrganizationRepository(store)
    _get_owned(repo, org_id, user.user_id)
    repo.delete(org_id)
    logger.info("organization_deleted", organization_id=org_id, user_id=user.user_id)
    return Response(status_code=204)


@router.get("/{org_id}/members")
async def list_members(
    org_id: str,
    user: AuthenticatedUser = Depends(require_auth),
    store: InMemoryStore = Depends(get_store),
):
    repo = OrganizationRepository(store)
    if repo.get(org_id) is None:
        raise NotFoundError("Organization")
    users = UserRepository(store)
    members = []
    for membership in repo.members(org_id):
        profile = users.get(membership.user_id)
        members.append({
            **membership.model_dump(mode="json"),
            "user": profile.model_dump(mode="json") if profile else None,
        })
    return members


@router.post("/{org_id}/members", status_code=201)
async def add_member(
    org_id: str,
    body: MemberAdd,
    user: AuthenticatedUser = Depends(require_auth),
    store: InMemoryStore = Depends(get_store),
):
    repo = OrganizationRepository(store)
    _get_owned(repo, org_id, user.user_id)
    if UserRepository(store).get(body.user_id) is None:
        raise NotFoundError("User")
    if any(m.user_id == body.user_id for m in repo.members(org_id)):
        raise ConflictError("User is already a member of this organization")
    membership = repo.add_member(org_id, body.user_id, body.role)
    return membership.model_dump(mode="json")
