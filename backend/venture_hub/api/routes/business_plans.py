from fastapi import APIRouter, Depends, Response

from venture_hub.api.deps import get_store
from venture_hub.core.auth import AuthenticatedUser, require_auth
from venture_hub.core.exceptions import ForbiddenError, NotFoundError
from venture_hub.repositories import BusinessPlanRepository
from venture_hub.schemas.business_plans import BusinessPlanCreate, BusinessPlanUpdate
from venture_hub.store.memory import InMemoryStore
from venture_hub.store.models import BusinessPlan, Visibility

router = APIRouter()


def _get_plan(repo: BusinessPlanRepository, plan_id: str, user_id: str, *, write: bool) -> BusinessPlan:
    plan = repo.get(plan_id)
    if plan is None:
        raise NotFoundError("Business plan")
    if plan.user_id == user_id:
        return plan
    if not write and plan.visibility == Visibility.PUBLIC:
        return plan
    raise ForbiddenError("You do not have access to this business plan")


@router.get("")
async def list_business_plans(
    user: AuthenticatedUser = Depends(require_auth),
    store: InMemoryStore = Depends(get_store),
):
    plans = BusinessPlanRepository(store).list_for_user(user.user_id)
    return [p.model_dump(mode="json") for p in plans]


@router.post("", status_code=201)
async def create_business_plan(
    body: BusinessPlanCreate,
    user: AuthenticatedUser = Depends(require_auth),
    store: InMemoryStore = Depends(get_store),
):
    plan = BusinessPlanRepository(store).create(user.user_id, body.model_dump())
    return plan.model_dump(mode="json")


@router.get("/{plan_id}")
async def get_business_plan(
    plan_id: str,
    user: AuthenticatedUser = Depends(require_auth),
    store: InMemoryStore = Depends(get_store),
):
    plan = _get_plan(BusinessPlanRepository(store), plan_id, user.user_id, write=False)
    return plan.model_dump(mode="json")


@router.patch("/{plan_id}")
async def update_business_plan(
    plan_id: str,
    body: BusinessPlanUpdate,
    user: AuthenticatedUser = Depends(require_auth),
    store: InMemoryStore = Depends(get_store),
):
    repo = BusinessPlanRepository(store)
    plan = _get_plan(repo, plan_id, user.user_id, write=True)
    changes = body.model_dump(exclude_unset=True, exclude_none=True)
    if changes:
        plan = repo.update(plan_id, changes)
    return plan.model_dump(mode="json")


@router.delete("/{plan_id}", status_code=204)
async def delete_business_plan(
    plan_id: str,
    user: AuthenticatedUser = Depends(require_auth),
    store: InMemoryStore = Depends(get_store),
):
    repo = BusinessPlanRepository(store)
    _get_plan(repo, plan_id, user.user_id, write=True)
    repo.delete(plan_id)
    return Response(status_code=204)
