from collections import Counter

from fastapi import APIRouter, Depends, Query

from venture_hub.api.deps import get_store
from venture_hub.core.auth import AuthenticatedUser, require_auth
from venture_hub.core.exceptions import ValidationError
from venture_hub.repositories import BusinessPlanRepository, UserRepository
from venture_hub.store.memory import InMemoryStore
from venture_hub.store.models import UserType, Visibility

router = APIRouter()


@router.get("/stats")
async def platform_stats(
    user: AuthenticatedUser = Depends(require_auth),
    store: InMemoryStore = Depends(get_store),
):
    """Record totals per domain and user counts per user type."""
    by_type = Counter(u.user_type for u in store.users.list())
    return {
        "totals": store.counts(),
        "users_by_type": {t.value: by_type.get(t, 0) for t in UserType},
    }


@router.get("/search")
async def platform_search(
    q: str = Query(min_length=1),
    user: AuthenticatedUser = Depends(require_auth),
    store: InMemoryStore = Depends(get_store),
):
    """Substring search over users and the business plans the caller can see."""
    q = q.strip()
    if not q:
        raise ValidationError("Search query must not be blank")
    users = UserRepository(store).search(q)
    plans = [
        p for p in BusinessPlanRepository(store).search(q)
        if p.user_id == user.user_id or p.visibility == Visibility.PUBLIC
    ]
    return {
        "users": [
            {
                "id": u.id,
                "first_name": u.first_name,
                "last_name": u.last_name,
                "user_type": u.user_type.value,
            }
            for u in users
        ],
        "business_plans": [p.model_dump(mode="json") for p in plans],
    }
