from fastapi import APIRouter

from venture_hub.api.routes import (
    agents,
    auth,
    business_plans,
    capabilities,
    health,
    organizations,
    platform,
    users,
)

api_router = APIRouter()

api_router.include_router(health.router, tags=["health"])
api_router.include_router(capabilities.router, tags=["capabilities"])
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(organizations.router, prefix="/organizations", tags=["organizations"])
api_router.include_router(business_plans.router, prefix="/business-plans", tags=["business-plans"])
api_router.include_router(platform.router, prefix="/platform", tags=["platform"])
api_router.include_router(agents.router, prefix="/agents", tags=["agents"])
