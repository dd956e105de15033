"""Session login/logout.

The browser completes the OAuth flow with Google or Azure AD and posts the
ID token here. A verified token becomes a signed session cookie.
"""

import structlog
from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel, Field

from venture_hub.api.deps import get_store
from venture_hub.core.auth import (
    SESSION_KEY,
    AuthenticatedUser,
    IdentityProvider,
    require_auth,
    session_claims,
    verify_id_token,
)
from venture_hub.repositories import UserRepository
from venture_hub.store.memory import InMemoryStore

logger = structlog.get_logger(__name__)

router = APIRouter()


class SessionRequest(BaseModel):
    provider: IdentityProvider
    id_token: str = Field(min_length=1)


@router.get("/user")
async def current_user(
    user: AuthenticatedUser = Depends(require_auth),
    store: InMemoryStore = Depends(get_store),
):
    """The signed-in user's profile."""
    profile = UserRepository(store).provision(user.user_id, user.claims)
    return profile.model_dump(mode="json")


@router.post("/session")
async def create_session(
    body: SessionRequest,
    request: Request,
    store: InMemoryStore = Depends(get_store),
):
    """Exchange a provider ID token for a session cookie."""
    claims = verify_id_token(body.id_token, body.provider)
    kept = session_claims(claims, body.provider)
    profile = UserRepository(store).upsert(kept["sub"], kept)

    request.session[SESSION_KEY] = kept
    logger.info("session_created", user_id=profile.id, provider=str(body.provider))
    return profile.model_dump(mode="json")


@router.post("/logout")
async def logout(request: Request):
    user_id = (request.session.get(SESSION_KEY) or {}).get("sub")
    request.session.clear()
    logger.info("session_cleared", user_id=user_id)
    return {"success": True}
