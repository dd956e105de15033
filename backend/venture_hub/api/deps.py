"""Shared FastAPI dependencies."""

from fastapi import Depends, Request

from venture_hub.agents.dispatcher import AgentEngine
from venture_hub.core.auth import AuthenticatedUser, require_auth
from venture_hub.core.config import get_settings
from venture_hub.llm.service import AIService, get_ai_service
from venture_hub.repositories import UserRepository
from venture_hub.store.memory import InMemoryStore
from venture_hub.store.models import User, UserType


def get_store(request: Request) -> InMemoryStore:
    return request.app.state.store


def get_ai() -> AIService:
    return get_ai_service()


def get_agent_engine(
    store: InMemoryStore = Depends(get_store),
    ai: AIService = Depends(get_ai),
) -> AgentEngine:
    return AgentEngine(store, ai, get_settings())


def get_current_profile(
    user: AuthenticatedUser = Depends(require_auth),
    store: InMemoryStore = Depends(get_store),
) -> User:
    """The signed-in user's stored profile, provisioned on first access."""
    return UserRepository(store).provision(user.user_id, user.claims)


def user_type_of(profile: User) -> UserType:
    """The stored profile's user type.

    Profiles are provisioned from the identity claims, so a ``user_type`` claim
    seeds it and later ``PATCH /users/me`` changes take precedence.
    """
    return profile.user_type
