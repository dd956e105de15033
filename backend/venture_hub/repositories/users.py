"""User profile persistence."""

from __future__ import annotations

from typing import Any

import structlog

from venture_hub.store.memory import InMemoryStore
from venture_hub.store.models import User, UserType

logger = structlog.get_logger(__name__)

# Profile fields a new identity inherits from a record with the same email
ADOPTED_FIELDS = ("first_name", "last_name", "profile_image_url", "preferences")


class UserRepository:
    def __init__(self, store: InMemoryStore):
        self.store = store
        self.table = store.users

    def get(self, user_id: str) -> User | None:
        return self.table.get(user_id)

    def get_by_email(self, email: str) -> User | None:
        for user in self.table.filter(lambda u: u.email == email):
            return user
        return None

    def create(self, data: dict[str, Any]) -> User:
        return self.table.create(data)

    def update(self, user_id: str, changes: dict[str, Any]) -> User | None:
        return self.table.update(user_id, changes)

    def delete(self, user_id: str) -> bool:
        return self.table.delete(user_id)

    def list(self, offset: int = 0, limit: int | None = None) -> list[User]:
        return self.table.list(offset, limit)

    def list_by_type(self, user_type: UserType) -> list[User]:
        return self.table.filter(lambda u: u.user_type == user_type)

    def search(self, query: str) -> list[User]:
        return self.table.search(query)

    def upsert(self, user_id: str, claims: dict[str, Any]) -> User:
        """Create or refresh a profile from identity claims.

        Existing name and picture are kept when the claims leave them blank.
        """
        existing = self.table.get(user_id)
        if existing is None:
            email = claims.get("email")
            by_email = self.get_by_email(email) if email else None
            if by_email is not None:
                logger.info("user_matched_by_email", user_id=user_id, existing_id=by_email.id)

            data = {
                "email": email,
                "first_name": claims.get("first_name"),
                "last_name": claims.get("last_name"),
                "profile_image_url": claims.get("profile_image_url"),
                "user_type": claims.get("user_type"),
            }
            data = {k: v for k, v in data.items() if v}
            if by_email is not None:
                data = {**by_email.model_dump(include=set(ADOPTED_FIELDS)), **data}
            user = self.table.create(data, record_id=user_id)
            logger.info("user_provisioned", user_id=user_id)
            return user

        changes = {
            field: claims[field]
            for field in ("email", "first_name", "last_name", "profile_image_url")
            if claims.get(field) and claims[field] != getattr(existing, field)
        }
        if not changes:
            return existing
        return self.table.update(user_id, changes)

    def provision(self, user_id: str, claims: dict[str, Any]) -> User:
        """Return the profile for an authenticated user, creating it on first sight."""
        existing = self.table.get(user_id)
        if existing is not None:
            return existing
        return self.upsert(user_id, claims)
