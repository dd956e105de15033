"""Organization and membership persistence."""

from __future__ import annotations

from typing import Any

from venture_hub.store.memory import InMemoryStore
from venture_hub.store.models import Membership, Organization, UserType


class OrganizationRepository:
    def __init__(self, store: InMemoryStore):
        self.store = store
        self.table = store.organizations
        self.memberships = store.memberships

    def create(self, data: dict[str, Any]) -> Organization:
        """Create an organization and enrol its owner as the first member."""
        org = self.table.create(data)
        self.memberships.create({"organization_id": org.id, "user_id": org.owner_id, "role": "owner"})
        return org

    def get(self, org_id: str) -> Organization | None:
        return self.table.get(org_id)

    def update(self, org_id: str, changes: dict[str, Any]) -> Organization | None:
        return self.table.update(org_id, changes)

    def delete(self, org_id: str) -> bool:
        if not self.table.delete(org_id):
            return False
        for membership in self.memberships.by_owner(org_id):
            self.memberships.delete(membership.id)
        return True

    def list(
        self,
        organization_type: UserType | None = None,
        query: str | None = None,
        offset: int = 0,
        limit: int | None = None,
    ) -> list[Organization]:
        orgs = self.table.search(query) if query else self.table.list()
        if organization_type is not None:
            orgs = [o for o in orgs if o.organization_type == organization_type]
        if limit is None:
            return orgs[offset:]
        return orgs[offset:offset + limit]

    def owned_by(self, user_id: str) -> list[Organization]:
        return self.table.by_owner(user_id)

    def for_user(self, user_id: str) -> list[Organization]:
        """Organizations the user owns or belongs to, without duplicates."""
        seen: dict[str, Organization] = {o.id: o for o in self.owned_by(user_id)}
        for membership in self.memberships.filter(lambda m: m.user_id == user_id):
            org = self.table.get(membership.organization_id)
            if org is not None:
                seen.setdefault(org.id, org)
        return list(seen.values())

    def members(self, org_id: str) -> list[Membership]:
        return self.memberships.by_owner(org_id)

    def add_member(self, org_id: str, user_id: str, role: str = "member") -> Membership:
        """Add a member, or return the existing membership unchanged."""
        for membership in self.members(org_id):
            if membership.user_id == user_id:
                return membership
        return self.memberships.create({"organization_id": org_id, "user_id": user_id, "role": role})
