"""Business plan persistence."""

from typing import Any

from venture_hub.store.memory import InMemoryStore
from venture_hub.store.models import BusinessPlan, Visibility


class BusinessPlanRepository:
    def __init__(self, store: InMemoryStore):
        self.store = store
        self.table = store.business_plans

    def create(self, user_id: str, data: dict[str, Any]) -> BusinessPlan:
        return self.table.create({**data, "user_id": user_id})

    def get(self, plan_id: str) -> BusinessPlan | None:
        return self.table.get(plan_id)

    def update(self, plan_id: str, changes: dict[str, Any]) -> BusinessPlan | None:
        return self.table.update(plan_id, changes)

    def delete(self, plan_id: str) -> bool:
        return self.table.delete(plan_id)

    def list_for_user(self, user_id: str) -> list[BusinessPlan]:
        """A user's plans, most recently updated first."""
        return sorted(self.table.by_owner(user_id), key=lambda p: p.updated_at, reverse=True)

    def latest_for_user(self, user_id: str) -> BusinessPlan | None:
        plans = self.list_for_user(user_id)
        return plans[0] if plans else None

    def list_public(self) -> list[BusinessPlan]:
        return self.table.filter(lambda p: p.visibility == Visibility.PUBLIC)

    def search(self, query: str) -> list[BusinessPlan]:
        return self.table.search(query)

    def count(self) -> int:
        return len(self.table)
