"""Co-founder goals and commitments."""

from datetime import datetime
from typing import Any

from venture_hub.store.memory import InMemoryStore
from venture_hub.store.models import (
    CoFounderCommitment,
    CoFounderGoal,
    CommitmentStatus,
    GoalStatus,
    utc_now,
)


class CoFounderRepository:
    def __init__(self, store: InMemoryStore):
        self.store = store
        self.goals = store.goals
        self.commitments = store.commitments

    # Goals

    def create_goal(self, user_id: str, data: dict[str, Any]) -> CoFounderGoal:
        """New goals always start pending with zero progress."""
        return self.goals.create({
            **data,
            "user_id": user_id,
            "status": GoalStatus.PENDING,
            "progress": 0,
        })

    def get_goal(self, goal_id: str) -> CoFounderGoal | None:
        return self.goals.get(goal_id)

    def list_goals(self, user_id: str) -> list[CoFounderGoal]:
        return self.goals.by_owner(user_id)

    def update_goal(self, goal_id: str, changes: dict[str, Any]) -> CoFounderGoal | None:
        return self.goals.update(goal_id, changes)

    def delete_goal(self, goal_id: str) -> bool:
        return self.goals.delete(goal_id)

    # Commitments

    def create_commitment(self, user_id: str, data: dict[str, Any]) -> CoFounderCommitment:
        return self.commitments.create({
            **data,
            "user_id": user_id,
            "status": CommitmentStatus.PENDING,
        })

    def get_commitment(self, commitment_id: str) -> CoFounderCommitment | None:
        return self.commitments.get(commitment_id)

    def list_commitments(self, user_id: str) -> list[CoFounderCommitment]:
        return self.commitments.by_owner(user_id)

    def update_commitment(self, commitment_id: str, changes: dict[str, Any]) -> CoFounderCommitment | None:
        """Merge changes; completing a commitment stamps ``completed_at``, reopening clears it."""
        changes = dict(changes)
        status = changes.get("status")
        if status == CommitmentStatus.COMPLETED and "completed_at" not in changes:
            changes["completed_at"] = utc_now()
        elif status is not None and status != CommitmentStatus.COMPLETED:
            changes["completed_at"] = None
        return self.commitments.update(commitment_id, changes)

    def overdue_commitments(self, user_id: str, now: datetime | None = None) -> list[CoFounderCommitment]:
        now = now or utc_now()
        return [
            c for c in self.list_commitments(user_id)
            if c.status == CommitmentStatus.OVERDUE
            or (c.status == CommitmentStatus.PENDING and c.due_date < now)
        ]
