"""Builds the AgentContext a handler sees for one request."""

from typing import Any

from venture_hub.agents.base import AgentContext, AgentRequest
from venture_hub.core.config import Settings, get_settings
from venture_hub.repositories import (
    BusinessPlanRepository,
    CoFounderRepository,
    ConversationRepository,
    UserRepository,
)
from venture_hub.store.memory import InMemoryStore
from venture_hub.store.models import GoalStatus, UserType, utc_now

PERMISSIONS: dict[UserType, list[str]] = {
    UserType.ENTREPRENEUR: ["business_plans:write", "organizations:write", "cofounder:use"],
    UserType.INVESTOR: ["business_plans:read_shared", "deals:review", "portfolio:manage"],
    UserType.LENDER: ["business_plans:read_shared", "credit:assess", "loans:manage"],
    UserType.GRANTOR: ["business_plans:read_shared", "grants:review", "impact:evaluate"],
    UserType.PARTNER: ["business_plans:read_shared", "programs:manage", "startups:match"],
    UserType.TEAM_MEMBER: ["organizations:read", "tasks:manage"],
    UserType.ADMIN: ["platform:admin", "users:manage", "organizations:manage"],
}


def _history_entry(message: Any) -> dict[str, str] | None:
    if not isinstance(message, dict) or not message.get("content"):
        return None
    role = message.get("role") if message.get("role") in ("user", "assistant") else "user"
    return {"role": role, "content": str(message["content"])}


class ContextBuilder:
    def __init__(self, store: InMemoryStore, settings: Settings | None = None):
        self.store = store
        self.settings = settings or get_settings()

    def conversation_history(self, request: AgentRequest) -> list[dict[str, str]]:
        """Client-supplied history when present, else recent stored turns; then the current message."""
        supplied = request.context.get("conversation_history")
        if isinstance(supplied, list) and supplied:
            history = [entry for entry in map(_history_entry, supplied) if entry]
        else:
            recent = ConversationRepository(self.store).recent(
                request.user_id, self.settings.recent_message_limit
            )
            history = [{"role": m.role.value, "content": m.content} for m in recent]
        history.append({"role": "user", "content": request.message})
        return history

    def relevant_data(self, request: AgentRequest) -> dict[str, Any]:
        user_id = request.user_id
        cofounder = CoFounderRepository(self.store)
        now = utc_now()

        overdue_ids = {c.id for c in cofounder.overdue_commitments(user_id, now)}
        commitments = []
        for commitment in cofounder.list_commitments(user_id):
            data = commitment.model_dump(mode="json")
            if commitment.id in overdue_ids:
                data["status"] = "overdue"
            commitments.append(data)

        goals = []
        for goal in cofounder.list_goals(user_id):
            data = goal.model_dump(mode="json")
            if goal.status not in (GoalStatus.COMPLETED, GoalStatus.OVERDUE) and goal.due_date < now:
                data["status"] = GoalStatus.OVERDUE.value
            goals.append(data)

        user = UserRepository(self.store).get(user_id)
        plans = BusinessPlanRepository(self.store).list_for_user(user_id)

        extra = {k: v for k, v in request.context.items() if k != "conversation_history"}
        if plans and plans[0].stage:
            extra.setdefault("stage", plans[0].stage)
        return {
            **extra,
            "user": user.model_dump(mode="json") if user else None,
            "business_plans": [p.model_dump(mode="json") for p in plans],
            "goals": goals,
            "commitments": commitments,
        }

    def build(self, request: AgentRequest) -> AgentContext:
        return AgentContext(
            user_id=request.user_id,
            user_type=request.user_type,
            current_task=request.task_type,
            conversation_history=self.conversation_history(request),
            relevant_data=self.relevant_data(request),
            permissions=list(PERMISSIONS.get(request.user_type, [])),
        )
