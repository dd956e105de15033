"""Tests for co-founder chat, goals, commitments and decision endpoints."""

from datetime import timedelta
from unittest.mock import AsyncMock, MagicMock

import pytest

from venture_hub.api.deps import get_agent_engine
from venture_hub.store.models import utc_now

pytestmark = pytest.mark.integration


def _iso(days: int) -> str:
    return (utc_now() + timedelta(days=days)).isoformat()


def _create_goal(client, **overrides) -> dict:
    payload = {"description": "Close seed round", "dueDate": _iso(30), "priority": "high", **overrides}
    response = client.post("/api/agents/co-founder/goals", json=payload)
    assert response.status_code == 201
    return response.json()


class TestCoFounderChat:
    def test_rule_based_reply_without_llm(self, client):
        response = client.post("/api/agents/co-founder/chat", json={"message": "I'm so stressed about payroll"})

        assert response.status_code == 200
        body = response.json()
        assert body["content"].startswith("I can hear that this is challenging right now.")
        assert body["confidence"] == 0.8

    def test_mode_selects_task(self, client):
        body = client.post(
            "/api/agents/co-founder/chat", json={"message": "ideas for marketing", "mode": "brainstorm"}
        ).json()
        assert body["content"].startswith("**Brainstorm Mode: Marketing Strategy**")

    def test_cofounder_used_regardless_of_user_type(self, client, login):
        login("user-a", user_type="investor")

        body = client.post(
            "/api/agents/co-founder/chat", json={"message": "morning", "mode": "daily_standup"}
        ).json()

        assert body["content"].startswith("Good morning!")

    def test_standup_sees_goals(self, client):
        _create_goal(client)
        _create_goal(client, description="Overdue demo", dueDate=_iso(-1))

        body = client.post(
            "/api/agents/co-founder/chat", json={"message": "morning", "mode": "daily_standup"}
        ).json()

        assert "Goals on track: 1/2" in body["content"]

    def test_client_history_drives_blockers(self, client):
        history = [{"role": "user", "content": "still blocked on legal"} for _ in range(3)]

        body = client.post(
            "/api/agents/co-founder/chat",
            json={"message": "morning", "mode": "daily_standup", "conversationHistory": history},
        ).json()

        assert "Blockers detected: 1 items need attention" in body["content"]

    def test_engine_failure_returns_apology(self, client, app):
        engine = MagicMock()
        engine.process_request = AsyncMock(side_effect=RuntimeError("boom"))
        app.dependency_overrides[get_agent_engine] = lambda: engine

        response = client.post("/api/agents/co-founder/chat", json={"message": "hello"})

        assert response.status_code == 500
        assert response.json() == {
            "content": "I'm having trouble right now. Let's try that again.",
            "error": "Co-Founder processing failed",
        }


class TestGoals:
    def test_create_and_list(self, client):
        goal = _create_goal(client)

        assert goal["status"] == "pending"
        assert goal["progress"] == 0
        assert goal["user_id"] == "user-a"
        assert [g["id"] for g in client.get("/api/agents/co-founder/goals").json()] == [goal["id"]]

    def test_goals_are_per_user(self, client, login):
        _create_goal(client)
        login("user-b")
        assert client.get("/api/agents/co-founder/goals").json() == []

    def test_missing_description_is_400(self, client):
        response = client.post("/api/agents/co-founder/goals", json={"dueDate": _iso(3), "priority": "low"})

        assert response.status_code == 400
        assert response.json()["error"] == "Invalid request data"

    def test_naive_due_date_rejected(self, client):
        response = client.post(
            "/api/agents/co-founder/goals",
            json={"description": "x", "dueDate": "2030-01-01T00:00:00", "priority": "low"},
        )
        assert response.status_code == 400

    def test_update_progress(self, client):
        goal = _create_goal(client)

        updated = client.patch(
            f"/api/agents/co-founder/goals/{goal['id']}", json={"progress": 40, "status": "in_progress"}
        ).json()

        assert updated["progress"] == 40
        assert updated["status"] == "in_progress"
        assert updated["description"] == goal["description"]

    def test_progress_out_of_range(self, client):
        goal = _create_goal(client)
        response = client.patch(f"/api/agents/co-founder/goals/{goal['id']}", json={"progress": 150})
        assert response.status_code == 400

    def test_other_user_cannot_modify(self, client, login):
        goal = _create_goal(client)
        login("user-b")

        patch = client.patch(f"/api/agents/co-founder/goals/{goal['id']}", json={"progress": 100})
        delete = client.delete(f"/api/agents/co-founder/goals/{goal['id']}")

        assert patch.status_code == 403
        assert patch.json()["error"] == "Unauthorized to update this goal"
        assert delete.status_code == 403

    def test_unknown_goal_is_404(self, client):
        response = client.patch("/api/agents/co-founder/goals/nope", json={"progress": 10})
        assert response.status_code == 404
        assert response.json()["error"] == "Goal not found"

    def test_delete(self, client):
        goal = _create_goal(client)

        assert client.delete(f"/api/agents/co-founder/goals/{goal['id']}").status_code == 204
        assert client.get("/api/agents/co-founder/goals").json() == []


class TestCommitments:
    def test_complete_commitment(self, client):
        created = client.post(
            "/api/agents/co-founder/commitments", json={"description": "Email 5 investors", "due_date": _iso(2)}
        )
        assert created.status_code == 201
        commitment = created.json()
        assert commitment["completed_at"] is None

        done = client.patch(
            f"/api/agents/co-founder/commitments/{commitment['id']}", json={"status": "completed"}
        ).json()

        assert done["status"] == "completed"
        assert done["completed_at"] is not None

    def test_accountability_check_sees_overdue(self, client):
        client.post("/api/agents/co-founder/commitments", json={"description": "Ship beta", "dueDate": _iso(-2)})

        body = client.post(
            "/api/agents/co-founder/chat", json={"message": "how am I doing", "mode": "accountability_check"}
        ).json()

        insights = {i["type"]: i["value"] for i in body["insights"]}
        assert insights == {"completed_commitments": 0, "overdue_commitments": 1}
        assert "Ship beta" in body["content"]

    def test_unknown_commitment_is_404(self, client):
        response = client.patch("/api/agents/co-founder/commitments/nope", json={"status": "completed"})
        assert response.status_code == 404


class TestDecisions:
    def test_analyze(self, client):
        body = client.post(
            "/api/agents/co-founder/decision/analyze",
            json={"decision": "Should we fire our agency and hire in-house?", "options": ["fire", "keep"]},
        ).json()

        insights = {i["type"]: i["value"] for i in body["insights"]}
        assert insights["impact"] == "high"
        assert insights["reversibility"] == "irreversible"
        assert body["content"].startswith("Let's work through this decision systematically.")

    def test_scenarios(self, client):
        body = client.post("/api/agents/co-founder/decision/scenarios", json={"decision": "Expand to EU"}).json()

        assert body["decision"] == "Expand to EU"
        assert sum(s["probability"] for s in body["scenarios"].values()) == 100

    def test_premortem(self, client):
        body = client.post("/api/agents/co-founder/decision/premortem", json={"decision": "Expand to EU"}).json()

        assert len(body["potential_failures"]) == 3
        assert body["mitigation_strategies"]

    def test_empty_decision_rejected(self, client):
        assert client.post("/api/agents/co-founder/decision/scenarios", json={"decision": ""}).status_code == 400
