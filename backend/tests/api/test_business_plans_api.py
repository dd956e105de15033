"""Tests for business plan CRUD and visibility rules."""

import pytest

pytestmark = pytest.mark.integration


def _create(client, **overrides) -> dict:
    response = client.post("/api/business-plans", json={"name": "Solar Co", "stage": "Seed", **overrides})
    assert response.status_code == 201
    return response.json()


class TestBusinessPlans:
    def test_create_defaults_to_private(self, client):
        plan = _create(client)

        assert plan["user_id"] == "user-a"
        assert plan["visibility"] == "private"
        assert plan["content"] == ""

    def test_list_returns_only_own_plans_newest_first(self, client):
        first = _create(client, name="First")
        second = _create(client, name="Second")
        client.patch(f"/api/business-plans/{first['id']}", json={"description": "revised"})

        plans = client.get("/api/business-plans").json()

        assert [p["id"] for p in plans] == [first["id"], second["id"]]

    def test_private_plan_hidden_from_others(self, client, login):
        plan = _create(client)
        login("user-b")

        response = client.get(f"/api/business-plans/{plan['id']}")

        assert response.status_code == 403
        assert response.json()["code"] == "FORBIDDEN"

    def test_shared_plan_is_owner_only(self, client, login):
        plan = _create(client, visibility="shared")
        login("user-b")
        assert client.get(f"/api/business-plans/{plan['id']}").status_code == 403

    def test_public_plan_readable_but_not_writable(self, client, login):
        plan = _create(client, visibility="public")
        login("user-b")

        assert client.get(f"/api/business-plans/{plan['id']}").status_code == 200
        assert client.patch(f"/api/business-plans/{plan['id']}", json={"name": "Mine now"}).status_code == 403
        assert client.delete(f"/api/business-plans/{plan['id']}").status_code == 403

    def test_update_merges_fields(self, client):
        plan = _create(client, industry="Energy")

        updated = client.patch(f"/api/business-plans/{plan['id']}", json={"funding_goal": 500000}).json()

        assert updated["funding_goal"] == 500000
        assert updated["industry"] == "Energy"

    def test_negative_funding_goal_rejected(self, client):
        response = client.post("/api/business-plans", json={"name": "X", "funding_goal": -1})
        assert response.status_code == 400

    def test_delete_then_404(self, client):
        plan = _create(client)

        assert client.delete(f"/api/business-plans/{plan['id']}").status_code == 204
        response = client.get(f"/api/business-plans/{plan['id']}")
        assert response.status_code == 404
        assert response.json()["error"] == "Business plan not found"
