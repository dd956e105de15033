"""Tests for profile endpoints and platform-wide stats and search."""

import pytest

pytestmark = pytest.mark.integration


class TestProfile:
    def test_me_provisions_profile_on_first_access(self, client, store):
        assert store.users.get("user-a") is None

        me = client.get("/api/users/me").json()

        assert me["id"] == "user-a"
        assert me["email"] == "user-a@example.com"
        assert me["user_type"] == "entrepreneur"
        assert store.users.get("user-a") is not None

    def test_patch_me(self, client):
        client.get("/api/users/me")

        updated = client.patch(
            "/api/users/me",
            json={"user_type": "investor", "preferences": {"stages": ["Seed"]}, "first_name": None},
        ).json()

        assert updated["user_type"] == "investor"
        assert updated["preferences"] == {"stages": ["Seed"]}
        assert updated["first_name"] == "User-A"

    def test_patch_invalid_user_type(self, client):
        assert client.patch("/api/users/me", json={"user_type": "wizard"}).status_code == 400


class TestPlatform:
    def test_stats(self, client):
        body = client.get("/api/platform/stats").json()

        assert body["totals"]["organizations"] == 4
        assert body["totals"]["business_plans"] == 3
        assert body["users_by_type"]["lender"] == 3
        assert body["users_by_type"]["admin"] == 1

    def test_search_hides_non_public_plans_of_others(self, client):
        body = client.get("/api/platform/search", params={"q": "platform"}).json()

        assert [p["name"] for p in body["business_plans"]] == ["FinTech Credit Analytics Platform"]

    def test_search_includes_own_private_plans(self, client):
        client.post("/api/business-plans", json={"name": "My Platform Idea"})

        names = {p["name"] for p in client.get("/api/platform/search", params={"q": "platform"}).json()["business_plans"]}

        assert "My Platform Idea" in names

    def test_search_users(self, client):
        users = client.get("/api/platform/search", params={"q": "credit"}).json()["users"]
        assert {"id", "first_name", "last_name", "user_type"} == set(users[0])
        assert "Credit" in {u["first_name"] for u in users}

    def test_search_requires_query(self, client):
        assert client.get("/api/platform/search").status_code == 400

    def test_blank_query_is_400(self, client):
        response = client.get("/api/platform/search", params={"q": "   "})

        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_ERROR"
