"""Tests for organization CRUD, ownership and membership endpoints."""

from datetime import datetime

import pytest

pytestmark = pytest.mark.integration


def _create(client, **overrides) -> dict:
    payload = {
        "name": "Acme Angels",
        "organization_type": "investor",
        "industry": "Venture Capital",
        "location": "Denver, CO",
        **overrides,
    }
    response = client.post("/api/organizations", json=payload)
    assert response.status_code == 201
    return response.json()


class TestOrganizationCrud:
    def test_create_get_round_trip(self, client):
        created = _create(client)

        assert created["owner_id"] == "user-a"
        assert created["id"].startswith("org-")

        fetched = client.get(f"/api/organizations/{created['id']}").json()
        assert fetched == created

    def test_list_filters_by_type_and_query(self, client):
        _create(client, name="Denver Lending Co", organization_type="lender")

        lenders = client.get("/api/organizations", params={"type": "lender"}).json()
        assert {o["name"] for o in lenders} == {"Capital Bridge Bank", "Denver Lending Co"}

        found = client.get("/api/organizations", params={"q": "denver"}).json()
        assert [o["name"] for o in found] == ["Denver Lending Co"]

    def test_list_paginates(self, client):
        page = client.get("/api/organizations", params={"offset": 1, "limit": 2}).json()
        assert [o["name"] for o in page] == ["Green Impact Foundation", "StartupBoost Accelerator"]

    def test_owner_can_update(self, client):
        org = _create(client)

        response = client.patch(f"/api/organizations/{org['id']}", json={"size": "11-50", "name": None})

        assert response.status_code == 200
        assert response.json()["size"] == "11-50"
        assert response.json()["name"] == "Acme Angels"
        assert datetime.fromisoformat(response.json()["updated_at"]) > datetime.fromisoformat(org["updated_at"])

    def test_non_owner_cannot_update_or_delete(self, client, login):
        org = _create(client)
        login("user-b")

        patch = client.patch(f"/api/organizations/{org['id']}", json={"name": "Hijacked"})
        delete = client.delete(f"/api/organizations/{org['id']}")

        assert patch.status_code == 403
        assert patch.json()["error"] == "Only the organization owner can modify it"
        assert delete.status_code == 403
        assert client.get(f"/api/organizations/{org['id']}").json()["name"] == "Acme Angels"

    def test_delete(self, client):
        org = _create(client)

        assert client.delete(f"/api/organizations/{org['id']}").status_code == 204
        missing = client.get(f"/api/organizations/{org['id']}")
        assert missing.status_code == 404
        assert missing.json()["error"] == "Organization not found"

    def test_invalid_type_rejected(self, client):
        response = client.post("/api/organizations", json={"name": "X", "organization_type": "pirate"})
        assert response.status_code == 400


class TestMembership:
    def test_owner_listed_as_first_member(self, client):
        org = _create(client)

        members = client.get(f"/api/organizations/{org['id']}/members").json()

        assert [(m["user_id"], m["role"]) for m in members] == [("user-a", "owner")]

    def test_add_existing_user(self, client):
        org = _create(client)

        response = client.post(
            f"/api/organizations/{org['id']}/members",
            json={"user_id": "investor-super-user", "role": "partner"},
        )

        assert response.status_code == 201
        members = client.get(f"/api/organizations/{org['id']}/members").json()
        added = members[1]
        assert added["role"] == "partner"
        assert added["user"]["email"] == "investor@superuser.com"

    def test_add_unknown_user_is_404(self, client):
        org = _create(client)

        response = client.post(f"/api/organizations/{org['id']}/members", json={"user_id": "ghost"})

        assert response.status_code == 404
        assert response.json()["error"] == "User not found"

    def test_add_existing_member_is_409(self, client):
        org = _create(client)
        url = f"/api/organizations/{org['id']}/members"
        client.post(url, json={"user_id": "investor-super-user"})

        response = client.post(url, json={"user_id": "investor-super-user", "role": "admin"})

        assert response.status_code == 409
        assert response.json()["code"] == "CONFLICT"

    def test_member_sees_organization_in_my_organizations(self, client, login):
        org = _create(client)
        client.post(f"/api/organizations/{org['id']}/members", json={"user_id": "investor-super-user"})

        login("investor-super-user")
        mine = client.get("/api/users/organizations").json()

        assert org["id"] in {o["id"] for o in mine}
        assert "org-1" in {o["id"] for o in mine}
