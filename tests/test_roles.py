"""
API tests for role management and menu permissions.
"""

from __future__ import annotations

import pytest


@pytest.fixture
def role_payload() -> dict:
    return {
        "name": "Dispatcher",
        "description": "Books and tracks shipments",
        "permissions": [
            {"menu_key": "orders", "menu_title": "Orders"},
            {"menu_key": "get-quote", "menu_title": "Quote"},
        ],
    }


class TestRoleCrud:
    async def test_seeded_roles_listed(self, client, admin, headers_for) -> None:
        response = await client.get("/api/roles", headers=headers_for(admin))
        assert response.status_code == 200
        names = {role["name"] for role in response.json()}
        assert {"Super Admin", "Customer"} <= names

    async def test_create_and_fetch_role(self, client, admin, headers_for, role_payload) -> None:
        created = await client.post("/api/roles", json=role_payload, headers=headers_for(admin))
        assert created.status_code == 201
        role = created.json()
        assert role["name"] == "Dispatcher"
        assert {p["menu_key"] for p in role["permissions"]} == {"orders", "get-quote"}

        fetched = await client.get(f"/api/roles/{role['id']}", headers=headers_for(admin))
        assert fetched.status_code == 200
        assert fetched.json()["description"] == "Books and tracks shipments"

    async def test_duplicate_name_conflicts(self, client, admin, headers_for, role_payload) -> None:
        await client.post("/api/roles", json=role_payload, headers=headers_for(admin))
        again = await client.post("/api/roles", json=role_payload, headers=headers_for(admin))
        assert again.status_code == 409

    async def test_unknown_menu_key_rejected(self, client, admin, headers_for) -> None:
        response = await client.post(
            "/api/roles",
            json={"name": "Broken", "permissions": [{"menu_key": "nuclear-codes", "menu_title": "No"}]},
            headers=headers_for(admin),
        )
        assert response.status_code == 400

    async def test_update_keeps_description_when_omitted(self, client, admin, headers_for, role_payload) -> None:
        role = (await client.post("/api/roles", json=role_payload, headers=headers_for(admin))).json()
        response = await client.put(
            f"/api/roles/{role['id']}",
            json={"permissions": [{"menu_key": "balance", "menu_title": "Balance"}]},
            headers=headers_for(admin),
        )
        assert response.status_code == 200
        body = response.json()
        assert body["name"] == "Dispatcher"
        assert body["description"] == "Books and tracks shipments"
        assert [p["menu_key"] for p in body["permissions"]] == ["balance"]

    async def test_update_without_permissions_keeps_them(self, client, admin, headers_for, role_payload) -> None:
        role = (await client.post("/api/roles", json=role_payload, headers=headers_for(admin))).json()
        response = await client.put(
            f"/api/roles/{role['id']}",
            json={"name": "Senior Dispatcher"},
            headers=headers_for(admin),
        )
        assert response.status_code == 200
        assert response.json()["name"] == "Senior Dispatcher"
        assert len(response.json()["permissions"]) == 2

    async def test_delete_custom_role(self, client, admin, headers_for, role_payload) -> None:
        role = (await client.post("/api/roles", json=role_payload, headers=headers_for(admin))).json()
        deleted = await client.delete(f"/api/roles/{role['id']}", headers=headers_for(admin))
        assert deleted.status_code == 200

        missing = await client.get(f"/api/roles/{role['id']}", headers=headers_for(admin))
        assert missing.status_code == 404


class TestSystemRoles:
    async def _role_id(self, client, headers, name: str) -> str:
        roles = (await client.get("/api/roles", headers=headers)).json()
        return next(role["id"] for role in roles if role["name"] == name)

    async def test_system_role_cannot_be_deleted(self, client, admin, headers_for) -> None:
        role_id = await self._role_id(client, headers_for(admin), "Customer")
        response = await client.delete(f"/api/roles/{role_id}", headers=headers_for(admin))
        assert response.status_code == 400

    async def test_system_role_cannot_be_renamed(self, client, admin, headers_for) -> None:
        role_id = await self._role_id(client, headers_for(admin), "Super Admin")
        response = await client.put(f"/api/roles/{role_id}", json={"name": "Root"}, headers=headers_for(admin))
        assert response.status_code == 400

    async def test_seed_defaults_is_idempotent(self, client, admin, headers_for) -> None:
        first = await client.post("/api/roles/seed-defaults", headers=headers_for(admin))
        second = await client.post("/api/roles/seed-defaults", headers=headers_for(admin))
        assert first.status_code == second.status_code == 200
        assert [r["id"] for r in first.json()] == [r["id"] for r in second.json()]

    async def test_menu_structure(self, client, admin, headers_for) -> None:
        response = await client.get("/api/roles/menu-structure", headers=headers_for(admin))
        assert response.status_code == 200
        keys = {item["key"] for item in response.json()}
        assert {"dashboard", "orders", "insurance"} <= keys

    async def test_roles_are_admin_only(self, client, customer, headers_for) -> None:
        response = await client.get("/api/roles", headers=headers_for(customer))
        assert response.status_code == 403
