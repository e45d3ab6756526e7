"""Test organization and department API endpoints"""

import pytest
from fastapi import status


@pytest.fixture
async def tenant(client) -> dict:
    response = await client.post(
        "/api/tenants",
        json={"name": "Acme Corp", "code": "acme", "domain": "acme.com", "type": "enterprise"},
    )
    return response.json()["data"]


@pytest.fixture
async def organization(client, tenant) -> dict:
    response = await client.post(
        "/api/organizations", json={"tenant_id": tenant["id"], "name": "Acme Labs", "code": "LABS"}
    )
    assert response.status_code == status.HTTP_201_CREATED, response.text
    return response.json()["data"]


async def create_department(client, organization: dict, code: str, parent_id: str | None = None) -> dict:
    response = await client.post(
        "/api/departments",
        json={
            "tenant_id": organization["tenant_id"],
            "organization_id": organization["id"],
            "name": f"Department {code}",
            "code": code,
            "parent_id": parent_id,
        },
    )
    assert response.status_code == status.HTTP_201_CREATED, response.text
    return response.json()["data"]


class TestOrganizationEndpoints:
    async def test_create_organization(self, client, organization):
        """Test a new organization starts initializing with the default type"""
        assert organization["status"] == "initializing"
        assert organization["type"] == "business"
        assert organization["code"] == "LABS"

    async def test_unknown_tenant(self, client):
        """Test organizations need an existing tenant"""
        response = await client.post(
            "/api/organizations", json={"tenant_id": "missing", "name": "Labs", "code": "LABS"}
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND

    async def test_duplicate_code_in_tenant(self, client, tenant, organization):
        """Test codes are unique within a tenant"""
        response = await client.post(
            "/api/organizations", json={"tenant_id": tenant["id"], "name": "Other", "code": "LABS"}
        )

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.json()["details"]["field"] == "code"

    async def test_update_and_lifecycle(self, client, organization):
        """
        GIVEN an initializing organization
        WHEN it is renamed and moved through its statuses
        THEN each response carries the new state and suspending too early conflicts
        """
        # GIVEN
        base = f"/api/organizations/{organization['id']}"

        # WHEN
        early = await client.post(f"{base}/suspend")
        renamed = await client.patch(base, json={"name": "Acme Research"})

        # THEN
        assert early.status_code == status.HTTP_409_CONFLICT
        assert renamed.json()["data"]["name"] == "Acme Research"
        assert renamed.json()["message"] == "Organization updated"
        for action, expected in (("activate", "active"), ("suspend", "suspended"), ("deactivate", "inactive")):
            response = await client.post(f"{base}/{action}")
            assert response.status_code == status.HTTP_200_OK
            assert response.json()["data"]["status"] == expected
        assert (await client.get(base)).json()["data"]["status"] == "inactive"


class TestDepartmentEndpoints:
    async def test_nested_departments(self, client, organization):
        """Test a child sits one level below its parent with an extended path"""
        parent = await create_department(client, organization, "ENG")
        child = await create_department(client, organization, "PLAT", parent["id"])

        assert parent["level"] == 1
        assert parent["path"] == f"/{parent['id']}"
        assert child["level"] == 2
        assert child["path"] == f"{parent['path']}/{child['id']}"
        assert child["type"] == "functional"

    async def test_organization_must_belong_to_tenant(self, client, organization):
        """Test a department cannot point at another tenant's organization"""
        response = await client.post(
            "/api/departments",
            json={
                "tenant_id": "other-tenant",
                "organization_id": organization["id"],
                "name": "Finance",
                "code": "FIN",
            },
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["details"]["resource_type"] == "Organization"

    async def test_move_rebases_descendants(self, client, organization):
        """
        GIVEN ENG > PLAT > STOR and a separate OPS root
        WHEN PLAT moves under OPS
        THEN PLAT and STOR are rewritten below OPS
        """
        # GIVEN
        eng = await create_department(client, organization, "ENG")
        plat = await create_department(client, organization, "PLAT", eng["id"])
        stor = await create_department(client, organization, "STOR", plat["id"])
        ops = await create_department(client, organization, "OPS")

        # WHEN
        response = await client.post(f"/api/departments/{plat['id']}/move", json={"parent_id": ops["id"]})

        # THEN
        assert response.status_code == status.HTTP_200_OK
        moved = response.json()["data"]
        assert moved["parent_id"] == ops["id"]
        assert moved["path"] == f"/{ops['id']}/{plat['id']}"
        storage = (await client.get(f"/api/departments/{stor['id']}")).json()["data"]
        assert storage["path"] == f"/{ops['id']}/{plat['id']}/{stor['id']}"
        assert storage["level"] == 3

    async def test_move_to_root_and_cycle(self, client, organization):
        """Test a null parent makes a root and a move below a descendant is rejected"""
        eng = await create_department(client, organization, "ENG")
        plat = await create_department(client, organization, "PLAT", eng["id"])

        cycle = await client.post(f"/api/departments/{eng['id']}/move", json={"parent_id": plat["id"]})
        assert cycle.status_code == status.HTTP_400_BAD_REQUEST

        root = await client.post(f"/api/departments/{plat['id']}/move", json={"parent_id": None})
        assert root.json()["data"]["level"] == 1
        assert root.json()["data"]["path"] == f"/{plat['id']}"

    async def test_unknown_department(self, client):
        """Test 404 for a missing department"""
        response = await client.get("/api/departments/missing")

        assert response.status_code == status.HTTP_404_NOT_FOUND
