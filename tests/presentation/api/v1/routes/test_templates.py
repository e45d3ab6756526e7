"""Test notification template API endpoints"""

import pytest
from fastapi import status

from tests.fakes import TENANT_ID

TEMPLATE = {
    "tenant_id": TENANT_ID,
    "name": "Welcome email",
    "type": "email",
    "content": "Hello {{name}}",
    "category": "onboarding",
    "subject": "Welcome",
}


@pytest.fixture
async def template(client) -> dict:
    response = await client.post("/api/templates", json=TEMPLATE)
    assert response.status_code == status.HTTP_201_CREATED, response.text
    return response.json()["data"]


async def approve_and_activate(client, template_id: str) -> dict:
    base = f"/api/templates/{template_id}"
    await client.post(f"{base}/submit")
    await client.post(f"{base}/approve", json={"comments": "ok"})
    response = await client.post(f"{base}/activate")
    assert response.status_code == status.HTTP_200_OK, response.text
    return response.json()["data"]


async def test_create_template(template):
    """Test defaults and extracted variables"""
    assert template["status"] == "draft"
    assert template["review_status"] == "pending"
    assert template["variables"] == ["name"]
    assert template["template_version"] == 1
    assert template["is_valid"] is True


async def test_duplicate_name(client, template):
    response = await client.post("/api/templates", json=TEMPLATE)

    assert response.status_code == status.HTTP_409_CONFLICT


async def test_invalid_type(client):
    response = await client.post("/api/templates", json={**TEMPLATE, "type": "fax"})

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["details"] == {"field": "type"}


async def test_list_templates(client, template):
    await client.post("/api/templates", json={**TEMPLATE, "name": "Login code", "type": "sms", "content": "{{code}}"})

    everything = await client.get("/api/templates", params={"tenant_id": TENANT_ID})
    sms = await client.get("/api/templates", params={"tenant_id": TENANT_ID, "type": "sms"})

    assert [t["name"] for t in everything.json()["data"]] == ["Login code", "Welcome email"]
    assert [t["name"] for t in sms.json()["data"]] == ["Login code"]


class TestTemplateLifecycle:
    async def test_activate_requires_approval(self, client, template):
        response = await client.post(f"/api/templates/{template['id']}/activate")

        assert response.status_code == status.HTTP_409_CONFLICT

    async def test_review_activate_render(self, client, template):
        """
        GIVEN a draft template
        WHEN it is reviewed, activated and rendered
        THEN the rendered content substitutes variables and usage is counted
        """
        # GIVEN
        base = f"/api/templates/{template['id']}"

        # WHEN
        active = await approve_and_activate(client, template["id"])
        rendered = await client.post(f"{base}/render", json={"data": {"name": "Jane"}})

        # THEN
        assert active["status"] == "active"
        assert active["reviewer_id"] is not None
        assert rendered.json()["data"] == {
            "subject": "Welcome",
            "content": "Hello Jane",
            "template_version": 1,
        }
        assert (await client.get(base)).json()["data"]["usage_count"] == 1

    async def test_content_update_and_revert(self, client, template):
        """Test content changes create versions and send the template back to draft"""
        base = f"/api/templates/{template['id']}"
        await approve_and_activate(client, template["id"])

        updated = await client.put(f"{base}/content", json={"content": "Hi {{name}}!"})
        version = await client.get(f"{base}/versions/1")
        reverted = await client.post(f"{base}/revert", json={"version": 1})

        assert updated.json()["data"]["status"] == "draft"
        assert updated.json()["data"]["template_version"] == 2
        assert version.json()["data"]["content"] == "Hello {{name}}"
        assert reverted.json()["data"]["content"] == "Hello {{name}}"
        assert reverted.json()["data"]["template_version"] == 3
        assert len(reverted.json()["data"]["version_history"]) == 2

    async def test_reject_requires_comments(self, client, template):
        base = f"/api/templates/{template['id']}"
        await client.post(f"{base}/submit")

        missing = await client.post(f"{base}/reject", json={})
        rejected = await client.post(f"{base}/reject", json={"comments": "Too short"})

        assert missing.status_code == status.HTTP_400_BAD_REQUEST
        assert rejected.json()["data"]["review_status"] == "rejected"

    async def test_delete(self, client, template):
        """Test active templates must be deactivated before deletion"""
        base = f"/api/templates/{template['id']}"
        await approve_and_activate(client, template["id"])

        assert (await client.delete(base)).status_code == status.HTTP_409_CONFLICT
        await client.post(f"{base}/deactivate")
        assert (await client.delete(base)).status_code == status.HTTP_200_OK
        assert (await client.get(base)).status_code == status.HTTP_404_NOT_FOUND


async def test_unknown_template(client):
    response = await client.get("/api/templates/missing")

    assert response.status_code == status.HTTP_404_NOT_FOUND
