"""Test platform API endpoints"""

import pytest
from fastapi import status


@pytest.fixture
async def platform(client) -> dict:
    response = await client.post("/api/platforms", json={"name": "Core Platform", "version": "2.1.0-beta.1"})
    assert response.status_code == status.HTTP_201_CREATED, response.text
    return response.json()["data"]


@pytest.mark.asyncio
async def test_create_platform(platform):
    """Test defaults and the derived prerelease flag"""
    assert platform["status"] == "initializing"
    assert platform["type"] == "saas"
    assert platform["version"] == "2.1.0-beta.1"
    assert platform["is_prerelease"] is True
    assert platform["configs"] == []


@pytest.mark.asyncio
async def test_duplicate_platform_name(client, platform):
    """Test platform names are globally unique"""
    response = await client.post("/api/platforms", json={"name": "Core Platform", "version": "1.0.0"})

    assert response.status_code == status.HTTP_409_CONFLICT


@pytest.mark.asyncio
async def test_invalid_version(client):
    """Test a malformed semantic version is a 400"""
    response = await client.post("/api/platforms", json={"name": "Edge", "version": "v1"})

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["details"] == {"field": "version"}


@pytest.mark.asyncio
async def test_update_platform(client, platform):
    """Test partial updates and the no-op message"""
    base = f"/api/platforms/{platform['id']}"

    response = await client.patch(base, json={"version": "2.1.0"})
    assert response.json()["data"]["is_prerelease"] is False

    unchanged = await client.patch(base, json={"version": "2.1.0"})
    assert unchanged.json()["message"] == "No changes applied"


class TestPlatformConfig:
    async def test_set_and_remove_config(self, client, platform):
        """
        GIVEN a platform
        WHEN a validated number config is stored and later removed
        THEN the config list reflects each step
        """
        # GIVEN
        url = f"/api/platforms/{platform['id']}/config/max_sessions"

        # WHEN
        saved = await client.put(
            url, json={"value": 5, "type": "number", "validation": {"min": 1, "max": 10}}
        )

        # THEN
        assert saved.status_code == status.HTTP_200_OK
        assert saved.json()["message"] == "Configuration max_sessions saved"
        [config] = saved.json()["data"]["configs"]
        assert config["key"] == "max_sessions"
        assert config["value"] == 5
        assert config["validation"]["max"] == 10

        removed = await client.delete(url)
        assert removed.json()["data"]["configs"] == []

    async def test_value_outside_rules(self, client, platform):
        """Test values breaking their validation rules are rejected"""
        response = await client.put(
            f"/api/platforms/{platform['id']}/config/max_sessions",
            json={"value": 50, "type": "number", "validation": {"max": 10}},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["details"] == {"field": "value"}

    async def test_invalid_pattern(self, client, platform):
        """Test a malformed validation pattern is a client error"""
        response = await client.put(
            f"/api/platforms/{platform['id']}/config/region",
            json={"value": "eu-1", "validation": {"pattern": "(unclosed"}},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["details"] == {"field": "validation"}

    async def test_locked_config_cannot_change(self, client, platform):
        """Test non-editable configs cannot be overwritten"""
        url = f"/api/platforms/{platform['id']}/config/region"
        await client.put(url, json={"value": "eu", "editable": False})

        response = await client.put(url, json={"value": "us"})

        assert response.status_code == status.HTTP_409_CONFLICT

    async def test_set_metadata(self, client, platform):
        """Test metadata values are stored as given"""
        response = await client.put(
            f"/api/platforms/{platform['id']}/metadata/owner", json={"value": {"team": "core"}}
        )

        assert response.json()["data"]["metadata"] == {"owner": {"team": "core"}}


class TestPlatformStatus:
    async def test_status_actions(self, client, platform):
        """Test each status endpoint and the idempotent repeat"""
        base = f"/api/platforms/{platform['id']}"

        assert (await client.post(f"{base}/activate")).json()["data"]["status"] == "active"
        assert (await client.post(f"{base}/maintenance")).json()["data"]["status"] == "maintenance"
        assert (await client.post(f"{base}/suspend")).json()["data"]["status"] == "suspended"
        assert (await client.post(f"{base}/deactivate")).json()["data"]["status"] == "inactive"
        repeat = await client.post(f"{base}/deactivate")
        assert repeat.status_code == status.HTTP_200_OK
        assert repeat.json()["message"] == "Platform status is inactive"

    async def test_deleted_platform_is_frozen(self, client, platform):
        """Test a deleted platform rejects further changes"""
        base = f"/api/platforms/{platform['id']}"
        assert (await client.delete(base)).json()["data"]["status"] == "deleted"

        response = await client.put(f"{base}/metadata/owner", json={"value": "core"})

        assert response.status_code == status.HTTP_409_CONFLICT

    async def test_unknown_platform(self, client):
        """Test 404 for a missing platform"""
        response = await client.post("/api/platforms/missing/activate")

        assert response.status_code == status.HTTP_404_NOT_FOUND
