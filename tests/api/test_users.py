"""Profile and settings endpoint tests."""

import pytest
from httpx import AsyncClient


class TestProfile:
    @pytest.mark.asyncio
    async def test_update_keeps_omitted_fields(self, client: AsyncClient, auth_headers):
        resp = await client.put(
            "/api/v1/user/profile",
            json={"last_name": "Lovelace", "parent_email": "parent@example.com"},
            headers=auth_headers,
        )
        assert resp.status_code == 200
        user = resp.json()["user"]
        assert user["first_name"] == "Ada"
        assert user["last_name"] == "Lovelace"
        assert user["parent_email"] == "parent@example.com"

        progress = (await client.get("/api/v1/user/progress", headers=auth_headers)).json()
        assert progress["user"]["last_name"] == "Lovelace"

    @pytest.mark.asyncio
    async def test_invalid_parent_email_is_422(self, client: AsyncClient, auth_headers):
        resp = await client.put("/api/v1/user/profile", json={"parent_email": "nope"}, headers=auth_headers)
        assert resp.status_code == 422

    @pytest.mark.asyncio
    async def test_requires_token(self, client: AsyncClient):
        resp = await client.put("/api/v1/user/profile", json={"first_name": "X"})
        assert resp.status_code == 401


class TestSettings:
    @pytest.mark.asyncio
    async def test_partial_update_merges(self, client: AsyncClient, auth_headers):
        await client.put("/api/v1/user/settings", json={"theme": "dark"}, headers=auth_headers)
        resp = await client.put("/api/v1/user/settings", json={"sound_effects": False}, headers=auth_headers)
        assert resp.status_code == 200
        settings = resp.json()["settings"]
        assert settings["theme"] == "dark"
        assert settings["sound_effects"] is False
        assert settings["language"] == "en"
        assert resp.json()["daily_goal"] is None

    @pytest.mark.asyncio
    async def test_daily_goal_lands_on_progress(self, client: AsyncClient, auth_headers):
        resp = await client.put("/api/v1/user/settings", json={"daily_goal": 5}, headers=auth_headers)
        assert resp.json()["daily_goal"] == 5
        assert "daily_goal" not in resp.json()["settings"]

        data = (await client.get("/api/v1/user/progress", headers=auth_headers)).json()
        assert data["progress"]["daily_goal"] == 5

    @pytest.mark.asyncio
    async def test_daily_goal_out_of_range_is_422(self, client: AsyncClient, auth_headers):
        resp = await client.put("/api/v1/user/settings", json={"daily_goal": 0}, headers=auth_headers)
        assert resp.status_code == 422
