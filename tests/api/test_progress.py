"""Progress ledger endpoint tests: read path, completions, achievements."""

import pytest
from httpx import AsyncClient

from roboquest.catalog.models import Course
from roboquest.catalog.service import course_key
from roboquest.progress.ledger import progress_key

TINY_COURSE = Course(
    id="course_tiny",
    title="Tiny Course",
    description="Three short modules",
    category="python",
    difficulty="beginner",
    estimated_hours="1 hour",
    module_count=3,
    modules=[
        {"id": 1, "title": "One", "type": "lesson", "duration": "5 min"},
        {"id": 2, "title": "Two", "type": "lesson", "duration": "5 min"},
        {"id": 3, "title": "Three", "type": "project", "duration": "5 min"},
    ],
)


async def _user_id(client: AsyncClient, headers: dict) -> str:
    return (await client.get("/api/v1/user/progress", headers=headers)).json()["user"]["id"]


class TestReadPath:
    """GET /api/v1/user/progress"""

    @pytest.mark.asyncio
    async def test_returns_progress_settings_and_user(self, client: AsyncClient, auth_headers):
        resp = await client.get("/api/v1/user/progress", headers=auth_headers)
        assert resp.status_code == 200
        data = resp.json()
        assert data["user"]["first_name"] == "Ada"
        assert data["progress"]["total_xp"] == 0
        assert data["settings"] == {
            "language": "en",
            "theme": "light",
            "sound_effects": True,
            "background_music": False,
            "notifications": True,
            "email_updates": False,
            "parental_notifications": True,
            "updated_at": None,
        }

    @pytest.mark.asyncio
    async def test_new_day_resets_daily_progress_and_persists(self, client: AsyncClient, auth_headers, clock, store):
        for tutorial_id in ("tutorial_python_1", "tutorial_python_2"):
            await client.post(f"/api/v1/tutorial/{tutorial_id}/complete", headers=auth_headers)
        user_id = await _user_id(client, auth_headers)
        assert (await store.get(progress_key(user_id)))["daily_progress"] == 2

        clock.advance()
        progress = (await client.get("/api/v1/user/progress", headers=auth_headers)).json()["progress"]
        assert progress["daily_progress"] == 0
        assert progress["last_active_date"] == clock.today.isoformat()

        stored = await store.get(progress_key(user_id))
        assert stored["daily_progress"] == 0
        assert stored["last_active_date"] == clock.today.isoformat()
        assert stored["lessons_completed"] == 2

    @pytest.mark.asyncio
    async def test_missing_record_yields_unpersisted_default(self, client: AsyncClient, auth_headers, store):
        user_id = await _user_id(client, auth_headers)
        await store.delete(progress_key(user_id))

        progress = (await client.get("/api/v1/user/progress", headers=auth_headers)).json()["progress"]
        assert progress["total_xp"] == 0
        assert await store.get(progress_key(user_id)) is None


class TestCompleteTutorial:
    """POST /api/v1/tutorial/{id}/complete"""

    @pytest.mark.asyncio
    async def test_awards_tutorial_xp(self, client: AsyncClient, auth_headers):
        resp = await client.post("/api/v1/tutorial/tutorial_python_7/complete", headers=auth_headers)
        assert resp.status_code == 200
        data = resp.json()
        assert data["xp_earned"] == 100
        assert data["already_completed"] is False
        assert data["progress"]["total_xp"] == 100
        assert data["progress"]["lessons_completed"] == 1
        assert data["progress"]["daily_progress"] == 1
        assert data["progress"]["level"] == 1

    @pytest.mark.asyncio
    async def test_second_completion_reports_already_completed(self, client: AsyncClient, auth_headers):
        first = (await client.post("/api/v1/tutorial/tutorial_arduino_1/complete", headers=auth_headers)).json()
        second = await client.post("/api/v1/tutorial/tutorial_arduino_1/complete", headers=auth_headers)
        assert second.status_code == 200
        data = second.json()
        assert data["already_completed"] is True
        assert data["message"] == "Tutorial already completed"
        assert data["progress"]["total_xp"] == first["progress"]["total_xp"]
        assert data["progress"]["lessons_completed"] == first["progress"]["lessons_completed"]

    @pytest.mark.asyncio
    async def test_showcase_items_count_as_tutorials(self, client: AsyncClient, auth_headers):
        resp = await client.post("/api/v1/tutorial/our_project_1/complete", headers=auth_headers)
        assert resp.json()["xp_earned"] == 30

    @pytest.mark.asyncio
    async def test_level_up_at_two_hundred(self, client: AsyncClient, auth_headers):
        # 100 + 90 + 85 = 275
        for tutorial_id in ("tutorial_python_7", "tutorial_python_5", "tutorial_scratch_4"):
            resp = await client.post(f"/api/v1/tutorial/{tutorial_id}/complete", headers=auth_headers)
        progress = resp.json()["progress"]
        assert progress["total_xp"] == 275
        assert progress["level"] == 2

    @pytest.mark.asyncio
    async def test_unknown_tutorial_is_404(self, client: AsyncClient, auth_headers):
        resp = await client.post("/api/v1/tutorial/tutorial_nope/complete", headers=auth_headers)
        assert resp.status_code == 404
        assert resp.json()["detail"] == "Tutorial not found"

    @pytest.mark.asyncio
    async def test_requires_token(self, client: AsyncClient):
        resp = await client.post("/api/v1/tutorial/tutorial_python_1/complete")
        assert resp.status_code == 401


class TestCompleteProject:
    """POST /api/v1/project/{id}/complete"""

    @pytest.mark.asyncio
    async def test_records_project_without_xp(self, client: AsyncClient, auth_headers):
        resp = await client.post(
            "/api/v1/project/exercism_python_two_fer/complete",
            json={"time_spent": 540, "user_code": "def two_fer(name='you'): ..."},
            headers=auth_headers,
        )
        assert resp.status_code == 200
        data = resp.json()
        assert data["time_spent"] == 540
        assert data["xp_earned"] == 0
        assert data["progress"]["projects_built"] == 1
        assert data["progress"]["total_xp"] == 0
        assert data["progress"]["completed_projects"] == ["exercism_python_two_fer"]

    @pytest.mark.asyncio
    async def test_body_is_optional_and_repeat_is_idempotent(self, client: AsyncClient, auth_headers):
        await client.post("/api/v1/project/robotics_line_follower/complete", headers=auth_headers)
        resp = await client.post("/api/v1/project/robotics_line_follower/complete", headers=auth_headers)
        assert resp.json()["already_completed"] is True
        assert resp.json()["progress"]["projects_built"] == 1

    @pytest.mark.asyncio
    async def test_unknown_project_is_404(self, client: AsyncClient, auth_headers):
        resp = await client.post("/api/v1/project/nope/complete", json={}, headers=auth_headers)
        assert resp.status_code == 404


class TestCompleteModule:
    """POST /api/v1/course/{course_id}/module/{module_id}/complete"""

    @pytest.mark.asyncio
    async def test_course_completes_after_third_module(self, client: AsyncClient, auth_headers, store):
        await store.set(course_key(TINY_COURSE.id), TINY_COURSE.model_dump(mode="json"))

        for module_id, done in ((1, False), (2, False), (3, True)):
            resp = await client.post(f"/api/v1/course/course_tiny/module/{module_id}/complete", headers=auth_headers)
            assert resp.status_code == 200
            data = resp.json()
            assert data["course_completed"] is done
            assert ("course_tiny" in data["progress"]["courses_completed"]) is done

        assert data["progress"]["courses_in_progress"] == {"course_tiny": [1, 2, 3]}
        assert data["progress"]["total_xp"] == 0

    @pytest.mark.asyncio
    async def test_repeat_module_is_idempotent(self, client: AsyncClient, auth_headers):
        url = "/api/v1/course/course_scratch_fundamentals/module/1/complete"
        await client.post(url, headers=auth_headers)
        resp = await client.post(url, headers=auth_headers)
        data = resp.json()
        assert data["already_completed"] is True
        assert data["course_completed"] is False
        assert data["progress"]["courses_in_progress"]["course_scratch_fundamentals"] == [1]

    @pytest.mark.asyncio
    async def test_unknown_course_is_404(self, client: AsyncClient, auth_headers):
        resp = await client.post("/api/v1/course/course_nope/module/1/complete", headers=auth_headers)
        assert resp.status_code == 404
        assert resp.json()["detail"] == "Course not found"

    @pytest.mark.asyncio
    async def test_module_outside_course_is_404(self, client: AsyncClient, auth_headers):
        resp = await client.post(
            "/api/v1/course/course_web_development/module/99/complete", headers=auth_headers
        )
        assert resp.status_code == 404
        assert resp.json()["detail"] == "Module not found"


class TestAchievements:
    """GET /api/v1/user/achievements"""

    @pytest.mark.asyncio
    async def test_first_lesson_unlocked(self, client: AsyncClient, auth_headers):
        await client.post("/api/v1/tutorial/tutorial_python_1/complete", headers=auth_headers)
        resp = await client.get("/api/v1/user/achievements", headers=auth_headers)
        assert resp.status_code == 200
        data = resp.json()
        assert data["total"] == 10
        assert data["earned"] == 1
        earned = [a["id"] for a in data["achievements"] if a["earned"]]
        assert earned == ["first_lesson"]


class TestDayBoundaryCompletion:
    @pytest.mark.asyncio
    async def test_completion_on_new_day_starts_daily_count_over(self, client: AsyncClient, auth_headers, clock):
        await client.post("/api/v1/tutorial/tutorial_python_1/complete", headers=auth_headers)
        clock.advance()
        resp = await client.post("/api/v1/tutorial/tutorial_python_2/complete", headers=auth_headers)
        progress = resp.json()["progress"]
        assert progress["daily_progress"] == 1
        assert progress["last_active_date"] == clock.today.isoformat()
