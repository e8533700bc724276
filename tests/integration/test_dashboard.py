"""
Integration tests for the dashboard endpoints.

Tests:
- Pipeline view counts, groups and ordering
- Pipeline after a move
- Metrics and time to hire
- Recent applications and the activity feed
"""

from datetime import timedelta

import pytest
from sqlalchemy import update

from api.services import dashboard as dashboard_service
from database.models.applications import Application
from tests.factories import BASE_TIME, make_application, make_candidate


@pytest.mark.asyncio
class TestPipelineEndpoint:
    """Test GET /api/dashboard/pipeline."""

    async def test_counts_and_groups(self, client, auth_headers, pipeline_applications):
        a1, a2, a3 = pipeline_applications

        response = await client.get("/api/dashboard/pipeline", headers=auth_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["stats"] == [
            {"status": "applied", "count": 2},
            {"status": "interview", "count": 1},
        ]
        assert [card["id"] for card in data["groups"]["applied"]] == [a3.id, a1.id]
        assert [card["id"] for card in data["groups"]["interview"]] == [a2.id]
        assert [card["id"] for card in data["applications"]] == [a3.id, a2.id, a1.id]

    async def test_cards_carry_names(self, client, auth_headers, pipeline_applications):
        response = await client.get("/api/dashboard/pipeline", headers=auth_headers)

        card = response.json()["groups"]["interview"][0]
        assert card["candidate_name"] == "Alan Turing"
        assert card["job_title"] == "Backend Engineer"
        assert card["stage"] == "interview"

    async def test_after_move(self, client, auth_headers, pipeline_applications):
        a1, _, _ = pipeline_applications

        await client.put(
            f"/api/applications/{a1.id}/status", json={"status": "interview"}, headers=auth_headers
        )
        response = await client.get("/api/dashboard/pipeline", headers=auth_headers)

        assert response.json()["stats"] == [
            {"status": "applied", "count": 1},
            {"status": "interview", "count": 2},
        ]

    async def test_group_sizes_match_total(self, client, auth_headers, db, job):
        statuses = ["applied", "screening", "hired", "on-hold", "applied", "rejected", "screening"]
        for i, status in enumerate(statuses):
            candidate = await make_candidate(db, f"C{i}", "Test", f"c{i}@example.com")
            await make_application(db, candidate, job, status, BASE_TIME + timedelta(hours=i))

        data = (await client.get("/api/dashboard/pipeline", headers=auth_headers)).json()

        assert sum(len(group) for group in data["groups"].values()) == len(statuses)
        assert sum(stat["count"] for stat in data["stats"]) == len(statuses)
        assert [stat["status"] for stat in data["stats"]] == [
            "applied", "screening", "hired", "rejected", "on-hold",
        ]

    async def test_empty_pipeline(self, client, auth_headers):
        data = (await client.get("/api/dashboard/pipeline", headers=auth_headers)).json()

        assert data == {"stats": [], "applications": [], "groups": {}}

    async def test_projection_is_idempotent(self, db, pipeline_applications):
        assert await dashboard_service.get_pipeline(db) == await dashboard_service.get_pipeline(db)

    async def test_requires_authentication(self, client, db):
        response = await client.get("/api/dashboard/pipeline")

        assert response.status_code == 401


@pytest.mark.asyncio
class TestMetrics:
    """Test GET /api/dashboard/metrics."""

    async def test_counts(self, client, auth_headers, pipeline_applications):
        data = (await client.get("/api/dashboard/metrics", headers=auth_headers)).json()

        assert data["total_applications"] == 3
        assert data["active_jobs"] == 1
        assert data["scheduled_interviews"] == 0
        assert data["time_to_hire_days"] is None

    async def test_time_to_hire(self, db, pipeline_applications):
        a1, a2, _ = pipeline_applications
        await db.execute(
            update(Application)
            .where(Application.id == a1.id)
            .values(status="hired", updated_at=a1.applied_at + timedelta(days=10))
        )
        await db.execute(
            update(Application)
            .where(Application.id == a2.id)
            .values(status="hired", updated_at=a2.applied_at + timedelta(days=20))
        )
        await db.commit()

        assert await dashboard_service.average_time_to_hire(db) == 15.0


@pytest.mark.asyncio
class TestRecentLists:

    async def test_recent_applications(self, client, auth_headers, pipeline_applications):
        a1, a2, a3 = pipeline_applications

        data = (await client.get("/api/dashboard/recent-applications", headers=auth_headers)).json()

        assert [row["id"] for row in data] == [a3.id, a2.id, a1.id]
        assert data[0]["candidate_name"] == "Grace Hopper"
        assert data[0]["candidate_email"] == "grace@example.com"

    async def test_activity_feed(self, client, auth_headers, user, pipeline_applications):
        a1, a2, _ = pipeline_applications
        await client.put(f"/api/applications/{a1.id}/status", json={"status": "screening"}, headers=auth_headers)
        await client.put(f"/api/applications/{a2.id}/status", json={"status": "decision"}, headers=auth_headers)

        data = (await client.get("/api/dashboard/activities", headers=auth_headers)).json()

        assert [entry["entity_id"] for entry in data] == [a2.id, a1.id]
        assert data[0]["action"] == "moved_candidate"
        assert data[0]["entity_type"] == "application"
        assert data[0]["metadata"] == {"status": "decision", "candidate_id": a2.candidate_id}
        assert data[0]["user_name"] == "Rita Recruiter"
        assert data[0]["user_profile_image"] == user.profile_image_url
