"""
Integration tests for moving applications between pipeline columns.

Tests:
- Status write and the single moved_candidate activity
- Missing applications leave no trace
- Free-form statuses
- Concurrent moves and opt-in version checks
"""

import asyncio

import pytest
from sqlalchemy import select
from sqlalchemy.exc import OperationalError

from api.services import activities as activity_service
from api.services import applications as application_service
from core.exceptions import ConflictError, InternalError, NotFoundError, ValidationError
from database.engine import AsyncSessionLocal
from database.models.activities import Activity, EntityRef, EntityType
from database.models.applications import Application


async def _reload(session, application_id):
    result = await session.execute(
        select(Application)
        .where(Application.id == application_id)
        .execution_options(populate_existing=True)
    )
    return result.scalar_one()


@pytest.mark.asyncio
class TestTransitionService:
    """Test the transition handler directly against the database."""

    async def test_updates_status_and_records_one_activity(self, db, user, pipeline_applications):
        a1, _, _ = pipeline_applications

        updated = await application_service.transition_status(db, a1.id, "screening", user.id)

        assert updated.status == "screening"
        assert updated.version == 2
        assert (await _reload(db, a1.id)).status == "screening"

        activities = await activity_service.list_for_entity(db, EntityRef.application(a1.id))
        assert len(activities) == 1
        activity = activities[0]
        assert activity.action == "moved_candidate"
        assert activity.user_id == user.id
        assert activity.entity.entity_type is EntityType.APPLICATION
        assert activity.details == {"status": "screening", "candidate_id": a1.candidate_id}

    async def test_missing_application(self, db, user, pipeline_applications):
        before = await activity_service.count(db)

        with pytest.raises(NotFoundError):
            await application_service.transition_status(db, 9999, "hired", user.id)

        assert await activity_service.count(db) == before
        statuses = sorted(a.status for a in (await db.execute(select(Application))).scalars())
        assert statuses == ["applied", "applied", "interview"]

    async def test_unknown_status_is_stored_as_is(self, db, user, pipeline_applications):
        a1, _, _ = pipeline_applications

        updated = await application_service.transition_status(db, a1.id, "on-hold", user.id)

        assert updated.status == "on-hold"
        assert updated.stage.value == "unknown"

    async def test_backward_move_allowed(self, db, user, pipeline_applications):
        _, a2, _ = pipeline_applications

        updated = await application_service.transition_status(db, a2.id, "applied", user.id)

        assert updated.status == "applied"

    async def test_empty_status_rejected(self, db, user, pipeline_applications):
        a1, _, _ = pipeline_applications

        with pytest.raises(ValidationError):
            await application_service.transition_status(db, a1.id, "", user.id)

        assert await activity_service.count(db) == 0

    async def test_each_move_appends_an_activity(self, db, user, pipeline_applications):
        a1, _, _ = pipeline_applications

        for status in ("screening", "interview", "decision", "hired"):
            await application_service.transition_status(db, a1.id, status, user.id)

        activities = await activity_service.list_for_entity(db, EntityRef.application(a1.id))
        assert [a.details["status"] for a in activities] == ["hired", "decision", "interview", "screening"]
        assert (await _reload(db, a1.id)).version == 5

    async def test_matching_expected_version(self, db, user, pipeline_applications):
        a1, _, _ = pipeline_applications

        updated = await application_service.transition_status(
            db, a1.id, "screening", user.id, expected_version=1
        )

        assert updated.version == 2

    async def test_stale_expected_version_conflicts(self, db, user, pipeline_applications):
        a1, _, _ = pipeline_applications
        # A failed transition rolls the session back, expiring loaded rows
        application_id, user_id = a1.id, user.id
        await application_service.transition_status(db, application_id, "screening", user_id)

        with pytest.raises(ConflictError):
            await application_service.transition_status(
                db, application_id, "rejected", user_id, expected_version=1
            )

        assert (await _reload(db, application_id)).status == "screening"
        assert await activity_service.count(db) == 1

    async def test_concurrent_moves_last_writer_wins(self, db, user, pipeline_applications):
        a1, _, _ = pipeline_applications

        async def move(status):
            async with AsyncSessionLocal() as session:
                return await application_service.transition_status(session, a1.id, status, user.id)

        await asyncio.gather(move("screening"), move("rejected"))

        final = await _reload(db, a1.id)
        assert final.status in {"screening", "rejected"}
        assert final.version == 3
        assert len(await activity_service.list_for_entity(db, EntityRef.application(a1.id))) == 2

    async def test_concurrent_versioned_moves_one_wins(self, db, user, pipeline_applications):
        a1, _, _ = pipeline_applications

        async def move(status):
            async with AsyncSessionLocal() as session:
                return await application_service.transition_status(
                    session, a1.id, status, user.id, expected_version=1
                )

        results = await asyncio.gather(move("screening"), move("rejected"), return_exceptions=True)

        winners = [r for r in results if isinstance(r, Application)]
        losers = [r for r in results if isinstance(r, ConflictError)]
        assert len(winners) == 1
        assert len(losers) == 1
        assert (await _reload(db, a1.id)).status == winners[0].status

    async def test_activity_failure_keeps_status(self, db, user, pipeline_applications, monkeypatch):
        a1, _, _ = pipeline_applications

        async def broken_record(*args, **kwargs):
            raise OperationalError("INSERT", {}, Exception("disk I/O error"))

        monkeypatch.setattr(activity_service, "record", broken_record)
        application_id = a1.id

        with pytest.raises(InternalError):
            await application_service.transition_status(db, application_id, "screening", user.id)

        assert (await _reload(db, application_id)).status == "screening"
        assert (await db.execute(select(Activity))).scalars().all() == []


@pytest.mark.asyncio
class TestTransitionEndpoint:
    """Test PUT /api/applications/{id}/status."""

    async def test_move(self, client, auth_headers, pipeline_applications):
        a1, _, _ = pipeline_applications

        response = await client.put(
            f"/api/applications/{a1.id}/status",
            json={"status": "interview"},
            headers=auth_headers,
        )

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "interview"
        assert data["version"] == 2

    async def test_missing_status_is_400(self, client, auth_headers, pipeline_applications):
        a1, _, _ = pipeline_applications

        response = await client.put(f"/api/applications/{a1.id}/status", json={}, headers=auth_headers)

        assert response.status_code == 400
        error = response.json()["error"]
        assert error["code"] == "VALIDATION_ERROR"
        assert error["details"][0]["field"] == "status"

    async def test_empty_status_is_400(self, client, auth_headers, pipeline_applications):
        a1, _, _ = pipeline_applications

        response = await client.put(
            f"/api/applications/{a1.id}/status", json={"status": ""}, headers=auth_headers
        )

        assert response.status_code == 400

    async def test_unknown_application_is_404(self, client, auth_headers, db):
        response = await client.put(
            "/api/applications/9999/status", json={"status": "hired"}, headers=auth_headers
        )

        assert response.status_code == 404
        assert response.json()["error"]["message"] == "Application not found"

    async def test_stale_version_is_409(self, client, auth_headers, pipeline_applications):
        a1, _, _ = pipeline_applications
        await client.put(f"/api/applications/{a1.id}/status", json={"status": "screening"}, headers=auth_headers)

        response = await client.put(
            f"/api/applications/{a1.id}/status",
            json={"status": "rejected", "expected_version": 1},
            headers=auth_headers,
        )

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "CONFLICT"

    async def test_requires_authentication(self, client, pipeline_applications):
        a1, _, _ = pipeline_applications

        response = await client.put(f"/api/applications/{a1.id}/status", json={"status": "hired"})

        assert response.status_code == 401
