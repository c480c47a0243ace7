from datetime import date

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession

from athletehub.core.achievements.models import Achievement
from athletehub.core.achievements.repository import SQLAchievementRepository
from athletehub.core.achievements.schemas import AchievementCreate, AchievementUpdate
from athletehub.core.achievements.service import AchievementsService
from athletehub.core.errors import (
    AuthorizationError,
    AuthorizationReason,
    ConflictError,
    NotFoundError,
    ServerError,
    ValidationError,
)
from athletehub.core.users.service import UsersService
from athletehub.db.base import async_session_context

from conftest import add_user

STATE_CHAMPION = dict(title="State Champion", date=date(2024, 1, 10), sport="cricket", venue="Delhi")


def _service(session: AsyncSession) -> AchievementsService:
    return AchievementsService(achievements=SQLAchievementRepository(session), users=UsersService(session))


@pytest_asyncio.fixture
async def people():
    await add_user("p1", username="priya")
    await add_user("p2", username="rahul")
    await add_user("c1", role="Coach", sport="cricket", username="coach_kapil")
    await add_user("c2", role="Coach", sport="football", username="coach_sunil")


@pytest.mark.asyncio
async def test_create_starts_pending(people, db_session: AsyncSession):
    svc = _service(db_session)

    ach = await svc.create("p1", AchievementCreate(**STATE_CHAMPION))

    assert ach.id is not None
    assert ach.status == "PENDING"
    assert ach.owner_id == "p1"
    assert ach.decision_reason is None
    assert ach.verified_by_id is None and ach.verified_at is None


@pytest.mark.asyncio
@pytest.mark.parametrize("field", ["title", "date", "sport", "venue"])
async def test_create_requires_field(people, db_session: AsyncSession, field):
    svc = _service(db_session)
    data = dict(STATE_CHAMPION)
    data.pop(field)

    with pytest.raises(ValidationError) as exc_info:
        await svc.create("p1", AchievementCreate(**data))

    assert exc_info.value.status_code == 400
    assert exc_info.value.context["missing"] == [field]


@pytest.mark.asyncio
async def test_create_treats_blank_strings_as_missing(people, db_session: AsyncSession):
    svc = _service(db_session)
    with pytest.raises(ValidationError) as exc_info:
        await svc.create("p1", AchievementCreate(**{**STATE_CHAMPION, "title": "  ", "venue": ""}))
    assert exc_info.value.context["missing"] == ["title", "venue"]
    assert exc_info.value.message == "Missing required fields: title, venue"


@pytest.mark.asyncio
async def test_verify_approve_stamps_coach(people, db_session: AsyncSession):
    svc = _service(db_session)
    ach = await svc.create("p1", AchievementCreate(**STATE_CHAMPION))

    verified = await svc.verify("c1", ach.id, "APPROVED")

    assert verified.status == "APPROVED"
    assert verified.verified_by_id == "c1"
    assert verified.verified_by_name == "coach_kapil"
    assert verified.verified_at is not None
    assert verified.decision_reason is None


@pytest.mark.asyncio
async def test_verify_reject_keeps_reason(people, db_session: AsyncSession):
    svc = _service(db_session)
    ach = await svc.create("p1", AchievementCreate(**STATE_CHAMPION))

    verified = await svc.verify("c1", ach.id, "REJECTED", reason="Certificate unreadable")

    assert verified.status == "REJECTED"
    assert verified.decision_reason == "Certificate unreadable"


@pytest.mark.asyncio
async def test_reapproval_clears_reason(people, db_session: AsyncSession):
    svc = _service(db_session)
    ach = await svc.create("p1", AchievementCreate(**STATE_CHAMPION))
    await svc.verify("c1", ach.id, "REJECTED", reason="Blurry")

    verified = await svc.verify("c1", ach.id, "APPROVED", reason="ignored on approval")

    assert verified.status == "APPROVED"
    assert verified.decision_reason is None


@pytest.mark.asyncio
@pytest.mark.parametrize("decision, reason", [("REJECTED", "Changed my mind"), ("APPROVED", None)])
async def test_approved_is_final_for_verify(people, db_session: AsyncSession, decision, reason):
    svc = _service(db_session)
    ach = await svc.create("p1", AchievementCreate(**STATE_CHAMPION))
    approved = await svc.verify("c1", ach.id, "APPROVED")
    stamped_at = approved.verified_at

    with pytest.raises(ConflictError) as exc_info:
        await svc.verify("c1", ach.id, decision, reason=reason)

    assert exc_info.value.message == "Achievement is already approved."
    assert exc_info.value.status_code == 403
    stored = await db_session.get(Achievement, ach.id)
    assert stored.status == "APPROVED"
    assert stored.decision_reason is None
    assert stored.verified_by_id == "c1"
    assert stored.verified_at == stamped_at
    with pytest.raises(ConflictError):
        await svc.delete("p1", ach.id)


@pytest.mark.asyncio
async def test_verify_other_sport_is_forbidden(people, db_session: AsyncSession):
    svc = _service(db_session)
    ach = await svc.create("p1", AchievementCreate(**STATE_CHAMPION))

    with pytest.raises(AuthorizationError) as exc_info:
        await svc.verify("c2", ach.id, "APPROVED")

    assert exc_info.value.status_code == 403
    unchanged = await db_session.get(Achievement, ach.id)
    assert unchanged.status == "PENDING"
    assert unchanged.verified_by_id is None


@pytest.mark.asyncio
@pytest.mark.parametrize("caller", ["p1", "nobody"])
async def test_verify_requires_coach(people, db_session: AsyncSession, caller):
    svc = _service(db_session)
    ach = await svc.create("p1", AchievementCreate(**STATE_CHAMPION))

    with pytest.raises(AuthorizationError) as exc_info:
        await svc.verify(caller, ach.id, "APPROVED")
    assert exc_info.value.reason is AuthorizationReason.FORBIDDEN


@pytest.mark.asyncio
async def test_verify_requires_coach_sport(people, db_session: AsyncSession):
    await add_user("c3", role="Coach", sport=None)
    svc = _service(db_session)
    ach = await svc.create("p1", AchievementCreate(**STATE_CHAMPION))

    with pytest.raises(AuthorizationError):
        await svc.verify("c3", ach.id, "APPROVED")


@pytest.mark.asyncio
async def test_verify_missing_achievement_looks_not_found(people, db_session: AsyncSession):
    svc = _service(db_session)
    with pytest.raises(AuthorizationError) as exc_info:
        await svc.verify("c1", 999, "APPROVED")
    assert exc_info.value.reason is AuthorizationReason.CONCEALED
    assert exc_info.value.status_code == 404


@pytest.mark.asyncio
async def test_verify_validates_decision(people, db_session: AsyncSession):
    svc = _service(db_session)
    ach = await svc.create("p1", AchievementCreate(**STATE_CHAMPION))

    with pytest.raises(ValidationError):
        await svc.verify("c1", ach.id, "PENDING")
    with pytest.raises(ValidationError):
        await svc.verify("c1", ach.id, "REJECTED")


@pytest.mark.asyncio
async def test_delete_own_pending(people, db_session: AsyncSession):
    svc = _service(db_session)
    ach = await svc.create("p1", AchievementCreate(**STATE_CHAMPION))

    await svc.delete("p1", ach.id)

    assert await SQLAchievementRepository(db_session).get(ach.id) is None


@pytest.mark.asyncio
async def test_delete_rejected_is_allowed(people, db_session: AsyncSession):
    svc = _service(db_session)
    ach = await svc.create("p1", AchievementCreate(**STATE_CHAMPION))
    await svc.verify("c1", ach.id, "REJECTED", reason="Wrong venue")

    await svc.delete("p1", ach.id)

    assert await svc.list_mine("p1") == []


@pytest.mark.asyncio
async def test_approved_cannot_be_deleted(people, db_session: AsyncSession):
    svc = _service(db_session)
    ach = await svc.create("p1", AchievementCreate(**STATE_CHAMPION))
    await svc.verify("c1", ach.id, "APPROVED")

    with pytest.raises(ConflictError) as exc_info:
        await svc.delete("p1", ach.id)

    assert exc_info.value.message == "Cannot delete an approved achievement."
    assert exc_info.value.status_code == 403
    assert (await db_session.get(Achievement, ach.id)) is not None


@pytest.mark.asyncio
async def test_approved_cannot_be_edited(people, db_session: AsyncSession):
    svc = _service(db_session)
    ach = await svc.create("p1", AchievementCreate(**STATE_CHAMPION))
    await svc.verify("c1", ach.id, "APPROVED")

    with pytest.raises(ConflictError):
        await svc.update("p1", ach.id, AchievementUpdate(title="National Champion"))

    assert (await db_session.get(Achievement, ach.id)).title == "State Champion"


@pytest.mark.asyncio
async def test_foreign_record_is_concealed(people, db_session: AsyncSession):
    svc = _service(db_session)
    ach = await svc.create("p1", AchievementCreate(**STATE_CHAMPION))

    with pytest.raises(AuthorizationError) as update_exc:
        await svc.update("p2", ach.id, AchievementUpdate(title="Mine now"))
    with pytest.raises(AuthorizationError) as delete_exc:
        await svc.delete("p2", ach.id)

    for exc_info in (update_exc, delete_exc):
        assert exc_info.value.reason is AuthorizationReason.CONCEALED
        assert exc_info.value.status_code == 404
        assert exc_info.value.message == "Achievement not found or unauthorized"


@pytest.mark.asyncio
async def test_missing_record_not_found(people, db_session: AsyncSession):
    svc = _service(db_session)
    with pytest.raises(NotFoundError) as exc_info:
        await svc.update("p1", 12345, AchievementUpdate(title="x"))
    assert exc_info.value.message == "Achievement not found or unauthorized"
    with pytest.raises(NotFoundError):
        await svc.delete("p1", 12345)


@pytest.mark.asyncio
async def test_update_applies_only_sent_fields(people, db_session: AsyncSession):
    svc = _service(db_session)
    ach = await svc.create("p1", AchievementCreate(**STATE_CHAMPION, description="Under-19 final"))
    created_updated_at = ach.updated_at

    updated = await svc.update("p1", ach.id, AchievementUpdate(venue="Mumbai"))

    assert updated.venue == "Mumbai"
    assert updated.title == "State Champion"
    assert updated.description == "Under-19 final"
    assert updated.status == "PENDING"
    assert updated.updated_at >= created_updated_at


@pytest.mark.asyncio
async def test_update_rejects_cleared_required_field(people, db_session: AsyncSession):
    svc = _service(db_session)
    ach = await svc.create("p1", AchievementCreate(**STATE_CHAMPION))

    with pytest.raises(ValidationError):
        await svc.update("p1", ach.id, AchievementUpdate(sport=None))


@pytest.mark.asyncio
async def test_editing_rejected_resubmits(people, db_session: AsyncSession):
    svc = _service(db_session)
    ach = await svc.create("p1", AchievementCreate(**STATE_CHAMPION))
    await svc.verify("c1", ach.id, "REJECTED", reason="Wrong date")

    updated = await svc.update("p1", ach.id, AchievementUpdate(date=date(2024, 1, 11)))

    assert updated.status == "PENDING"
    assert updated.decision_reason is None
    # Owner edits never touch the verification stamp
    assert updated.verified_by_id == "c1"
    pending = await svc.list_pending_for_coach("c1")
    assert [p.id for p in pending] == [ach.id]


@pytest.mark.asyncio
async def test_list_mine_newest_first(people, db_session: AsyncSession):
    svc = _service(db_session)
    first = await svc.create("p1", AchievementCreate(**STATE_CHAMPION))
    second = await svc.create("p1", AchievementCreate(**{**STATE_CHAMPION, "title": "District Champion"}))
    await svc.create("p2", AchievementCreate(**STATE_CHAMPION))

    mine = await svc.list_mine("p1")

    assert [a.id for a in mine] == [second.id, first.id]


@pytest.mark.asyncio
async def test_pending_list_scoped_to_sport_and_status(people, db_session: AsyncSession):
    svc = _service(db_session)
    cricket_1 = await svc.create("p1", AchievementCreate(**STATE_CHAMPION))
    cricket_2 = await svc.create("p2", AchievementCreate(**STATE_CHAMPION))
    approved = await svc.create("p2", AchievementCreate(**STATE_CHAMPION))
    await svc.create("p1", AchievementCreate(**{**STATE_CHAMPION, "sport": "football"}))
    await svc.verify("c1", approved.id, "APPROVED")

    pending = await svc.list_pending_for_coach("c1")

    assert [p.id for p in pending] == [cricket_2.id, cricket_1.id]
    assert all(p.status == "PENDING" and p.sport == "cricket" for p in pending)
    assert [p.owner_username for p in pending] == ["rahul", "priya"]


@pytest.mark.asyncio
async def test_pending_list_requires_sport_coach(people, db_session: AsyncSession):
    await add_user("c3", role="Coach", sport=None)
    svc = _service(db_session)
    with pytest.raises(AuthorizationError):
        await svc.list_pending_for_coach("p1")
    with pytest.raises(AuthorizationError):
        await svc.list_pending_for_coach("c3")


@pytest.mark.asyncio
async def test_conditional_update_refuses_stale_status(people, db_session: AsyncSession):
    svc = _service(db_session)
    repo = SQLAchievementRepository(db_session)
    ach = await svc.create("p1", AchievementCreate(**STATE_CHAMPION))

    first = await repo.update(ach.id, {"status": "APPROVED"}, expected_status="PENDING")
    second = await repo.update(ach.id, {"status": "REJECTED"}, expected_status="PENDING")

    assert first is not None and first.status == "APPROVED"
    assert second is None
    assert (await repo.get(ach.id)).status == "APPROVED"


@pytest.mark.asyncio
async def test_decision_reason_iff_rejected(people, db_session: AsyncSession):
    svc = _service(db_session)
    decisions = [("APPROVED", None), ("REJECTED", "No proof"), (None, None), ("REJECTED", "Late"), ("APPROVED", "x")]
    for decision, reason in decisions:
        ach = await svc.create("p1", AchievementCreate(**STATE_CHAMPION))
        if decision:
            await svc.verify("c1", ach.id, decision, reason=reason)

    for ach in await svc.list_mine("p1"):
        assert (ach.status == "REJECTED") == (ach.decision_reason is not None)


class ExplodingRepository:
    async def get(self, achievement_id):
        raise RuntimeError("connection reset by peer")

    async def find_by_owner(self, owner_id):
        raise RuntimeError("connection reset by peer")


@pytest.mark.asyncio
async def test_store_failure_becomes_server_error(people, db_session: AsyncSession):
    svc = AchievementsService(achievements=ExplodingRepository(), users=UsersService(db_session))

    with pytest.raises(ServerError) as exc_info:
        await svc.list_mine("p1")
    assert exc_info.value.status_code == 500
    assert exc_info.value.message == "Server error"
    assert exc_info.value.label == "GET_MY_ACHIEVEMENTS_ERROR"

    # Domain errors raised before the store is reached pass through untouched
    with pytest.raises(AuthorizationError):
        await svc.verify("p1", 1, "APPROVED")


@pytest.mark.asyncio
async def test_changes_are_visible_after_commit(people):
    async with async_session_context() as session:
        ach = await _service(session).create("p1", AchievementCreate(**STATE_CHAMPION))
        ach_id = ach.id

    async with async_session_context() as session:
        stored = await session.get(Achievement, ach_id)
        assert stored is not None
        assert stored.status == "PENDING"
