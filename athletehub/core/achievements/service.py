# athletehub/core/achievements/service.py

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Sequence

from athletehub.core.datetime_utils import utc_now
from athletehub.core.errors import (
    AuthorizationError,
    AuthorizationReason,
    ConflictError,
    NotFoundError,
    ValidationError,
    store_guard,
)
from athletehub.core.users.models import User
from athletehub.core.users.service import UsersService

from . import permissions
from .models import Achievement, AchievementStatus
from .repository import AchievementRepository
from .schemas import AchievementCreate, AchievementUpdate, PendingAchievementOut

log = logging.getLogger(__name__)

# Fields an achievement can never be without
REQUIRED_FIELDS = ("title", "date", "sport", "venue")

# Same body for "no such record" and "not yours"
NOT_FOUND_OR_UNAUTHORIZED = "Achievement not found or unauthorized"

DECISIONS = (AchievementStatus.APPROVED.value, AchievementStatus.REJECTED.value)


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


class AchievementsService:
    """
    Lifecycle of achievement claims.

    Players create, edit and delete their own claims; coaches verify claims
    of their own sport. Every mutation touches exactly one record and checks
    permissions before writing anything.
    """

    def __init__(self, achievements: AchievementRepository, users: UsersService):
        """
        Args:
            achievements (AchievementRepository): Achievement store.
            users (UsersService): Identity & role provider.
        """
        self.achievements = achievements
        self.users = users

    async def _get_owned(self, caller_id: str, achievement_id: int) -> Achievement:
        """Load a record the caller owns. Missing and foreign records look the same."""
        achievement = await self.achievements.get(achievement_id)
        if achievement is None:
            raise NotFoundError(NOT_FOUND_OR_UNAUTHORIZED, achievement_id=achievement_id)

        caller = await self.users.get_user(caller_id)
        if caller is None or not permissions.is_owner(caller, achievement):
            log.warning("User '%s' tried to touch achievement %d owned by '%s'",
                        caller_id, achievement_id, achievement.owner_id)
            raise AuthorizationError(
                NOT_FOUND_OR_UNAUTHORIZED,
                reason=AuthorizationReason.CONCEALED,
                achievement_id=achievement_id,
            )
        return achievement

    async def _get_sport_coach(self, coach_id: str, message: str = "Forbidden") -> User:
        coach = await self.users.get_user(coach_id)
        if not permissions.is_sport_coach(coach):
            log.info("User '%s' is not a coach with a sport", coach_id)
            raise AuthorizationError(message)
        return coach

    @store_guard("CREATE_ACHIEVEMENT_ERROR")
    async def create(self, owner_id: str, data: AchievementCreate) -> Achievement:
        """
        Submit a new claim. It always starts PENDING.

        Raises:
            ValidationError: ``title``, ``date``, ``sport`` or ``venue`` missing.
        """
        missing = [name for name in REQUIRED_FIELDS if _is_blank(getattr(data, name))]
        if missing:
            raise ValidationError("Missing required fields: " + ", ".join(missing), missing=missing)

        achievement = Achievement(
            owner_id=owner_id,
            title=data.title,
            date=data.date,
            description=data.description,
            proof=data.proof,
            sport=data.sport,
            venue=data.venue,
            status=AchievementStatus.PENDING.value,
        )
        achievement = await self.achievements.create(achievement)
        log.info("Achievement %d created by '%s' (sport=%s)", achievement.id, owner_id, achievement.sport)
        return achievement

    @store_guard("UPDATE_ACHIEVEMENT_ERROR")
    async def update(self, caller_id: str, achievement_id: int, changes: AchievementUpdate) -> Achievement:
        """
        Owner edit of the fields present in ``changes``.

        An approved record is frozen. Editing a rejected record resubmits it:
        the status goes back to PENDING and the rejection reason is cleared.

        Raises:
            NotFoundError / AuthorizationError: missing or not the caller's.
            ConflictError: record is APPROVED, or changed status meanwhile.
            ValidationError: a required field was sent empty.
        """
        patch: Dict[str, Any] = changes.model_dump(exclude_unset=True)
        cleared = [name for name in REQUIRED_FIELDS if name in patch and _is_blank(patch[name])]
        if cleared:
            raise ValidationError("Missing required fields: " + ", ".join(cleared), missing=cleared)

        achievement = await self._get_owned(caller_id, achievement_id)
        seen_status = achievement.status
        if seen_status == AchievementStatus.APPROVED.value:
            raise ConflictError("Cannot edit an approved achievement.")

        if seen_status == AchievementStatus.REJECTED.value:
            log.info("Achievement %d resubmitted by '%s'", achievement_id, caller_id)
            patch["status"] = AchievementStatus.PENDING.value
            patch["decision_reason"] = None
        patch["updated_at"] = utc_now()

        updated = await self.achievements.update(achievement_id, patch, expected_status=seen_status)
        if updated is None:
            raise ConflictError("Achievement changed while editing, reload and retry.")
        return updated

    @store_guard("DELETE_ACHIEVEMENT_ERROR")
    async def delete(self, caller_id: str, achievement_id: int) -> None:
        achievement = await self._get_owned(caller_id, achievement_id)
        if achievement.status == AchievementStatus.APPROVED.value:
            raise ConflictError("Cannot delete an approved achievement.")
        await self.achievements.delete(achievement_id)
        log.info("Achievement %d deleted by '%s'", achievement_id, caller_id)

    @store_guard("VERIFY_ACHIEVEMENT_ERROR")
    async def verify(
        self,
        coach_id: str,
        achievement_id: int,
        decision: str,
        reason: Optional[str] = None,
    ) -> Achievement:
        """
        Approve or reject a claim in the coach's sport.

        This is the only way ``status`` leaves PENDING. The write is conditional
        on the status read here, so two coaches racing on the same record
        cannot both win.

        Raises:
            AuthorizationError: not a coach with a sport, record missing
                (rendered as not found), or a different sport.
            ValidationError: unknown decision, or a rejection without reason.
            ConflictError: the record is already approved, or was verified
                concurrently.
        """
        coach = await self._get_sport_coach(coach_id, "Forbidden: Not a coach")

        if decision not in DECISIONS:
            raise ValidationError("Decision must be APPROVED or REJECTED")
        rejecting = decision == AchievementStatus.REJECTED.value
        if rejecting and _is_blank(reason):
            raise ValidationError("A reason is required to reject an achievement")

        achievement = await self.achievements.get(achievement_id)
        if achievement is None:
            raise AuthorizationError(
                "Achievement not found",
                reason=AuthorizationReason.CONCEALED,
                achievement_id=achievement_id,
            )
        if not permissions.can_verify(coach, achievement):
            log.warning("Coach '%s' (%s) tried to verify %s achievement %d",
                        coach.id, coach.sport, achievement.sport, achievement_id)
            raise AuthorizationError("Forbidden: Cannot verify achievement for a different sport")
        # APPROVED is terminal; only PENDING and REJECTED records take a decision
        if achievement.status == AchievementStatus.APPROVED.value:
            raise ConflictError("Achievement is already approved.")

        patch = {
            "status": decision,
            "decision_reason": reason if rejecting else None,
            "verified_by_id": coach.id,
            "verified_by_name": coach.username,
            "verified_at": utc_now(),
        }
        updated = await self.achievements.update(achievement_id, patch, expected_status=achievement.status)
        if updated is None:
            raise ConflictError("Achievement was verified concurrently.")
        log.info("Achievement %d %s by coach '%s'", achievement_id, decision, coach.id)
        return updated

    @store_guard("GET_MY_ACHIEVEMENTS_ERROR")
    async def list_mine(self, owner_id: str) -> Sequence[Achievement]:
        log.debug("Listing achievements of '%s'", owner_id)
        return await self.achievements.find_by_owner(owner_id)

    @store_guard("GET_PENDING_ACHIEVEMENTS_ERROR")
    async def list_pending_for_coach(self, coach_id: str) -> List[PendingAchievementOut]:
        """PENDING claims of the coach's sport, newest first, with the owner's username."""
        coach = await self._get_sport_coach(coach_id)
        rows = await self.achievements.find_by_sport_and_status(coach.sport, AchievementStatus.PENDING.value)
        log.debug("Coach '%s' has %d pending %s achievements", coach_id, len(rows), coach.sport)
        return [
            PendingAchievementOut.model_validate(achievement).model_copy(update={"owner_username": username})
            for achievement, username in rows
        ]
