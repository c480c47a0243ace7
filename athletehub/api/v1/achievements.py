# athletehub/api/v1/achievements.py

from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter, Body, Depends, Path, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from athletehub.core.achievements.repository import SQLAchievementRepository
from athletehub.core.achievements.schemas import (
    AchievementCreate,
    AchievementOut,
    AchievementUpdate,
    PendingAchievementOut,
    VerifyRequest,
)
from athletehub.core.achievements.service import AchievementsService
from athletehub.core.auth.security import get_current_user
from athletehub.core.users.models import User
from athletehub.core.users.service import UsersService
from athletehub.db.base import get_async_db_session

router = APIRouter(
    prefix="/v1/achievements",
    tags=["Achievements"],
)
log = logging.getLogger(__name__)


def get_achievements_service(db: AsyncSession = Depends(get_async_db_session)) -> AchievementsService:
    """Builds the lifecycle service on top of the request's session."""
    return AchievementsService(
        achievements=SQLAchievementRepository(db),
        users=UsersService(db),
    )


@router.get(
    "/my",
    response_model=List[AchievementOut],
    summary="List my achievements",
    description="All achievements submitted by the current user, newest first.",
)
async def list_my_achievements(
    current_user: User = Depends(get_current_user),
    svc: AchievementsService = Depends(get_achievements_service),
):
    log.info("API: User '%s' requesting their achievements.", current_user.id)
    return await svc.list_mine(current_user.id)


@router.get(
    "/pending",
    response_model=List[PendingAchievementOut],
    summary="List pending achievements of my sport",
    description="Coach only. PENDING achievements whose sport matches the coach's, newest first.",
)
async def list_pending_achievements(
    current_user: User = Depends(get_current_user),
    svc: AchievementsService = Depends(get_achievements_service),
):
    return await svc.list_pending_for_coach(current_user.id)


@router.post(
    "",
    response_model=AchievementOut,
    status_code=status.HTTP_201_CREATED,
    summary="Submit an achievement",
)
async def create_achievement(
    payload: AchievementCreate = Body(...),
    current_user: User = Depends(get_current_user),
    svc: AchievementsService = Depends(get_achievements_service),
):
    return await svc.create(current_user.id, payload)


@router.put(
    "/{achievement_id}",
    response_model=AchievementOut,
    summary="Edit my achievement",
    description="Owner only. Approved achievements cannot be edited; editing a rejected one resubmits it.",
)
async def update_achievement(
    achievement_id: int = Path(..., ge=1),
    payload: AchievementUpdate = Body(...),
    current_user: User = Depends(get_current_user),
    svc: AchievementsService = Depends(get_achievements_service),
):
    return await svc.update(current_user.id, achievement_id, payload)


@router.delete(
    "/{achievement_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete my achievement",
    description="Owner only. Approved achievements cannot be deleted.",
)
async def delete_achievement(
    achievement_id: int = Path(..., ge=1),
    current_user: User = Depends(get_current_user),
    svc: AchievementsService = Depends(get_achievements_service),
) -> Response:
    await svc.delete(current_user.id, achievement_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.patch(
    "/{achievement_id}/verify",
    response_model=AchievementOut,
    summary="Approve or reject an achievement",
    description="Coach only, and only for achievements of the coach's sport.",
)
async def verify_achievement(
    achievement_id: int = Path(..., ge=1),
    payload: VerifyRequest = Body(...),
    current_user: User = Depends(get_current_user),
    svc: AchievementsService = Depends(get_achievements_service),
):
    log.info("API: Coach '%s' verifying achievement %d as %s", current_user.id, achievement_id, payload.decision)
    return await svc.verify(current_user.id, achievement_id, payload.decision, payload.reason)
