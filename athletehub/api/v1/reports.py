# athletehub/api/v1/reports.py

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from athletehub.core.achievements.repository import SQLAchievementRepository
from athletehub.core.auth.security import get_current_user
from athletehub.core.reports.schemas import CoachKPIs
from athletehub.core.reports.service import ReportsService
from athletehub.core.schedules.repository import SQLScheduleRepository
from athletehub.core.tournaments.repository import SQLTournamentRegistrationRepository
from athletehub.core.users.models import User
from athletehub.core.users.service import UsersService
from athletehub.db.base import get_async_db_session

router = APIRouter(prefix="/v1/reports", tags=["Reports"])
log = logging.getLogger(__name__)


def get_reports_service(db: AsyncSession = Depends(get_async_db_session)) -> ReportsService:
    return ReportsService(
        users=UsersService(db),
        achievements=SQLAchievementRepository(db),
        registrations=SQLTournamentRegistrationRepository(db),
        schedules=SQLScheduleRepository(db),
    )


@router.get(
    "/coach",
    response_model=CoachKPIs,
    summary="Coach KPI snapshot",
    description="Coach only. Counts scoped to the coach's sport and schedules, computed on demand.",
)
async def coach_report(
    current_user: User = Depends(get_current_user),
    svc: ReportsService = Depends(get_reports_service),
) -> CoachKPIs:
    log.info("API: Coach report requested by '%s'", current_user.id)
    return await svc.compute_coach_kpis(current_user.id)
