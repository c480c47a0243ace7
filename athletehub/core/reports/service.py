# athletehub/core/reports/service.py

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Optional, Sequence

from athletehub.config import settings
from athletehub.core.achievements import permissions
from athletehub.core.achievements.models import AchievementStatus
from athletehub.core.achievements.repository import AchievementRepository
from athletehub.core.datetime_utils import utc_now
from athletehub.core.errors import AuthorizationError, store_guard
from athletehub.core.schedules.models import ScheduleRequestStatus
from athletehub.core.schedules.repository import ScheduleRepository
from athletehub.core.tournaments.models import RegistrationStatus
from athletehub.core.tournaments.repository import TournamentRegistrationRepository
from athletehub.core.users.service import UsersService

from .schemas import CoachKPIs

log = logging.getLogger(__name__)


def attendance_rate(statuses: Sequence[str]) -> Optional[int]:
    """
    Percentage of APPROVED entries, rounded half up. None for an empty window,
    which is not the same thing as 0%.
    """
    total = len(statuses)
    if total == 0:
        return None
    approved = sum(1 for s in statuses if s == ScheduleRequestStatus.APPROVED.value)
    # Integer form of floor(100 * approved / total + 0.5)
    return (200 * approved + total) // (2 * total)


class ReportsService:
    """Read-only KPI aggregation for coaches."""

    def __init__(
        self,
        users: UsersService,
        achievements: AchievementRepository,
        registrations: TournamentRegistrationRepository,
        schedules: ScheduleRepository,
        activity_window_days: int | None = None,
        attendance_window_days: int | None = None,
    ):
        self.users = users
        self.achievements = achievements
        self.registrations = registrations
        self.schedules = schedules
        if activity_window_days is None:
            activity_window_days = settings.REPORT_ACTIVITY_WINDOW_DAYS
        if attendance_window_days is None:
            attendance_window_days = settings.REPORT_ATTENDANCE_WINDOW_DAYS
        if activity_window_days <= 0 or attendance_window_days <= 0:
            raise ValueError("Report windows must be positive")
        self.activity_window = timedelta(days=activity_window_days)
        self.attendance_window = timedelta(days=attendance_window_days)

    @store_guard("COACH_REPORTS_ERROR")
    async def compute_coach_kpis(self, coach_id: str, now: datetime | None = None) -> CoachKPIs:
        """
        KPIs scoped to the coach's sport (achievements, registrations) and to
        the coach's own schedules (sessions, requests).

        The sub-queries are independent reads; small skew between them is fine.

        Raises:
            AuthorizationError: caller is not a coach with a sport.
        """
        coach = await self.users.get_user(coach_id)
        if not permissions.is_sport_coach(coach):
            raise AuthorizationError("Forbidden")

        now = now or utc_now()
        week_ago = now - self.activity_window
        week_ahead = now + self.activity_window
        attendance_since = now - self.attendance_window

        achievement_counts = await self.achievements.count_by_status_for_players(coach.sport)
        registration_counts = await self.registrations.count_by_status_for_players(coach.sport)
        upcoming = await self.schedules.count_upcoming(coach.id, now, week_ahead)
        recent_statuses = await self.schedules.list_request_statuses_since(coach.id, attendance_since)
        active_players = await self.schedules.count_distinct_players_since(coach.id, week_ago)

        kpis = CoachKPIs(
            achievements_approved=achievement_counts.get(AchievementStatus.APPROVED.value, 0),
            achievements_pending=achievement_counts.get(AchievementStatus.PENDING.value, 0),
            reg_pending=registration_counts.get(RegistrationStatus.PENDING.value, 0),
            reg_confirmed=registration_counts.get(RegistrationStatus.CONFIRMED.value, 0),
            upcoming_sessions_7d=upcoming,
            active_players_this_week=active_players,
            attendance_rate_pct=attendance_rate(recent_statuses),
        )
        log.info("KPIs computed for coach '%s' (%s): %s", coach.id, coach.sport, kpis.model_dump())
        return kpis
