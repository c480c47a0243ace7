# athletehub/core/schedules/repository.py

from __future__ import annotations

import logging
from datetime import datetime
from typing import Protocol, Sequence

from sqlalchemy import distinct, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from .models import Schedule, ScheduleRequest

log = logging.getLogger(__name__)


class ScheduleRepository(Protocol):
    """Read side of coaching schedules and the requests made against them."""

    async def count_upcoming(self, coach_id: str, start: datetime, end: datetime) -> int:
        """Coach's sessions with ``start <= date <= end``."""

    async def list_request_statuses_since(self, coach_id: str, since: datetime) -> Sequence[str]:
        """Status of every request created at or after ``since`` under the coach's schedules."""

    async def count_distinct_players_since(self, coach_id: str, since: datetime) -> int:
        """Distinct players with a request created at or after ``since`` under the coach's schedules."""


class SQLScheduleRepository:
    def __init__(self, db_session: AsyncSession) -> None:
        self.db: AsyncSession = db_session

    async def count_upcoming(self, coach_id: str, start: datetime, end: datetime) -> int:
        stmt = select(func.count(Schedule.id)).where(
            Schedule.coach_id == coach_id,
            Schedule.date >= start,
            Schedule.date <= end,
        )
        return (await self.db.scalar(stmt)) or 0

    async def list_request_statuses_since(self, coach_id: str, since: datetime) -> Sequence[str]:
        stmt = (
            select(ScheduleRequest.status)
            .join(Schedule, Schedule.id == ScheduleRequest.schedule_id)
            .where(Schedule.coach_id == coach_id, ScheduleRequest.created_at >= since)
        )
        result = await self.db.scalars(stmt)
        return result.all()

    async def count_distinct_players_since(self, coach_id: str, since: datetime) -> int:
        stmt = (
            select(func.count(distinct(ScheduleRequest.player_id)))
            .join(Schedule, Schedule.id == ScheduleRequest.schedule_id)
            .where(Schedule.coach_id == coach_id, ScheduleRequest.created_at >= since)
        )
        return (await self.db.scalar(stmt)) or 0
