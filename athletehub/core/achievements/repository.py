# athletehub/core/achievements/repository.py

"""Achievement store: the contract the services depend on and its SQL implementation."""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional, Protocol, Sequence, Tuple

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from athletehub.core.users.models import Role, User

from .models import Achievement

log = logging.getLogger(__name__)


class AchievementRepository(Protocol):
    """Keyed store of achievement records. Lists are newest-created first."""

    async def create(self, achievement: Achievement) -> Achievement:
        """Persist a new record and return it with its id assigned."""

    async def get(self, achievement_id: int) -> Optional[Achievement]:
        """Fetch a record or None."""

    async def find_by_owner(self, owner_id: str) -> Sequence[Achievement]:
        """All records submitted by ``owner_id``."""

    async def find_by_sport_and_status(self, sport: str, status: str) -> Sequence[Tuple[Achievement, str]]:
        """Records matching sport and status, each paired with the owner's username."""

    async def update(
        self, achievement_id: int, patch: Mapping[str, Any], expected_status: Optional[str] = None
    ) -> Optional[Achievement]:
        """
        Apply ``patch``. When ``expected_status`` is given the write only happens
        if the stored status still equals it; None is returned otherwise.
        """

    async def delete(self, achievement_id: int) -> None:
        """Hard-delete a record."""

    async def count_by_status_for_players(self, sport: str) -> Dict[str, int]:
        """Status -> count over records whose owner is a Player of ``sport``."""


class SQLAchievementRepository:
    """:class:`AchievementRepository` backed by an async SQLAlchemy session."""

    def __init__(self, db_session: AsyncSession) -> None:
        self.db: AsyncSession = db_session

    async def create(self, achievement: Achievement) -> Achievement:
        self.db.add(achievement)
        await self.db.flush()
        await self.db.refresh(achievement)
        log.debug("Inserted achievement id=%d", achievement.id)
        return achievement

    async def get(self, achievement_id: int) -> Optional[Achievement]:
        return await self.db.get(Achievement, achievement_id)

    async def find_by_owner(self, owner_id: str) -> Sequence[Achievement]:
        stmt = (
            select(Achievement)
            .where(Achievement.owner_id == owner_id)
            .order_by(Achievement.created_at.desc(), Achievement.id.desc())
        )
        result = await self.db.scalars(stmt)
        return result.all()

    async def find_by_sport_and_status(self, sport: str, status: str) -> Sequence[Tuple[Achievement, str]]:
        stmt = (
            select(Achievement, User.username)
            .join(User, User.id == Achievement.owner_id)
            .where(Achievement.sport == sport, Achievement.status == status)
            .order_by(Achievement.created_at.desc(), Achievement.id.desc())
        )
        result = await self.db.execute(stmt)
        return [(row[0], row[1]) for row in result.all()]

    async def update(
        self, achievement_id: int, patch: Mapping[str, Any], expected_status: Optional[str] = None
    ) -> Optional[Achievement]:
        stmt = update(Achievement).where(Achievement.id == achievement_id)
        if expected_status is not None:
            stmt = stmt.where(Achievement.status == expected_status)
        stmt = stmt.values(**patch).execution_options(synchronize_session=False)

        result = await self.db.execute(stmt)
        if result.rowcount == 0:
            log.warning(
                "Conditional update of achievement id=%d matched no row (expected status %s)",
                achievement_id, expected_status,
            )
            return None
        # Reload so the identity map reflects the UPDATE
        return await self.db.get(Achievement, achievement_id, populate_existing=True)

    async def delete(self, achievement_id: int) -> None:
        achievement = await self.db.get(Achievement, achievement_id)
        if achievement is None:
            log.warning("Achievement id=%d not found for deletion.", achievement_id)
            return
        await self.db.delete(achievement)
        await self.db.flush()
        log.debug("Deleted achievement id=%d", achievement_id)

    async def count_by_status_for_players(self, sport: str) -> Dict[str, int]:
        stmt = (
            select(Achievement.status, func.count(Achievement.id))
            .join(User, User.id == Achievement.owner_id)
            .where(User.sport == sport, User.role == Role.PLAYER.value)
            .group_by(Achievement.status)
        )
        result = await self.db.execute(stmt)
        return {status: count for status, count in result.all()}
