# athletehub/core/tournaments/repository.py

from __future__ import annotations

import logging
from typing import Dict, Protocol

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from athletehub.core.users.models import Role, User

from .models import TournamentRegistration

log = logging.getLogger(__name__)


class TournamentRegistrationRepository(Protocol):
    async def count_by_status_for_players(self, sport: str) -> Dict[str, int]:
        """reg_status -> count over registrations of Players in ``sport``."""


class SQLTournamentRegistrationRepository:
    def __init__(self, db_session: AsyncSession) -> None:
        self.db: AsyncSession = db_session

    async def count_by_status_for_players(self, sport: str) -> Dict[str, int]:
        stmt = (
            select(TournamentRegistration.reg_status, func.count(TournamentRegistration.id))
            .join(User, User.id == TournamentRegistration.player_id)
            .where(User.sport == sport, User.role == Role.PLAYER.value)
            .group_by(TournamentRegistration.reg_status)
        )
        result = await self.db.execute(stmt)
        counts = {status: count for status, count in result.all()}
        log.debug("Registration counts for sport=%s: %s", sport, counts)
        return counts
