# athletehub/core/tournaments/models.py

from __future__ import annotations

import enum
from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from athletehub.core.datetime_utils import utc_now
from athletehub.db.base import Base


class RegistrationStatus(str, enum.Enum):
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    CANCELLED = "CANCELLED"


class TournamentRegistration(Base):
    """A player's entry into a tournament. Written elsewhere, only read here."""
    __tablename__ = "tournament_registrations"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    player_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    tournament_name: Mapped[str] = mapped_column(String(200), nullable=False)
    reg_status: Mapped[str] = mapped_column(
        String(16), default=RegistrationStatus.PENDING.value, nullable=False, index=True
    )
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utc_now, nullable=False)

    def __repr__(self) -> str:  # pragma: no cover
        return f"<TournamentRegistration id={self.id} player={self.player_id!r} status={self.reg_status!r}>"
