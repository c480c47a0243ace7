# athletehub/core/achievements/models.py

from __future__ import annotations

import enum
from datetime import date as date_type, datetime
from typing import TYPE_CHECKING, Optional

from sqlalchemy import Date, DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from athletehub.core.datetime_utils import utc_now
from athletehub.db.base import Base

if TYPE_CHECKING:
    from athletehub.core.users.models import User


class AchievementStatus(str, enum.Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class Achievement(Base):
    """
    A player's claimed accomplishment.

    ``status`` only leaves PENDING through coach verification. The
    ``verified_by_*`` columns are stamped together by that same action.
    """
    __tablename__ = "achievements"
    __table_args__ = (
        Index("ix_achievements_sport_status", "sport", "status"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    owner_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("users.id", ondelete="CASCADE", name="fk_achievements_owner_id"),
        nullable=False, index=True,
    )
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    date: Mapped[date_type] = mapped_column(Date, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    proof: Mapped[Optional[str]] = mapped_column(Text, nullable=True, comment="Opaque reference to the proof document")
    sport: Mapped[str] = mapped_column(String(64), nullable=False)
    venue: Mapped[str] = mapped_column(String(200), nullable=False)

    status: Mapped[str] = mapped_column(String(16), default=AchievementStatus.PENDING.value, nullable=False)
    decision_reason: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    verified_by_id: Mapped[Optional[str]] = mapped_column(
        String(64), ForeignKey("users.id", ondelete="SET NULL", name="fk_achievements_verified_by_id"),
        nullable=True,
    )
    verified_by_name: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    verified_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=utc_now, nullable=False, index=True)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=utc_now, nullable=False)

    owner: Mapped["User"] = relationship(back_populates="achievements", foreign_keys=[owner_id])

    def __repr__(self) -> str:  # pragma: no cover
        return f"<Achievement id={self.id} owner={self.owner_id!r} sport={self.sport!r} status={self.status!r}>"
