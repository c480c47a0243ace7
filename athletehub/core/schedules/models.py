# athletehub/core/schedules/models.py

from __future__ import annotations

import enum
from datetime import datetime
from typing import List, Optional

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from athletehub.core.datetime_utils import utc_now
from athletehub.db.base import Base


class ScheduleRequestStatus(str, enum.Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class Schedule(Base):
    """A coaching session offered by a coach."""
    __tablename__ = "schedules"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    coach_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    title: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    # Session start (UTC)
    date: Mapped[datetime] = mapped_column(DateTime, nullable=False, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utc_now, nullable=False)

    requests: Mapped[List["ScheduleRequest"]] = relationship(
        back_populates="schedule", cascade="all, delete-orphan"
    )


class ScheduleRequest(Base):
    """A player asking to join a coaching session."""
    __tablename__ = "schedule_requests"
    __table_args__ = (
        Index("ix_schedule_requests_schedule_created", "schedule_id", "created_at"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    schedule_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("schedules.id", ondelete="CASCADE"), nullable=False
    )
    player_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    status: Mapped[str] = mapped_column(
        String(16), default=ScheduleRequestStatus.PENDING.value, nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utc_now, nullable=False)

    schedule: Mapped["Schedule"] = relationship(back_populates="requests")

    def __repr__(self) -> str:  # pragma: no cover
        return f"<ScheduleRequest id={self.id} schedule={self.schedule_id} player={self.player_id!r} status={self.status!r}>"
