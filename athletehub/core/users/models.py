# athletehub/core/users/models.py
from __future__ import annotations

import enum
from datetime import date, datetime
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import Date, DateTime, Float, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from athletehub.core.datetime_utils import utc_now
from athletehub.db.base import Base

if TYPE_CHECKING:
    from athletehub.core.achievements.models import Achievement


class Role(str, enum.Enum):
    PLAYER = "Player"
    COACH = "Coach"


class User(Base):
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(64), primary_key=True, index=True, comment="Internal User ID")
    username: Mapped[str] = mapped_column(String(64), unique=True, index=True, nullable=False)
    email: Mapped[Optional[str]] = mapped_column(String(255), unique=True, index=True, nullable=True)
    # Free-form on purpose, other roles may exist upstream
    role: Mapped[str] = mapped_column(String(32), default=Role.PLAYER.value, nullable=False, index=True)
    sport: Mapped[Optional[str]] = mapped_column(String(64), nullable=True, index=True)

    # Profile
    name: Mapped[Optional[str]] = mapped_column(String(128), nullable=True, comment="User display name")
    dob: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    gender: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)
    mobile: Mapped[Optional[str]] = mapped_column(String(10), nullable=True)
    profile_pic: Mapped[Optional[str]] = mapped_column(String(512), nullable=True)
    height: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    weight: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    bloodgroup: Mapped[Optional[str]] = mapped_column(String(8), nullable=True)
    address: Mapped[Optional[str]] = mapped_column(String(512), nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=utc_now, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=utc_now, onupdate=utc_now, nullable=False)

    achievements: Mapped[List["Achievement"]] = relationship(
        back_populates="owner",
        cascade="all, delete-orphan",
        foreign_keys="Achievement.owner_id",
    )

    @property
    def is_coach(self) -> bool:
        return self.role == Role.COACH.value

    def __repr__(self) -> str:  # pragma: no cover
        return f"<User id={self.id!r} username={self.username!r} role={self.role!r} sport={self.sport!r}>"
