# athletehub/core/reports/schemas.py

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class CoachKPIs(BaseModel):
    """KPI snapshot for one coach. Computed on demand, never stored."""
    achievements_approved: int = Field(0, description="Approved achievements of the coach's players")
    achievements_pending: int = Field(0, description="Pending achievements of the coach's players")
    reg_pending: int = Field(0, description="Pending tournament registrations")
    reg_confirmed: int = Field(0, description="Confirmed tournament registrations")
    upcoming_sessions_7d: int = Field(0, description="Coach's sessions starting within the next 7 days")
    active_players_this_week: int = Field(0, description="Distinct players who requested a session in the last 7 days")
    attendance_rate_pct: Optional[int] = Field(
        None, description="Approved share of session requests in the last 30 days; null when there were none"
    )
