# athletehub/core/achievements/schemas.py

from __future__ import annotations

from datetime import date as date_type, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class AchievementCreate(BaseModel):
    """
    Body of a new achievement claim.

    Required fields are typed optional so that absence is reported by the
    service as a ``ValidationError`` listing every missing field.
    """
    title: Optional[str] = None
    date: Optional[date_type] = None
    sport: Optional[str] = None
    venue: Optional[str] = None
    description: Optional[str] = None
    proof: Optional[str] = Field(None, description="Opaque reference to a proof document")


class AchievementUpdate(BaseModel):
    """
    Owner edit. Only fields present in the request are applied
    (``model_fields_set``); ``title``, ``date``, ``sport`` and ``venue`` may be
    omitted but never cleared.
    """
    title: Optional[str] = None
    date: Optional[date_type] = None
    sport: Optional[str] = None
    venue: Optional[str] = None
    description: Optional[str] = None
    proof: Optional[str] = None


class VerifyRequest(BaseModel):
    decision: str = Field(..., description="APPROVED or REJECTED")
    reason: Optional[str] = Field(None, description="Required when rejecting")


class AchievementOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    owner_id: str
    title: str
    date: date_type
    description: Optional[str] = None
    proof: Optional[str] = None
    sport: str
    venue: str
    status: str
    decision_reason: Optional[str] = None
    verified_by_id: Optional[str] = None
    verified_by_name: Optional[str] = None
    verified_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime


class PendingAchievementOut(AchievementOut):
    """Pending claim as shown to a coach, joined with the owner's username."""
    owner_username: Optional[str] = None
