# athletehub/core/users/schemas.py

from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class UserOut(BaseModel):
    """Public view of a user."""
    model_config = ConfigDict(from_attributes=True)

    id: str
    username: str
    email: Optional[str] = None
    role: str
    sport: Optional[str] = None
    name: Optional[str] = None
    dob: Optional[date] = None
    gender: Optional[str] = None
    mobile: Optional[str] = None
    profile_pic: Optional[str] = None
    height: Optional[float] = None
    weight: Optional[float] = None
    bloodgroup: Optional[str] = None
    address: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class ProfileUpdate(BaseModel):
    """Profile edit; only fields present in the body are written."""
    name: Optional[str] = None
    dob: Optional[date] = None
    gender: Optional[str] = None
    mobile: Optional[str] = Field(None, description="Exactly 10 digits")
    role: Optional[str] = None
    sport: Optional[str] = None
    profile_pic: Optional[str] = None
    height: Optional[float] = None
    weight: Optional[float] = None
    bloodgroup: Optional[str] = None
    address: Optional[str] = None
