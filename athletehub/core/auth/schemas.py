# athletehub/core/auth/schemas.py

from __future__ import annotations

from pydantic import BaseModel, Field


class TokenData(BaseModel):
    """
    Data carried inside the JWT.
    The standard 'sub' claim holds our internal user id.
    """
    user_id: str | None = Field(None, description="User ID within our application")
