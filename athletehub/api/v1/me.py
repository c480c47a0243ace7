# athletehub/api/v1/me.py

from __future__ import annotations

from fastapi import APIRouter, Body, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from athletehub.core.auth.security import get_current_user
from athletehub.core.users.models import User
from athletehub.core.users.schemas import ProfileUpdate, UserOut
from athletehub.core.users.service import UsersService
from athletehub.db.base import get_async_db_session

router = APIRouter(prefix="/v1/me", tags=["Profile"])


@router.get("", response_model=UserOut, summary="Get my profile")
async def get_me(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_db_session),
):
    return await UsersService(db).get_profile(current_user.id)


@router.patch("", response_model=UserOut, summary="Update my profile")
async def patch_me(
    changes: ProfileUpdate = Body(...),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_db_session),
):
    return await UsersService(db).update_profile(current_user.id, changes)
