# athletehub/core/users/service.py

from __future__ import annotations

import logging
import re
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from athletehub.core.datetime_utils import utc_now
from athletehub.core.errors import NotFoundError, ValidationError, store_guard
from athletehub.core.users.models import User
from athletehub.core.users.schemas import ProfileUpdate

log = logging.getLogger(__name__)

MOBILE_RE = re.compile(r"^[0-9]{10}$")


class UsersService:
    """
    Async service for user records.

    Acts as the identity & role provider for the rest of the core: given an
    internal user id it returns the user with its role and sport.
    """
    def __init__(self, db_session: AsyncSession):
        """
        Args:
            db_session (AsyncSession): Active SQLAlchemy session.
        """
        self.db: AsyncSession = db_session

    async def get_user(self, user_id: str) -> Optional[User]:
        """Return the user or None."""
        log.debug("Fetching user id=%s", user_id)
        return await self.db.get(User, user_id)

    @store_guard("ME_GET_ERROR")
    async def get_profile(self, user_id: str) -> User:
        user = await self.get_user(user_id)
        if user is None:
            raise NotFoundError("Not found")
        return user

    @store_guard("ME_PATCH_ERROR")
    async def update_profile(self, user_id: str, changes: ProfileUpdate) -> User:
        """
        Apply the fields present in ``changes`` to the user's profile.

        Raises:
            ValidationError: ``mobile`` is set but is not exactly 10 digits,
                or ``role`` is sent empty.
            NotFoundError: no such user.
        """
        data = changes.model_dump(exclude_unset=True)
        if "role" in data and not (data["role"] or "").strip():
            raise ValidationError("Role cannot be empty")
        mobile = data.get("mobile")
        if mobile and not MOBILE_RE.match(mobile):
            raise ValidationError("Mobile must be 10 digits")

        user = await self.get_user(user_id)
        if user is None:
            raise NotFoundError("Not found")

        for key, value in data.items():
            setattr(user, key, value)
        user.updated_at = utc_now()
        self.db.add(user)
        await self.db.flush()
        await self.db.refresh(user)
        log.info("Updated profile fields %s for user %s", sorted(data), user_id)
        return user
