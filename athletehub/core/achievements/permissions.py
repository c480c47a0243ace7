# athletehub/core/achievements/permissions.py

"""
Authorization predicates for achievements.

Pure functions over already-loaded records. They never touch the store and
never raise; callers decide which error a ``False`` turns into.
"""

from __future__ import annotations

from athletehub.core.users.models import Role, User

from .models import Achievement


def is_owner(caller: User, achievement: Achievement) -> bool:
    return caller.id == achievement.owner_id


def is_sport_coach(caller: User | None) -> bool:
    """A coach attached to a sport. Gate for listing pending claims and reports."""
    return caller is not None and caller.role == Role.COACH.value and bool(caller.sport)


def can_verify(caller: User | None, achievement: Achievement) -> bool:
    return is_sport_coach(caller) and caller.sport == achievement.sport
