# athletehub/core/achievements/__init__.py

"""
Achievements package.

Re-exports the lifecycle service so callers can write
`from athletehub.core.achievements import AchievementsService`.
"""

from .service import AchievementsService  # noqa: F401

__all__: list[str] = ["AchievementsService"]
