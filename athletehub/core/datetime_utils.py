"""Datetime helpers.

All timestamps are stored as naive UTC (``DateTime`` without timezone) so that
PostgreSQL and SQLite compare them the same way.
"""

from datetime import datetime, timezone


def utc_now() -> datetime:
    """Current UTC time as a naive datetime."""
    return datetime.now(timezone.utc).replace(tzinfo=None)
