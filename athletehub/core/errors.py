# athletehub/core/errors.py

"""
Domain error taxonomy.

Every error knows the HTTP status it maps to and the message that is safe to
show to the caller. The API layer renders them; services only raise them.
"""

from __future__ import annotations

import enum
import functools
import logging
from typing import Any, Awaitable, Callable, TypeVar

log = logging.getLogger(__name__)

T = TypeVar("T")


class DomainError(Exception):
    """Base class for every error the core raises on purpose."""

    status_code: int = 400
    default_message: str = "Bad request"

    def __init__(self, message: str | None = None, **context: Any) -> None:
        self.message = message or self.default_message
        self.context = context
        super().__init__(self.message)

    def __repr__(self) -> str:  # pragma: no cover
        return f"<{type(self).__name__} status={self.status_code} message={self.message!r}>"


class ValidationError(DomainError):
    """Missing or malformed input."""

    status_code = 400
    default_message = "Missing required fields"


class Unauthenticated(DomainError):
    status_code = 401
    default_message = "Unauthorized"


class AuthorizationReason(str, enum.Enum):
    # Plain 403, the caller may learn the target exists.
    FORBIDDEN = "forbidden"
    # Rendered exactly like a missing record so existence is not leaked.
    CONCEALED = "concealed"


class AuthorizationError(DomainError):
    """Authenticated but not permitted."""

    default_message = "Forbidden"

    def __init__(
        self,
        message: str | None = None,
        reason: AuthorizationReason = AuthorizationReason.FORBIDDEN,
        **context: Any,
    ) -> None:
        super().__init__(message, **context)
        self.reason = reason

    @property
    def status_code(self) -> int:  # type: ignore[override]
        return 404 if self.reason is AuthorizationReason.CONCEALED else 403


class NotFoundError(DomainError):
    status_code = 404
    default_message = "Not found"


class ConflictError(DomainError):
    """The request is incompatible with the record's current state."""

    status_code = 403
    default_message = "Conflict with current state"


class ServerError(DomainError):
    """Unexpected collaborator failure. The message never leaves the process."""

    status_code = 500
    default_message = "Server error"

    def __init__(self, label: str = "SERVER_ERROR", **context: Any) -> None:
        super().__init__(self.default_message, **context)
        self.label = label


def store_guard(label: str) -> Callable[[Callable[..., Awaitable[T]]], Callable[..., Awaitable[T]]]:
    """
    Wrap an async service operation so that anything other than a DomainError
    is logged under ``label`` and re-raised as :class:`ServerError`.
    """

    def decorator(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> T:
            try:
                return await func(*args, **kwargs)
            except DomainError:
                raise
            except Exception as exc:
                log.exception("%s: %s", label, exc)
                raise ServerError(label) from exc

        return wrapper

    return decorator


__all__ = [
    "DomainError", "ValidationError", "Unauthenticated", "AuthorizationReason",
    "AuthorizationError", "NotFoundError", "ConflictError", "ServerError",
    "store_guard",
]
