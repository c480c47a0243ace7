# athletehub/config.py

from __future__ import annotations

import logging
from typing import Optional

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

log = logging.getLogger(__name__)


class Settings(BaseSettings):
    """
    Single project config. Reads environment variables.
    Pydantic v2 + pydantic-settings.
    """
    model_config = SettingsConfigDict(
        case_sensitive=False,
        extra="ignore",
    )

    # --- General ---
    ENVIRONMENT: str = Field("dev", description="Application environment (dev, test, prod)")
    LOG_LEVEL: str = Field("INFO", description="Root log level")

    # --- Database ---
    # Required, no default
    DATABASE_URL: str = Field(..., description="Async database connection URL (e.g., postgresql+asyncpg://...)")

    # --- JWT ---
    # Tokens are issued by the credential service; we only verify them.
    JWT_SECRET_KEY: str = Field(..., description="Secret key shared with the token issuer")
    JWT_ALGORITHM: str = Field("HS256", description="Algorithm for JWT signing")
    JWT_ACCESS_TOKEN_EXPIRE_MINUTES: int = Field(60 * 24 * 7, description="JWT access token lifetime in minutes")  # 7 days
    AUTH_COOKIE_NAME: Optional[str] = Field("sid", description="Cookie carrying the session token, if any")

    # --- Reports ---
    REPORT_ATTENDANCE_WINDOW_DAYS: int = Field(30, description="Trailing window for attendance rate")
    REPORT_ACTIVITY_WINDOW_DAYS: int = Field(7, description="Trailing window for active players / upcoming sessions")

    @model_validator(mode="after")
    def check_windows(self) -> "Settings":
        if self.REPORT_ATTENDANCE_WINDOW_DAYS <= 0 or self.REPORT_ACTIVITY_WINDOW_DAYS <= 0:
            raise ValueError("Report windows must be positive")
        return self


try:
    settings = Settings()
    log.info("Settings loaded successfully for ENVIRONMENT=%s", settings.ENVIRONMENT)
    log.debug("Loaded settings: DB URL=%s..., JWT algorithm=%s",
              str(settings.DATABASE_URL)[:25],
              settings.JWT_ALGORITHM)
except Exception:
    log.exception("Failed to instantiate Settings.")
    raise
