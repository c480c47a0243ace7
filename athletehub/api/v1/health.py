# athletehub/api/v1/health.py

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, status
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from athletehub.config import settings
from athletehub.db.base import engine

router = APIRouter(tags=["Health"])
log = logging.getLogger(__name__)


@router.get("/v1/health", status_code=status.HTTP_200_OK)
async def ping():
    """Liveness only, no dependencies touched."""
    return {"ok": True}


@router.get("/healthz", status_code=status.HTTP_200_OK)
async def healthz():
    out: dict[str, str] = {"status": "ok", "environment": settings.ENVIRONMENT}

    # DB
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        out["db"] = "ok"
    except SQLAlchemyError as exc:
        log.exception("DB health check failed")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="db error") from exc

    return out
