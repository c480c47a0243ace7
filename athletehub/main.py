# athletehub/main.py

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from athletehub.api.v1.achievements import router as achievements_router
from athletehub.api.v1.health import router as health_router
from athletehub.api.v1.me import router as me_router
from athletehub.api.v1.reports import router as reports_router
from athletehub.config import settings
from athletehub.core.errors import DomainError, ServerError, Unauthenticated

logging.basicConfig(level=settings.LOG_LEVEL.upper())
log = logging.getLogger(__name__)

description = """
Athletes submit achievement claims, coaches verify or reject them for their
sport and follow a small set of KPIs.
"""
tags_metadata = [
    {"name": "Achievements", "description": "Submitting, editing and verifying achievements."},
    {"name": "Reports", "description": "Coach KPIs."},
    {"name": "Profile", "description": "The current user's profile."},
    {"name": "Health", "description": "Liveness and readiness probes."},
]

app = FastAPI(
    title="AthleteHub API",
    description=description,
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_tags=tags_metadata,
)

app.include_router(achievements_router)
app.include_router(reports_router)
app.include_router(me_router)
app.include_router(health_router)


@app.exception_handler(DomainError)
async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, Unauthenticated) else None
    if exc.status_code >= 500:
        log.error("%s %s failed: %s", request.method, request.url.path, getattr(exc, "label", exc))
    else:
        log.info("%s %s -> %d %s", request.method, request.url.path, exc.status_code, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message}, headers=headers)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    log.info("%s %s -> 400 invalid body: %s", request.method, request.url.path, exc.errors())
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": "Invalid request"})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    log.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": ServerError.default_message},
    )


log.info("\U0001F331 FastAPI application configured. Environment: %s", settings.ENVIRONMENT)


@app.on_event("startup")
async def startup_event() -> None:
    log.info("\U0001F680 FastAPI application startup complete.")


@app.on_event("shutdown")
async def shutdown_event() -> None:
    log.info("\U0001F44B FastAPI application shutdown.")
