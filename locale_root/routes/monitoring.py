"""
Monitoring Routes

Liveness and readiness probes. Readiness reports whether the content store
is initialized, which is the condition the root router checks before
serving a language root.
"""

import time
from datetime import datetime, timezone

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

router = APIRouter(tags=["Monitoring"])

# Application start time for uptime calculation
APP_START_TIME = time.time()


class HealthStatus(BaseModel):
    """Health check response model."""

    status: str
    timestamp: str
    version: str
    uptime_seconds: float


class ReadinessStatus(BaseModel):
    """Readiness check response model."""

    status: str
    timestamp: str
    content_store: bool


@router.get("/health", response_model=HealthStatus)
def health_check(request: Request) -> HealthStatus:
    """Liveness probe endpoint. Does not touch the content store."""
    return HealthStatus(
        status="healthy",
        timestamp=datetime.now(timezone.utc).isoformat(),
        version=request.app.state.settings.app_version,
        uptime_seconds=round(time.time() - APP_START_TIME, 2),
    )


@router.get("/ready", response_model=ReadinessStatus)
def readiness_check(request: Request):
    """Readiness probe endpoint; 503 until the content store is initialized."""
    content_ready = request.app.state.content_store.is_ready()
    body = ReadinessStatus(
        status="ready" if content_ready else "not_ready",
        timestamp=datetime.now(timezone.utc).isoformat(),
        content_store=content_ready,
    )
    return JSONResponse(status_code=200 if content_ready else 503, content=body.model_dump())
