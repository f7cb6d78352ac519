# Hey future me - these are for Docker/Kubernetes probes, NOT for humans.
#
# - /health/live  → Liveness probe (process is up, no dependency checks)
# - /health/ready → Readiness probe (database answers SELECT 1 AND Redis answers PING)
#
# Docker HEALTHCHECK: curl -f http://localhost:8000/health/live || exit 1
"""Health check endpoints for Docker/Kubernetes probes."""

import logging
from datetime import UTC, datetime

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)

router = APIRouter()


class LivenessStatus(BaseModel):
    """Simple liveness probe response."""

    status: str = Field(description="alive or dead")
    timestamp: str = Field(description="ISO timestamp")


class ReadinessStatus(BaseModel):
    """Readiness probe response."""

    status: str = Field(description="ready or not_ready")
    timestamp: str = Field(description="ISO timestamp")
    database: bool = Field(description="Database connection OK")
    role_store: bool = Field(description="Role membership store reachable")


@router.get("/live", response_model=LivenessStatus)
async def liveness_probe() -> LivenessStatus:
    """Liveness probe. Returns 200 whenever the process can serve a request."""
    return LivenessStatus(
        status="alive",
        timestamp=datetime.now(UTC).isoformat(),
    )


@router.get("/ready", response_model=ReadinessStatus)
async def readiness_probe(request: Request) -> JSONResponse:
    """Readiness probe.

    Returns 200 if the database and the role store are reachable, 503 otherwise.
    """
    db_ok = False
    db = getattr(request.app.state, "db", None)
    if db is not None:
        try:
            db_ok = await db.ping()
        except (SQLAlchemyError, OSError) as e:
            logger.warning(f"Readiness: database ping failed: {e}")

    role_store = getattr(request.app.state, "role_store", None)
    role_store_ok = role_store is not None and await role_store.ping()

    is_ready = db_ok and role_store_ok
    response = ReadinessStatus(
        status="ready" if is_ready else "not_ready",
        timestamp=datetime.now(UTC).isoformat(),
        database=db_ok,
        role_store=role_store_ok,
    )
    status_code = status.HTTP_200_OK if is_ready else status.HTTP_503_SERVICE_UNAVAILABLE
    return JSONResponse(content=response.model_dump(), status_code=status_code)
