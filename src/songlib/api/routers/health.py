# Hey future me - this router is for Docker/Kubernetes health checks!
#
# Endpoints:
# - /health/live     → Liveness probe (process is running, no dependency checks)
# - /health/ready    → Readiness probe (database answers SELECT 1)
#
# Use cases:
# - Docker HEALTHCHECK: curl -f http://localhost:8080/health/live || exit 1
# - K8s livenessProbe: /health/live
# - K8s readinessProbe: /health/ready
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

    status: str = Field(description="alive")
    timestamp: str = Field(description="ISO timestamp")
    version: str = Field(description="Application version")


class ReadinessStatus(BaseModel):
    """Readiness probe response."""

    status: str = Field(description="ready or not_ready")
    timestamp: str = Field(description="ISO timestamp")
    database: bool = Field(description="Database connection OK")


@router.get("/live", response_model=LivenessStatus)
async def liveness_probe(request: Request) -> LivenessStatus:
    """Liveness probe for Kubernetes/Docker.

    Returns 200 if the application process is running.
    """
    return LivenessStatus(
        status="alive",
        timestamp=datetime.now(UTC).isoformat(),
        version=request.app.version,
    )


@router.get("/ready", response_model=ReadinessStatus)
async def readiness_probe(request: Request) -> JSONResponse:
    """Readiness probe for Kubernetes/Docker.

    Returns 200 if the database answers, 503 otherwise.
    """
    db_ok = False
    db = getattr(request.app.state, "db", None)
    if db is not None:
        try:
            db_ok = await db.ping()
        except (SQLAlchemyError, OSError) as e:
            logger.warning("Readiness check failed: %s", e)

    response = ReadinessStatus(
        status="ready" if db_ok else "not_ready",
        timestamp=datetime.now(UTC).isoformat(),
        database=db_ok,
    )
    status_code = status.HTTP_200_OK if db_ok else status.HTTP_503_SERVICE_UNAVAILABLE
    return JSONResponse(content=response.model_dump(), status_code=status_code)
