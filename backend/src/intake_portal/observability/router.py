"""Observability API endpoints.

Provides metrics, health checks, and readiness probes for monitoring.
"""

from fastapi import APIRouter, Depends, Response
from fastapi.responses import JSONResponse
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from sqlalchemy.orm import Session

from ..database import get_db
from ..dependencies import get_storage
from ..domain.documents.ports.object_storage_port import ObjectStoragePort
from .health import (
    check_database_health,
    check_object_storage_health,
    get_overall_health,
    HealthStatus,
)

router = APIRouter(tags=["Observability"])


@router.get(
    "/metrics",
    summary="Prometheus metrics endpoint",
    include_in_schema=False,
)
def metrics():
    """Expose Prometheus metrics in text exposition format."""
    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST
    )


@router.get(
    "/health",
    summary="Health check endpoint",
    description="Returns health status of the database and object storage",
)
async def health_check(
    db: Session = Depends(get_db),
    storage: ObjectStoragePort = Depends(get_storage),
):
    """Check health of all system components.

    Returns 200 OK if all components are healthy, 503 if any are unhealthy.
    """
    components = {
        "database": check_database_health(db),
        "object_storage": await check_object_storage_health(storage),
    }

    overall_status = get_overall_health(components)

    response_data = {
        "status": overall_status.value,
        "components": {
            name: {
                "status": comp.status.value,
                "message": comp.message,
                "latency_ms": comp.latency_ms,
            }
            for name, comp in components.items()
        }
    }

    status_code = 200 if overall_status != HealthStatus.UNHEALTHY else 503

    return JSONResponse(
        content=response_data,
        status_code=status_code
    )


@router.get(
    "/ready",
    summary="Readiness check endpoint",
    description="Returns readiness status (for Kubernetes readiness probes)",
)
def readiness_check(db: Session = Depends(get_db)):
    """Check if the application can serve traffic (database reachable)."""
    db_health = check_database_health(db)

    if db_health.status == HealthStatus.HEALTHY:
        return {
            "status": "ready",
            "message": "Application is ready to serve traffic"
        }
    return JSONResponse(
        content={
            "status": "not_ready",
            "message": db_health.message
        },
        status_code=503
    )
