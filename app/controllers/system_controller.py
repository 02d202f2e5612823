# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Controller: System endpoints — health, readiness, metrics.
Pure HTTP layer — no business logic.
"""

from datetime import datetime, timezone

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from app.core.config import settings
from app.core.dependencies import get_document_store
from app.core.exceptions import UpstreamFailure

router = APIRouter(tags=["System"])


@router.get("/health")
def health_check():
    """Liveness probe for Docker and orchestration."""
    return {
        "status": "ok",
        "service": settings.SERVICE_NAME,
        "version": settings.SERVICE_VERSION,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@router.get("/health/ready")
def readiness_check():
    """Readiness probe — verifies the document store answers."""
    try:
        documents = get_document_store().verify_connection()
    except UpstreamFailure as exc:
        return JSONResponse(
            status_code=503,
            content={"status": "degraded", "service": settings.SERVICE_NAME, "error": str(exc)},
        )
    return {
        "status": "ready",
        "service": settings.SERVICE_NAME,
        "documents": documents,
    }


@router.get("/metrics")
def prometheus_metrics():
    """Expose Prometheus metrics in OpenMetrics format."""
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
