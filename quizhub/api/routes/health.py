"""Health & Readiness Probes — liveness and readiness endpoints.

Invariants:
    - GET / always returns 200 plain text if the process is up (liveness)
    - GET /health/ready returns 503 if the document store is unreachable (readiness)

Design Decisions:
    - Separate liveness/readiness: liveness restarts, readiness removes from
      the load balancer
"""

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse, PlainTextResponse

from quizhub.api.dependencies import get_document_store
from quizhub.config import Settings, get_settings
from quizhub.core.repository_protocols import DocumentStore

logger = logging.getLogger(__name__)
router = APIRouter(tags=["health"])


@router.get("/", response_class=PlainTextResponse)
async def liveness(settings: Settings = Depends(get_settings)):
    """Basic liveness probe. Returns 200 if the process is up."""
    return settings.liveness_message


@router.get("/health/ready")
async def readiness_check(store: DocumentStore = Depends(get_document_store)):
    """Readiness probe — includes document store connectivity."""
    if not await store.health_check():
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "not_ready",
                "reason": "document_store_unavailable",
            },
        )
    return {"status": "ready", "checks": {"document_store": "healthy"}}
