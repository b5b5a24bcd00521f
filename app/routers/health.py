# =============================================================================
# app/routers/health.py - Health Check Endpoints
# =============================================================================
# Provides health check endpoints for monitoring and load balancers.
# =============================================================================

import logging
from datetime import datetime, timezone

from fastapi import APIRouter
from pydantic import BaseModel

from app.config import settings
from lib.supabase_client import SupabaseClient

logger = logging.getLogger(__name__)

router = APIRouter()

API_VERSION = "1.0.0"


# =============================================================================
# Response Models
# =============================================================================

class HealthResponse(BaseModel):
    """Basic health check response."""
    status: str
    timestamp: str
    environment: str
    version: str


class ChecksResponse(BaseModel):
    """Individual dependency checks."""
    database: str
    storage: str


class ReadinessResponse(BaseModel):
    """Readiness check response."""
    status: str
    checks: ChecksResponse
    timestamp: str


class LivenessResponse(BaseModel):
    """Liveness check response."""
    status: str
    timestamp: str


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


# =============================================================================
# Endpoints
# =============================================================================

@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Basic health status for load balancers and monitoring."""
    return HealthResponse(
        status="healthy",
        timestamp=_now(),
        environment=settings.ENVIRONMENT,
        version=API_VERSION,
    )


@router.get("/health/ready", response_model=ReadinessResponse)
async def readiness_check():
    """
    Readiness check endpoint.

    Probes the business_profiles table and the logo storage bucket.
    A failing probe reports "degraded" rather than an error status.
    """
    checks = ChecksResponse(database="unknown", storage="unknown")

    try:
        client = SupabaseClient.get_client()
        client.table("business_profiles").select("id").limit(1).execute()
        checks.database = "healthy"
    except Exception as e:
        logger.warning(f"Database readiness probe failed: {e}")
        checks.database = f"unhealthy: {str(e)[:50]}"

    try:
        client = SupabaseClient.get_client()
        client.storage.get_bucket(settings.STORAGE_LOGO_BUCKET)
        checks.storage = "healthy"
    except Exception as e:
        logger.warning(f"Storage readiness probe failed: {e}")
        checks.storage = f"unhealthy: {str(e)[:50]}"

    all_healthy = checks.database == "healthy" and checks.storage == "healthy"

    return ReadinessResponse(
        status="ready" if all_healthy else "degraded",
        checks=checks,
        timestamp=_now(),
    )


@router.get("/health/live", response_model=LivenessResponse)
async def liveness_check():
    """Whether the process is alive; used for container restart decisions."""
    return LivenessResponse(status="alive", timestamp=_now())
