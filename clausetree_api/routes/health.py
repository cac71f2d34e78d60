"""
Health check endpoints for monitoring and orchestration.

Provides:
- /health - Full health check with version info
- /health/live - Kubernetes liveness check
- /health/ready - Kubernetes readiness check
"""

from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import APIRouter, Response
from pydantic import BaseModel

from clausetree.config import load_config
from clausetree.settings import get_settings

router = APIRouter(tags=["Health"])
settings = get_settings()


class HealthResponse(BaseModel):
    """Health check response model."""
    status: str
    timestamp: str
    version: str
    environment: str


class ReadinessResponse(BaseModel):
    """Readiness check response model."""
    status: str
    checks: Dict[str, Any]


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """
    Full health check endpoint.

    Returns application status, version, and environment.
    """
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc).isoformat(),
        version=settings.app_version,
        environment=settings.environment.value,
    )


@router.get("/health/live")
async def liveness() -> Dict[str, str]:
    """
    Kubernetes liveness check.

    Returns 200 if the application is alive.
    """
    return {"status": "alive"}


@router.get("/health/ready")
async def readiness(response: Response) -> ReadinessResponse:
    """
    Kubernetes readiness check.

    Checks that the analysis configuration loads and that a generator
    is configured for the orchestrated path.
    """
    checks: Dict[str, Any] = {}
    all_ready = True

    try:
        config = load_config(settings.config_path)
        checks["config"] = {"status": "ready", "aliases": len(config.clause_types.aliases)}
    except (OSError, ValueError) as e:
        checks["config"] = {"status": "not_ready", "error": str(e)}
        all_ready = False

    # The validation endpoint works without a generator; report it only
    checks["generator"] = {
        "status": "configured" if settings.llm_api_key else "not_configured",
        "model": settings.llm_model,
    }

    if not all_ready:
        response.status_code = 503

    return ReadinessResponse(
        status="ready" if all_ready else "not_ready",
        checks=checks,
    )
