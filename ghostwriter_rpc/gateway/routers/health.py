"""
Health check router.

Provides /health and /ready endpoints for container orchestration.
"""

from typing import Any

from fastapi import APIRouter, Depends

from ...catalog import GROUPS, OPERATIONS
from ...config import Settings
from ..dependencies import get_app_settings

router = APIRouter(tags=["Health"])


@router.get("/health")
def health(settings: Settings = Depends(get_app_settings)) -> dict[str, Any]:
    """Basic health check for container orchestration."""
    return {"status": "healthy", "service": settings.service_name}


@router.get("/ready")
def ready(settings: Settings = Depends(get_app_settings)) -> dict[str, Any]:
    """Readiness check - configuration loaded and catalog available."""
    return {
        "status": "ready",
        "service": settings.service_name,
        "operations": len(OPERATIONS),
        "groups": list(GROUPS),
    }
