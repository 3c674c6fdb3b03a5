"""Health check API router."""

from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import APIRouter, status

from govfeed.api.dependencies import FetchCacheDep
from govfeed.core.config import settings

router = APIRouter()


@router.get(
    "/health",
    status_code=status.HTTP_200_OK,
    summary="Overall health check",
)
async def health_check(cache: FetchCacheDep) -> Dict[str, Any]:
    """Report service status and cache occupancy."""
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": settings.api_version,
        "environment": settings.environment,
        "cache_entries": cache.size(),
    }
