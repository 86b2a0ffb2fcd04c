"""
Health routes — liveness check endpoint.

Mounted at the application root, outside /api/v1.
Version: 1.0.0
"""
from fastapi import APIRouter

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check():
    """Liveness check. Does not touch the search engine."""
    return {"success": True, "data": {"status": "healthy"}}
