"""
Route aggregator — mounts both search surfaces under the /api/v1 prefix.

Route aggregation module.

- /api/v1/external: public storefront search (unauthenticated)
- /api/v1/internal: account-scoped search (Cognito bearer token)
Health is exported separately for main.py to mount at root.
Version: 1.0.0
"""
from fastapi import APIRouter

from app.routes.public_search import router as public_search_router
from app.routes.search import router as search_router
from app.routes.health import router as health_router

external_router = APIRouter(prefix="/external")
external_router.include_router(public_search_router)

internal_router = APIRouter(prefix="/internal")
internal_router.include_router(search_router)

v1_router = APIRouter(prefix="/api/v1")

v1_router.include_router(external_router)
v1_router.include_router(internal_router)

__all__ = ["v1_router", "health_router"]
