"""API v1 router aggregation.

Includes all endpoint modules with consistent prefix and tags. All routes
use dependencies from app.api.v1.dependencies (no manual repo/service construction).
"""

from fastapi import APIRouter

from app.api.v1.endpoints import health, integrations, portal, spaces

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(portal.router, prefix="/portal", tags=["portal"])
api_router.include_router(spaces.router, prefix="/spaces", tags=["spaces"])
api_router.include_router(
    integrations.router, prefix="/integrations", tags=["integrations"]
)
