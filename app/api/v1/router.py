"""API v1 router aggregation.

Includes all endpoint modules with consistent prefix and tags. All routes
use dependencies from app.api.v1.dependencies (no manual client/service construction).
"""

from fastapi import APIRouter

from app.api.v1.endpoints import authorizations, health, subscriptions

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(
    authorizations.router, prefix="/authorizations", tags=["authorizations"]
)
api_router.include_router(
    subscriptions.router, prefix="/subscriptions", tags=["subscriptions"]
)
