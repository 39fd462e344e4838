"""API v1 router aggregation.

Includes all endpoint modules with consistent prefix and tags. All routes
use dependencies from sikap.api.v1.dependencies (no manual repo/service construction).
"""

from fastapi import APIRouter

from sikap.api.v1.endpoints import documents, health

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(documents.router, prefix="/documents", tags=["documents"])
