"""API router aggregation.

Includes all endpoint modules with consistent prefix and tags. All routes
use dependencies from blog_search.api.v1.dependencies (no manual repo/service construction).
"""

from fastapi import APIRouter

from blog_search.api.v1.endpoints import health, search

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(search.router, prefix="/search", tags=["search"])
