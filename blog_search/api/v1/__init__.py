"""API v1: search and health routers."""

from blog_search.api.v1.router import api_router

__all__ = ["api_router"]
