"""Presentation-layer dependency injection (composition root).

Routes depend only on these providers; repositories and services are built
here from infrastructure implementations.
"""

from blog_search.api.v1.dependencies.search import (
    get_analytics_repo,
    get_background_recorder,
    get_metadata_enricher,
    get_metadata_repo,
    get_search_analytics_service,
    get_search_repo,
    get_search_service,
    get_tracking_service,
    get_user_id,
)

__all__ = [
    "get_analytics_repo",
    "get_background_recorder",
    "get_metadata_enricher",
    "get_metadata_repo",
    "get_search_analytics_service",
    "get_search_repo",
    "get_search_service",
    "get_tracking_service",
    "get_user_id",
]
