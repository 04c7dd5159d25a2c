"""Application use cases: one entry point per workflow."""

from blog_search.application.use_cases.search import SearchService
from blog_search.application.use_cases.search_analytics import SearchAnalyticsService

__all__ = [
    "SearchAnalyticsService",
    "SearchService",
]
