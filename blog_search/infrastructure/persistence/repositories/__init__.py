"""Repository implementations (SQLAlchemy async)."""

from blog_search.infrastructure.persistence.repositories.post_metadata_repo import (
    PostMetadataRepository,
)
from blog_search.infrastructure.persistence.repositories.search_analytics_repo import (
    SearchAnalyticsRepository,
)
from blog_search.infrastructure.persistence.repositories.search_repo import (
    SearchRepository,
)

__all__ = [
    "PostMetadataRepository",
    "SearchAnalyticsRepository",
    "SearchRepository",
]
