"""Application interfaces (ports): repository protocols.

Define contracts for infrastructure implementations (DIP).
No runtime imports from blog_search.infrastructure or blog_search.api.
"""

from blog_search.application.interfaces.repositories import (
    IPostMetadataRepository,
    IPostSearchRepository,
    ISearchAnalyticsRepository,
)

__all__ = [
    "IPostMetadataRepository",
    "IPostSearchRepository",
    "ISearchAnalyticsRepository",
]
