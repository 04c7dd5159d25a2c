"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference application DTOs only; no infrastructure imports.
Implementations raise StorageQueryError when the backing store fails.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from blog_search.application.dtos.search import (
        PopularQuery,
        SearchableDocument,
        SearchEventCreate,
        SearchEventResult,
        SearchSuggestion,
    )
    from blog_search.application.services.query_normalizer import (
        SearchQuery,
        SuggestionQuery,
    )


class IPostSearchRepository(Protocol):
    """Protocol for ranked, filtered post search and title suggestions."""

    async def count_matches(self, query: SearchQuery) -> int:
        """Return how many posts match the query's text filter (all posts when blank)."""

    async def fetch_page(self, query: SearchQuery) -> list[SearchableDocument]:
        """Return one page of matching posts, newest first."""

    async def suggest_titles(self, query: SuggestionQuery) -> list[SearchSuggestion]:
        """Return distinct matching titles with scores, best first."""


class IPostMetadataRepository(Protocol):
    """Protocol for batch lookup of tag and category names by post id."""

    async def get_tag_names(self, post_ids: list[str]) -> dict[str, list[str]]:
        """Map post id to tag names; posts without tags are absent."""

    async def get_category_names(self, post_ids: list[str]) -> dict[str, list[str]]:
        """Map post id to category names; posts without categories are absent."""


class ISearchAnalyticsRepository(Protocol):
    """Protocol for the append-only search analytics log."""

    async def record(self, event: SearchEventCreate) -> SearchEventResult:
        """Append one search event."""

    async def popular_queries(self, since: datetime, limit: int) -> list[PopularQuery]:
        """Return the most frequent non-empty queries logged at or after since."""
