"""Post search and title suggestion use cases. Delegates to the search and metadata repositories."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from blog_search.application.dtos.search import SearchPage, SearchSuggestion
from blog_search.shared.telemetry.tracing import add_span_attributes, traced

if TYPE_CHECKING:
    from blog_search.application.dtos.search import SearchableDocument
    from blog_search.application.interfaces.repositories import IPostSearchRepository
    from blog_search.application.services.metadata_enricher import MetadataEnricher
    from blog_search.application.services.query_normalizer import (
        SearchQuery,
        SuggestionQuery,
    )

logger = logging.getLogger(__name__)


def rank_suggestions(
    suggestions: list[SearchSuggestion], limit: int
) -> list[SearchSuggestion]:
    """Deduplicate by text (keeping the best score) and order by score desc, text asc."""
    best: dict[str, SearchSuggestion] = {}
    for suggestion in suggestions:
        current = best.get(suggestion.text)
        if current is None or suggestion.score > current.score:
            best[suggestion.text] = suggestion
    ordered = sorted(best.values(), key=lambda s: (-s.score, s.text))
    return ordered[:limit]


class SearchService:
    """Ranked post search with pagination, metadata enrichment, and title suggestions.

    Count and page are two independent reads: under concurrent writes the
    total may differ slightly from what the page reflects.
    """

    def __init__(
        self,
        search_repo: "IPostSearchRepository",
        enricher: "MetadataEnricher",
    ) -> None:
        self.search_repo = search_repo
        self.enricher = enricher

    @traced("search.search_posts")
    async def search_posts(self, query: "SearchQuery") -> SearchPage:
        """Return one page of matching posts and the total match count.

        Blank query text matches every post. An empty page is returned as-is
        without metadata lookups.
        """
        total_count = await self.search_repo.count_matches(query)
        documents: list[SearchableDocument] = await self.search_repo.fetch_page(query)
        add_span_attributes(
            **{"search.total_count": total_count, "search.page_size": len(documents)}
        )
        if not documents:
            return SearchPage(results=[], total_count=total_count)

        results = await self.enricher.enrich(documents)
        logger.debug(
            "Search found %d results (page %d, limit %d)",
            total_count,
            query.page,
            query.limit,
        )
        return SearchPage(results=results, total_count=total_count)

    @traced("search.get_suggestions")
    async def get_suggestions(self, query: "SuggestionQuery") -> list[SearchSuggestion]:
        """Return up to query.limit distinct title completions; blank text yields []."""
        if not query.text:
            return []
        suggestions = await self.search_repo.suggest_titles(query)
        return rank_suggestions(suggestions, query.limit)

    async def index_post(self, post_id: str) -> None:
        """Accept a post for indexing. No-op: posts are searched in place."""
        logger.info("index_post called for post %s; store-backed search, nothing to do", post_id)

    async def delete_post_from_index(self, post_id: str) -> None:
        """Accept an index removal. No-op: posts are searched in place."""
        logger.info(
            "delete_post_from_index called for post %s; store-backed search, nothing to do",
            post_id,
        )
