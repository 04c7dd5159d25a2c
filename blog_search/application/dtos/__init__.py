"""Application DTOs (dataclasses, no ORM dependency)."""

from blog_search.application.dtos.search import (
    PopularQuery,
    PostMetadata,
    SearchableDocument,
    SearchEventCreate,
    SearchEventResult,
    SearchPage,
    SearchResult,
    SearchSuggestion,
)

__all__ = [
    "PopularQuery",
    "PostMetadata",
    "SearchableDocument",
    "SearchEventCreate",
    "SearchEventResult",
    "SearchPage",
    "SearchResult",
    "SearchSuggestion",
]
