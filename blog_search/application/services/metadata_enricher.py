"""Attach tag and category names to a page of search hits.

Two batch lookups (categories, tags) over the page's post ids instead of two
queries per row. A failed lookup leaves that field empty for the page and is
logged; the search itself still succeeds.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from blog_search.application.dtos.search import (
    PostMetadata,
    SearchableDocument,
    SearchResult,
)
from blog_search.domain.exceptions import StorageQueryError

if TYPE_CHECKING:
    from blog_search.application.interfaces.repositories import IPostMetadataRepository

logger = logging.getLogger(__name__)


class MetadataEnricher:
    """Resolve tags/categories for documents and build SearchResult rows."""

    def __init__(self, metadata_repo: "IPostMetadataRepository") -> None:
        self.metadata_repo = metadata_repo

    async def enrich(self, documents: list[SearchableDocument]) -> list[SearchResult]:
        """Return one SearchResult per document, in the same order."""
        if not documents:
            return []
        post_ids = list(dict.fromkeys(doc.id for doc in documents))

        categories: dict[str, list[str]] = {}
        try:
            categories = await self.metadata_repo.get_category_names(post_ids)
        except StorageQueryError as exc:
            logger.warning(
                "Failed to load categories for %d posts: %s", len(post_ids), exc
            )

        tags: dict[str, list[str]] = {}
        try:
            tags = await self.metadata_repo.get_tag_names(post_ids)
        except StorageQueryError as exc:
            logger.warning("Failed to load tags for %d posts: %s", len(post_ids), exc)

        return [
            SearchResult.from_document(
                doc,
                PostMetadata(
                    tags=tags.get(doc.id, []),
                    categories=categories.get(doc.id, []),
                ),
            )
            for doc in documents
        ]
