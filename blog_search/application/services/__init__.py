"""Application services: query normalization and result enrichment."""

from blog_search.application.services.metadata_enricher import MetadataEnricher
from blog_search.application.services.query_normalizer import (
    SearchQuery,
    SuggestionQuery,
    normalize_limit,
    normalize_search_params,
    normalize_suggestion_params,
)

__all__ = [
    "MetadataEnricher",
    "SearchQuery",
    "SuggestionQuery",
    "normalize_limit",
    "normalize_search_params",
    "normalize_suggestion_params",
]
