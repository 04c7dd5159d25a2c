"""SearchService unit tests with mocked repositories."""

from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest

from blog_search.application.dtos.search import (
    SearchableDocument,
    SearchResult,
    SearchSuggestion,
)
from blog_search.application.services.query_normalizer import (
    SearchQuery,
    SuggestionQuery,
)
from blog_search.application.use_cases.search import SearchService, rank_suggestions
from blog_search.domain.exceptions import StorageQueryError


def _doc(post_id: str, title: str = "Learning Rust") -> SearchableDocument:
    return SearchableDocument(
        id=post_id,
        title=title,
        title_name=title.lower().replace(" ", "-"),
        preview_content="preview",
        user_id="u1",
        created_at=datetime(2025, 3, 1, tzinfo=timezone.utc),
        views=4,
    )


@pytest.fixture
def search_mocks():
    search_repo = AsyncMock()
    enricher = AsyncMock()
    return search_repo, enricher, SearchService(search_repo, enricher)


async def test_empty_page_skips_enrichment(search_mocks) -> None:
    search_repo, enricher, service = search_mocks
    search_repo.count_matches.return_value = 0
    search_repo.fetch_page.return_value = []

    page = await service.search_posts(SearchQuery(text="nothing"))

    assert page.results == []
    assert page.total_count == 0
    enricher.enrich.assert_not_awaited()


async def test_page_past_end_keeps_total_count(search_mocks) -> None:
    search_repo, enricher, service = search_mocks
    search_repo.count_matches.return_value = 2
    search_repo.fetch_page.return_value = []

    page = await service.search_posts(SearchQuery(text="rust", page=5, limit=10))

    assert page.results == []
    assert page.total_count == 2


async def test_results_are_enriched_in_order(search_mocks) -> None:
    search_repo, enricher, service = search_mocks
    docs = [_doc("p2"), _doc("p1")]
    search_repo.count_matches.return_value = 7
    search_repo.fetch_page.return_value = docs
    enricher.enrich.return_value = [SearchResult.from_document(d) for d in docs]

    page = await service.search_posts(SearchQuery(text="rust", page=1, limit=2))

    assert [r.id for r in page.results] == ["p2", "p1"]
    assert page.total_count == 7
    enricher.enrich.assert_awaited_once_with(docs)


async def test_storage_error_propagates(search_mocks) -> None:
    search_repo, _, service = search_mocks
    search_repo.count_matches.side_effect = StorageQueryError("Search failed", "boom")

    with pytest.raises(StorageQueryError) as exc_info:
        await service.search_posts(SearchQuery(text="rust"))
    assert exc_info.value.to_dict() == {"error": "Search failed", "details": "boom"}


async def test_blank_suggestion_query_returns_empty_without_store(search_mocks) -> None:
    search_repo, _, service = search_mocks

    assert await service.get_suggestions(SuggestionQuery(text="")) == []
    search_repo.suggest_titles.assert_not_awaited()


async def test_suggestions_are_deduplicated_and_limited(search_mocks) -> None:
    search_repo, _, service = search_mocks
    search_repo.suggest_titles.return_value = [
        SearchSuggestion("Rust basics", 0.2),
        SearchSuggestion("Learning Rust", 0.5),
        SearchSuggestion("Rust basics", 0.6),
        SearchSuggestion("Rust async", 0.1),
    ]

    suggestions = await service.get_suggestions(SuggestionQuery(text="ru", limit=2))

    assert suggestions == [
        SearchSuggestion("Rust basics", 0.6),
        SearchSuggestion("Learning Rust", 0.5),
    ]


def test_rank_suggestions_breaks_ties_by_text() -> None:
    ranked = rank_suggestions(
        [SearchSuggestion("b", 0.1), SearchSuggestion("a", 0.1)], limit=5
    )
    assert [s.text for s in ranked] == ["a", "b"]


async def test_index_operations_do_not_touch_the_store(search_mocks) -> None:
    search_repo, enricher, service = search_mocks

    await service.index_post("p1")
    await service.delete_post_from_index("p1")

    assert search_repo.method_calls == []
    assert enricher.method_calls == []
