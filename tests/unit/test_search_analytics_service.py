"""SearchAnalyticsService unit tests with a mocked analytics repository."""

from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, patch

import pytest

from blog_search.application.dtos.search import (
    PopularQuery,
    SearchEventCreate,
    SearchEventResult,
)
from blog_search.application.use_cases.search_analytics import SearchAnalyticsService
from blog_search.domain.exceptions import ValidationException

NOW = datetime(2025, 6, 15, 12, 0, tzinfo=timezone.utc)


def _stored(event: SearchEventCreate) -> SearchEventResult:
    return SearchEventResult(
        id="e1",
        query=event.query,
        user_id=event.user_id,
        results_count=event.results_count,
        created_at=NOW,
    )


@pytest.fixture
def analytics_repo():
    repo = AsyncMock()
    repo.record.side_effect = _stored
    return repo


@pytest.mark.parametrize("query", [None, "", "   "])
async def test_track_rejects_blank_query(analytics_repo, query) -> None:
    service = SearchAnalyticsService(analytics_repo)
    with pytest.raises(ValidationException) as exc_info:
        await service.track_search(query)
    assert exc_info.value.details == {"field": "query"}
    analytics_repo.record.assert_not_awaited()


async def test_track_without_user_id_succeeds(analytics_repo) -> None:
    service = SearchAnalyticsService(analytics_repo)

    result = await service.track_search("  rust  ", results_count=3)

    assert result.query == "rust"
    analytics_repo.record.assert_awaited_once_with(
        SearchEventCreate(query="rust", user_id="", results_count=3)
    )


async def test_track_clamps_negative_results_count(analytics_repo) -> None:
    service = SearchAnalyticsService(analytics_repo)
    result = await service.track_search("go", user_id="u1", results_count=-4)
    assert result.results_count == 0
    assert result.user_id == "u1"


async def test_popular_uses_trailing_seven_day_window(analytics_repo) -> None:
    analytics_repo.popular_queries.return_value = [PopularQuery("rust", 5)]
    service = SearchAnalyticsService(analytics_repo)

    with patch(
        "blog_search.application.use_cases.search_analytics.utc_now", return_value=NOW
    ):
        popular = await service.get_popular_searches(10)

    assert popular == [PopularQuery("rust", 5)]
    analytics_repo.popular_queries.assert_awaited_once_with(
        NOW - timedelta(days=7), 10
    )


async def test_popular_orders_by_count_then_query_and_limits(analytics_repo) -> None:
    analytics_repo.popular_queries.return_value = [
        PopularQuery("go", 2),
        PopularQuery("rust", 5),
        PopularQuery("async", 2),
    ]
    service = SearchAnalyticsService(analytics_repo, window_days=30)

    popular = await service.get_popular_searches(2)

    assert popular == [PopularQuery("rust", 5), PopularQuery("async", 2)]
