"""Search analytics use cases: record searches and compute popular queries."""

from __future__ import annotations

from datetime import timedelta
from typing import TYPE_CHECKING

from blog_search.application.dtos.search import (
    PopularQuery,
    SearchEventCreate,
    SearchEventResult,
)
from blog_search.application.services.query_normalizer import normalize_query_text
from blog_search.domain.exceptions import ValidationException
from blog_search.shared.telemetry.tracing import traced
from blog_search.shared.utils.datetime import utc_now

if TYPE_CHECKING:
    from blog_search.application.interfaces.repositories import (
        ISearchAnalyticsRepository,
    )

POPULAR_WINDOW_DAYS = 7


class SearchAnalyticsService:
    """Append search events and aggregate them over a trailing window.

    Popular queries are derived only from recorded events, so they lag behind
    live searches by however long recording takes.
    """

    def __init__(
        self,
        analytics_repo: "ISearchAnalyticsRepository",
        window_days: int = POPULAR_WINDOW_DAYS,
    ) -> None:
        self.analytics_repo = analytics_repo
        self.window_days = window_days

    @traced("search_analytics.track_search")
    async def track_search(
        self,
        query: str | None,
        user_id: str | None = None,
        results_count: int | None = None,
    ) -> SearchEventResult:
        """Append one search event.

        Raises:
            ValidationException: query is missing or blank after trimming.
        """
        text = normalize_query_text(query)
        if not text:
            raise ValidationException("query is required", field="query")
        event = SearchEventCreate(
            query=text,
            user_id=(user_id or "").strip(),
            results_count=max(results_count or 0, 0),
        )
        return await self.analytics_repo.record(event)

    @traced("search_analytics.get_popular_searches")
    async def get_popular_searches(self, limit: int) -> list[PopularQuery]:
        """Return the most frequent queries of the trailing window, count descending."""
        since = utc_now() - timedelta(days=self.window_days)
        popular = await self.analytics_repo.popular_queries(since, limit)
        return sorted(popular, key=lambda p: (-p.count, p.query))[:limit]
