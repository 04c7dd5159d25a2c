"""Search analytics repository. Append-only; implements ISearchAnalyticsRepository."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import Select, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from blog_search.application.dtos.search import (
    PopularQuery,
    SearchEventCreate,
    SearchEventResult,
)
from blog_search.domain.exceptions import StorageQueryError
from blog_search.infrastructure.persistence.models.search_analytics import (
    SearchAnalytics,
)
from blog_search.shared.utils.datetime import ensure_utc


def _orm_to_result(row: SearchAnalytics) -> SearchEventResult:
    """Map ORM to application DTO."""
    return SearchEventResult(
        id=str(row.id),
        query=row.query,
        user_id=row.user_id,
        results_count=row.results_count,
        created_at=ensure_utc(row.created_at),
    )


def popular_queries_statement(since: datetime, limit: int) -> Select:
    """Non-empty queries logged at or after since, grouped by exact text, most frequent first.

    Ties are broken by query text in code point order ("C" collation).
    """
    count = func.count().label("count")
    return (
        select(SearchAnalytics.query, count)
        .where(SearchAnalytics.created_at >= since, SearchAnalytics.query != "")
        .group_by(SearchAnalytics.query)
        .order_by(count.desc(), SearchAnalytics.query.collate("C").asc())
        .limit(limit)
    )


class SearchAnalyticsRepository:
    """Append-only search analytics log. No update/delete."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def record(self, event: SearchEventCreate) -> SearchEventResult:
        """Append one search event; return the stored record."""
        row = SearchAnalytics(
            query=event.query,
            user_id=event.user_id,
            results_count=event.results_count,
        )
        try:
            self.db.add(row)
            await self.db.flush()
            await self.db.refresh(row)
        except SQLAlchemyError as e:
            raise StorageQueryError("Failed to track search", str(e)) from e
        return _orm_to_result(row)

    async def popular_queries(self, since: datetime, limit: int) -> list[PopularQuery]:
        """Return the most frequent queries since the given time."""
        try:
            result = await self.db.execute(popular_queries_statement(since, limit))
        except SQLAlchemyError as e:
            raise StorageQueryError("Failed to get popular searches", str(e)) from e
        return [
            PopularQuery(query=row["query"], count=int(row["count"]))
            for row in result.mappings().all()
        ]
