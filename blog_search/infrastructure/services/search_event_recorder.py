"""Best-effort recording of searches served by GET /search/posts.

Runs as a FastAPI background task after the response is sent, in its own
transaction. Failures are logged and dropped: a broken analytics write must
never fail or delay a search. The explicit POST /search/track endpoint does
not go through here and reports write failures to its caller.
"""

import logging
from collections.abc import Callable
from contextlib import AbstractAsyncContextManager

from sqlalchemy.ext.asyncio import AsyncSession

from blog_search.application.use_cases.search_analytics import SearchAnalyticsService
from blog_search.infrastructure.persistence.database import session_scope
from blog_search.infrastructure.persistence.repositories.search_analytics_repo import (
    SearchAnalyticsRepository,
)

logger = logging.getLogger(__name__)

SessionScope = Callable[[], AbstractAsyncContextManager[AsyncSession]]


class BackgroundSearchRecorder:
    """Append one analytics event per search, swallowing any failure."""

    def __init__(self, session_factory: SessionScope = session_scope) -> None:
        self.session_factory = session_factory

    async def record(self, query: str, user_id: str, results_count: int) -> bool:
        """Record the search; return False (after logging) if it could not be stored."""
        if not query.strip():
            return False
        try:
            async with self.session_factory() as session:
                service = SearchAnalyticsService(SearchAnalyticsRepository(session))
                await service.track_search(query, user_id, results_count)
        except Exception:
            logger.exception("Failed to record search analytics (query length=%d)", len(query))
            return False
        return True
