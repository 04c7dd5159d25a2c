"""Search and search analytics dependencies (composition root)."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from blog_search.application.services.metadata_enricher import MetadataEnricher
from blog_search.application.use_cases.search import SearchService
from blog_search.application.use_cases.search_analytics import SearchAnalyticsService
from blog_search.core.config import get_settings
from blog_search.infrastructure.persistence.database import (
    get_db,
    get_db_transactional,
)
from blog_search.infrastructure.persistence.repositories import (
    PostMetadataRepository,
    SearchAnalyticsRepository,
    SearchRepository,
)
from blog_search.infrastructure.services.search_event_recorder import (
    BackgroundSearchRecorder,
)


async def get_search_repo(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> SearchRepository:
    """Post search repository (read-only), configured from search settings."""
    settings = get_settings()
    return SearchRepository(
        db,
        text_config=settings.search_text_config,
        unaccent=settings.search_unaccent_enabled,
    )


async def get_metadata_repo(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> PostMetadataRepository:
    """Tag/category lookups sharing the request's read session."""
    return PostMetadataRepository(db)


async def get_metadata_enricher(
    metadata_repo: Annotated[PostMetadataRepository, Depends(get_metadata_repo)],
) -> MetadataEnricher:
    return MetadataEnricher(metadata_repo)


async def get_search_service(
    search_repo: Annotated[SearchRepository, Depends(get_search_repo)],
    enricher: Annotated[MetadataEnricher, Depends(get_metadata_enricher)],
) -> SearchService:
    """Search use case (posts and title suggestions)."""
    return SearchService(search_repo, enricher)


async def get_analytics_repo(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> SearchAnalyticsRepository:
    """Analytics repository on a read session (popular queries)."""
    return SearchAnalyticsRepository(db)


async def get_search_analytics_service(
    analytics_repo: Annotated[SearchAnalyticsRepository, Depends(get_analytics_repo)],
) -> SearchAnalyticsService:
    """Analytics use case for reads (popular searches)."""
    return SearchAnalyticsService(
        analytics_repo, window_days=get_settings().search_popular_window_days
    )


async def get_tracking_service(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> SearchAnalyticsService:
    """Analytics use case for POST /search/track (commits on success)."""
    return SearchAnalyticsService(
        SearchAnalyticsRepository(db),
        window_days=get_settings().search_popular_window_days,
    )


def get_background_recorder() -> BackgroundSearchRecorder:
    """Recorder for best-effort tracking after GET /search/posts responds."""
    return BackgroundSearchRecorder()


def get_user_id(request: Request) -> str:
    """Caller's user id from the configured header ("" when absent)."""
    return (request.headers.get(get_settings().user_id_header) or "").strip()
