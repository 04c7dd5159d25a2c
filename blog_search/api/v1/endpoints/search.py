"""Search API: post search, title suggestions, popular queries, search tracking.

Pagination parameters are taken as raw strings and parsed leniently: bad or
non-positive values fall back to defaults instead of failing the request.
"""

import logging
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, BackgroundTasks, Depends, Query, Request

from blog_search.api.v1.dependencies import (
    get_background_recorder,
    get_search_analytics_service,
    get_search_service,
    get_tracking_service,
    get_user_id,
)
from blog_search.application.services.query_normalizer import (
    DEFAULT_POPULAR_LIMIT,
    normalize_limit,
    normalize_search_params,
    normalize_suggestion_params,
)
from blog_search.application.use_cases.search import SearchService
from blog_search.application.use_cases.search_analytics import SearchAnalyticsService
from blog_search.core.config import get_settings
from blog_search.core.limiter import limit_track, limit_writes
from blog_search.infrastructure.services.search_event_recorder import (
    BackgroundSearchRecorder,
)
from blog_search.schemas.search import (
    IndexPostRequest,
    MessageResponse,
    PopularSearchesResponse,
    PopularSearchItem,
    SearchPostsResponse,
    SearchResultResponse,
    SuggestionItem,
    SuggestionsResponse,
    TrackSearchRequest,
    TrackSearchResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/posts", response_model=SearchPostsResponse)
async def search_posts(
    background_tasks: BackgroundTasks,
    search_svc: Annotated[SearchService, Depends(get_search_service)],
    recorder: Annotated[BackgroundSearchRecorder, Depends(get_background_recorder)],
    user_id: Annotated[str, Depends(get_user_id)],
    q: str | None = Query(None, description="Search text; empty matches all posts"),
    page: str | None = Query(None, description="1-based page (default 1)"),
    limit: str | None = Query(None, description="Page size (default 10)"),
):
    """Search posts by title and preview text, newest first."""
    query = normalize_search_params(q, page, limit)
    result = await search_svc.search_posts(query)
    if query.has_text and get_settings().search_analytics_auto_track:
        background_tasks.add_task(
            recorder.record, query.text, user_id, result.total_count
        )
    return SearchPostsResponse(
        data=[SearchResultResponse.from_result(r) for r in result.results],
        total_count=result.total_count,
    )


@router.get("/suggestions", response_model=SuggestionsResponse)
async def get_suggestions(
    search_svc: Annotated[SearchService, Depends(get_search_service)],
    q: str | None = Query(None, description="Partial title; empty yields no suggestions"),
    limit: str | None = Query(None, description="Max suggestions (default 5)"),
):
    """Title completions for a partial query; empty q yields an empty list."""
    query = normalize_suggestion_params(q, limit)
    suggestions = await search_svc.get_suggestions(query)
    return SuggestionsResponse(
        suggestions=[SuggestionItem.from_suggestion(s) for s in suggestions]
    )


@router.get("/popular", response_model=PopularSearchesResponse)
async def get_popular_searches(
    analytics_svc: Annotated[
        SearchAnalyticsService, Depends(get_search_analytics_service)
    ],
    limit: str | None = Query(None, description="Max queries (default 10)"),
):
    """Most frequent queries of the trailing window (default 7 days)."""
    popular = await analytics_svc.get_popular_searches(
        normalize_limit(limit, DEFAULT_POPULAR_LIMIT)
    )
    return PopularSearchesResponse(
        popular_searches=[PopularSearchItem.from_popular(p) for p in popular]
    )


@router.post("/track", response_model=TrackSearchResponse)
@limit_track
async def track_search(
    request: Request,
    analytics_svc: Annotated[SearchAnalyticsService, Depends(get_tracking_service)],
    header_user_id: Annotated[str, Depends(get_user_id)],
    body: TrackSearchRequest | None = None,
):
    """Record one search event. Missing body or blank query returns 400."""
    body = body or TrackSearchRequest()
    event = await analytics_svc.track_search(
        body.query,
        user_id=body.user_id or header_user_id,
        results_count=body.results_count,
    )
    return TrackSearchResponse(message="Search tracked successfully", query=event.query)


@router.post("/index", response_model=MessageResponse)
@limit_writes
async def index_post(
    request: Request,
    body: IndexPostRequest,
    search_svc: Annotated[SearchService, Depends(get_search_service)],
):
    """Accept a post for indexing. Posts are searched in place, so nothing is stored."""
    await search_svc.index_post(str(body.id))
    return MessageResponse(message="Post indexed successfully")


@router.delete("/index/{post_id}", response_model=MessageResponse)
@limit_writes
async def delete_post_from_index(
    request: Request,
    post_id: UUID,
    search_svc: Annotated[SearchService, Depends(get_search_service)],
):
    """Accept an index removal. Nothing is deleted."""
    await search_svc.delete_post_from_index(str(post_id))
    return MessageResponse(message="Post deleted from index successfully")
