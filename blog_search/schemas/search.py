"""Search API schemas.

Field names follow the wire format the application-tier aggregator already
consumes (e.g. "claps", "total_count").
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from blog_search.application.dtos.search import (
    PopularQuery,
    SearchResult,
    SearchSuggestion,
)


class SearchResultResponse(BaseModel):
    """Single post hit. claps, comments_count and average_rating are advisory (always 0)."""

    id: str
    title: str
    title_name: str
    preview_content: str
    content: str = Field("", description="Never loaded on the search path")
    tags: list[str] = Field(default_factory=list)
    categories: list[str] = Field(default_factory=list)
    user_id: str
    created_at: datetime
    claps: int = 0
    views: int = 0
    comments_count: int = 0
    average_rating: float = 0.0

    @classmethod
    def from_result(cls, r: SearchResult) -> "SearchResultResponse":
        return cls(
            id=r.id,
            title=r.title,
            title_name=r.title_name,
            preview_content=r.preview_content,
            content=r.content,
            tags=r.tags,
            categories=r.categories,
            user_id=r.user_id,
            created_at=r.created_at,
            claps=r.clap_count,
            views=r.views,
            comments_count=r.comments_count,
            average_rating=r.average_rating,
        )


class SearchPostsResponse(BaseModel):
    """One page of hits plus the total match count."""

    data: list[SearchResultResponse]
    total_count: int


class SuggestionItem(BaseModel):
    text: str
    score: float

    @classmethod
    def from_suggestion(cls, s: SearchSuggestion) -> "SuggestionItem":
        return cls(text=s.text, score=s.score)


class SuggestionsResponse(BaseModel):
    """Title completions, best first."""

    suggestions: list[SuggestionItem]


class PopularSearchItem(BaseModel):
    query: str
    count: int

    @classmethod
    def from_popular(cls, p: PopularQuery) -> "PopularSearchItem":
        return cls(query=p.query, count=p.count)


class PopularSearchesResponse(BaseModel):
    """Most frequent queries of the trailing window, most frequent first."""

    popular_searches: list[PopularSearchItem]


class TrackSearchRequest(BaseModel):
    """Body for POST /search/track. query is checked by the use case (400 when blank)."""

    query: str | None = None
    user_id: str | None = Field(None, max_length=255)
    results_count: int | None = None


class TrackSearchResponse(BaseModel):
    message: str
    query: str


class IndexPostRequest(BaseModel):
    """Post payload accepted by the no-op index endpoint."""

    id: UUID
    title: str = ""
    title_name: str = ""
    preview_content: str = ""
    user_id: UUID | None = None
    created_at: datetime | None = None
    views: int = 0


class MessageResponse(BaseModel):
    message: str
