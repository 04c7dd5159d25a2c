"""DTOs for post search, suggestions, and search analytics (no dependency on ORM)."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class SearchableDocument:
    """Projection of a post as seen by search (read-model, snapshot for one query)."""

    id: str
    title: str
    title_name: str
    preview_content: str
    user_id: str
    created_at: datetime
    views: int


@dataclass(frozen=True)
class PostMetadata:
    """Tag and category names of one post. Order is whatever the join returned."""

    tags: list[str] = field(default_factory=list)
    categories: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class SearchResult:
    """Search hit: document fields plus tag/category names.

    clap_count, comments_count and average_rating are placeholders: they are
    always zero here and callers must treat them as advisory. content is
    never loaded on the search path.
    """

    id: str
    title: str
    title_name: str
    preview_content: str
    user_id: str
    created_at: datetime
    views: int
    tags: list[str] = field(default_factory=list)
    categories: list[str] = field(default_factory=list)
    content: str = ""
    clap_count: int = 0
    comments_count: int = 0
    average_rating: float = 0.0

    @classmethod
    def from_document(
        cls, doc: SearchableDocument, metadata: PostMetadata | None = None
    ) -> SearchResult:
        """Build a result from a document and its (possibly missing) metadata."""
        metadata = metadata or PostMetadata()
        return cls(
            id=doc.id,
            title=doc.title,
            title_name=doc.title_name,
            preview_content=doc.preview_content,
            user_id=doc.user_id,
            created_at=doc.created_at,
            views=doc.views,
            tags=list(metadata.tags),
            categories=list(metadata.categories),
        )


@dataclass(frozen=True)
class SearchPage:
    """One page of results plus the total match count for the same filter."""

    results: list[SearchResult]
    total_count: int


@dataclass(frozen=True)
class SearchSuggestion:
    """Title completion with its text-search rank (higher = more relevant)."""

    text: str
    score: float


@dataclass(frozen=True)
class PopularQuery:
    """Query string and how often it was searched within the trailing window."""

    query: str
    count: int


@dataclass(frozen=True)
class SearchEventCreate:
    """Input for appending one search analytics event."""

    query: str
    user_id: str
    results_count: int


@dataclass(frozen=True)
class SearchEventResult:
    """Persisted search analytics event (write-once)."""

    id: str
    query: str
    user_id: str
    results_count: int
    created_at: datetime
