"""Search, metadata and analytics repositories against Postgres. Session is rolled back after each test."""

import uuid
from datetime import timedelta

import pytest
from sqlalchemy import func, select

from blog_search.application.dtos.search import SearchEventCreate
from blog_search.application.services.metadata_enricher import MetadataEnricher
from blog_search.application.services.query_normalizer import (
    SearchQuery,
    SuggestionQuery,
)
from blog_search.application.use_cases.search import SearchService
from blog_search.application.use_cases.search_analytics import SearchAnalyticsService
from blog_search.infrastructure.persistence.models import (
    Category,
    Post,
    SearchAnalytics,
    Tag,
    post_categories,
    post_tags,
)
from blog_search.infrastructure.persistence.repositories import (
    PostMetadataRepository,
    SearchAnalyticsRepository,
    SearchRepository,
)
from blog_search.shared.utils.datetime import utc_now


def _marker() -> str:
    """Unique word so assertions only see rows created by the current test."""
    return f"zq{uuid.uuid4().hex[:10]}"


async def _add_post(db_session, title: str, preview: str = "", age_minutes: int = 0, **kwargs) -> Post:
    post = Post(
        id=str(uuid.uuid4()),
        title=title,
        title_name=title.lower().replace(" ", "-"),
        preview_content=preview,
        user_id=str(uuid.uuid4()),
        views=0,
        created_at=utc_now() - timedelta(minutes=age_minutes),
        **kwargs,
    )
    db_session.add(post)
    await db_session.flush()
    return post


def _service(db_session) -> SearchService:
    return SearchService(
        SearchRepository(db_session),
        MetadataEnricher(PostMetadataRepository(db_session)),
    )


@pytest.mark.requires_db
async def test_search_matches_title_and_returns_metadata(db_session) -> None:
    """Posts "Learning Rust" and "Go concurrency": q=rust finds only the first, with its tags."""
    marker = _marker()
    rust = await _add_post(db_session, f"Learning Rust {marker}", "Ownership explained")
    await _add_post(db_session, f"Go concurrency {marker}", "Goroutines and channels")
    tag = Tag(id=str(uuid.uuid4()), name=f"rust-{marker}")
    category = Category(id=str(uuid.uuid4()), name=f"Programming {marker}")
    db_session.add_all([tag, category])
    await db_session.flush()
    await db_session.execute(post_tags.insert().values(post_id=rust.id, tag_id=tag.id))
    await db_session.execute(
        post_categories.insert().values(post_id=rust.id, category_id=category.id)
    )

    page = await _service(db_session).search_posts(SearchQuery(text=f"rust {marker}"))

    assert page.total_count == 1
    assert [r.id for r in page.results] == [rust.id]
    assert page.results[0].tags == [tag.name]
    assert page.results[0].categories == [category.name]


@pytest.mark.requires_db
async def test_search_matches_preview_substring(db_session) -> None:
    marker = _marker()
    post = await _add_post(db_session, "Untitled", f"all about {marker}channels")

    page = await _service(db_session).search_posts(SearchQuery(text=f"{marker}chan"))

    assert [r.id for r in page.results] == [post.id]


@pytest.mark.requires_db
async def test_pagination_is_newest_first(db_session) -> None:
    """Two matches, page=2 limit=1: the older post, total still 2."""
    marker = _marker()
    await _add_post(db_session, f"Newer {marker}", age_minutes=1)
    older = await _add_post(db_session, f"Older {marker}", age_minutes=10)

    page = await _service(db_session).search_posts(SearchQuery(text=marker, page=2, limit=1))

    assert page.total_count == 2
    assert [r.id for r in page.results] == [older.id]


@pytest.mark.requires_db
async def test_page_past_end_is_empty_with_total(db_session) -> None:
    marker = _marker()
    await _add_post(db_session, f"Only {marker}")

    page = await _service(db_session).search_posts(SearchQuery(text=marker, page=3, limit=10))

    assert page.results == []
    assert page.total_count == 1


@pytest.mark.requires_db
async def test_soft_deleted_posts_are_hidden(db_session) -> None:
    marker = _marker()
    await _add_post(db_session, f"Gone {marker}", deleted_at=utc_now())

    page = await _service(db_session).search_posts(SearchQuery(text=marker))

    assert page.total_count == 0


@pytest.mark.requires_db
async def test_like_wildcards_match_literally(db_session) -> None:
    marker = _marker()
    # Unescaped, "_" would match the "b".
    await _add_post(db_session, f"xab{marker}")

    page = await _service(db_session).search_posts(SearchQuery(text=f"a_{marker}"))

    assert page.total_count == 0


@pytest.mark.requires_db
async def test_suggestions_return_distinct_titles(db_session) -> None:
    marker = _marker()
    await _add_post(db_session, f"Learning Rust {marker}")
    await _add_post(db_session, f"Learning Rust {marker}")

    suggestions = await _service(db_session).get_suggestions(
        SuggestionQuery(text=f"rust {marker}"[:12], limit=5)
    )

    assert [s.text for s in suggestions] == [f"Learning Rust {marker}"]


@pytest.mark.requires_db
async def test_popular_counts_only_trailing_window(db_session) -> None:
    """Same query tracked 5 times in the window and once 8 days ago: count is 5."""
    query = f"rust {_marker()}"
    now = utc_now()
    db_session.add_all(
        [SearchAnalytics(query=query, created_at=now - timedelta(days=1)) for _ in range(5)]
        + [SearchAnalytics(query=query, created_at=now - timedelta(days=8))]
    )
    await db_session.flush()

    popular = await SearchAnalyticsService(
        SearchAnalyticsRepository(db_session)
    ).get_popular_searches(1000)

    counts = {p.query: p.count for p in popular}
    assert counts[query] == 5


@pytest.mark.requires_db
async def test_record_appends_event(db_session) -> None:
    repo = SearchAnalyticsRepository(db_session)

    stored = await repo.record(SearchEventCreate(query=f"go {_marker()}", user_id="", results_count=0))

    assert stored.id
    assert stored.user_id == ""
    assert stored.created_at.tzinfo is not None


async def _rust_fixture(db_session, marker: str) -> tuple[Post, Post, Post]:
    intro = await _add_post(db_session, f"Intro to Rust {marker}", age_minutes=2)
    patterns = await _add_post(db_session, f"Rust Patterns {marker}", age_minutes=1)
    go = await _add_post(db_session, f"Go Basics {marker}")
    return intro, patterns, go


@pytest.mark.requires_db
async def test_rust_titles_scenario(db_session) -> None:
    """Titles "Intro to Rust", "Rust Patterns", "Go Basics": the query finds exactly the two Rust posts."""
    marker = _marker()
    intro, patterns, _ = await _rust_fixture(db_session, marker)

    page = await _service(db_session).search_posts(SearchQuery(text=f"rust {marker}"))

    assert page.total_count == 2
    assert [r.id for r in page.results] == [patterns.id, intro.id]


@pytest.mark.requires_db
async def test_rust_titles_second_page_of_one(db_session) -> None:
    """page=2, limit=1 over the two Rust posts: the second-ranked one, total_count=2."""
    marker = _marker()
    intro, _, _ = await _rust_fixture(db_session, marker)

    page = await _service(db_session).search_posts(
        SearchQuery(text=f"rust {marker}", page=2, limit=1)
    )

    assert page.total_count == 2
    assert [r.id for r in page.results] == [intro.id]


@pytest.mark.requires_db
async def test_rust_titles_suggestions(db_session) -> None:
    marker = _marker()
    await _rust_fixture(db_session, marker)

    suggestions = await _service(db_session).get_suggestions(
        SuggestionQuery(text=f"rust {marker}", limit=10)
    )

    texts = [s.text for s in suggestions]
    assert sorted(texts) == sorted([f"Intro to Rust {marker}", f"Rust Patterns {marker}"])
    assert all(s.score > 0 for s in suggestions)


@pytest.mark.requires_db
async def test_blank_query_counts_every_live_post(db_session) -> None:
    await _add_post(db_session, f"Live {_marker()}")
    await _add_post(db_session, f"Deleted {_marker()}", deleted_at=utc_now())
    live = await db_session.scalar(
        select(func.count()).select_from(Post).where(Post.deleted_at.is_(None))
    )

    page = await _service(db_session).search_posts(SearchQuery(text="", limit=1))

    assert page.total_count == live
    assert len(page.results) == 1


@pytest.mark.requires_db
async def test_popular_ties_use_code_point_order(db_session) -> None:
    """Equal counts: "B..." sorts before "a..." (code points), whatever the database collation."""
    marker = _marker()
    upper, lower = f"B{marker}", f"a{marker}"
    db_session.add_all([SearchAnalytics(query=lower), SearchAnalytics(query=upper)])
    await db_session.flush()

    popular = await SearchAnalyticsRepository(db_session).popular_queries(
        utc_now() - timedelta(days=1), 1000
    )

    queries = [p.query for p in popular]
    assert queries.index(upper) < queries.index(lower)
