"""Post search repository. Uses PostgreSQL full-text search on posts.title and posts.preview_content.

The filter is a disjunction of a lexical match (tsvector @@ plainto_tsquery)
and substring matches on title and preview, so short or partial queries that
the lexical match misses are still found. Results are newest first.

Expressions use literal regconfig/'' constants (not bind parameters) so they
are textually identical to the expression indexes created in
search_indexes.py and the planner can use them.
"""

from __future__ import annotations

from sqlalchemy import ColumnElement, func, literal_column, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from blog_search.application.dtos.search import SearchableDocument, SearchSuggestion
from blog_search.application.services.query_normalizer import (
    SearchQuery,
    SuggestionQuery,
)
from blog_search.domain.exceptions import StorageQueryError
from blog_search.infrastructure.persistence.models.post import Post
from blog_search.shared.utils.datetime import ensure_utc

LIKE_ESCAPE = "\\"

_EMPTY = literal_column("''")
_SPACE = literal_column("' '")


def escape_like(value: str) -> str:
    """Escape LIKE/ILIKE wildcards so the value matches literally."""
    return (
        value.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )


def contains_pattern(value: str) -> str:
    return f"%{escape_like(value)}%"


def regconfig(text_config: str) -> ColumnElement:
    """Text search configuration as a SQL constant. text_config is validated in Settings."""
    return literal_column(f"'{text_config}'::regconfig")


def folded(expr: ColumnElement, unaccent: bool) -> ColumnElement:
    """lower(expr), or lower(immutable_unaccent(expr)) when accent folding is on."""
    if unaccent:
        expr = func.immutable_unaccent(expr)
    return func.lower(expr)


def document_vector(text_config: str, unaccent: bool) -> ColumnElement:
    """Lexical vector over title + preview text."""
    text = (
        func.coalesce(Post.title, _EMPTY)
        .op("||")(_SPACE)
        .op("||")(func.coalesce(Post.preview_content, _EMPTY))
    )
    return func.to_tsvector(regconfig(text_config), folded(text, unaccent))


def title_vector(text_config: str, unaccent: bool) -> ColumnElement:
    """Lexical vector over the title alone (used to score suggestions)."""
    return func.to_tsvector(
        regconfig(text_config), folded(func.coalesce(Post.title, _EMPTY), unaccent)
    )


def lexical_query(text_config: str, folded_text: str) -> ColumnElement:
    return func.plainto_tsquery(regconfig(text_config), folded_text)


def substring_match(
    column: ColumnElement, text: str, folded_text: str, unaccent: bool
) -> ColumnElement[bool]:
    """Case-insensitive containment; also accent-insensitive when unaccent is on."""
    conditions = [column.ilike(contains_pattern(text), escape=LIKE_ESCAPE)]
    if unaccent:
        conditions.append(
            folded(column, unaccent=True).like(
                contains_pattern(folded_text), escape=LIKE_ESCAPE
            )
        )
    return or_(*conditions) if len(conditions) > 1 else conditions[0]


def build_text_filter(
    text: str, folded_text: str, text_config: str, unaccent: bool
) -> ColumnElement[bool]:
    """Lexical match OR title substring OR preview substring."""
    return or_(
        document_vector(text_config, unaccent).bool_op("@@")(
            lexical_query(text_config, folded_text)
        ),
        substring_match(Post.title, text, folded_text, unaccent),
        substring_match(Post.preview_content, text, folded_text, unaccent),
    )


class SearchRepository:
    """Ranked post search, match counting, and title suggestions (read-only)."""

    def __init__(
        self,
        db: AsyncSession,
        text_config: str = "simple",
        unaccent: bool = False,
    ) -> None:
        self.db = db
        self.text_config = text_config
        self.unaccent = unaccent

    def _conditions(self, query: SearchQuery) -> list[ColumnElement[bool]]:
        conditions: list[ColumnElement[bool]] = [Post.deleted_at.is_(None)]
        if query.has_text:
            conditions.append(
                build_text_filter(
                    query.text, query.folded_text, self.text_config, self.unaccent
                )
            )
        return conditions

    def count_statement(self, query: SearchQuery):
        """SELECT count(*) with the same filter as the page (no order, no limit)."""
        return select(func.count()).select_from(Post).where(*self._conditions(query))

    def page_statement(self, query: SearchQuery):
        """Projection of matching posts, newest first, offset then limit."""
        return (
            select(
                Post.id,
                Post.title,
                Post.title_name,
                Post.preview_content,
                Post.user_id,
                Post.created_at,
                Post.views,
            )
            .where(*self._conditions(query))
            .order_by(Post.created_at.desc(), Post.id.desc())
            .offset(query.offset)
            .limit(query.limit)
        )

    def suggestion_statement(self, query: SuggestionQuery):
        """Distinct matching titles with their best ts_rank, best first.

        Ties are broken by title under the "C" collation (code point order), the
        same order the service sorts by, so LIMIT keeps the same rows.
        """
        vector = title_vector(self.text_config, self.unaccent)
        tsquery = lexical_query(self.text_config, query.folded_text)
        score = func.max(func.ts_rank(vector, tsquery)).label("score")
        title_folded = folded(Post.title, self.unaccent)
        return (
            select(Post.title, score)
            .where(
                Post.deleted_at.is_(None),
                Post.title != "",
                or_(
                    title_folded.like(
                        contains_pattern(query.folded_text), escape=LIKE_ESCAPE
                    ),
                    Post.title.ilike(contains_pattern(query.text), escape=LIKE_ESCAPE),
                    vector.bool_op("@@")(tsquery),
                ),
            )
            .group_by(Post.title)
            .order_by(score.desc(), Post.title.collate("C").asc())
            .limit(query.limit)
        )

    async def count_matches(self, query: SearchQuery) -> int:
        """Return the number of posts matching the filter (all live posts when blank)."""
        try:
            result = await self.db.execute(self.count_statement(query))
        except SQLAlchemyError as e:
            raise StorageQueryError("Search failed", str(e)) from e
        return int(result.scalar_one())

    async def fetch_page(self, query: SearchQuery) -> list[SearchableDocument]:
        """Return the requested page of matching posts, newest first."""
        try:
            result = await self.db.execute(self.page_statement(query))
        except SQLAlchemyError as e:
            raise StorageQueryError("Search failed", str(e)) from e
        return [
            SearchableDocument(
                id=str(row["id"]),
                title=row["title"] or "",
                title_name=row["title_name"] or "",
                preview_content=row["preview_content"] or "",
                user_id=str(row["user_id"]),
                created_at=ensure_utc(row["created_at"]),
                views=int(row["views"] or 0),
            )
            for row in result.mappings().all()
        ]

    async def suggest_titles(self, query: SuggestionQuery) -> list[SearchSuggestion]:
        """Return distinct title suggestions with ts_rank scores. Blank text yields []."""
        if not query.text:
            return []
        try:
            result = await self.db.execute(self.suggestion_statement(query))
        except SQLAlchemyError as e:
            raise StorageQueryError("Failed to get suggestions", str(e)) from e
        return [
            SearchSuggestion(text=row["title"], score=float(row["score"] or 0.0))
            for row in result.mappings().all()
        ]
