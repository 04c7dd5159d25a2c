"""Idempotent bootstrap of the search schema (analytics table and indexes).

Runs at startup when SEARCH_ENSURE_INDEXES is true. Every statement uses
IF NOT EXISTS / OR REPLACE, so concurrent instances starting together rely
on PostgreSQL's own catalog locking instead of any coordination here. Each
statement runs in its own transaction; a failure is logged and the rest
still run.

The index expressions must stay textually identical to the ones built in
repositories/search_repo.py, or the planner will not use them.
"""

import logging

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine

from blog_search.infrastructure.persistence.models.search_analytics import (
    SearchAnalytics,
)

logger = logging.getLogger(__name__)

_UNACCENT_STATEMENTS = [
    "CREATE EXTENSION IF NOT EXISTS unaccent",
    # unaccent() is STABLE; expression indexes need an IMMUTABLE wrapper.
    """
    CREATE OR REPLACE FUNCTION immutable_unaccent(text)
    RETURNS text AS $$
    BEGIN
      RETURN unaccent($1);
    END;
    $$ LANGUAGE plpgsql IMMUTABLE
    """,
]


def _folded_sql(expr: str, unaccent: bool) -> str:
    if unaccent:
        return f"lower(immutable_unaccent({expr}))"
    return f"lower({expr})"


def index_statements(text_config: str, unaccent: bool) -> list[str]:
    """DDL for the lexical and sort indexes. text_config is validated in Settings."""
    document_text = _folded_sql(
        "coalesce(posts.title, '') || ' ' || coalesce(posts.preview_content, '')",
        unaccent,
    )
    title_text = _folded_sql("coalesce(posts.title, '')", unaccent)
    cfg = f"'{text_config}'::regconfig"
    return [
        f"CREATE INDEX IF NOT EXISTS idx_posts_fulltext_search "
        f"ON posts USING gin (to_tsvector({cfg}, {document_text}))",
        f"CREATE INDEX IF NOT EXISTS idx_posts_title_fulltext "
        f"ON posts USING gin (to_tsvector({cfg}, {title_text}))",
        "CREATE INDEX IF NOT EXISTS idx_posts_created_at ON posts (created_at)",
        "CREATE INDEX IF NOT EXISTS idx_posts_views ON posts (views)",
        "CREATE INDEX IF NOT EXISTS idx_posts_user_id ON posts (user_id)",
        "CREATE INDEX IF NOT EXISTS idx_search_analytics_created_at "
        "ON search_analytics (created_at)",
    ]


async def _run(engine: AsyncEngine, statement: str) -> bool:
    try:
        async with engine.begin() as conn:
            await conn.execute(text(statement))
    except SQLAlchemyError as e:
        logger.warning(
            "Search schema statement failed: %s (%s)",
            statement.strip().splitlines()[0],
            e,
        )
        return False
    return True


async def ensure_search_schema(
    engine: AsyncEngine, text_config: str = "simple", unaccent: bool = False
) -> int:
    """Create the analytics table and search indexes if missing.

    Returns:
        Number of statements that failed (0 when everything is in place).
    """
    failures = 0
    try:
        async with engine.begin() as conn:
            await conn.run_sync(
                SearchAnalytics.metadata.create_all,
                tables=[SearchAnalytics.__table__],
                checkfirst=True,
            )
    except SQLAlchemyError as e:
        logger.warning("Could not create search_analytics table: %s", e)
        failures += 1

    statements = list(_UNACCENT_STATEMENTS) if unaccent else []
    statements.extend(index_statements(text_config, unaccent))
    for statement in statements:
        if not await _run(engine, statement):
            failures += 1

    if failures:
        logger.warning("Search schema bootstrap finished with %d failures", failures)
    else:
        logger.info("Search schema bootstrap complete")
    return failures
