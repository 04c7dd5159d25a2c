"""Post metadata repository: tag and category names for a batch of posts."""

from __future__ import annotations

from collections import defaultdict

from sqlalchemy import Select, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from blog_search.domain.exceptions import StorageQueryError
from blog_search.infrastructure.persistence.models.taxonomy import (
    Category,
    Tag,
    post_categories,
    post_tags,
)


def tag_names_statement(post_ids: list[str]) -> Select:
    return (
        select(post_tags.c.post_id, Tag.name)
        .join(Tag, Tag.id == post_tags.c.tag_id)
        .where(post_tags.c.post_id.in_(post_ids))
    )


def category_names_statement(post_ids: list[str]) -> Select:
    return (
        select(post_categories.c.post_id, Category.name)
        .join(Category, Category.id == post_categories.c.category_id)
        .where(post_categories.c.post_id.in_(post_ids))
    )


class PostMetadataRepository:
    """Batch lookups over post_tags/post_categories. One query per kind, not per post."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def get_tag_names(self, post_ids: list[str]) -> dict[str, list[str]]:
        """Map post id to tag names (join order, no sort)."""
        return await self._names_by_post(
            tag_names_statement(post_ids), post_ids, "tags"
        )

    async def get_category_names(self, post_ids: list[str]) -> dict[str, list[str]]:
        """Map post id to category names (join order, no sort)."""
        return await self._names_by_post(
            category_names_statement(post_ids), post_ids, "categories"
        )

    async def _names_by_post(
        self, stmt: Select, post_ids: list[str], kind: str
    ) -> dict[str, list[str]]:
        if not post_ids:
            return {}
        try:
            result = await self.db.execute(stmt)
        except SQLAlchemyError as e:
            raise StorageQueryError(f"Failed to load {kind}", str(e)) from e
        names: defaultdict[str, list[str]] = defaultdict(list)
        for post_id, name in result.all():
            names[str(post_id)].append(name)
        return dict(names)
