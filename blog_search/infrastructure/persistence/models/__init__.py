"""ORM models. Import here so Base.metadata sees every table."""

from blog_search.infrastructure.persistence.models.post import Post
from blog_search.infrastructure.persistence.models.search_analytics import (
    SearchAnalytics,
)
from blog_search.infrastructure.persistence.models.taxonomy import (
    Category,
    Tag,
    post_categories,
    post_tags,
)

__all__ = [
    "Category",
    "Post",
    "SearchAnalytics",
    "Tag",
    "post_categories",
    "post_tags",
]
