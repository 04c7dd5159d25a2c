"""Tag and category ORM models and their post association tables."""

from sqlalchemy import Column, ForeignKey, String, Table, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from blog_search.infrastructure.persistence.database import Base

post_tags = Table(
    "post_tags",
    Base.metadata,
    Column("post_id", Uuid(as_uuid=False), ForeignKey("posts.id"), primary_key=True),
    Column("tag_id", Uuid(as_uuid=False), ForeignKey("tags.id"), primary_key=True),
)

post_categories = Table(
    "post_categories",
    Base.metadata,
    Column("post_id", Uuid(as_uuid=False), ForeignKey("posts.id"), primary_key=True),
    Column(
        "category_id",
        Uuid(as_uuid=False),
        ForeignKey("categories.id"),
        primary_key=True,
    ),
)


class Tag(Base):
    """Tag (unique name)."""

    __tablename__ = "tags"

    id: Mapped[str] = mapped_column(Uuid(as_uuid=False), primary_key=True)
    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)


class Category(Base):
    """Category (unique name)."""

    __tablename__ = "categories"

    id: Mapped[str] = mapped_column(Uuid(as_uuid=False), primary_key=True)
    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
