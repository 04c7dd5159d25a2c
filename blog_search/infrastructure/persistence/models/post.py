"""Post ORM model (read-only projection of the content store's posts table).

The content service owns this table and its writes; search only reads it.
"""

from datetime import datetime

from sqlalchemy import BigInteger, DateTime, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from blog_search.infrastructure.persistence.database import Base


class Post(Base):
    """Blog post. Searched on title and preview_content; content body lives elsewhere."""

    __tablename__ = "posts"

    id: Mapped[str] = mapped_column(Uuid(as_uuid=False), primary_key=True)
    title: Mapped[str] = mapped_column(String, nullable=False, default="")
    title_name: Mapped[str] = mapped_column(String, nullable=False, default="")
    image_title: Mapped[str | None] = mapped_column(String, nullable=True)
    preview_content: Mapped[str] = mapped_column(Text, nullable=False, default="")
    user_id: Mapped[str] = mapped_column(Uuid(as_uuid=False), nullable=False)
    views: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    # Soft delete: non-null rows are hidden from search.
    deleted_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
