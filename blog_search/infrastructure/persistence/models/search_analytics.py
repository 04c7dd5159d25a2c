"""Search analytics ORM model. Append-only log of executed searches."""

import uuid
from datetime import datetime

from sqlalchemy import DateTime, Index, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from blog_search.infrastructure.persistence.database import Base


def _new_event_id() -> str:
    return str(uuid.uuid4())


class SearchAnalytics(Base):
    """One row per tracked search: query text, requester, result count, time."""

    __tablename__ = "search_analytics"

    id: Mapped[str] = mapped_column(
        Uuid(as_uuid=False), primary_key=True, default=_new_event_id
    )
    query: Mapped[str] = mapped_column(Text, nullable=False)
    # Opaque requester id from the identity system; empty for anonymous searches.
    user_id: Mapped[str] = mapped_column(String, nullable=False, default="")
    results_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    __table_args__ = (
        Index("idx_search_analytics_created_at", "created_at"),
    )
