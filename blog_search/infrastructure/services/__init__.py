"""Infrastructure services: work that needs its own database session."""

from blog_search.infrastructure.services.search_event_recorder import (
    BackgroundSearchRecorder,
)

__all__ = ["BackgroundSearchRecorder"]
