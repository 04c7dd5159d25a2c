"""Blog post search service: ranked full-text search, suggestions, and search analytics."""
