"""Shared utilities: telemetry and cross-cutting helpers.

Used by application, infrastructure, and presentation. No business logic.
"""

from blog_search.shared.utils import ensure_utc, utc_now

__all__ = [
    "utc_now",
    "ensure_utc",
]
