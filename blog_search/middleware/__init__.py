"""HTTP middleware: request timeout and request ID.

Applied in main app; order matters (first added = outermost).
"""

from blog_search.middleware.request_id import RequestIDMiddleware
from blog_search.middleware.timeout import TimeoutMiddleware

__all__ = [
    "RequestIDMiddleware",
    "TimeoutMiddleware",
]
