"""Request ID middleware.

Forwards the caller's request id (or mints one) and echoes it on the
response. While the request runs, including background tasks scheduled by
the endpoint, the id is bound in blog_search.shared.context so every log
line carries it. Raw ASGI (no BaseHTTPMiddleware) so background tasks stay
inside the same context.
"""

import re
import uuid
from typing import Callable

from starlette.datastructures import Headers

from blog_search.shared.context import reset_request_id, set_request_id

# Only ids that are safe to write into logs verbatim are forwarded.
_SAFE_REQUEST_ID = re.compile(r"[A-Za-z0-9_-]{1,64}")


def sanitize_request_id(raw: str | None) -> str:
    """Return the caller's id if it is log-safe, otherwise a fresh UUID4."""
    candidate = (raw or "").strip()
    if _SAFE_REQUEST_ID.fullmatch(candidate):
        return candidate
    return str(uuid.uuid4())


def RequestIDMiddleware(app: Callable, header_name: str = "X-Request-ID") -> Callable:
    """Bind a request id for the lifetime of each HTTP request and echo it back."""
    header_bytes = header_name.lower().encode("latin-1")

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return
        request_id = sanitize_request_id(Headers(scope=scope).get(header_name))
        scope.setdefault("state", {})["request_id"] = request_id

        async def send_wrapper(message: dict) -> None:
            if message["type"] == "http.response.start":
                message["headers"] = [
                    *message.get("headers", []),
                    (header_bytes, request_id.encode("latin-1")),
                ]
            await send(message)

        token = set_request_id(request_id)
        try:
            await app(scope, receive, send_wrapper)
        finally:
            reset_request_id(token)

    return asgi_app
