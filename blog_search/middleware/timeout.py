"""Request timeout middleware.

Cancels the request after the configured timeout (asyncio.wait_for). The
cancellation propagates into the in-flight database call, which is how a
slow search is aborted; the service holds no cancellation state itself.
"""

import asyncio
import logging
from typing import Callable

from starlette.responses import JSONResponse

logger = logging.getLogger(__name__)


def timeout_response(timeout_seconds: float) -> JSONResponse:
    """504 body, same {"error", "details"} shape as the other error responses."""
    return JSONResponse(
        status_code=504,
        content={
            "error": f"Request timed out after {timeout_seconds} seconds",
            "details": {"timeout_seconds": timeout_seconds},
        },
    )


def TimeoutMiddleware(app: Callable, timeout_seconds: float) -> Callable:
    """Cancel request after timeout_seconds (504 if no response has started)."""

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return
        started = asyncio.Event()

        async def send_wrapper(message: dict) -> None:
            if message["type"] == "http.response.start":
                started.set()
            await send(message)

        try:
            await asyncio.wait_for(app(scope, receive, send_wrapper), timeout_seconds)
        except TimeoutError:
            logger.warning(
                "%s %s cancelled after %ss",
                scope.get("method", ""),
                scope.get("path", ""),
                timeout_seconds,
            )
            # Headers already sent: the client sees a truncated body instead.
            if not started.is_set():
                await timeout_response(timeout_seconds)(scope, receive, send)

    return asgi_app
