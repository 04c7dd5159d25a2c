"""Raw ASGI middleware: request id binding, log stamping and request timeout."""

import asyncio
import logging

from httpx import ASGITransport, AsyncClient
from starlette.responses import JSONResponse

from blog_search.middleware import TimeoutMiddleware
from blog_search.middleware.request_id import RequestIDMiddleware, sanitize_request_id
from blog_search.shared.context import get_request_id, reset_request_id, set_request_id
from blog_search.shared.telemetry.logging import RequestIdFilter


def test_sanitize_request_id_keeps_safe_values() -> None:
    assert sanitize_request_id("req-42_a") == "req-42_a"


def test_sanitize_request_id_replaces_unsafe_values() -> None:
    for raw in (None, "", "bad id\nInjected: x", "x" * 65):
        assert sanitize_request_id(raw) != raw


async def _echo_request_id(scope, receive, send) -> None:
    response = JSONResponse({"seen": get_request_id()})
    await response(scope, receive, send)


async def test_request_id_is_bound_while_the_request_runs() -> None:
    app = RequestIDMiddleware(_echo_request_id)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        response = await ac.get("/search/posts", headers={"X-Request-ID": "trace-7"})

    assert response.json() == {"seen": "trace-7"}
    assert response.headers["X-Request-ID"] == "trace-7"
    assert get_request_id() is None


async def test_unsafe_request_id_is_replaced_everywhere() -> None:
    app = RequestIDMiddleware(_echo_request_id)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        response = await ac.get("/search/posts", headers={"X-Request-ID": "a b"})

    seen = response.json()["seen"]
    assert seen != "a b"
    assert response.headers["X-Request-ID"] == seen


def _record() -> logging.LogRecord:
    return logging.LogRecord("blog_search", logging.INFO, __file__, 1, "search", (), None)


def test_log_filter_stamps_current_request_id() -> None:
    token = set_request_id("req-99")
    try:
        record = _record()
        assert RequestIdFilter().filter(record) is True
    finally:
        reset_request_id(token)
    assert record.request_id == "req-99"


def test_log_filter_uses_dash_outside_a_request() -> None:
    record = _record()
    RequestIdFilter().filter(record)
    assert record.request_id == "-"


async def _slow_app(scope, receive, send) -> None:
    await asyncio.sleep(5)


async def test_timeout_returns_504_json() -> None:
    app = TimeoutMiddleware(_slow_app, timeout_seconds=0.05)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        response = await ac.get("/search/posts")

    assert response.status_code == 504
    assert response.json()["details"] == {"timeout_seconds": 0.05}
