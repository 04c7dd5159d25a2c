"""Span helpers for use cases: a @traced decorator and current-span attributes.

Without a configured tracer provider the OpenTelemetry API is a no-op, so
these helpers cost nothing when TELEMETRY_ENABLED is false.
"""

from collections.abc import Awaitable, Callable
from functools import wraps
from typing import Any, TypeVar

from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode

T = TypeVar("T")

# Keyword arguments recorded on spans. Query text is user input and is never recorded.
SAFE_ARG_NAMES = frozenset(
    {"post_id", "limit", "page", "results_count", "window_days"}
)

_tracer = trace.get_tracer("blog_search")


def traced(
    operation_name: str,
) -> Callable[[Callable[..., Awaitable[T]]], Callable[..., Awaitable[T]]]:
    """Run an async function inside a span named operation_name.

    Allowlisted keyword arguments become "arg.<name>" attributes. Exceptions
    mark the span as failed and are re-raised unchanged.
    """

    def decorator(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
        @wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> T:
            with _tracer.start_as_current_span(
                operation_name, record_exception=False, set_status_on_exception=False
            ) as span:
                for key, value in kwargs.items():
                    if key in SAFE_ARG_NAMES:
                        span.set_attribute(f"arg.{key}", str(value))
                try:
                    result = await func(*args, **kwargs)
                except Exception as e:
                    span.set_status(Status(StatusCode.ERROR, type(e).__name__))
                    span.record_exception(e)
                    raise
                span.set_status(Status(StatusCode.OK))
                return result

        return wrapper

    return decorator


def add_span_attributes(**attributes: str | int | float | bool) -> None:
    """Set attributes on the current span if it is recording."""
    span = trace.get_current_span()
    if span.is_recording():
        for key, value in attributes.items():
            span.set_attribute(key, value)
