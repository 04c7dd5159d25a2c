"""Request-scoped context (contextvars).

Holds the request id set by RequestIDMiddleware so log records written while
serving a search, including the analytics write that runs after the
response, can be correlated with the aggregator's logs.
"""

from contextvars import ContextVar, Token

_request_id: ContextVar[str | None] = ContextVar("request_id", default=None)


def get_request_id() -> str | None:
    """Request id of the current request, or None outside a request."""
    return _request_id.get()


def set_request_id(request_id: str | None) -> Token:
    """Bind request_id to the current context; pass the token to reset_request_id."""
    return _request_id.set(request_id)


def reset_request_id(token: Token) -> None:
    _request_id.reset(token)
