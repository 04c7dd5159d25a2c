"""Domain exceptions for the blog search service.

Independent of transport: the presentation layer maps error_code to an HTTP
status in core.exception_handlers.
"""

from typing import Any


class BlogSearchException(Exception):
    """Base exception for all blog search errors.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Response body: error message, code, and details."""
        return {
            "error": self.message,
            "code": self.error_code,
            "details": self.details,
        }


class ValidationException(BlogSearchException):
    """Raised when a required input is missing or invalid (e.g. blank track query)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class SqlNotConfiguredException(BlogSearchException):
    """Raised when a request needs the database but no engine could be built."""

    def __init__(self) -> None:
        super().__init__(
            message="This operation requires a SQL database that is not configured.",
            error_code="SERVICE_UNAVAILABLE",
        )


class StorageQueryError(BlogSearchException):
    """A query against the backing store failed.

    Carries an opaque summary (e.g. "Search failed") and the underlying
    driver message. Never retried by the service.
    """

    def __init__(self, summary: str, reason: str) -> None:
        super().__init__(summary, "STORAGE_ERROR", {"reason": reason})
        self.reason = reason

    def to_dict(self) -> dict[str, Any]:
        """Response body: summary as error, driver message as details."""
        return {"error": self.message, "details": self.reason}
