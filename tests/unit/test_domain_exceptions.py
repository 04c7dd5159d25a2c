"""Domain exceptions and their HTTP mapping."""

from blog_search.core.exception_handlers import status_for
from blog_search.domain.exceptions import (
    BlogSearchException,
    SqlNotConfiguredException,
    StorageQueryError,
    ValidationException,
)


class TestBlogSearchException:
    def test_error_code_defaults_to_class_name(self) -> None:
        exc = BlogSearchException("boom")
        assert exc.error_code == "BlogSearchException"
        assert exc.to_dict() == {"error": "boom", "code": "BlogSearchException", "details": {}}

    def test_unknown_code_maps_to_400(self) -> None:
        assert status_for(BlogSearchException("boom")) == 400


class TestValidationException:
    def test_field_in_details(self) -> None:
        exc = ValidationException("query is required", field="query")
        assert exc.error_code == "VALIDATION_ERROR"
        assert exc.details == {"field": "query"}
        assert status_for(exc) == 400


class TestStorageQueryError:
    def test_body_is_summary_and_reason(self) -> None:
        exc = StorageQueryError("Search failed", "connection refused")
        assert exc.to_dict() == {"error": "Search failed", "details": "connection refused"}
        assert exc.reason == "connection refused"
        assert status_for(exc) == 500


def test_sql_not_configured_is_503() -> None:
    assert status_for(SqlNotConfiguredException()) == 503
