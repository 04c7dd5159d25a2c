"""Settings validation."""

import pytest
from pydantic import ValidationError

from blog_search.core.config import Settings

DB_URL = "postgresql+asyncpg://u:p@localhost:5432/blog"


def test_defaults() -> None:
    settings = Settings(_env_file=None, database_url=DB_URL)
    assert settings.search_text_config == "simple"
    assert settings.search_popular_window_days == 7
    assert settings.api_prefix == ""
    assert settings.user_id_header == "X-User-ID"


def test_database_url_required() -> None:
    with pytest.raises(ValidationError, match="DATABASE_URL is required"):
        Settings(_env_file=None, database_url="")


@pytest.mark.parametrize("config", ["simple; DROP TABLE posts", "Simple", "x'y", ""])
def test_text_config_must_be_identifier(config: str) -> None:
    with pytest.raises(ValidationError):
        Settings(_env_file=None, database_url=DB_URL, search_text_config=config)


def test_popular_window_must_be_positive() -> None:
    with pytest.raises(ValidationError):
        Settings(_env_file=None, database_url=DB_URL, search_popular_window_days=0)
