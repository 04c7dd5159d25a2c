"""Query and pagination normalization for the search endpoints.

Leniency policy: malformed pagination never fails a request. Anything that is
not a positive integer is replaced by the endpoint's default, so clients that
send page=abc or limit=-1 still get a first page back. Values beyond the
signed 64-bit range (what PostgreSQL accepts for LIMIT/OFFSET) are malformed
too, and a page whose offset would overflow is pulled back to the last page
that still fits, which is simply past the end of any real result set.
"""

from __future__ import annotations

import unicodedata
from dataclasses import dataclass
from typing import Any

DEFAULT_PAGE = 1
DEFAULT_SEARCH_LIMIT = 10
DEFAULT_SUGGESTION_LIMIT = 5
DEFAULT_POPULAR_LIMIT = 10

MAX_SQL_INT = 2**63 - 1


@dataclass(frozen=True)
class SearchQuery:
    """Normalized post search request."""

    text: str
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_SEARCH_LIMIT

    @property
    def has_text(self) -> bool:
        return bool(self.text)

    @property
    def folded_text(self) -> str:
        return fold_query_text(self.text)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


@dataclass(frozen=True)
class SuggestionQuery:
    """Normalized suggestion request."""

    text: str
    limit: int = DEFAULT_SUGGESTION_LIMIT

    @property
    def folded_text(self) -> str:
        return fold_query_text(self.text)


def parse_positive_int(raw: Any, default: int) -> int:
    """Return raw as an int if it is a positive integer (or its decimal string), else default."""
    if raw is None or isinstance(raw, bool):
        return default
    if isinstance(raw, int):
        return raw if 1 <= raw <= MAX_SQL_INT else default
    if not isinstance(raw, str):
        return default
    candidate = raw.strip()
    if candidate.startswith("+"):
        candidate = candidate[1:]
    if not candidate.isdecimal() or not candidate.isascii():
        return default
    # Longer digit strings cannot fit; also keeps int() away from its digit limit.
    digits = candidate.lstrip("0")
    if len(digits) > len(str(MAX_SQL_INT)):
        return default
    value = int(digits or "0")
    return value if 1 <= value <= MAX_SQL_INT else default


def normalize_query_text(raw: str | None) -> str:
    """Trim surrounding whitespace; None becomes the empty string."""
    if raw is None:
        return ""
    return raw.strip()


def fold_query_text(text: str) -> str:
    """Lowercase and strip combining marks ("Tiếng Việt" -> "tieng viet").

    Matches the lower(unaccent(...)) side of the SQL filters.
    """
    lowered = text.lower()
    decomposed = unicodedata.normalize("NFD", lowered)
    stripped = "".join(ch for ch in decomposed if unicodedata.category(ch) != "Mn")
    return unicodedata.normalize("NFC", stripped)


def normalize_limit(raw: Any, default: int) -> int:
    return parse_positive_int(raw, default)


def normalize_search_params(
    q: str | None,
    page: Any = None,
    limit: Any = None,
    default_limit: int = DEFAULT_SEARCH_LIMIT,
) -> SearchQuery:
    """Build a SearchQuery; blank text means "no text filter" (match all).

    page is capped so that (page - 1) * limit stays within MAX_SQL_INT.
    """
    parsed_limit = parse_positive_int(limit, default_limit)
    parsed_page = parse_positive_int(page, DEFAULT_PAGE)
    return SearchQuery(
        text=normalize_query_text(q),
        page=min(parsed_page, MAX_SQL_INT // parsed_limit + 1),
        limit=parsed_limit,
    )


def normalize_suggestion_params(
    q: str | None,
    limit: Any = None,
    default_limit: int = DEFAULT_SUGGESTION_LIMIT,
) -> SuggestionQuery:
    """Build a SuggestionQuery; blank text yields no suggestions downstream."""
    return SuggestionQuery(
        text=normalize_query_text(q),
        limit=parse_positive_int(limit, default_limit),
    )
