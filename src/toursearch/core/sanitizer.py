"""Query sanitizer — turns raw client input into a ``SearchTerm``.

Normalization is trimming, ASCII lower-casing, and escaping the LIKE meta
characters so user input never acts as a wildcard. Stores bind the pattern
as a parameter.
"""

from __future__ import annotations

import logging

from toursearch.core.exceptions import QueryValidationError
from toursearch.models.query import SearchTerm, ascii_lower

logger = logging.getLogger(__name__)

MIN_LENGTH_MESSAGE = "Search query must be at least {min_length} characters long"
MAX_LENGTH_MESSAGE = "Search query must be at most {max_length} characters long"

_LIKE_ESCAPES = str.maketrans({"\\": "\\\\", "%": "\\%", "_": "\\_"})


def escape_like(value: str) -> str:
    """Escape ``%``, ``_`` and the escape character itself for a LIKE pattern."""
    return value.translate(_LIKE_ESCAPES)


class QuerySanitizer:
    """Validates and normalizes raw search input.

    Args:
        min_length: Minimum length of the trimmed query.
        max_length: Maximum length of the trimmed query.
    """

    def __init__(self, min_length: int = 2, max_length: int = 200) -> None:
        self.min_length = min_length
        self.max_length = max_length

    def sanitize(self, raw: str | None) -> SearchTerm:
        """Validate ``raw`` and build a ``SearchTerm``.

        Args:
            raw: The query as received, or None when it was omitted.

        Returns:
            The normalized search term.

        Raises:
            QueryValidationError: If the trimmed query is too short or too long.
        """
        trimmed = (raw or "").strip()
        if len(trimmed) < self.min_length:
            logger.debug("Rejected query %r: shorter than %d", raw, self.min_length)
            raise QueryValidationError(MIN_LENGTH_MESSAGE.format(min_length=self.min_length))
        if len(trimmed) > self.max_length:
            logger.debug("Rejected query: longer than %d", self.max_length)
            raise QueryValidationError(MAX_LENGTH_MESSAGE.format(max_length=self.max_length))

        text = ascii_lower(trimmed)
        return SearchTerm(
            raw=raw or "",
            text=text,
            like_pattern=f"%{escape_like(text)}%",
        )
