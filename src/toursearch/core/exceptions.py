"""Search pipeline exceptions."""


class SearchError(Exception):
    """Base exception for search pipeline errors."""


class QueryValidationError(SearchError):
    """Raised when the raw query is absent, too short, or too long.

    Surfaced to clients as HTTP 400; never reaches a source adapter.
    """


class SearchFailedError(SearchError):
    """Raised when fan-in or formatting fails, or no source could answer."""
