"""Search term model."""

from __future__ import annotations

from pydantic import BaseModel, Field


class SearchTerm(BaseModel):
    """A validated, normalized search term.

    Instances are produced by ``QuerySanitizer``; a SearchTerm that exists
    has already passed the length checks.
    """

    model_config = {"frozen": True}

    raw: str = Field(description="Query exactly as supplied by the client")
    text: str = Field(description="Trimmed, ASCII lower-cased query used for matching")
    like_pattern: str = Field(description="Escaped ``%term%`` pattern for LIKE matching")

    def matches(self, value: str | None) -> bool:
        """Return True if the term is a case-insensitive substring of ``value``."""
        if not value:
            return False
        return self.text in ascii_lower(value)


def ascii_lower(value: str) -> str:
    """Lower-case ASCII letters only, leaving every other character untouched."""
    return value.translate(_ASCII_LOWER)


_ASCII_LOWER = str.maketrans("ABCDEFGHIJKLMNOPQRSTUVWXYZ", "abcdefghijklmnopqrstuvwxyz")
