"""Tests for the query sanitizer."""

from __future__ import annotations

import pytest

from toursearch.core.exceptions import QueryValidationError
from toursearch.core.sanitizer import QuerySanitizer, escape_like


class TestValidation:
    @pytest.mark.parametrize("raw", [None, "", " ", "a", "  a  ", "\tb\n"])
    def test_short_queries_rejected(self, sanitizer: QuerySanitizer, raw: str | None) -> None:
        with pytest.raises(QueryValidationError, match="at least 2 characters"):
            sanitizer.sanitize(raw)

    def test_two_characters_accepted(self, sanitizer: QuerySanitizer) -> None:
        term = sanitizer.sanitize(" ab ")
        assert term.text == "ab"

    def test_too_long_rejected(self) -> None:
        sanitizer = QuerySanitizer(max_length=10)
        with pytest.raises(QueryValidationError, match="at most 10"):
            sanitizer.sanitize("x" * 11)

    def test_custom_min_length(self) -> None:
        sanitizer = QuerySanitizer(min_length=3)
        with pytest.raises(QueryValidationError, match="at least 3"):
            sanitizer.sanitize("ab")


class TestNormalization:
    def test_trims_and_lowercases(self, sanitizer: QuerySanitizer) -> None:
        term = sanitizer.sanitize("  Shahdag Day HIKE ")
        assert term.text == "shahdag day hike"

    def test_raw_query_preserved(self, sanitizer: QuerySanitizer) -> None:
        term = sanitizer.sanitize("  Shahdag ")
        assert term.raw == "  Shahdag "

    def test_only_ascii_is_lowercased(self, sanitizer: QuerySanitizer) -> None:
        term = sanitizer.sanitize("ŞEKİ Tour")
        assert term.text == "Şekİ tour"

    def test_like_pattern_wraps_term(self, sanitizer: QuerySanitizer) -> None:
        assert sanitizer.sanitize("Baku").like_pattern == "%baku%"


class TestEscaping:
    def test_escape_percent_and_underscore(self) -> None:
        assert escape_like("50%_off") == "50\\%\\_off"

    def test_escape_backslash_first(self) -> None:
        assert escape_like("a\\b") == "a\\\\b"

    def test_pattern_escapes_wildcards(self, sanitizer: QuerySanitizer) -> None:
        term = sanitizer.sanitize("%%")
        assert term.like_pattern == "%\\%\\%%"
        assert term.text == "%%"


class TestSearchTermMatching:
    def test_matches_case_insensitively(self, sanitizer: QuerySanitizer) -> None:
        term = sanitizer.sanitize("shahdag")
        assert term.matches("SHAHDAG Day Hike")

    def test_no_match_on_empty(self, sanitizer: QuerySanitizer) -> None:
        term = sanitizer.sanitize("shahdag")
        assert not term.matches(None)
        assert not term.matches("")

    def test_wildcards_are_literal(self, sanitizer: QuerySanitizer) -> None:
        term = sanitizer.sanitize("a_b")
        assert term.matches("xa_by")
        assert not term.matches("axb")
