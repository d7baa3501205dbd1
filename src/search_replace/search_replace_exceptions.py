"""Custom exceptions for search/replace patch operations."""

from typing import Any

from search_replace.search_replace_types import MatchFailure, SearchReplaceErrorKind


class SearchReplaceError(Exception):
    """Base exception for search/replace operations."""

    kind = SearchReplaceErrorKind.SYNTAX

    def __init__(self, message: str, error_details: dict[str, Any] | None = None):
        """
        Initialize the exception.

        Args:
            message: Error message
            error_details: Optional dictionary with detailed error information
        """
        super().__init__(message)
        self.error_details = error_details


class SearchReplaceParseError(SearchReplaceError):
    """Raised when the SEARCH/REPLACE markers are missing or malformed."""

    kind = SearchReplaceErrorKind.SYNTAX


class SearchReplaceHintError(SearchReplaceError):
    """Raised when a line range hint is outside the document or inverted."""

    kind = SearchReplaceErrorKind.HINT_RANGE


class SearchReplaceHintConsistencyError(SearchReplaceError):
    """Raised when an empty SEARCH block is combined with an unusable hint."""

    kind = SearchReplaceErrorKind.HINT_CONSISTENCY


class SearchReplaceMatchError(SearchReplaceError):
    """Raised when no candidate reaches the similarity threshold."""

    kind = SearchReplaceErrorKind.NO_MATCH

    def __init__(self, message: str, failure: MatchFailure):
        """
        Initialize the exception.

        Args:
            message: Formatted description of the failed match
            failure: Structured details of the best attempt
        """
        super().__init__(message, failure.to_dict())
        self.failure = failure
