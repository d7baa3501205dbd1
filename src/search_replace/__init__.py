"""
SEARCH/REPLACE patch matching and application.

This package applies a single SEARCH/REPLACE block to document text even when
the block's line hints and whitespace have drifted from the current content,
re-indenting the replacement to fit wherever the match is found.
"""

from search_replace.search_replace_applier import SearchReplaceApplier
from search_replace.search_replace_config import SearchReplaceConfig
from search_replace.search_replace_diagnostics import build_match_failure, format_match_failure
from search_replace.search_replace_exceptions import (
    SearchReplaceError,
    SearchReplaceHintConsistencyError,
    SearchReplaceHintError,
    SearchReplaceMatchError,
    SearchReplaceParseError,
)
from search_replace.search_replace_matcher import SearchReplaceMatcher, candidate_starts
from search_replace.search_replace_normalizer import (
    add_line_numbers,
    detect_line_ending,
    normalize_blocks,
    split_lines,
    strip_line_numbers,
)
from search_replace.search_replace_parser import SearchReplaceParser
from search_replace.search_replace_similarity import similarity
from search_replace.search_replace_splicer import SearchReplaceSplicer
from search_replace.search_replace_types import (
    Document,
    MatchCandidate,
    MatchFailure,
    MatchResult,
    PatchRequest,
    SearchReplaceErrorKind,
    SearchReplaceResult,
)

__all__ = [
    # Exceptions
    'SearchReplaceError',
    'SearchReplaceParseError',
    'SearchReplaceHintError',
    'SearchReplaceHintConsistencyError',
    'SearchReplaceMatchError',
    # Types
    'Document',
    'PatchRequest',
    'MatchCandidate',
    'MatchResult',
    'MatchFailure',
    'SearchReplaceErrorKind',
    'SearchReplaceResult',
    'SearchReplaceConfig',
    # Functions
    'add_line_numbers',
    'build_match_failure',
    'candidate_starts',
    'detect_line_ending',
    'format_match_failure',
    'normalize_blocks',
    'similarity',
    'split_lines',
    'strip_line_numbers',
    # Core classes
    'SearchReplaceParser',
    'SearchReplaceMatcher',
    'SearchReplaceSplicer',
    'SearchReplaceApplier',
]
