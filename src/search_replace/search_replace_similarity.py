"""Whitespace-insensitive similarity scoring based on Levenshtein distance."""

import re

from rapidfuzz.distance import Levenshtein


_WHITESPACE_RUN = re.compile(r'\s+')


def normalize_whitespace(text: str) -> str:
    """Collapse every run of whitespace to a single space and trim both ends."""
    return _WHITESPACE_RUN.sub(' ', text).strip()


def levenshtein_distance(a: str, b: str) -> int:
    """
    Compute the single-character edit distance between two strings.

    Insertions, deletions and substitutions all cost 1.

    Args:
        a: First string
        b: Second string

    Returns:
        Minimum number of edits turning a into b
    """
    return Levenshtein.distance(a, b)


def similarity(original: str, search: str) -> float:
    """
    Score how closely a chunk of the original document matches the search text.

    Both strings are whitespace-normalized first.  An empty search string
    matches anything trivially (pure insertion).

    Args:
        original: Candidate chunk taken from the document
        search: SEARCH block text

    Returns:
        Similarity from 0.0 to 1.0, where 1.0 means identical after normalization
    """
    if search == '':
        return 1.0

    normalized_original = normalize_whitespace(original)
    normalized_search = normalize_whitespace(search)

    if normalized_original == normalized_search:
        return 1.0

    distance = levenshtein_distance(normalized_original, normalized_search)
    max_length = max(len(normalized_original), len(normalized_search))
    return 1.0 - (distance / max_length)
