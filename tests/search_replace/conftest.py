"""Shared fixtures and utilities for search/replace tests."""

import pytest
from typing import Sequence

from search_replace.search_replace_applier import SearchReplaceApplier
from search_replace.search_replace_config import SearchReplaceConfig
from search_replace.search_replace_matcher import SearchReplaceMatcher
from search_replace.search_replace_parser import SearchReplaceParser
from search_replace.search_replace_similarity import similarity
from search_replace.search_replace_splicer import SearchReplaceSplicer
from search_replace.search_replace_types import MatchCandidate


@pytest.fixture
def applier():
    """Create an applier with default settings (exact match, 20 buffer lines)."""
    return SearchReplaceApplier()


@pytest.fixture
def config_custom():
    """Factory for configs with custom settings."""
    def _create_config(similarity_threshold: float = 1.0, buffer_lines: int = 20):
        return SearchReplaceConfig(
            similarity_threshold=similarity_threshold,
            buffer_lines=buffer_lines
        )
    return _create_config


@pytest.fixture
def matcher():
    """Create a matcher."""
    return SearchReplaceMatcher()


@pytest.fixture
def parser():
    """Create a parser."""
    return SearchReplaceParser()


@pytest.fixture
def splicer():
    """Create a splicer."""
    return SearchReplaceSplicer()


class SearchReplaceTestHelpers:
    """Helper utilities for search/replace testing."""

    @staticmethod
    def make_diff(search: str, replace: str) -> str:
        """Build diff text holding one SEARCH/REPLACE block."""
        search_part = f"{search}\n" if search else ""
        replace_part = f"{replace}\n" if replace else ""
        return f"<<<<<<< SEARCH\n{search_part}=======\n{replace_part}>>>>>>> REPLACE"

    @staticmethod
    def numbered(lines: Sequence[str], start_line: int = 1) -> str:
        """Annotate lines the way a numbered file view does."""
        return '\n'.join(f"{start_line + i} | {line}" for i, line in enumerate(lines))

    @staticmethod
    def exhaustive_best(
        original_lines: Sequence[str],
        search_lines: Sequence[str],
        search_start: int,
        search_end: int
    ) -> MatchCandidate | None:
        """Brute-force reference: score every candidate in the window in order."""
        search_chunk = '\n'.join(search_lines)
        length = len(search_lines)
        best: MatchCandidate | None = None
        for start in range(search_start, search_end - length + 1):
            lines = tuple(original_lines[start:start + length])
            score = similarity('\n'.join(lines), search_chunk)
            if best is None or score > best.score:
                best = MatchCandidate(start, length, score, lines)

        return best


@pytest.fixture
def helpers():
    """Provide test helper utilities."""
    return SearchReplaceTestHelpers
