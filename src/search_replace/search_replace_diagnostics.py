"""Diagnostic data and messages for SEARCH blocks that could not be matched."""

import math
from typing import Sequence

from search_replace.search_replace_config import SearchReplaceConfig
from search_replace.search_replace_normalizer import add_line_numbers
from search_replace.search_replace_types import MatchFailure, MatchResult


def _percent(value: float) -> int:
    return math.floor(value * 100)


def build_match_failure(
    original_lines: Sequence[str],
    search_lines: Sequence[str],
    match_result: MatchResult,
    config: SearchReplaceConfig,
    start_line: int | None = None,
    end_line: int | None = None
) -> MatchFailure:
    """
    Collect everything needed to explain a failed match.

    The excerpt covers the hinted range widened by the buffer, or the whole
    document when no hint was given.

    Args:
        original_lines: Lines of the document
        search_lines: Lines of the SEARCH block
        match_result: Result returned by the matcher
        config: Settings used for the match
        start_line: First hinted line (1-indexed), or None
        end_line: Last hinted line (1-indexed, inclusive), or None

    Returns:
        MatchFailure describing the attempt
    """
    if start_line is not None and end_line is not None:
        excerpt_from = max(0, start_line - 1 - config.buffer_lines)
        excerpt_to = min(len(original_lines), end_line + config.buffer_lines)

    else:
        excerpt_from = 0
        excerpt_to = len(original_lines)

    return MatchFailure(
        score=match_result.confidence,
        threshold=match_result.threshold,
        search_lines=tuple(search_lines),
        start_line=start_line,
        end_line=end_line,
        best_match=match_result.best,
        excerpt_start=excerpt_from + 1,
        excerpt_lines=tuple(original_lines[excerpt_from:excerpt_to])
    )


def format_match_failure(failure: MatchFailure) -> str:
    """
    Render a failed match as a single human-readable message.

    Args:
        failure: Structured failure details

    Returns:
        Message embedding the score, threshold, search content, best match and original excerpt
    """
    score = _percent(failure.score)
    threshold = _percent(failure.threshold)
    hinted = failure.start_line is not None and failure.end_line is not None

    line_range = f" at start: {failure.start_line} to end: {failure.end_line}" if hinted else ''
    search_range = f"lines {failure.start_line}-{failure.end_line}" if hinted else 'start to end'

    if failure.best_match is not None and failure.best_match.lines:
        best_match = add_line_numbers(failure.best_match.lines, failure.best_match.first_line)

    else:
        best_match = '(no match)'

    return (
        f"No sufficiently similar match found{line_range} ({score}% similar, needs {threshold}%)\n\n"
        f"Debug Info:\n"
        f"- Similarity Score: {score}%\n"
        f"- Required Threshold: {threshold}%\n"
        f"- Search Range: {search_range}\n\n"
        f"Search Content:\n{add_line_numbers(failure.search_lines)}\n\n"
        f"Best Match Found:\n{best_match}\n\n"
        f"Original Content:\n{add_line_numbers(failure.excerpt_lines, failure.excerpt_start)}"
    )
