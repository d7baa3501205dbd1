"""Locating a SEARCH block within a document that may have drifted."""

import logging
from typing import List, Sequence, Tuple

from search_replace.search_replace_config import SearchReplaceConfig
from search_replace.search_replace_exceptions import (
    SearchReplaceHintConsistencyError,
    SearchReplaceHintError,
)
from search_replace.search_replace_similarity import similarity
from search_replace.search_replace_types import MatchCandidate, MatchResult


def candidate_starts(search_start: int, search_end: int, length: int) -> List[int]:
    """
    List candidate start positions from the middle of a window outwards.

    Positions alternate left then right of the midpoint, so when several
    candidates score equally the first one seen is the one nearest the centre.

    Args:
        search_start: First line of the window (0-indexed)
        search_end: End of the window (0-indexed, exclusive)
        length: Number of lines in each candidate

    Returns:
        Every start position whose candidate fits inside the window, centre first
    """
    last_start = search_end - length
    if last_start < search_start:
        return []

    mid_point = (search_start + search_end) // 2
    left = mid_point
    right = mid_point + 1
    starts: List[int] = []

    while left >= search_start or right <= last_start:
        if left >= search_start:
            # The midpoint can sit past the last start that still fits
            if left <= last_start:
                starts.append(left)

            left -= 1

        if right <= last_start:
            starts.append(right)
            right += 1

    return starts


class SearchReplaceMatcher:
    """
    Finds the run of original lines that best matches a SEARCH block.

    The matcher holds no per-call state; thresholds and buffers arrive in a
    SearchReplaceConfig with each call.
    """

    def __init__(self) -> None:
        """Initialize the matcher."""
        self._logger = logging.getLogger("SearchReplaceMatcher")

    def validate_hint(
        self,
        line_count: int,
        search_line_count: int,
        start_line: int | None,
        end_line: int | None
    ) -> Tuple[int | None, int | None]:
        """
        Check a line range hint against the document and the SEARCH block.

        For a non-empty SEARCH block a hint is only used when both bounds are
        given; a single bound is ignored and the whole document is searched.

        Args:
            line_count: Number of lines in the document
            search_line_count: Number of lines in the SEARCH block
            start_line: First hinted line (1-indexed), or None
            end_line: Last hinted line (1-indexed, inclusive), or None

        Returns:
            Tuple of (start_line, end_line), both None when no hint was given

        Raises:
            SearchReplaceHintConsistencyError: If an empty SEARCH block has no usable insertion point
            SearchReplaceHintError: If the range is outside the document or inverted
        """
        requested = {'start_line': start_line, 'end_line': end_line, 'line_count': line_count}

        if search_line_count == 0:
            if start_line is None:
                raise SearchReplaceHintConsistencyError(
                    "Empty search content requires start_line to be specified",
                    requested
                )

            if end_line is not None and start_line != end_line:
                raise SearchReplaceHintConsistencyError(
                    f"Empty search content requires start_line and end_line to be the same "
                    f"(got {start_line}-{end_line})",
                    requested
                )

            end_line = start_line

        elif start_line is None or end_line is None:
            if start_line is not None or end_line is not None:
                self._logger.debug(
                    "Ignoring partial line hint %s-%s, searching whole document", start_line, end_line
                )

            return None, None

        if start_line < 1 or end_line > line_count or start_line > end_line:
            raise SearchReplaceHintError(
                f"Line range {start_line}-{end_line} is invalid (file has {line_count} lines)",
                requested
            )

        return start_line, end_line

    def find_match(
        self,
        original_lines: Sequence[str],
        search_lines: Sequence[str],
        config: SearchReplaceConfig,
        start_line: int | None = None,
        end_line: int | None = None
    ) -> MatchResult:
        """
        Find the best location for the SEARCH block.

        Hints are expected to have been through validate_hint() already.

        Args:
            original_lines: Lines of the document
            search_lines: Lines of the SEARCH block
            config: Threshold and buffer settings
            start_line: First hinted line (1-indexed), or None
            end_line: Last hinted line (1-indexed, inclusive), or None

        Returns:
            MatchResult with the best candidate found and whether it cleared the threshold
        """
        threshold = config.similarity_threshold

        if not search_lines:
            # Pure insertion before start_line
            assert start_line is not None
            insert_at = start_line - 1
            return MatchResult(
                success=True,
                best=MatchCandidate(start=insert_at, length=0, score=1.0),
                threshold=threshold,
                search_start=insert_at,
                search_end=insert_at
            )

        search_chunk = '\n'.join(search_lines)
        search_start = 0
        search_end = len(original_lines)

        if start_line is not None and end_line is not None:
            hinted = self._score_candidate(
                original_lines, start_line - 1, end_line, len(search_lines), search_chunk
            )
            if hinted.score >= threshold:
                self._logger.debug("Hinted range %d-%d matched (%.3f)", start_line, end_line, hinted.score)
                return MatchResult(
                    success=True,
                    best=hinted,
                    threshold=threshold,
                    search_start=start_line - 1,
                    search_end=end_line
                )

            search_start = max(0, start_line - (config.buffer_lines + 1))
            search_end = min(len(original_lines), end_line + config.buffer_lines)
            self._logger.debug(
                "Hinted range %d-%d scored %.3f, searching lines %d-%d",
                start_line, end_line, hinted.score, search_start + 1, search_end
            )

        best = self._middle_out_search(original_lines, search_start, search_end, len(search_lines), search_chunk)

        return MatchResult(
            success=best is not None and best.score >= threshold,
            best=best,
            threshold=threshold,
            search_start=search_start,
            search_end=search_end
        )

    def _middle_out_search(
        self,
        original_lines: Sequence[str],
        search_start: int,
        search_end: int,
        length: int,
        search_chunk: str
    ) -> MatchCandidate | None:
        """
        Score every candidate in the window, centre first, and keep the best.

        Args:
            original_lines: Lines of the document
            search_start: First line of the window (0-indexed)
            search_end: End of the window (0-indexed, exclusive)
            length: Number of lines in the SEARCH block
            search_chunk: SEARCH block joined with '\\n'

        Returns:
            Best scoring candidate, or None if no candidate fits in the window
        """
        best: MatchCandidate | None = None

        for start in candidate_starts(search_start, search_end, length):
            candidate = self._score_candidate(original_lines, start, start + length, length, search_chunk)
            if best is None or candidate.score > best.score:
                best = candidate

        if best is not None:
            self._logger.debug("Best candidate at line %d (%.3f)", best.first_line, best.score)

        return best

    def _score_candidate(
        self,
        original_lines: Sequence[str],
        start: int,
        end: int,
        length: int,
        search_chunk: str
    ) -> MatchCandidate:
        """
        Score original_lines[start:end] against the SEARCH block.

        The scored span can be longer than length for a hinted range; the
        candidate only keeps the length lines it would replace.
        """
        scored = original_lines[start:end]
        return MatchCandidate(
            start=start,
            length=length,
            score=similarity('\n'.join(scored), search_chunk),
            lines=tuple(original_lines[start:start + length])
        )
