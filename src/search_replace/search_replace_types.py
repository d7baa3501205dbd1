"""Shared dataclasses for search/replace operations."""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Sequence, Tuple

from search_replace.search_replace_normalizer import detect_line_ending, split_lines


class SearchReplaceErrorKind(Enum):
    """Categories of failure reported by the applier."""

    SYNTAX = auto()
    HINT_RANGE = auto()
    HINT_CONSISTENCY = auto()
    NO_MATCH = auto()


@dataclass(frozen=True)
class Document:
    """A document split into lines, along with the line ending used to rejoin it."""

    lines: Tuple[str, ...]
    line_ending: str = '\n'

    @classmethod
    def from_text(cls, text: str) -> "Document":
        """
        Split raw text into a document.

        Args:
            text: Document content with any line ending style

        Returns:
            Document holding every line, including a trailing empty one if present
        """
        return cls(tuple(split_lines(text)), detect_line_ending(text))

    def join(self, lines: Sequence[str]) -> str:
        """Join lines using this document's line ending."""
        return self.line_ending.join(lines)

    def __len__(self) -> int:
        return len(self.lines)


@dataclass(frozen=True)
class PatchRequest:
    """A single SEARCH/REPLACE edit with an optional 1-indexed inclusive line hint."""

    search: str
    replace: str
    start_line: int | None = None
    end_line: int | None = None

    def search_lines(self) -> Tuple[str, ...]:
        """Get the SEARCH block as lines (empty block gives no lines)."""
        return tuple(split_lines(self.search)) if self.search else ()

    def replace_lines(self) -> Tuple[str, ...]:
        """Get the REPLACE block as lines (empty block gives no lines)."""
        return tuple(split_lines(self.replace)) if self.replace else ()


@dataclass(frozen=True)
class MatchCandidate:
    """A contiguous run of original lines scored against the SEARCH block."""

    start: int  # Index of the first matched line (0-indexed)
    length: int  # Number of original lines replaced (the SEARCH line count)
    score: float  # 0.0 to 1.0
    lines: Tuple[str, ...] = ()  # The original lines this candidate replaces

    @property
    def end(self) -> int:
        """Index one past the last replaced line (0-indexed)."""
        return self.start + self.length

    @property
    def first_line(self) -> int:
        """Line number of the first matched line (1-indexed)."""
        return self.start + 1


@dataclass(frozen=True)
class MatchResult:
    """Result of searching the document for the SEARCH block."""

    success: bool
    best: MatchCandidate | None
    threshold: float
    search_start: int  # First candidate start considered (0-indexed)
    search_end: int  # End of the scanned window (0-indexed, exclusive)

    @property
    def confidence(self) -> float:
        """Score of the best candidate, or 0.0 if nothing was scored."""
        return self.best.score if self.best is not None else 0.0


@dataclass(frozen=True)
class MatchFailure:
    """Structured details of a below-threshold match, kept apart from any formatted text."""

    score: float
    threshold: float
    search_lines: Tuple[str, ...]
    start_line: int | None
    end_line: int | None
    best_match: MatchCandidate | None
    excerpt_start: int  # Line number of the first excerpt line (1-indexed)
    excerpt_lines: Tuple[str, ...]

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-friendly dictionary."""
        best: dict[str, Any] | None = None
        if self.best_match is not None:
            best = {
                'location': self.best_match.first_line,
                'confidence': round(self.best_match.score, 4),
                'actual_context': list(self.best_match.lines)
            }

        return {
            'similarity': round(self.score, 4),
            'threshold': self.threshold,
            'hint': [self.start_line, self.end_line],
            'search_content': list(self.search_lines),
            'best_match': best,
            'excerpt_range': [self.excerpt_start, self.excerpt_start + len(self.excerpt_lines) - 1],
        }


@dataclass
class SearchReplaceResult:
    """Result of applying a search/replace patch."""

    success: bool
    message: str
    content: str | None = None
    match: MatchCandidate | None = None
    error_kind: SearchReplaceErrorKind | None = None
    error_details: dict | None = None
    failure: MatchFailure | None = None
