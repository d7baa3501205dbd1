"""Immutable matching configuration for search/replace patches."""

from dataclasses import dataclass, replace
import json


DEFAULT_SIMILARITY_THRESHOLD = 1.0
DEFAULT_BUFFER_LINES = 20


@dataclass(frozen=True)
class SearchReplaceConfig:
    """
    Settings that control how a SEARCH block is located.

    A config is passed into each call rather than held by the matcher, so a
    single matcher can serve concurrent callers with different settings.
    """
    similarity_threshold: float = DEFAULT_SIMILARITY_THRESHOLD
    buffer_lines: int = DEFAULT_BUFFER_LINES  # Lines added either side of a hinted range

    def __post_init__(self) -> None:
        if not 0.0 <= self.similarity_threshold <= 1.0:
            raise ValueError(
                f"similarity_threshold must be between 0.0 and 1.0 (got {self.similarity_threshold})"
            )

        if self.buffer_lines < 0:
            raise ValueError(f"buffer_lines must not be negative (got {self.buffer_lines})")

    @classmethod
    def create_default(cls) -> "SearchReplaceConfig":
        """Create a config requiring an exact match with the default buffer."""
        return cls()

    @classmethod
    def load(cls, path: str) -> "SearchReplaceConfig":
        """
        Load a config from a JSON settings file.

        Keys that are not present keep their default values.

        Args:
            path: Path to the settings file

        Returns:
            SearchReplaceConfig with loaded values

        Raises:
            json.JSONDecodeError: If file contains invalid JSON
            ValueError: If a setting is out of range
        """
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)

        defaults = cls.create_default()
        return cls(
            similarity_threshold=float(data.get("similarityThreshold", defaults.similarity_threshold)),
            buffer_lines=int(data.get("bufferLines", defaults.buffer_lines))
        )

    def with_overrides(
        self,
        similarity_threshold: float | None = None,
        buffer_lines: int | None = None
    ) -> "SearchReplaceConfig":
        """
        Create a copy with some settings replaced.

        Args:
            similarity_threshold: New threshold, or None to keep the current one
            buffer_lines: New buffer size, or None to keep the current one

        Returns:
            New SearchReplaceConfig
        """
        changes: dict = {}
        if similarity_threshold is not None:
            changes['similarity_threshold'] = similarity_threshold

        if buffer_lines is not None:
            changes['buffer_lines'] = buffer_lines

        return replace(self, **changes)
