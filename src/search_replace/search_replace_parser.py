"""SEARCH/REPLACE block parsing."""

import re
from typing import List, Tuple

from search_replace.search_replace_exceptions import SearchReplaceParseError


SEARCH_MARKER = '<<<<<<< SEARCH'
DIVIDER_MARKER = '======='
REPLACE_MARKER = '>>>>>>> REPLACE'


class SearchReplaceParser:
    """Parser for a single SEARCH/REPLACE block."""

    _BLOCK_PATTERN = re.compile(
        r'^<<<<<<< SEARCH[ \t]*\r?\n([\s\S]*?)(?:\r?\n)?^=======[ \t]*\r?\n([\s\S]*?)(?:\r?\n)?^>>>>>>> REPLACE',
        re.MULTILINE
    )
    _SEARCH_MARKER_PATTERN = re.compile(r'^<<<<<<< SEARCH[ \t]*\r?$', re.MULTILINE)

    def parse(self, diff_text: str) -> Tuple[str, str]:
        """
        Extract the SEARCH and REPLACE blocks from diff text.

        Args:
            diff_text: Text holding exactly one SEARCH/REPLACE block

        Returns:
            Tuple of (search, replace) text, either of which may be empty

        Raises:
            SearchReplaceParseError: If the markers are missing, out of order or repeated
        """
        if not diff_text or not diff_text.strip():
            raise SearchReplaceParseError("Empty diff provided")

        search_blocks = len(self._SEARCH_MARKER_PATTERN.findall(diff_text))
        if search_blocks > 1:
            raise SearchReplaceParseError(
                f"Expected exactly one SEARCH/REPLACE block (found {search_blocks})",
                {'search_blocks': search_blocks}
            )

        match = self._BLOCK_PATTERN.search(diff_text)
        if not match:
            raise SearchReplaceParseError(
                "Invalid diff format - missing required SEARCH/REPLACE sections",
                {
                    'missing_markers': self._missing_markers(diff_text),
                    'expected_format': f"{SEARCH_MARKER}\n...\n{DIVIDER_MARKER}\n...\n{REPLACE_MARKER}"
                }
            )

        return match.group(1), match.group(2)

    def _missing_markers(self, diff_text: str) -> List[str]:
        """
        List the markers that never appear on a line of their own.

        Args:
            diff_text: Text that failed to parse

        Returns:
            Marker strings that could not be found
        """
        lines = [line.rstrip() for line in diff_text.splitlines()]
        return [
            marker for marker in (SEARCH_MARKER, DIVIDER_MARKER, REPLACE_MARKER)
            if marker not in lines
        ]
