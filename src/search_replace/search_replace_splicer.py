"""Indentation-aware replacement of matched lines."""

import re
from typing import List, Sequence

from search_replace.search_replace_types import MatchCandidate


_LEADING_INDENT = re.compile(r'^[\t ]*')


def leading_indent(line: str) -> str:
    """Get the run of spaces and tabs at the start of a line."""
    match = _LEADING_INDENT.match(line)
    return match.group(0) if match else ''


class SearchReplaceSplicer:
    """Splices REPLACE lines into a document at a matched location."""

    def reindent(
        self,
        matched_lines: Sequence[str],
        search_lines: Sequence[str],
        replace_lines: Sequence[str]
    ) -> List[str]:
        """
        Re-anchor the REPLACE block's indentation to where the match actually sits.

        Each REPLACE line keeps its indentation relative to the first SEARCH
        line, applied on top of the indentation of the first matched line.
        Lines indented less than the SEARCH base remove that many characters
        from the matched indentation instead.

        Args:
            matched_lines: Original lines that were matched
            search_lines: Lines of the SEARCH block
            replace_lines: Lines of the REPLACE block

        Returns:
            REPLACE lines with adjusted indentation and trimmed content
        """
        matched_indent = leading_indent(matched_lines[0]) if matched_lines else ''
        search_base_indent = leading_indent(search_lines[0]) if search_lines else ''
        search_base_level = len(search_base_indent)

        indented: List[str] = []
        for line in replace_lines:
            current_indent = leading_indent(line)
            relative_level = len(current_indent) - search_base_level

            if relative_level < 0:
                final_indent = matched_indent[:max(0, len(matched_indent) + relative_level)]

            else:
                final_indent = matched_indent + current_indent[search_base_level:]

            indented.append(final_indent + line.strip())

        return indented

    def splice(
        self,
        original_lines: Sequence[str],
        match: MatchCandidate,
        search_lines: Sequence[str],
        replace_lines: Sequence[str]
    ) -> List[str]:
        """
        Replace the matched lines with the re-indented REPLACE block.

        Args:
            original_lines: Lines of the document
            match: Accepted match location
            search_lines: Lines of the SEARCH block
            replace_lines: Lines of the REPLACE block

        Returns:
            Complete list of lines for the patched document
        """
        matched_lines = original_lines[match.start:match.end]
        replaced = self.reindent(matched_lines, search_lines, replace_lines)
        return [*original_lines[:match.start], *replaced, *original_lines[match.end:]]
