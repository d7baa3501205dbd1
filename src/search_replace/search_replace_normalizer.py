"""
Line splitting and line-number annotation handling.

Patch authors frequently copy SEARCH/REPLACE text from a numbered file view
("12 | return 1").  When every line of both blocks carries such an annotation
it is stripped before matching.  If only one block is annotated both are left
alone.
"""

import re
from typing import List, Sequence, Tuple


LINE_SPLIT_PATTERN = re.compile(r'\r?\n')

# Digits, optional spaces, a single pipe (not "||"), then an optional space before the content
LINE_NUMBER_PATTERN = re.compile(r'^\s*\d+\s*\|(?!\|) ?(.*)$')


def detect_line_ending(text: str) -> str:
    """
    Detect the line ending used by some text.

    Args:
        text: Text to inspect

    Returns:
        '\\r\\n' if the text contains any Windows line endings, otherwise '\\n'
    """
    if '\r\n' in text:
        return '\r\n'

    return '\n'


def split_lines(text: str) -> List[str]:
    """
    Split text on '\\n' or '\\r\\n'.

    Unlike str.splitlines() this never drops a trailing empty line, so joining
    the result with the detected line ending reproduces the input.

    Args:
        text: Text to split

    Returns:
        List of lines without their line endings
    """
    return LINE_SPLIT_PATTERN.split(text)


def every_line_has_line_number(text: str) -> bool:
    """
    Check whether every line of a block carries a "lineno | " annotation.

    Args:
        text: SEARCH or REPLACE block

    Returns:
        True if the block is non-empty and all of its lines are annotated
    """
    if not text:
        return False

    return all(LINE_NUMBER_PATTERN.match(line) for line in split_lines(text))


def strip_line_numbers(text: str) -> str:
    """
    Remove "lineno | " annotations from every line that has one.

    Args:
        text: Annotated block

    Returns:
        Block content with annotations removed, joined with the block's own line ending
    """
    stripped: List[str] = []
    for line in split_lines(text):
        match = LINE_NUMBER_PATTERN.match(line)
        stripped.append(match.group(1) if match else line)

    return detect_line_ending(text).join(stripped)


def normalize_blocks(search: str, replace: str) -> Tuple[str, str]:
    """
    Strip line-number annotations from SEARCH and REPLACE when both are fully annotated.

    Args:
        search: SEARCH block text
        replace: REPLACE block text

    Returns:
        Tuple of (search, replace), stripped or untouched
    """
    if every_line_has_line_number(search) and every_line_has_line_number(replace):
        return strip_line_numbers(search), strip_line_numbers(replace)

    return search, replace


def add_line_numbers(lines: Sequence[str], start_line: int = 1) -> str:
    """
    Render lines with right-aligned "lineno | " prefixes.

    Args:
        lines: Lines to render
        start_line: Number given to the first line (1-indexed)

    Returns:
        Numbered lines joined with '\\n'
    """
    width = len(str(start_line + len(lines) - 1))
    return '\n'.join(
        f"{str(start_line + i).rjust(width)} | {line}" for i, line in enumerate(lines)
    )
