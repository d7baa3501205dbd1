"""
srpatch - apply SEARCH/REPLACE patches to files from the command line.

This package wraps the search_replace engine with file handling: reading the
source, dry-run validation, backups and atomic writes.
"""

from .patcher import SearchReplacePatcher, main

__version__ = "1.0.0"

__all__ = [
    "SearchReplacePatcher",
    "main",
]
