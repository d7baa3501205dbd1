#!/usr/bin/env python3
"""
srpatch - Command-line tool for applying SEARCH/REPLACE patches to a file.

The patch may carry stale line numbers or slightly different whitespace from
the file; the block is located by similarity and the replacement re-indented
to fit where it is found.

Usage:
    python -m srpatch --file <source_file> --patch <patch_file> [options]

Options:
    --file PATH          Source file to patch (required)
    --patch PATH         File holding one SEARCH/REPLACE block
    --start-line N       First line the SEARCH block is expected at (1-indexed)
    --end-line N         Last line the SEARCH block is expected at (1-indexed)
    --threshold F        Similarity required to accept a match (0.0-1.0)
    --buffer-lines N     Lines searched either side of the hinted range
    --config PATH        JSON settings file
    --apply              Actually apply the patch (default is dry-run)
    --backup             Create backup before applying (file.bak)
    --show-lines         Print the source file with line numbers and exit
    --verbose            Show detailed output
    --log-file PATH      Also write log output to a rotating log file
    --no-color           Disable colored output
"""

import argparse
import json
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
import shutil
import sys
import tempfile
import traceback
from typing import List, Optional, Sequence

from search_replace import (
    SearchReplaceApplier,
    SearchReplaceConfig,
    SearchReplaceResult,
    add_line_numbers,
    split_lines,
)


class Colors:
    """ANSI color codes for terminal output."""

    def __init__(self, enabled: bool = True):
        """
        Initialize the color codes.

        Args:
            enabled: If False every code is an empty string
        """
        self.reset = '\033[0m' if enabled else ''
        self.bold = '\033[1m' if enabled else ''
        self.red = '\033[91m' if enabled else ''
        self.green = '\033[92m' if enabled else ''
        self.yellow = '\033[93m' if enabled else ''
        self.blue = '\033[94m' if enabled else ''
        self.cyan = '\033[96m' if enabled else ''


class SearchReplacePatcher:
    """
    Main patcher application.

    Coordinates:
    - Reading the source and patch files
    - Building the matching configuration
    - Applying the patch via SearchReplaceApplier
    - Writing results
    """

    def __init__(self, args: argparse.Namespace):
        """
        Initialize patcher with command-line arguments.

        Args:
            args: Parsed command-line arguments
        """
        self.args = args
        self.source_file = Path(args.file)
        self.patch_file = Path(args.patch) if args.patch else None
        self.verbose = args.verbose
        self.colors = Colors(enabled=sys.stdout.isatty() and not args.no_color)
        self._logger = logging.getLogger("SearchReplacePatcher")

    def run(self) -> int:
        """
        Run the patcher.

        Returns:
            Exit code (0 for success, non-zero for failure)
        """
        try:
            if not self._validate_inputs():
                return 1

            source_content = self._read_text(self.source_file, "source file")
            if source_content is None:
                return 1

            if self.args.show_lines:
                print(add_line_numbers(split_lines(source_content)))
                return 0

            assert self.patch_file is not None
            patch_content = self._read_text(self.patch_file, "patch file")
            if patch_content is None:
                return 1

            config = self._load_config()
            if config is None:
                return 1

            self._show_patch_info(config)

            applier = SearchReplaceApplier(config)
            result = applier.apply_diff(
                source_content,
                patch_content,
                start_line=self.args.start_line,
                end_line=self.args.end_line,
                dry_run=not self.args.apply
            )

            if not result.success:
                self._print_error(f"Patch failed: {result.message}")
                return 1

            if not self.args.apply:
                print(f"{self.colors.green}✓ {result.message}{self.colors.reset}")
                self._show_dry_run_message()
                return 0

            return self._apply_patch(result)

        except KeyboardInterrupt:
            self._print_error("\nInterrupted by user")
            return 130

        except Exception as e:
            self._logger.exception("Unexpected error patching %s", self.source_file)
            self._print_error(f"Unexpected error: {e}")
            if self.verbose:
                traceback.print_exc()

            return 1

    def _validate_inputs(self) -> bool:
        """Validate that input files exist."""
        if not self.source_file.is_file():
            self._print_error(f"Source file not found: {self.source_file}")
            return False

        if self.args.show_lines:
            return True

        if self.patch_file is None:
            self._print_error("--patch is required unless --show-lines is given")
            return False

        if not self.patch_file.is_file():
            self._print_error(f"Patch file not found: {self.patch_file}")
            return False

        return True

    def _read_text(self, path: Path, description: str) -> Optional[str]:
        """Read a file without translating its line endings."""
        try:
            with open(path, 'r', encoding='utf-8', newline='') as f:
                content = f.read()

        except (OSError, UnicodeDecodeError) as e:
            self._print_error(f"Failed to read {description}: {e}")
            return None

        self._print_verbose(f"Read {len(content)} characters from {path}")
        return content

    def _load_config(self) -> Optional[SearchReplaceConfig]:
        """Build matching settings from the config file and command-line overrides."""
        try:
            if self.args.config:
                config = SearchReplaceConfig.load(self.args.config)

            else:
                config = SearchReplaceConfig.create_default()

            return config.with_overrides(
                similarity_threshold=self.args.threshold,
                buffer_lines=self.args.buffer_lines
            )

        except (OSError, json.JSONDecodeError, ValueError) as e:
            self._print_error(f"Invalid configuration: {e}")
            return None

    def _show_patch_info(self, config: SearchReplaceConfig) -> None:
        """Display information about the patch."""
        c = self.colors
        if self.args.start_line is not None or self.args.end_line is not None:
            hint = f"{self.args.start_line or '?'}-{self.args.end_line or '?'}"

        else:
            hint = "none"

        print(f"\n{c.bold}Patch Information:{c.reset}")
        print(f"  Source file:  {c.cyan}{self.source_file}{c.reset}")
        print(f"  Patch file:   {c.cyan}{self.patch_file}{c.reset}")
        print(f"  Line hint:    {c.cyan}{hint}{c.reset}")
        print(f"  Threshold:    {c.cyan}{config.similarity_threshold:.2f}{c.reset}")
        print(f"  Buffer lines: {c.cyan}±{config.buffer_lines} lines{c.reset}")

    def _apply_patch(self, result: SearchReplaceResult) -> int:
        """Write the patched content to the source file."""
        c = self.colors
        if self.args.backup and not self._create_backup():
            return 1

        assert result.content is not None
        if not self._write_patched_file(result.content):
            return 1

        print(f"{c.green}✓ {result.message}{c.reset}")
        print(f"  Modified: {c.cyan}{self.source_file}{c.reset}")

        if self.args.backup:
            print(f"  Backup:   {c.cyan}{self._backup_path()}{c.reset}")

        return 0

    def _backup_path(self) -> Path:
        return self.source_file.with_suffix(self.source_file.suffix + '.bak')

    def _create_backup(self) -> bool:
        """Create backup of source file."""
        backup_file = self._backup_path()

        try:
            shutil.copy2(self.source_file, backup_file)

        except OSError as e:
            self._print_error(f"Failed to create backup: {e}")
            return False

        self._print_verbose(f"Created backup: {backup_file}")
        return True

    def _write_patched_file(self, content: str) -> bool:
        """Write content via a temporary file and rename it over the source file."""
        tmp_path: Path | None = None
        try:
            with tempfile.NamedTemporaryFile(
                mode='w',
                encoding='utf-8',
                newline='',
                dir=self.source_file.parent,
                delete=False,
                suffix='.tmp'
            ) as tmp_file:
                tmp_file.write(content)
                tmp_path = Path(tmp_file.name)

            shutil.copymode(self.source_file, tmp_path)
            tmp_path.replace(self.source_file)

        except OSError as e:
            if tmp_path is not None:
                tmp_path.unlink(missing_ok=True)

            self._print_error(f"Failed to write patched file: {e}")
            return False

        self._print_verbose(f"Wrote {len(content)} characters to {self.source_file}")
        return True

    def _show_dry_run_message(self) -> None:
        """Show message about dry-run mode."""
        c = self.colors
        print(f"\n{c.yellow}Dry-run mode: No changes were made{c.reset}")
        print(f"  Use {c.bold}--apply{c.reset} to actually apply the patch")
        print(f"  Use {c.bold}--backup{c.reset} to create a backup before applying")

    def _print_error(self, message: str) -> None:
        """Print error message."""
        print(f"{self.colors.red}Error:{self.colors.reset} {message}", file=sys.stderr)

    def _print_verbose(self, message: str) -> None:
        """Print verbose message."""
        if self.verbose:
            print(f"{self.colors.blue}[verbose]{self.colors.reset} {message}")


def setup_logging(verbose: bool, log_file: str | None = None) -> None:
    """
    Configure logging for a command-line run.

    Args:
        verbose: If True log at DEBUG level, otherwise WARNING
        log_file: Optional path for a rotating log file
    """
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        # Keep up to 5 log files, max 1MB each
        handlers.append(RotatingFileHandler(
            log_file,
            maxBytes=1024*1024,
            backupCount=4,
            encoding='utf-8'
        ))

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=handlers,
        force=True
    )


def parse_arguments(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="srpatch",
        description="Apply a SEARCH/REPLACE patch with fuzzy, indentation-aware matching",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Dry run (default) - show whether the patch can be applied
  python -m srpatch --file src/example.py --patch change.txt

  # Apply the patch, expecting the SEARCH block at lines 10-14
  python -m srpatch --file src/example.py --patch change.txt --start-line 10 --end-line 14 --apply

  # Accept a 90% similar match and keep a backup
  python -m srpatch --file src/example.py --patch change.txt --threshold 0.9 --apply --backup

  # Show the file with line numbers to pick a hint
  python -m srpatch --file src/example.py --show-lines
        """
    )

    parser.add_argument('--file', required=True, help='Source file to patch')
    parser.add_argument('--patch', help='File holding one SEARCH/REPLACE block')
    parser.add_argument('--start-line', type=int, help='First line the SEARCH block is expected at (1-indexed)')
    parser.add_argument('--end-line', type=int, help='Last line the SEARCH block is expected at (1-indexed)')
    parser.add_argument('--threshold', type=float, help='Similarity required to accept a match (default: 1.0)')
    parser.add_argument('--buffer-lines', type=int, help='Lines searched either side of the hint (default: 20)')
    parser.add_argument('--config', help='JSON settings file (similarityThreshold, bufferLines)')
    parser.add_argument('--apply', action='store_true', help='Actually apply the patch (default is dry-run)')
    parser.add_argument('--backup', action='store_true', help='Create backup before applying (file.bak)')
    parser.add_argument('--show-lines', action='store_true', help='Print the source file with line numbers and exit')
    parser.add_argument('--verbose', action='store_true', help='Show detailed output')
    parser.add_argument('--log-file', help='Also write log output to this file')
    parser.add_argument('--no-color', action='store_true', help='Disable colored output')

    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point."""
    args = parse_arguments(argv)
    setup_logging(args.verbose, args.log_file)
    patcher = SearchReplacePatcher(args)
    return patcher.run()


if __name__ == "__main__":
    sys.exit(main())
