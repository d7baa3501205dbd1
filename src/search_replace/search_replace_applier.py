"""Applying a SEARCH/REPLACE patch to document text."""

from dataclasses import replace
import logging

from search_replace.search_replace_config import SearchReplaceConfig
from search_replace.search_replace_diagnostics import build_match_failure, format_match_failure
from search_replace.search_replace_exceptions import SearchReplaceError, SearchReplaceMatchError
from search_replace.search_replace_matcher import SearchReplaceMatcher
from search_replace.search_replace_normalizer import normalize_blocks
from search_replace.search_replace_parser import SearchReplaceParser
from search_replace.search_replace_splicer import SearchReplaceSplicer
from search_replace.search_replace_types import (
    Document,
    MatchCandidate,
    PatchRequest,
    SearchReplaceResult,
)


class SearchReplaceApplier:
    """
    Applies SEARCH/REPLACE patches: parse, normalize, match, then splice.

    Failures never escape as exceptions; every call returns a
    SearchReplaceResult.  Nothing is applied unless the whole patch succeeds,
    and the applier keeps no state between calls, so one instance can be
    shared freely.
    """

    def __init__(self, config: SearchReplaceConfig | None = None):
        """
        Initialize the applier.

        Args:
            config: Settings used when a call does not supply its own
        """
        self._parser = SearchReplaceParser()
        self._matcher = SearchReplaceMatcher()
        self._splicer = SearchReplaceSplicer()
        self._config = config or SearchReplaceConfig.create_default()
        self._logger = logging.getLogger("SearchReplaceApplier")

    def config(self) -> SearchReplaceConfig:
        """Get the default settings for this applier."""
        return self._config

    def apply_diff(
        self,
        original_text: str,
        diff_text: str,
        start_line: int | None = None,
        end_line: int | None = None,
        config: SearchReplaceConfig | None = None,
        dry_run: bool = False
    ) -> SearchReplaceResult:
        """
        Apply a diff holding one SEARCH/REPLACE block to document text.

        Args:
            original_text: Current document content
            diff_text: Text holding exactly one SEARCH/REPLACE block
            start_line: First hinted line (1-indexed), or None
            end_line: Last hinted line (1-indexed, inclusive), or None
            config: Settings for this call, or None to use the applier's defaults
            dry_run: If True, locate the match but don't build the patched content

        Returns:
            SearchReplaceResult with the patched content or the reason for failure
        """
        try:
            search, replacement = self._parser.parse(diff_text)

        except SearchReplaceError as e:
            return self._failure_result(e)

        request = PatchRequest(search, replacement, start_line, end_line)
        return self.apply_request(original_text, request, config, dry_run)

    def apply_request(
        self,
        original_text: str,
        request: PatchRequest,
        config: SearchReplaceConfig | None = None,
        dry_run: bool = False
    ) -> SearchReplaceResult:
        """
        Apply an already parsed patch request to document text.

        Args:
            original_text: Current document content
            request: SEARCH/REPLACE blocks and optional line hint
            config: Settings for this call, or None to use the applier's defaults
            dry_run: If True, locate the match but don't build the patched content

        Returns:
            SearchReplaceResult with the patched content or the reason for failure
        """
        config = config or self._config
        search, replacement = normalize_blocks(request.search, request.replace)
        if (search, replacement) != (request.search, request.replace):
            self._logger.debug("Stripped line number annotations from SEARCH/REPLACE blocks")
            request = replace(request, search=search, replace=replacement)

        document = Document.from_text(original_text)

        try:
            match = self._locate(document, request, config)

        except SearchReplaceError as e:
            return self._failure_result(e)

        similarity = f"{int(match.score * 100)}% similar"
        if dry_run:
            return SearchReplaceResult(
                success=True,
                message=f"Patch can be applied at line {match.first_line} ({similarity})",
                match=match
            )

        lines = self._splicer.splice(
            document.lines,
            match,
            request.search_lines(),
            request.replace_lines()
        )

        return SearchReplaceResult(
            success=True,
            message=f"Successfully applied patch at line {match.first_line} ({similarity})",
            content=document.join(lines),
            match=match
        )

    def _locate(
        self,
        document: Document,
        request: PatchRequest,
        config: SearchReplaceConfig
    ) -> MatchCandidate:
        """
        Validate the hint and find where the SEARCH block belongs.

        Args:
            document: Document to search
            request: Normalized patch request
            config: Settings for this call

        Returns:
            Accepted match

        Raises:
            SearchReplaceHintError: If the hint is outside the document or inverted
            SearchReplaceHintConsistencyError: If an empty SEARCH block has no usable hint
            SearchReplaceMatchError: If no candidate reaches the threshold
        """
        search_lines = request.search_lines()
        start_line, end_line = self._matcher.validate_hint(
            len(document), len(search_lines), request.start_line, request.end_line
        )

        match_result = self._matcher.find_match(document.lines, search_lines, config, start_line, end_line)
        if not match_result.success or match_result.best is None:
            failure = build_match_failure(
                document.lines, search_lines, match_result, config, start_line, end_line
            )
            raise SearchReplaceMatchError(format_match_failure(failure), failure)

        return match_result.best

    def _failure_result(self, error: SearchReplaceError) -> SearchReplaceResult:
        """Convert an exception raised while applying a patch into a failed result."""
        message = str(error)
        self._logger.warning("Patch rejected (%s): %s", error.kind.name, message.splitlines()[0])
        return SearchReplaceResult(
            success=False,
            message=message,
            error_kind=error.kind,
            error_details=error.error_details,
            failure=error.failure if isinstance(error, SearchReplaceMatchError) else None
        )
