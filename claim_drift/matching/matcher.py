"""Evidence Matcher.

Evaluates one matcher (type + pattern) against one resolved file.

The matcher set is closed: each MatcherType has exactly one handler, and an
unknown tag is rejected rather than treated as a non-match, so the set of
things a ledger can assert stays auditable.

Supports:
    - regex:              JS-style regex against raw text
    - marker_tag:         substring search (default @claim-evidence:<claim_id>)
    - ast_workflow_step:  `- name: <pattern>` line in workflow YAML text
    - ast_export:         exported declaration named <pattern>
    - ast_function_call:  call whose callee is <pattern> or ends with .<pattern>
    - ast_route_handler:  exported HTTP verb handler (GET, POST, ...)
"""

import logging
import re
from collections.abc import Callable
from pathlib import Path

from claim_drift.errors import UnsupportedMatcherError
from claim_drift.matching.ast_queries import has_exported_identifier, has_function_call, has_route_handler_export
from claim_drift.matching.js_regex import parse_js_regex
from claim_drift.matching.source_cache import SourceCache
from claim_drift.types.enums import MatcherType
from claim_drift.types.results import MatcherResult

logger = logging.getLogger(__name__)

FILE_NOT_FOUND = "file_not_found"
MARKER_TEMPLATE = "@claim-evidence:{claim_id}"


def default_marker(claim_id: str) -> str:
    return MARKER_TEMPLATE.format(claim_id=claim_id)


def workflow_step_pattern(step_name: str) -> re.Pattern[str]:
    """`- name: <step_name>` on its own line.

    Matched on text; quoting variants of the same step do not match.
    """
    return re.compile(rf"^\s*-\s*name:\s*{re.escape(step_name)}\s*$", re.MULTILINE)


class EvidenceMatcher:
    """Dispatches matcher evaluation over a per-run SourceCache."""

    def __init__(self, cache: SourceCache | None = None):
        self.cache = cache if cache is not None else SourceCache()
        self._handlers: dict[MatcherType, Callable[[str, str, str], MatcherResult]] = {
            MatcherType.REGEX: self._match_regex,
            MatcherType.MARKER_TAG: self._match_marker_tag,
            MatcherType.AST_WORKFLOW_STEP: self._match_workflow_step,
            MatcherType.AST_EXPORT: self._match_export,
            MatcherType.AST_FUNCTION_CALL: self._match_function_call,
            MatcherType.AST_ROUTE_HANDLER: self._match_route_handler,
        }

    def match(
        self,
        claim_id: str,
        resolved_path: str | Path,
        matcher_type: MatcherType | str,
        pattern: str,
    ) -> MatcherResult:
        """Evaluate one matcher against one file.

        Args:
            claim_id: Claim being evaluated (used for the default marker tag)
            resolved_path: Concrete path from resolve_path()
            matcher_type: One of MatcherType
            pattern: Matcher pattern

        Returns:
            MatcherResult; a missing file is matched=False, details="file_not_found"

        Raises:
            UnsupportedMatcherError: If matcher_type is not a known matcher
            SchemaError: If a regex pattern is invalid
            ParseFailure: If the file exists but cannot be read
        """
        handler = self._handlers.get(_coerce_matcher_type(matcher_type))
        if handler is None:
            raise UnsupportedMatcherError(f"unsupported matcher: {matcher_type}", matcher_type=str(matcher_type))

        path = str(resolved_path)
        if not path or not Path(path).exists():
            return MatcherResult(matched=False, details=FILE_NOT_FOUND)

        result = handler(claim_id, path, pattern or "")
        logger.debug(f"{claim_id}: {result.details} -> {result.matched} ({path})")
        return result

    # ------------------------------------------------------------------
    # Text matchers
    # ------------------------------------------------------------------

    def _match_regex(self, claim_id: str, path: str, pattern: str) -> MatcherResult:
        regex = parse_js_regex(pattern)
        return MatcherResult(matched=regex.test(self.cache.get_text(path)), details=f"regex:{regex}")

    def _match_marker_tag(self, claim_id: str, path: str, pattern: str) -> MatcherResult:
        tag = pattern.strip() or default_marker(claim_id)
        return MatcherResult(matched=tag in self.cache.get_text(path), details=f"marker:{tag}")

    def _match_workflow_step(self, claim_id: str, path: str, pattern: str) -> MatcherResult:
        matched = workflow_step_pattern(pattern).search(self.cache.get_text(path)) is not None
        return MatcherResult(matched=matched, details=f"workflow_step:{pattern}")

    # ------------------------------------------------------------------
    # AST matchers
    # ------------------------------------------------------------------

    def _match_export(self, claim_id: str, path: str, pattern: str) -> MatcherResult:
        matched = has_exported_identifier(self.cache.get_tree(path), pattern)
        return MatcherResult(matched=matched, details=f"ast_export:{pattern}")

    def _match_function_call(self, claim_id: str, path: str, pattern: str) -> MatcherResult:
        matched = has_function_call(self.cache.get_tree(path), pattern)
        return MatcherResult(matched=matched, details=f"ast_function_call:{pattern}")

    def _match_route_handler(self, claim_id: str, path: str, pattern: str) -> MatcherResult:
        matched = has_route_handler_export(self.cache.get_tree(path), pattern)
        return MatcherResult(matched=matched, details=f"ast_route_handler:{pattern}")


def _coerce_matcher_type(matcher_type: MatcherType | str) -> MatcherType | None:
    if isinstance(matcher_type, MatcherType):
        return matcher_type
    try:
        return MatcherType(matcher_type)
    except ValueError:
        return None
