"""claim-drift Enums - Type-safe Constants.

Central enum definitions for type safety and IDE support.

str-based Enums for JSON compatibility: ledger values parse straight into
these and reports serialize them back as plain strings.
"""

from enum import Enum


class Severity(str, Enum):
    """Claim severity levels."""

    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def rank(self) -> int:
        """Numeric rank; higher is more severe."""
        return SEVERITY_RANK[self]

    def __str__(self) -> str:
        """String representation."""
        return self.value


SEVERITY_RANK: dict[Severity, int] = {
    Severity.CRITICAL: 4,
    Severity.HIGH: 3,
    Severity.MEDIUM: 2,
    Severity.LOW: 1,
}


class DeclaredStatus(str, Enum):
    """Status a claim's author declared for the feature."""

    IMPLEMENTED = "implemented"
    PARTIAL = "partial"
    PLANNED = "planned"
    DEPRECATED = "deprecated"

    def __str__(self) -> str:
        """String representation."""
        return self.value


class DriftState(str, Enum):
    """Drift classification of a single claim.

    Priority: contradicted > missing > partial > ok.
    """

    OK = "ok"
    PARTIAL = "partial"
    MISSING = "missing"
    CONTRADICTED = "contradicted"

    @property
    def is_unresolved(self) -> bool:
        """States that can block a run."""
        return self in (DriftState.MISSING, DriftState.CONTRADICTED)

    def __str__(self) -> str:
        """String representation."""
        return self.value


class MatcherType(str, Enum):
    """Closed set of evidence matchers.

    ast_* matchers inspect syntax trees (ast_workflow_step is the exception:
    it reads workflow YAML as text but belongs to the same family for
    ledger-validation purposes).
    """

    AST_EXPORT = "ast_export"
    AST_FUNCTION_CALL = "ast_function_call"
    AST_ROUTE_HANDLER = "ast_route_handler"
    AST_WORKFLOW_STEP = "ast_workflow_step"
    REGEX = "regex"
    MARKER_TAG = "marker_tag"

    @property
    def is_ast(self) -> bool:
        return self.value.startswith("ast_")

    @property
    def needs_syntax_tree(self) -> bool:
        return self.is_ast and self is not MatcherType.AST_WORKFLOW_STEP

    def __str__(self) -> str:
        """String representation."""
        return self.value


class Mode(str, Enum):
    """Run mode: report never blocks, enforce can."""

    REPORT = "report"
    ENFORCE = "enforce"

    def __str__(self) -> str:
        """String representation."""
        return self.value


class ReportFormat(str, Enum):
    """Report output formats."""

    JSON = "json"
    MARKDOWN = "md"

    def __str__(self) -> str:
        """String representation."""
        return self.value
