"""
Standardized Error Handling for claim-drift

Provides hierarchical exception classes with error codes and context.

Taxonomy:
    - SchemaError: ledger/override file structure is wrong (operator must fix it)
    - ParseFailure: a source file exists but cannot be read or decoded
    - ConfigurationError: invalid run configuration (mode, strict level, paths)

Missing evidence files and rejected overrides are not errors; they are
reported through result objects.
"""

from typing import Any


class ClaimDriftError(Exception):
    """Base exception for all claim-drift errors.

    Includes error code for programmatic handling and context for debugging.

    Example:
        raise ClaimDriftError(
            code="SCHEMA_ERROR",
            message="duplicate claim_id: auth-001",
            claim_id="auth-001",
        )
    """

    def __init__(self, code: str, message: str, **context: Any) -> None:
        self.code = code
        self.message = message
        self.context = context
        super().__init__(f"[{code}] {message}")

    def __repr__(self) -> str:
        ctx_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r}, {ctx_str})"


# ==============================================================================
# Validation Errors
# ==============================================================================


class SchemaError(ClaimDriftError):
    """Ledger or override file violates its schema."""

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(code="SCHEMA_ERROR", message=message, **context)

    @property
    def errors(self) -> list[dict[str, Any]]:
        """Individual validation errors, when raised from model validation."""
        return list(self.context.get("errors", []))


class UnsupportedMatcherError(SchemaError):
    """Matcher tag outside the closed matcher set."""

    def __init__(self, message: str, **context: Any) -> None:
        ClaimDriftError.__init__(self, code="UNSUPPORTED_MATCHER", message=message, **context)


# ==============================================================================
# Runtime Errors
# ==============================================================================


class ParseFailure(ClaimDriftError):
    """Source file exists but could not be read or decoded."""

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(code="PARSE_FAILURE", message=message, **context)


# ==============================================================================
# Configuration Errors
# ==============================================================================


class ConfigurationError(ClaimDriftError):
    """Error in run configuration."""

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(code="CONFIGURATION_ERROR", message=message, **context)


__all__ = [
    "ClaimDriftError",
    "SchemaError",
    "UnsupportedMatcherError",
    "ParseFailure",
    "ConfigurationError",
]
