"""Claim Ledger Spec.

Parsed form of the claim ledger and override ledger JSON files.
Schema validation is strict on the ledger so that malformed claims fail
before any file-system or AST work; overrides are parsed record by record
so that one bad override never aborts a run.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from claim_drift.errors import SchemaError
from claim_drift.matching.js_regex import parse_js_regex
from claim_drift.types.enums import DeclaredStatus, MatcherType, Severity


def _check_regex(matcher_type: MatcherType, matcher: str) -> None:
    if matcher_type != MatcherType.REGEX:
        return
    try:
        parse_js_regex(matcher)
    except SchemaError as e:
        raise ValueError(e.message) from e


class ContradictionSpec(BaseModel):
    """A rule that, when matched, proves a claim is actively false.

    Examples:
        - matcher_type: regex, matcher: "throw new Error\\('not implemented'\\)"
        - matcher_type: marker_tag, matcher: "@stub"
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    matcher_type: MatcherType
    matcher: str = ""
    reason: str = ""

    @model_validator(mode="after")
    def validate_pattern(self) -> "ContradictionSpec":
        _check_regex(self.matcher_type, self.matcher)
        return self


class EvidenceSpec(BaseModel):
    """Where and how to verify that a claim is backed by code."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    path: str
    matcher_type: MatcherType
    matcher: str = ""
    required: bool = False
    contradiction: list[ContradictionSpec] = Field(default_factory=list)

    @field_validator("contradiction", mode="before")
    @classmethod
    def default_contradictions(cls, v: object) -> object:
        return [] if v is None else v

    @model_validator(mode="after")
    def validate_pattern(self) -> "EvidenceSpec":
        _check_regex(self.matcher_type, self.matcher)
        return self


class ClaimRecord(BaseModel):
    """One recorded assertion about the codebase.

    Validation:
        - claim_id: non-empty
        - evidence: at least one spec
        - critical claims: non-empty owner and at least one required ast_* spec
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    claim_id: str = Field(..., min_length=1)
    source_doc: str = ""
    claim_text: str = ""
    declared_status: DeclaredStatus
    severity: Severity
    owner: str | None = None
    evidence: list[EvidenceSpec] = Field(..., min_length=1)
    tags: list[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def validate_critical(self) -> "ClaimRecord":
        if self.severity != Severity.CRITICAL:
            return self

        if not self.owner or not self.owner.strip():
            raise ValueError(f"critical claim {self.claim_id} must have owner")

        if not any(e.required and e.matcher_type.is_ast for e in self.evidence):
            raise ValueError(
                f"critical claim {self.claim_id} must have at least one required ast_* evidence matcher"
            )
        return self


class ClaimLedger(BaseModel):
    """The claim ledger document."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    schema_version: str = Field(..., min_length=1)
    generated_at: str = Field(..., min_length=1)
    claims: list[ClaimRecord]

    @model_validator(mode="after")
    def validate_unique_ids(self) -> "ClaimLedger":
        seen: set[str] = set()
        for claim in self.claims:
            if claim.claim_id in seen:
                raise ValueError(f"duplicate claim_id: {claim.claim_id}")
            seen.add(claim.claim_id)
        return self


class OverrideRecord(BaseModel):
    """Time-boxed, approved suppression of one claim's blocking verdict.

    Fields default to empty strings: governance rules are applied later
    and a failing override is inactive.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    claim_id: str
    ticket: str = ""
    reason: str = ""
    approved_by: str = ""
    created_at: str | None = None
    expires_at: str = ""


class OverridesFile(BaseModel):
    """The override ledger document."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    schema_version: str = "1.0.0"
    overrides: list[OverrideRecord] = Field(default_factory=list)
