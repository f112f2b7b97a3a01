"""
Settings groups.

Settings are split into logical groups. Each group can be used on its own
and is assembled from the flat Settings fields.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator


def normalize_approver(raw: str) -> str:
    """Canonical `@handle` form of an approver name."""
    trimmed = raw.strip()
    return trimmed if trimmed.startswith("@") else f"@{trimmed}"


class OverridePolicy(BaseModel):
    """Governance rules an override must satisfy to suppress a claim."""

    model_config = ConfigDict(frozen=True)

    max_ttl_days: float = Field(default=30.0, gt=0, description="Maximum expires_at - created_at, in days")
    approvers_required: bool = Field(default=False, description="Require approved_by to be allow-listed")
    allowed_approvers: tuple[str, ...] = Field(default=(), description="Allow-listed approvers (@handle form)")

    @field_validator("allowed_approvers", mode="before")
    @classmethod
    def normalize_approvers(cls, v: object) -> tuple[str, ...]:
        if isinstance(v, str):
            v = v.split(",")
        return tuple(normalize_approver(item) for item in v if str(item).strip())  # type: ignore[union-attr]


class ScanConfig(BaseModel):
    """Where a scan reads from and writes to."""

    model_config = ConfigDict(frozen=True)

    ledger_path: str = Field(default="docs/governance/claim-ledger.json", description="Claim ledger JSON")
    overrides_path: str = Field(default="docs/governance/claim-overrides.json", description="Overrides JSON")
    output_dir: str = Field(default="artifacts", description="Report output directory")
    repo_marker: str | None = Field(default=None, description="Repo-root path segment used to rebase ledger paths")
    performance_budget_ms: int = Field(default=30_000, ge=0, description="Wall-clock budget reported per run")
    parallel_reads: int = Field(default=0, ge=0, description="Thread pool size for source prefetch (0 = off)")
