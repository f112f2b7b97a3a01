from functools import cached_property, lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from claim_drift.config.groups import OverridePolicy, ScanConfig
from claim_drift.types.enums import Mode, ReportFormat, Severity


class Settings(BaseSettings):
    """
    claim-drift Settings

    Environment variables use the CLAIM_DRIFT_ prefix.
    Example: CLAIM_DRIFT_MODE=enforce, CLAIM_DRIFT_OVERRIDE_MAX_TTL_DAYS=14

    Grouped access:
        settings.scan             # ScanConfig
        settings.override_policy  # OverridePolicy
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="CLAIM_DRIFT_",
        extra="ignore",
    )

    # ========================================================================
    # Grouped Config Accessors
    # ========================================================================

    @cached_property
    def scan(self) -> ScanConfig:
        """Scan input/output group."""
        return ScanConfig(
            ledger_path=self.ledger_path,
            overrides_path=self.overrides_path,
            output_dir=self.output_dir,
            repo_marker=self.repo_marker,
            performance_budget_ms=self.performance_budget_ms,
            parallel_reads=self.parallel_reads,
        )

    @cached_property
    def override_policy(self) -> OverridePolicy:
        """Override governance group."""
        return OverridePolicy(
            max_ttl_days=self.override_max_ttl_days,
            approvers_required=self.override_approvers_required,
            allowed_approvers=self.override_allowed_approvers,
        )

    # ========================================================================
    # Scan
    # ========================================================================
    ledger_path: str = "docs/governance/claim-ledger.json"
    overrides_path: str = "docs/governance/claim-overrides.json"
    output_dir: str = "artifacts"
    repo_marker: str | None = None  # None: use the repo root directory name
    performance_budget_ms: int = 30_000
    parallel_reads: int = Field(default=0, ge=0)

    # ========================================================================
    # Gate
    # ========================================================================
    mode: Mode = Mode.REPORT
    strict: Severity = Severity.CRITICAL
    formats: list[ReportFormat] = [ReportFormat.JSON, ReportFormat.MARKDOWN]

    # ========================================================================
    # Override Governance
    # ========================================================================
    override_max_ttl_days: float = 30.0
    override_approvers_required: bool = False
    override_allowed_approvers: list[str] = []

    # ========================================================================
    # Logging
    # ========================================================================
    log_level: str = "INFO"
    log_structured: bool = False


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Process-wide settings instance (environment is read once)."""
    return Settings()
