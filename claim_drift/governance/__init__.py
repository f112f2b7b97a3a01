"""Override governance: validity rules and active-suppression lookup."""

from claim_drift.governance.overrides import (
    OverrideGovernance,
    describe_override,
    parse_timestamp,
)

__all__ = [
    "OverrideGovernance",
    "describe_override",
    "parse_timestamp",
]
