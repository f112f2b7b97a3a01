from claim_drift.config.groups import OverridePolicy, ScanConfig, normalize_approver
from claim_drift.config.settings import Settings, get_settings

__all__ = [
    # Settings
    "Settings",
    "get_settings",
    # Config Groups
    "OverridePolicy",
    "ScanConfig",
    "normalize_approver",
]
