"""Override Governance.

An override temporarily suppresses one claim's blocking verdict. It only
counts when it passes every governance rule:

    - ticket, reason and approved_by are non-empty
    - created_at and expires_at parse as timestamps
    - expires_at >= now and expires_at > created_at
    - expires_at - created_at <= policy.max_ttl_days
    - approved_by is allow-listed (when policy.approvers_required)

An override that fails a rule is excluded from the active set. It is never
raised as an error: a bad override fails closed instead of aborting the run.
"""

import logging
from datetime import datetime, timezone

from claim_drift.config.groups import OverridePolicy, normalize_approver
from claim_drift.ledger.spec import OverrideRecord

logger = logging.getLogger(__name__)

SECONDS_PER_DAY = 60 * 60 * 24


def parse_timestamp(value: str | None) -> datetime | None:
    """Parse an ISO-8601 timestamp or date.

    `Z` suffixes are accepted; values without an offset are taken as UTC.

    Returns:
        Aware datetime, or None when the value is missing or unparseable
    """
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = f"{text[:-1]}+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _as_utc(moment: datetime) -> datetime:
    return moment if moment.tzinfo is not None else moment.replace(tzinfo=timezone.utc)


class OverrideGovernance:
    """Validates overrides against an OverridePolicy."""

    def __init__(self, policy: OverridePolicy | None = None):
        self.policy = policy or OverridePolicy()

    def rejection_reason(self, override: OverrideRecord, now: datetime) -> str | None:
        """First governance rule the override violates, or None if valid."""
        if not override.ticket.strip():
            return "missing_ticket"
        if not override.reason.strip():
            return "missing_reason"
        if not override.approved_by.strip():
            return "missing_approver"

        now = _as_utc(now)
        created_at = parse_timestamp(override.created_at)
        expires_at = parse_timestamp(override.expires_at)
        if created_at is None or expires_at is None:
            return "invalid_timestamp"
        if expires_at < now:
            return "expired"
        if expires_at <= created_at:
            return "expires_before_created"

        ttl_days = (expires_at - created_at).total_seconds() / SECONDS_PER_DAY
        if ttl_days > self.policy.max_ttl_days:
            return "ttl_exceeded"

        if self.policy.approvers_required:
            if normalize_approver(override.approved_by) not in self.policy.allowed_approvers:
                return "approver_not_allowed"

        return None

    def is_valid(self, override: OverrideRecord, now: datetime | None = None) -> bool:
        return self.rejection_reason(override, now or datetime.now(timezone.utc)) is None

    def active_overrides(self, overrides: list[OverrideRecord], now: datetime | None = None) -> list[OverrideRecord]:
        """Overrides that pass governance at `now`, in file order."""
        now = now or datetime.now(timezone.utc)
        active = []
        for override in overrides:
            reason = self.rejection_reason(override, now)
            if reason is None:
                active.append(override)
            else:
                logger.debug(f"Override {override.ticket or '<no ticket>'} for {override.claim_id} rejected: {reason}")
        return active

    @staticmethod
    def find_active_suppression(claim_id: str, valid_overrides: list[OverrideRecord]) -> OverrideRecord | None:
        """First valid override targeting `claim_id`, else None."""
        for override in valid_overrides:
            if override.claim_id == claim_id:
                return override
        return None


def describe_override(override: OverrideRecord) -> str:
    """Human-readable suppression note for reports."""
    return f"{override.ticket} by {override.approved_by} until {override.expires_at}: {override.reason}"
