"""Ledger Loader - claim-ledger.json / claim-overrides.json → models.

This loader:
    1. Reads JSON (or YAML for *.yaml / *.yml ledgers)
    2. Validates the claim ledger strictly (SchemaError on any violation)
    3. Parses overrides leniently (malformed records are dropped)

Validation runs before any evidence matching, so a malformed ledger fails
fast and cheaply.
"""

import json
import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from claim_drift.errors import ConfigurationError, SchemaError
from claim_drift.ledger.spec import ClaimLedger, OverrideRecord, OverridesFile

logger = logging.getLogger(__name__)

_YAML_SUFFIXES = {".yaml", ".yml"}


def load_ledger(path: str | Path) -> ClaimLedger:
    """Load and validate a claim ledger.

    Args:
        path: Path to the ledger file

    Returns:
        Validated ClaimLedger

    Raises:
        ConfigurationError: If the ledger file does not exist
        SchemaError: If the document is unreadable or violates the schema
    """
    path = Path(path)
    if not path.exists():
        raise ConfigurationError(f"ledger not found at {path}", path=str(path))

    ledger = validate_ledger(read_document(path))
    logger.info(f"Loaded {len(ledger.claims)} claims from {path} (schema {ledger.schema_version})")
    return ledger


def validate_ledger(data: Any) -> ClaimLedger:
    """Validate a raw ledger document.

    Raises:
        SchemaError: With the individual validation errors in `errors`
    """
    if not isinstance(data, dict):
        raise SchemaError(f"ledger must be a JSON object, got {type(data).__name__}")

    try:
        return ClaimLedger.model_validate(data)
    except ValidationError as e:
        errors = e.errors(include_url=False, include_context=False)
        raise SchemaError(f"ledger schema invalid: {_summarize(errors)}", errors=errors) from e


def load_overrides(path: str | Path) -> OverridesFile:
    """Load the override ledger.

    A missing file means no overrides. Records that do not fit the
    OverrideRecord shape are dropped with a warning; governance checks
    (expiry, approver, TTL) happen later in OverrideGovernance.

    Raises:
        SchemaError: If the file exists but is not a readable JSON object
    """
    path = Path(path)
    if not path.exists():
        logger.debug(f"No overrides file at {path}")
        return OverridesFile()

    data = read_document(path)
    if not isinstance(data, dict):
        raise SchemaError(f"overrides file must be a JSON object, got {type(data).__name__}", path=str(path))

    schema_version = data.get("schema_version")
    if not isinstance(schema_version, str) or not schema_version:
        schema_version = "1.0.0"

    raw_overrides = data.get("overrides")
    if not isinstance(raw_overrides, list):
        logger.warning(f"overrides in {path} is not a list; treating as empty")
        return OverridesFile(schema_version=schema_version)

    overrides: list[OverrideRecord] = []
    for i, raw in enumerate(raw_overrides):
        try:
            overrides.append(OverrideRecord.model_validate(raw))
        except ValidationError as e:
            errors = e.errors(include_url=False, include_context=False)
            logger.warning(f"Dropping malformed override #{i} in {path}: {_summarize(errors)}")

    logger.info(f"Loaded {len(overrides)} overrides from {path}")
    return OverridesFile(schema_version=schema_version, overrides=overrides)


def read_document(path: str | Path) -> Any:
    """Read a raw JSON or YAML document without validating it.

    Raises:
        SchemaError: If the file is unreadable or not valid JSON/YAML
    """
    path = Path(path)
    try:
        raw = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise SchemaError(f"failed to read {path}: {e}", path=str(path)) from e

    try:
        if path.suffix.lower() in _YAML_SUFFIXES:
            return yaml.safe_load(raw)
        return json.loads(raw)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise SchemaError(f"invalid document in {path}: {e}", path=str(path)) from e


def _summarize(errors: list[dict[str, Any]]) -> str:
    parts = []
    for err in errors:
        loc = ".".join(str(p) for p in err.get("loc", ())) or "<root>"
        parts.append(f"{loc}: {err.get('msg', 'invalid')}")
    return "; ".join(parts)
