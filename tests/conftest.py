"""
Global test configuration and fixtures
"""

import json
import logging
import os
import time
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from claim_drift.config import get_settings
from claim_drift.logging import ROOT_LOGGER_NAME

SLOW_TEST_THRESHOLD = 5.0


@pytest.fixture(autouse=True)
def track_test_duration(request):
    """Warn about slow tests."""
    start_time = time.time()

    yield

    duration = time.time() - start_time
    if duration > SLOW_TEST_THRESHOLD:
        print(f"\nSLOW TEST ({duration:.2f}s): {request.node.nodeid}")


@pytest.fixture(autouse=True)
def reset_claim_drift_logging():
    """setup_logger() detaches the package logger from root; undo it between tests."""
    yield
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.handlers = []
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch):
    """Settings are cached per process; keep CLAIM_DRIFT_* from leaking in."""
    for key in list(os.environ):
        if key.startswith("CLAIM_DRIFT_"):
            monkeypatch.delenv(key, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def repo(tmp_path) -> Path:
    """Empty repository root."""
    root = tmp_path / "repo"
    root.mkdir()
    return root


@pytest.fixture
def write_file(repo) -> Callable[[str, str], Path]:
    """Write a file under the repository root, creating parent directories."""

    def _write(relative: str, content: str) -> Path:
        path = repo / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write


def _make_claim(
    claim_id: str = "claim-1",
    severity: str = "high",
    owner: str | None = "@docs-team",
    evidence: list[dict[str, Any]] | None = None,
    declared_status: str = "implemented",
) -> dict[str, Any]:
    """Raw claim record with sensible defaults."""
    return {
        "claim_id": claim_id,
        "source_doc": "README.md",
        "claim_text": f"{claim_id} is implemented",
        "declared_status": declared_status,
        "severity": severity,
        "owner": owner,
        "evidence": evidence
        if evidence is not None
        else [{"path": "src/api.ts", "matcher_type": "ast_export", "matcher": "handler", "required": True}],
    }


def _make_ledger(*claims: dict[str, Any]) -> dict[str, Any]:
    """Raw ledger document."""
    return {
        "schema_version": "1.0.0",
        "generated_at": "2026-01-01T00:00:00Z",
        "claims": list(claims),
    }


@pytest.fixture
def make_claim():
    return _make_claim


@pytest.fixture
def make_ledger():
    return _make_ledger


@pytest.fixture
def write_ledger(repo) -> Callable[..., Path]:
    """Write a ledger (and optionally overrides) into docs/governance/."""

    def _write(ledger: dict[str, Any], overrides: list[dict[str, Any]] | None = None) -> Path:
        governance = repo / "docs" / "governance"
        governance.mkdir(parents=True, exist_ok=True)
        ledger_path = governance / "claim-ledger.json"
        ledger_path.write_text(json.dumps(ledger), encoding="utf-8")
        if overrides is not None:
            (governance / "claim-overrides.json").write_text(
                json.dumps({"schema_version": "1.0.0", "overrides": overrides}), encoding="utf-8"
            )
        return ledger_path

    return _write


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: Unit tests (fast, isolated)")
    config.addinivalue_line("markers", "integration: Integration tests (file system, full scan)")


def pytest_collection_modifyitems(config, items):
    """Path-based markers."""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)
