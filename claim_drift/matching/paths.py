"""Path Resolver.

Ledgers are often authored against a different checkout location than the
one being scanned (a developer laptop vs. a CI runner). Evidence paths are
resolved against the scanned repository root, rebasing absolute paths that
contain the repo-root marker segment.
"""

import os
import re
from pathlib import Path

# POSIX root or Windows drive, after slash normalization
_ABSOLUTE = re.compile(r"^(?:/|[A-Za-z]:/)")


def resolve_path(raw_path: str, repo_root: str | Path, marker: str | None = None) -> str:
    """Map a ledger path onto the scanned tree.

    Order:
        1. absolute and exists -> as is
        2. contains `/<marker>/` -> suffix after the last marker, rebased
           onto repo_root, if that exists
        3. raw_path resolved against repo_root, existing or not

    Args:
        raw_path: Path as recorded in the ledger
        repo_root: Root of the scanned checkout
        marker: Repo-root directory name to look for. Defaults to the
            name of repo_root, which is only matched in absolute paths.

    Returns:
        Concrete path. Non-existence is left to the caller (a missing
        evidence file is a non-match, not an error).
    """
    if not raw_path:
        return raw_path

    root = Path(repo_root)
    if os.path.isabs(raw_path) and os.path.exists(raw_path):
        return raw_path

    normalized = raw_path.replace("\\", "/")
    # The implicit marker (root directory name) only rebases foreign absolute paths
    rebase = marker is not None or _ABSOLUTE.match(normalized) is not None
    segment = f"/{(marker or root.resolve().name).strip('/')}/"
    idx = normalized.rfind(segment) if rebase else -1
    if idx >= 0:
        candidate = root / normalized[idx + len(segment) :]
        if candidate.exists():
            return str(candidate)

    return str((root / raw_path).resolve())
