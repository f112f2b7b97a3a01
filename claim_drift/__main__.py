"""Entry point for ``python -m claim_drift``."""

from claim_drift.cli import main

if __name__ == "__main__":
    main()
