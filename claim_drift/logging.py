"""
Structured Logging for claim-drift

Provides consistent, structured logging across the codebase.
Compatible with JSON logging for CI log collectors.
"""

import json
import logging
import sys
import time
from collections.abc import Callable
from functools import wraps
from typing import Any, TypeVar

T = TypeVar("T")

ROOT_LOGGER_NAME = "claim_drift"

# Attributes every LogRecord carries; anything else came in through `extra=`.
_RESERVED_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {"message", "asctime"}

# ==============================================================================
# Logger Configuration
# ==============================================================================


def setup_logger(
    name: str = ROOT_LOGGER_NAME,
    level: int | str = logging.INFO,
    structured: bool = False,
) -> logging.Logger:
    """Setup logger with optional structured logging.

    Args:
        name: Logger name
        level: Logging level (int or level name)
        structured: Use JSON structured logging

    Returns:
        Configured logger

    Example:
        logger = setup_logger("claim_drift", level=logging.DEBUG)
        logger.info("Claim evaluated", extra={"claim_id": "auth-001", "state": "ok"})
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())

    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers = []

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)

    if structured:
        formatter: logging.Formatter = StructuredFormatter()
    else:
        formatter = logging.Formatter(
            fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    handler.setFormatter(formatter)
    logger.addHandler(handler)
    logger.propagate = False

    return logger


class StructuredFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        # Fields passed with `extra=`
        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS and key != "context":
                log_data[key] = value

        # Fields added by LogContext
        context = getattr(record, "context", None)
        if isinstance(context, dict):
            log_data.update(context)

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


# ==============================================================================
# Context Manager for Logging
# ==============================================================================


class LogContext:
    """Context manager for adding context to logs.

    Example:
        with LogContext(ledger="docs/governance/claim-ledger.json", mode="enforce"):
            logger.info("Scanning claims")
            # Logs: {"message": "Scanning claims", "ledger": "...", "mode": "enforce"}
    """

    def __init__(self, **context: Any) -> None:
        self.context = context
        self.old_factory = logging.getLogRecordFactory()

    def __enter__(self) -> "LogContext":
        old_factory = self.old_factory
        context = self.context

        def record_factory(*args: Any, **kwargs: Any) -> logging.LogRecord:
            record = old_factory(*args, **kwargs)
            record.context = context  # type: ignore[attr-defined]
            return record

        logging.setLogRecordFactory(record_factory)
        return self

    def __exit__(self, *args: Any) -> None:
        logging.setLogRecordFactory(self.old_factory)


# ==============================================================================
# Helper Functions
# ==============================================================================


def log_duration(logger: logging.Logger, message: str, **context: Any) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """Decorator to log function duration.

    Example:
        @log_duration(logger, "Claim drift scan")
        def run(ledger):
            ...
    """

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> T:
            start = time.perf_counter()
            try:
                result = func(*args, **kwargs)
                duration_ms = (time.perf_counter() - start) * 1000
                logger.info(
                    f"{message} completed",
                    extra={"duration_ms": round(duration_ms, 2), **context},
                )
                return result
            except Exception as e:
                duration_ms = (time.perf_counter() - start) * 1000
                logger.error(
                    f"{message} failed",
                    extra={"duration_ms": round(duration_ms, 2), "error": str(e), **context},
                )
                raise

        return wrapper

    return decorator


def get_logger(name: str | None = None) -> logging.Logger:
    """Get logger instance.

    Args:
        name: Logger name (defaults to "claim_drift")

    Returns:
        Logger instance
    """
    if name is None:
        return logging.getLogger(ROOT_LOGGER_NAME)
    return logging.getLogger(name)
