"""Structured logging for rblcheck.

Logs go to stderr: stdout carries the resolver's results.
"""

import logging
import sys
import uuid
from datetime import datetime, timezone
from typing import Any, Dict

from pythonjsonlogger import jsonlogger


# Run ID for correlating log entries of one invocation
RUN_ID = str(uuid.uuid4())


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter that adds run_id and standardized fields."""

    def add_fields(
        self,
        log_record: Dict[str, Any],
        record: logging.LogRecord,
        message_dict: Dict[str, Any],
    ) -> None:
        """Add custom fields to log record.

        Args:
            log_record: The log record to modify.
            record: The original logging.LogRecord.
            message_dict: Additional fields from the logging call.
        """
        super().add_fields(log_record, record, message_dict)

        log_record["timestamp"] = (
            datetime.now(timezone.utc).replace(tzinfo=None).isoformat() + "Z"
        )
        log_record["run_id"] = RUN_ID
        log_record["level"] = record.levelname
        log_record["logger"] = record.name


def setup_logging(verbose: bool = False, log_format: str = "text") -> logging.Logger:
    """Configure logging on stderr.

    Args:
        verbose: Log INFO and above instead of WARNING and above.
        log_format: "text" for bare messages, "json" for structured records.

    Returns:
        logging.Logger: Configured root logger.
    """
    logger = logging.getLogger()
    logger.setLevel(logging.INFO if verbose else logging.WARNING)

    # Remove existing handlers to avoid duplicates
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    if log_format == "text":
        handler.setFormatter(logging.Formatter("%(message)s"))
    else:
        handler.setFormatter(CustomJsonFormatter("%(message)s", timestamp=True))
    logger.addHandler(handler)

    return logger


def log_run_summary(
    ip: str,
    rules_path: str,
    query_count: int,
    exit_code: int,
    duration_ms: int,
) -> None:
    """Log structured per-run summary.

    Args:
        ip: IPv4 address checked.
        rules_path: Rule file the zones were read from.
        query_count: Number of query names sent to the resolver.
        exit_code: Final exit code of the run.
        duration_ms: Run time in milliseconds.
    """
    logger = logging.getLogger(__name__)
    logger.info(
        "RBL check completed",
        extra={
            "ip": ip,
            "rules_path": rules_path,
            "query_count": query_count,
            "exit_code": exit_code,
            "duration_ms": duration_ms,
        },
    )
