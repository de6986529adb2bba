"""
Structured logging setup for the repair triage engine.
Provides JSON-formatted logs with consistent fields for ranking passes.
"""

import logging
import sys
from typing import Any

import structlog
from structlog.stdlib import LoggerFactory


def setup_logging(log_level: str = "INFO") -> None:
    """
    Configure structured logging with JSON output.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso"),
            _add_engine_context,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=LoggerFactory(),
        context_class=dict,
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, log_level.upper()),
    )


def _add_engine_context(logger, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """Tag every entry with the emitting component."""
    event_dict.setdefault("component", "repair_triage")
    return event_dict


def get_logger(name: str = None) -> structlog.stdlib.BoundLogger:
    """
    Get a structured logger instance.

    Args:
        name: Logger name (usually __name__)

    Returns:
        Configured structlog logger
    """
    return structlog.get_logger(name)


def log_triage_pass(
    job_count: int,
    duration_ms: float,
    inventory_aware: bool,
    catch_all_rules: int = 0,
    top_job_id: str | None = None,
) -> None:
    """Log a completed ranking pass with consistent fields."""
    logger = get_logger("triage")

    log_data = {
        "job_count": job_count,
        "duration_ms": duration_ms,
        "inventory_aware": inventory_aware,
        "kind": "triage_pass",
    }

    if top_job_id:
        log_data["top_job_id"] = top_job_id

    if catch_all_rules:
        log_data["catch_all_rules"] = catch_all_rules
        logger.warning("Triage pass completed with catch-all rules", **log_data)
    else:
        logger.info("Triage pass completed", **log_data)
