"""Structured logging setup for proofstore.

Uses structlog for key-value logging with a level and timestamp in
every log entry.
"""

import logging
import sys

import structlog


def configure_logging(level: str = "INFO", json_output: bool = False) -> None:
    """Configure structlog for proofstore.

    Args:
        level: Minimum level name (DEBUG, INFO, WARNING, ERROR).
        json_output: If True, render logs as JSON lines (to stderr).
                     If False (default), use console-friendly output.
    """
    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if json_output:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    level_num = getattr(logging, level.upper(), logging.INFO)
    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level_num),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


def get_logger(workspace: str | None = None) -> structlog.BoundLogger:
    """Get a logger, optionally bound to a workspace root.

    Args:
        workspace: Workspace root path to bind as context.

    Returns:
        A structlog BoundLogger.
    """
    logger = structlog.get_logger()
    if workspace:
        logger = logger.bind(workspace=workspace)
    return logger
