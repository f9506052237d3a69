"""Structured logging configuration."""

import logging
import sys

import structlog
from structlog.types import Processor


def _stderr_logger_factory(*args) -> structlog.PrintLogger:
    # Looked up per logger so that a swapped sys.stderr (click's CliRunner) is honoured.
    return structlog.PrintLogger(file=sys.stderr)


def configure_logging(verbose: bool = False) -> None:
    """Configure structlog; WARNING by default, DEBUG when verbose."""
    log_level = logging.DEBUG if verbose else logging.WARNING

    processors: list[Processor] = [
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.ConsoleRenderer(colors=False),
    ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=_stderr_logger_factory,
        cache_logger_on_first_use=False,
    )


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a logger for a module."""
    return structlog.get_logger(name)


# Library use without the CLI: stay quiet below WARNING unless the host
# application has configured structlog itself.
if not structlog.is_configured():
    configure_logging()
