"""Logging configuration using structlog.

Logs go to stderr so stdout carries only PCP results (piping). Every
event passes through a redaction step: PCP passwords must never reach a
log line, whichever key they were logged under.
"""

import logging
import sys
from typing import Any

import structlog

REDACTED = "***"

_SECRET_KEYS = frozenset({"password", "pcp_password", "PCPPASSWORD"})


class _LazyStderrFactory:
    """Resolve sys.stderr when a logger is created, not at configure() time.

    Under CliRunner tests a handle captured by configure() goes stale once
    stderr is swapped between invocations.
    """

    def __call__(self, *args: Any, **kwargs: Any) -> structlog.PrintLogger:
        return structlog.PrintLogger(file=sys.stderr)


def redact_secrets(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """structlog processor replacing password-like values with REDACTED."""
    for key in _SECRET_KEYS.intersection(event_dict):
        if event_dict[key]:
            event_dict[key] = REDACTED
    return event_dict


def setup_logging(verbose: bool = False) -> None:
    """Configure structlog for PCP Tool.

    Args:
        verbose: If True, log at DEBUG (every PCP invocation). Otherwise INFO.
    """
    level = logging.DEBUG if verbose else logging.INFO

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            redact_secrets,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=_LazyStderrFactory(),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str | None = None) -> Any:
    """Get a structlog logger, optionally bound with a name.

    Call inside functions or __init__(), never at module level, so the
    logger picks up whatever setup_logging() configured.
    """
    logger = structlog.get_logger()
    if name:
        logger = logger.bind(logger=name)
    return logger
