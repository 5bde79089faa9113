"""Sentry integration for error tracking and performance monitoring.

Sentry is initialized in main() after logging setup, and only when a DSN
is provided through PCP_TOOL_SENTRY_DSN. Events are scrubbed of PCP
credentials before they leave the process.
"""

import os
from typing import Any

import sentry_sdk

from pcp_tool.__about__ import __version__

SENTRY_DSN_ENV = "PCP_TOOL_SENTRY_DSN"
SENTRY_ENVIRONMENT_ENV = "PCP_TOOL_SENTRY_ENVIRONMENT"

_SCRUBBED = "[Filtered]"
_SECRET_KEYS = frozenset({"password", "pcp_password", "PCPPASSWORD", "PCPPASSFILE"})


def _scrub(value: Any) -> Any:
    if isinstance(value, dict):
        return {
            key: _SCRUBBED if key in _SECRET_KEYS and item else _scrub(item)
            for key, item in value.items()
        }
    if isinstance(value, list):
        return [_scrub(item) for item in value]
    return value


def scrub_event(event: dict[str, Any], hint: dict[str, Any]) -> dict[str, Any]:
    """before_send hook: drop password and pcppass values anywhere in the event."""
    return _scrub(event)


def setup_sentry(environment: str | None = None) -> bool:
    """Initialize Sentry. Returns False when no DSN is configured."""
    dsn = os.environ.get(SENTRY_DSN_ENV)
    if not dsn:
        return False
    sentry_sdk.init(
        dsn=dsn,
        traces_sample_rate=0.03,
        environment=environment or os.environ.get(SENTRY_ENVIRONMENT_ENV, "local"),
        release=__version__,
        attach_stacktrace=True,
        send_default_pii=False,
        before_send=scrub_event,
    )
    return True
