"""Error tracking via Sentry.

Reporting is a no-op until ``init_error_tracking`` has run with a DSN.
"""

import logging
from typing import Any

import sentry_sdk

from outreach_crm.core.config import APP_ENV, APP_ID, SENTRY_DSN

logger = logging.getLogger(__name__)

_initialized = False


def init_error_tracking(dsn: str | None = None) -> bool:
    """Initialize the Sentry SDK.

    Args:
        dsn: Sentry DSN. Falls back to the SENTRY_DSN environment variable.

    Returns:
        True if error tracking is active after the call.
    """
    global _initialized
    dsn = (dsn or SENTRY_DSN or "").strip()
    if not dsn:
        logger.info("SENTRY_DSN not set - error tracking disabled")
        return False

    sentry_sdk.init(dsn=dsn, environment=APP_ENV, send_default_pii=False)
    sentry_sdk.set_tag("type", "backend")
    sentry_sdk.set_tag("projectId", APP_ID)
    _initialized = True
    logger.info(f"Error tracking enabled for environment '{APP_ENV}'")
    return True


def capture_exception(error: BaseException, extra: dict[str, Any] | None = None) -> None:
    """Report an exception with request context attached."""
    if not _initialized:
        return
    with sentry_sdk.new_scope() as scope:
        for key, value in (extra or {}).items():
            scope.set_extra(key, value)
        sentry_sdk.capture_exception(error)
