"""Authentication dependency applied to every ``/api`` router."""

import logging
from typing import Any

from fastapi import Header

from outreach_crm.core import config
from outreach_crm.core.errors import UnauthorizedError
from outreach_crm.services.auth_service import AuthServiceUnavailable, get_auth_service

logger = logging.getLogger(__name__)

ANONYMOUS_USER: dict[str, Any] = {"id": "anonymous", "email": None}


def _extract_bearer(authorization: str | None) -> str | None:
    if not authorization:
        return None
    scheme, _, token = authorization.strip().partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


async def require_user(authorization: str | None = Header(None)) -> dict[str, Any]:
    """Validate the bearer token and return the caller's user record."""
    if not config.AUTH_REQUIRED:
        return ANONYMOUS_USER

    token = _extract_bearer(authorization)
    if token is None:
        raise UnauthorizedError("No authorization token provided")

    try:
        user = await get_auth_service().get_user(token)
    except AuthServiceUnavailable as e:
        logger.warning(f"Rejecting request, identity service unavailable: {e}")
        raise UnauthorizedError(
            "Authentication service unavailable", code="AUTH_SERVICE_UNAVAILABLE"
        )

    if user is None:
        raise UnauthorizedError("Invalid or expired token")
    return user
