"""Bearer-token validation against the Supabase auth API.

Tokens are issued by the frontend's Supabase client. Each request's token is
checked with ``GET {SUPABASE_URL}/auth/v1/user``; a 200 response carries the
user record.
"""

import logging
from typing import Any

import httpx

from outreach_crm.core.config import AUTH_TIMEOUT_SECONDS, SUPABASE_ANON_KEY, SUPABASE_URL

logger = logging.getLogger(__name__)


class AuthServiceUnavailable(Exception):
    """The identity service could not be reached or answered unexpectedly."""


class SupabaseAuthService:
    """Client for the Supabase auth ``/user`` endpoint.

    Example usage:
        service = SupabaseAuthService()
        user = await service.get_user(token)
        if user is None:
            ...  # invalid or expired token
    """

    def __init__(
        self,
        base_url: str | None = None,
        api_key: str | None = None,
        timeout: float = AUTH_TIMEOUT_SECONDS,
    ) -> None:
        self.base_url = (base_url if base_url is not None else SUPABASE_URL).rstrip("/")
        self.api_key = (api_key if api_key is not None else SUPABASE_ANON_KEY).strip()
        self._timeout = timeout
        self._http_client: httpx.AsyncClient | None = None

    @property
    def is_configured(self) -> bool:
        return bool(self.base_url and self.api_key)

    async def _get_client(self) -> httpx.AsyncClient:
        if self._http_client is None or self._http_client.is_closed:
            self._http_client = httpx.AsyncClient(
                timeout=self._timeout,
                headers={"apikey": self.api_key},
            )
        return self._http_client

    async def close(self) -> None:
        if self._http_client and not self._http_client.is_closed:
            await self._http_client.aclose()

    async def get_user(self, token: str) -> dict[str, Any] | None:
        """Resolve a bearer token to its user record.

        Returns:
            The user dict, or None if the token is invalid or expired.

        Raises:
            AuthServiceUnavailable: on transport errors and 5xx responses.
        """
        if not self.is_configured:
            raise AuthServiceUnavailable("SUPABASE_URL / SUPABASE_ANON_KEY are not set")

        client = await self._get_client()
        try:
            response = await client.get(
                f"{self.base_url}/auth/v1/user",
                headers={"Authorization": f"Bearer {token}"},
            )
        except httpx.HTTPError as e:
            logger.warning(f"Auth service request failed: {e}")
            raise AuthServiceUnavailable(str(e)) from e

        if response.status_code in (401, 403):
            return None
        if response.status_code >= 500:
            logger.warning(f"Auth service returned {response.status_code}")
            raise AuthServiceUnavailable(f"auth service returned {response.status_code}")
        if response.status_code != 200:
            return None

        user = response.json()
        if not isinstance(user, dict) or not user.get("id"):
            return None
        return user


# Singleton pattern matching other services
_auth_service: SupabaseAuthService | None = None


def get_auth_service() -> SupabaseAuthService:
    """Get the singleton SupabaseAuthService instance."""
    global _auth_service
    if _auth_service is None:
        _auth_service = SupabaseAuthService()
    return _auth_service
