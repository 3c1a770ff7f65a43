from __future__ import annotations

import logging
from typing import Optional

import httpx
from pydantic import BaseModel

from kondate.shared.config.settings import settings
from kondate.shared.errors import AuthenticationRequired

log = logging.getLogger("auth")


class AuthUser(BaseModel):
    id: str
    email: Optional[str] = None
    access_token: str


def parse_bearer(authorization: Optional[str]) -> str:
    """
    Extract the token from an ``Authorization: Bearer <token>`` header value.
    """
    if not authorization:
        log.info("Authorization header missing")
        raise AuthenticationRequired()
    scheme, _, token = authorization.partition(" ")
    token = token.strip()
    if scheme.lower() != "bearer" or not token:
        log.info("Authorization header is not a bearer credential")
        raise AuthenticationRequired()
    return token


class SupabaseAuth:
    """
    Resolves a Supabase session token to its user through ``GET /auth/v1/user``.
    """

    def __init__(
        self,
        *,
        url: Optional[str] = None,
        anon_key: Optional[str] = None,
        request_timeout: Optional[int] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.url = (url or settings.SUPABASE_URL).rstrip("/")
        self.anon_key = settings.SUPABASE_ANON_KEY if anon_key is None else anon_key
        self.timeout = httpx.Timeout(request_timeout or settings.SUPABASE_TIMEOUT)
        self._http = http_client

    async def get_user(self, token: str) -> AuthUser:
        if not token:
            raise AuthenticationRequired()
        if not self.url:
            log.error("SUPABASE_URL is not configured; rejecting credential")
            raise AuthenticationRequired()

        headers = {"apikey": self.anon_key, "Authorization": f"Bearer {token}"}
        endpoint = f"{self.url}/auth/v1/user"
        try:
            if self._http is not None:
                r = await self._http.get(endpoint, headers=headers, timeout=self.timeout)
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    r = await client.get(endpoint, headers=headers)
        except httpx.HTTPError as e:
            log.warning("auth lookup failed: %s", e)
            raise AuthenticationRequired() from e

        if r.status_code != 200:
            log.info("auth rejected token: status %s", r.status_code)
            raise AuthenticationRequired()

        try:
            data = r.json()
        except ValueError as e:
            log.warning("auth lookup returned an unreadable body")
            raise AuthenticationRequired() from e
        if not isinstance(data, dict):
            raise AuthenticationRequired()
        user_id = data.get("id")
        if not user_id:
            raise AuthenticationRequired()
        log.info("authenticated user %s", data.get("email") or user_id)
        return AuthUser(id=str(user_id), email=data.get("email"), access_token=token)
