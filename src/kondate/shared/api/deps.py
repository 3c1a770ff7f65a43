"""
FastAPI dependencies shared across features.

Every external collaborator (auth, model provider) is provided through a
dependency so tests can swap it with ``app.dependency_overrides``.
"""
from __future__ import annotations

from functools import lru_cache
from typing import Optional

from fastapi import Depends, Header

from kondate.shared.auth.supabase_auth import AuthUser, SupabaseAuth, parse_bearer
from kondate.shared.llm.gemini_client import GeminiClient


@lru_cache
def get_auth() -> SupabaseAuth:
    return SupabaseAuth()


@lru_cache
def get_provider() -> GeminiClient:
    return GeminiClient()


async def get_current_user(
    authorization: Optional[str] = Header(None, alias="Authorization"),
    auth: SupabaseAuth = Depends(get_auth),
) -> AuthUser:
    token = parse_bearer(authorization)
    return await auth.get_user(token)
