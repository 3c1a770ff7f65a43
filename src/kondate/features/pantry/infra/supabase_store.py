from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx

from kondate.shared.config.settings import settings
from kondate.shared.errors import AuthenticationRequired, StoreError

log = logging.getLogger("pantry")

PROFILES = "profiles"
FAMILY_GROUPS = "family_groups"
INGREDIENTS = "ingredients"
INGREDIENT_MASTER = "ingredient_master"


class SupabaseStore:
    """
    PostgREST access to the household tables, always on behalf of the end user
    so that the project's row-level rules decide what is visible.
    """

    def __init__(
        self,
        access_token: str,
        *,
        url: Optional[str] = None,
        anon_key: Optional[str] = None,
        request_timeout: Optional[int] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.access_token = access_token
        self.url = (url or settings.SUPABASE_URL).rstrip("/")
        self.anon_key = settings.SUPABASE_ANON_KEY if anon_key is None else anon_key
        self.timeout = httpx.Timeout(request_timeout or settings.SUPABASE_TIMEOUT)
        self._http = http_client

    def _headers(self, *, returning: bool = False) -> Dict[str, str]:
        h = {
            "apikey": self.anon_key,
            "Authorization": f"Bearer {self.access_token}",
            "Content-Type": "application/json",
        }
        if returning:
            h["Prefer"] = "return=representation"
        return h

    async def _request(
        self,
        method: str,
        table: str,
        *,
        params: Optional[Dict[str, str]] = None,
        json: Any = None,
        returning: bool = False,
    ) -> List[Dict[str, Any]]:
        endpoint = f"{self.url}/rest/v1/{table}"
        headers = self._headers(returning=returning)
        try:
            if self._http is not None:
                r = await self._http.request(method, endpoint, params=params, json=json, headers=headers, timeout=self.timeout)
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    r = await client.request(method, endpoint, params=params, json=json, headers=headers)
        except httpx.HTTPError as e:
            log.error("%s %s failed: %s", method, table, e)
            raise StoreError() from e

        if r.status_code == 401:
            raise AuthenticationRequired()
        if r.is_error:
            log.error("%s %s -> %s: %s", method, table, r.status_code, r.text[:500])
            raise StoreError()
        if not r.content:
            return []
        try:
            data = r.json()
        except ValueError as e:
            log.error("%s %s returned an unreadable body: %s", method, table, r.text[:500])
            raise StoreError() from e
        rows = data if isinstance(data, list) else [data]
        if not all(isinstance(row, dict) for row in rows):
            log.error("%s %s returned unexpected rows: %s", method, table, r.text[:500])
            raise StoreError()
        return rows

    # Ingredients
    async def list_ingredients(self, *, in_stock_only: bool = False) -> List[Dict[str, Any]]:
        params = {"select": "*", "order": "category.asc,name.asc"}
        if in_stock_only:
            params["has_stock"] = "eq.true"
        return await self._request("GET", INGREDIENTS, params=params)

    async def get_ingredient(self, ingredient_id: str) -> Optional[Dict[str, Any]]:
        rows = await self._request("GET", INGREDIENTS, params={"select": "*", "id": f"eq.{ingredient_id}"})
        return rows[0] if rows else None

    async def insert_ingredient(self, row: Dict[str, Any]) -> Dict[str, Any]:
        rows = await self._request("POST", INGREDIENTS, json=row, returning=True)
        return rows[0] if rows else dict(row)

    async def update_ingredient(self, ingredient_id: str, fields: Dict[str, Any]) -> List[Dict[str, Any]]:
        return await self._request(
            "PATCH", INGREDIENTS, params={"id": f"eq.{ingredient_id}"}, json=fields, returning=True
        )

    async def delete_ingredient(self, ingredient_id: str) -> List[Dict[str, Any]]:
        return await self._request("DELETE", INGREDIENTS, params={"id": f"eq.{ingredient_id}"}, returning=True)

    async def list_master(self) -> List[Dict[str, Any]]:
        return await self._request("GET", INGREDIENT_MASTER, params={"select": "*", "order": "category.asc,name.asc"})

    # Family
    async def family_group_id(self, user_id: str) -> Optional[str]:
        rows = await self._request("GET", PROFILES, params={"select": "family_group_id", "id": f"eq.{user_id}"})
        return (rows[0] if rows else {}).get("family_group_id")

    async def get_family_group(self, group_id: str) -> Optional[Dict[str, Any]]:
        rows = await self._request("GET", FAMILY_GROUPS, params={"select": "*", "id": f"eq.{group_id}"})
        return rows[0] if rows else None

    async def update_family_group(self, group_id: str, fields: Dict[str, Any]) -> List[Dict[str, Any]]:
        return await self._request(
            "PATCH", FAMILY_GROUPS, params={"id": f"eq.{group_id}"}, json=fields, returning=True
        )
