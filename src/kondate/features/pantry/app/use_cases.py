from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import List, Tuple

from kondate.features.pantry.domain.models import FamilyGroup, MasterIngredient, PantryIngredient
from kondate.features.pantry.infra.supabase_store import SupabaseStore
from kondate.shared.errors import DuplicateIngredient, NotFound

log = logging.getLogger("pantry")


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class PantryService:
    """Household ingredient list and family settings for one authenticated user."""

    def __init__(self, store: SupabaseStore, user_id: str) -> None:
        self.store = store
        self.user_id = user_id

    async def list_ingredients(self) -> List[PantryIngredient]:
        rows = await self.store.list_ingredients()
        return [PantryIngredient.model_validate(r) for r in rows]

    async def in_stock_names(self) -> List[str]:
        rows = await self.store.list_ingredients(in_stock_only=True)
        return [r["name"] for r in rows if r.get("name")]

    async def list_master(self) -> List[MasterIngredient]:
        rows = await self.store.list_master()
        return [MasterIngredient.model_validate(r) for r in rows]

    async def add_ingredient(self, name: str, category: str) -> PantryIngredient:
        name = name.strip()
        existing = await self.store.list_ingredients()
        if any(r.get("name") == name for r in existing):
            raise DuplicateIngredient()
        row = await self.store.insert_ingredient({"name": name, "category": category, "has_stock": True})
        log.info("user %s added ingredient %r", self.user_id, name)
        return PantryIngredient.model_validate(row)

    async def toggle_stock(self, ingredient_id: str) -> PantryIngredient:
        current = await self.store.get_ingredient(ingredient_id)
        if current is None:
            raise NotFound()
        rows = await self.store.update_ingredient(
            ingredient_id,
            {"has_stock": not current.get("has_stock", False), "updated_at": _now_iso()},
        )
        if not rows:
            raise NotFound()
        return PantryIngredient.model_validate(rows[0])

    async def remove_ingredient(self, ingredient_id: str) -> None:
        rows = await self.store.delete_ingredient(ingredient_id)
        if not rows:
            raise NotFound()
        log.info("user %s removed ingredient %s", self.user_id, ingredient_id)

    async def family_group(self) -> FamilyGroup:
        group_id = await self.store.family_group_id(self.user_id)
        if not group_id:
            raise NotFound()
        row = await self.store.get_family_group(group_id)
        if row is None:
            raise NotFound()
        return FamilyGroup.model_validate(row)

    async def update_member_count(self, member_count: int) -> FamilyGroup:
        if member_count < 1:
            raise ValueError("member_count must be positive")
        group = await self.family_group()
        log.info("family %s member_count %d -> %d", group.id, group.member_count, member_count)
        rows = await self.store.update_family_group(group.id, {"member_count": member_count})
        if not rows:
            raise NotFound()
        return FamilyGroup.model_validate(rows[0])

    async def recipe_inputs(self) -> Tuple[List[str], int]:
        """In-stock ingredient names and the household size used for suggestions."""
        names = await self.in_stock_names()
        group = await self.family_group()
        return names, group.member_count
