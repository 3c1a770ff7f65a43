from __future__ import annotations

from fastapi import APIRouter, Depends

from kondate.features.pantry.app.use_cases import PantryService
from kondate.features.pantry.infra.supabase_store import SupabaseStore
from kondate.shared.api.deps import get_current_user
from kondate.shared.auth.supabase_auth import AuthUser
from .schemas import AddIngredientPayload, MemberCountPayload

router = APIRouter(prefix="/pantry", tags=["pantry"])


def get_pantry(user: AuthUser = Depends(get_current_user)) -> PantryService:
    return PantryService(SupabaseStore(user.access_token), user.id)


@router.get("/ingredients")
async def list_ingredients(pantry: PantryService = Depends(get_pantry)):
    items = await pantry.list_ingredients()
    return {"ingredients": [i.model_dump() for i in items]}


@router.get("/ingredients/in-stock")
async def list_in_stock(pantry: PantryService = Depends(get_pantry)):
    return {"ingredients": await pantry.in_stock_names()}


@router.post("/ingredients", status_code=201)
async def add_ingredient(payload: AddIngredientPayload, pantry: PantryService = Depends(get_pantry)):
    item = await pantry.add_ingredient(payload.name, payload.category)
    return {"ingredient": item.model_dump()}


@router.post("/ingredients/{ingredient_id}/toggle")
async def toggle_stock(ingredient_id: str, pantry: PantryService = Depends(get_pantry)):
    item = await pantry.toggle_stock(ingredient_id)
    return {"ingredient": item.model_dump()}


@router.delete("/ingredients/{ingredient_id}")
async def remove_ingredient(ingredient_id: str, pantry: PantryService = Depends(get_pantry)):
    await pantry.remove_ingredient(ingredient_id)
    return {"ok": True}


@router.get("/master")
async def list_master(pantry: PantryService = Depends(get_pantry)):
    items = await pantry.list_master()
    return {"ingredients": [i.model_dump() for i in items]}


@router.get("/family")
async def get_family(pantry: PantryService = Depends(get_pantry)):
    group = await pantry.family_group()
    return {"family": group.model_dump()}


@router.put("/family/member-count")
async def update_member_count(payload: MemberCountPayload, pantry: PantryService = Depends(get_pantry)):
    group = await pantry.update_member_count(payload.member_count)
    return {"family": group.model_dump()}
