from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from kondate.features.pantry.api.routes import get_pantry
from kondate.features.pantry.app.use_cases import PantryService
from kondate.features.recipes.app.use_cases import generate_relayed_recipe, suggest_recipes
from kondate.shared.api.deps import get_current_user, get_provider
from kondate.shared.auth.supabase_auth import AuthUser
from kondate.shared.llm.gemini_client import GeminiClient
from .schemas import GenerateRecipePayload, RecipeBatchPayload

log = logging.getLogger("recipes")

router = APIRouter(prefix="/recipes", tags=["recipes"])


@router.post("/generate")
async def generate_recipe(
    payload: GenerateRecipePayload,
    user: AuthUser = Depends(get_current_user),
    provider: GeminiClient = Depends(get_provider),
):
    log.info("relay request from %s: slot %d/%d", user.id, payload.recipe_index, payload.total_recipes)
    recipe = await generate_relayed_recipe(payload, provider)
    return {"recipe": recipe.to_wire()}


@router.post("/batch")
async def generate_batch(
    payload: RecipeBatchPayload,
    user: AuthUser = Depends(get_current_user),
    provider: GeminiClient = Depends(get_provider),
    pantry: PantryService = Depends(get_pantry),
):
    log.info("batch request from %s", user.id)
    recipes = await suggest_recipes(payload, provider, pantry)
    return {"recipes": [r.to_wire() for r in recipes]}
