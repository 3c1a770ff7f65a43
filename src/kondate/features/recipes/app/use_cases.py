from __future__ import annotations

import logging
from typing import List, Optional

import httpx

from kondate.features.pantry.app.use_cases import PantryService
from kondate.features.recipes.api.schemas import GenerateRecipePayload, RecipeBatchPayload
from kondate.features.recipes.app.client import RecipeGenerationClient
from kondate.features.recipes.app.orchestrator import RecipeOrchestrator
from kondate.features.recipes.domain.models import Recipe, unique_ingredients
from kondate.features.recipes.infra.transports import ModelTransport, RecipeTransport, RelayTransport
from kondate.shared.config.settings import settings
from kondate.shared.errors import NoIngredientsProvided, ProviderUnconfigured
from kondate.shared.llm.gemini_client import GeminiClient

log = logging.getLogger("recipes")

DEFAULT_MEMBER_COUNT = 2


def build_transport(
    kind: Optional[str] = None,
    *,
    access_token: Optional[str] = None,
    provider: Optional[GeminiClient] = None,
    relay_url: Optional[str] = None,
    http_client: Optional[httpx.AsyncClient] = None,
) -> RecipeTransport:
    """
    ``relay`` (default): go through the authenticated backend endpoint.
    ``direct``: call the provider with a locally held key.
    """
    kind = (kind or settings.RECIPE_TRANSPORT).lower()
    if kind == "direct":
        return ModelTransport(provider or GeminiClient(http_client=http_client))
    if kind == "relay":
        return RelayTransport(access_token, url=relay_url, http_client=http_client)
    raise ValueError(f"unknown recipe transport: {kind}")


def build_orchestrator(
    transport: RecipeTransport,
    *,
    policy: Optional[str] = None,
) -> RecipeOrchestrator:
    return RecipeOrchestrator(
        RecipeGenerationClient(transport),
        policy=policy or settings.RECIPE_BATCH_POLICY,
        slot_timeout=settings.LLM_REQUEST_TIMEOUT,
    )


async def generate_relayed_recipe(payload: GenerateRecipePayload, provider: GeminiClient) -> Recipe:
    """
    Server side of the relay: one slot, generated with the server's provider key.
    """
    if not provider.configured:
        log.error("GEMINI_API_KEY is not configured")
        raise ProviderUnconfigured()
    ingredients = unique_ingredients(payload.ingredients)
    if not ingredients:
        raise NoIngredientsProvided()

    client = RecipeGenerationClient(ModelTransport(provider))
    return await client.generate_one(
        ingredients,
        payload.member_count or DEFAULT_MEMBER_COUNT,
        payload.recipe_index,
        payload.total_recipes,
    )


async def suggest_recipes(
    payload: RecipeBatchPayload,
    provider: GeminiClient,
    pantry: PantryService,
) -> List[Recipe]:
    """
    Full batch on the server. Without explicit ingredients the user's in-stock
    pantry and family size are used.
    """
    if not provider.configured:
        log.error("GEMINI_API_KEY is not configured")
        raise ProviderUnconfigured()

    if payload.ingredients is not None:
        ingredients = payload.ingredients
        member_count = payload.member_count or DEFAULT_MEMBER_COUNT
    elif payload.member_count:
        ingredients, member_count = await pantry.in_stock_names(), payload.member_count
    else:
        ingredients, member_count = await pantry.recipe_inputs()

    orchestrator = build_orchestrator(ModelTransport(provider), policy=payload.mode)
    return await orchestrator.generate_batch(
        ingredients,
        member_count,
        payload.count or settings.RECIPE_COUNT,
    )
