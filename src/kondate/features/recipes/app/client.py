from __future__ import annotations

import logging
from typing import Sequence

import httpx
from pydantic import ValidationError

from kondate.features.recipes.domain.models import GenerationRequest, Recipe
from kondate.features.recipes.infra.transports import RecipeTransport
from kondate.shared.errors import GenerationFailed, KondateError, message_for

log = logging.getLogger("recipes")


class RecipeGenerationClient:
    """Produces one validated recipe per slot through the configured transport."""

    def __init__(self, transport: RecipeTransport) -> None:
        self.transport = transport

    async def generate_one(
        self,
        ingredients: Sequence[str],
        household_size: int = 2,
        slot_index: int = 1,
        total_slots: int = 3,
    ) -> Recipe:
        request = GenerationRequest.build(ingredients, household_size, slot_index, total_slots)
        return await self.generate(request)

    async def generate(self, request: GenerationRequest) -> Recipe:
        try:
            payloads = await self.transport.fetch_recipes(request)
        except GenerationFailed:
            raise
        except (httpx.HTTPError, KondateError) as e:
            log.warning("slot %d failed: %s: %s", request.slot_index, type(e).__name__, e)
            raise GenerationFailed(cause=e) from e

        if not payloads:
            log.warning("slot %d: no recipe produced", request.slot_index)
            raise GenerationFailed(message_for("no_recipe"))

        try:
            recipe = Recipe.model_validate(payloads[0])
        except ValidationError as e:
            log.warning("slot %d: recipe failed validation: %s", request.slot_index, e)
            raise GenerationFailed(cause=e) from e

        log.info("slot %d: generated %r", request.slot_index, recipe.name)
        return recipe
