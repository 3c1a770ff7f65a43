from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Protocol

import httpx

from kondate.features.recipes.domain.extraction import RAW_EXCERPT_CHARS, extract_recipes
from kondate.features.recipes.domain.models import GenerationRequest
from kondate.features.recipes.domain.prompts import build_recipe_prompt
from kondate.shared.config.settings import settings
from kondate.shared.errors import AuthenticationRequired, MalformedResponse
from kondate.shared.llm.gemini_client import GeminiClient, SamplingConfig

log = logging.getLogger("recipes")

RECIPE_SAMPLING = SamplingConfig(temperature=0.7, top_p=0.8, top_k=50, max_output_tokens=3072)


class RecipeTransport(Protocol):
    async def fetch_recipes(self, request: GenerationRequest) -> List[Dict[str, Any]]:
        ...


class ModelTransport:
    """
    Calls the model provider directly. Only for trusted contexts that hold the
    provider key (the API server itself, or an operator's CLI).
    """

    def __init__(self, provider: GeminiClient, *, lang: Optional[str] = None) -> None:
        self.provider = provider
        self.lang = lang or settings.APP_LANG

    async def fetch_recipes(self, request: GenerationRequest) -> List[Dict[str, Any]]:
        prompt = build_recipe_prompt(
            request.ingredients,
            request.household_size,
            request.slot_index,
            request.total_slots,
            lang=self.lang,
        )
        text = await self.provider.generate_text(prompt, sampling=RECIPE_SAMPLING)
        log.info("slot %d: model returned %d chars", request.slot_index, len(text))
        return extract_recipes(text)


class RelayTransport:
    """
    Sends the request to the authenticated backend relay, which holds the
    provider key. The end user's session token is attached as a bearer credential.
    """

    def __init__(
        self,
        access_token: Optional[str],
        *,
        url: Optional[str] = None,
        request_timeout: Optional[int] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.access_token = access_token
        self.url = url or settings.RECIPE_RELAY_URL
        self.timeout = httpx.Timeout(request_timeout or settings.LLM_REQUEST_TIMEOUT)
        self._http = http_client

    async def fetch_recipes(self, request: GenerationRequest) -> List[Dict[str, Any]]:
        if not self.access_token:
            raise AuthenticationRequired()

        body = {
            "ingredients": list(request.ingredients),
            "memberCount": request.household_size,
            "recipeIndex": request.slot_index,
            "totalRecipes": request.total_slots,
        }
        headers = {
            "Authorization": f"Bearer {self.access_token}",
            "Content-Type": "application/json",
        }
        log.info("slot %d: sending relay request", request.slot_index)
        if self._http is not None:
            r = await self._http.post(self.url, headers=headers, json=body, timeout=self.timeout)
        else:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                r = await client.post(self.url, headers=headers, json=body)

        if r.status_code == 401:
            raise AuthenticationRequired()
        if r.is_error:
            log.error("relay error %s: %s", r.status_code, r.text[:RAW_EXCERPT_CHARS])
        r.raise_for_status()

        try:
            data = r.json()
        except ValueError as e:
            raise MalformedResponse(raw_excerpt=r.text[:RAW_EXCERPT_CHARS]) from e
        recipe = data.get("recipe") if isinstance(data, dict) else None
        return [recipe] if recipe else []
