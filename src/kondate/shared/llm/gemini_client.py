from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import httpx

from kondate.shared.config.settings import settings
from kondate.shared.concurrency import LLM_SEMAPHORE
from kondate.shared.errors import MalformedResponse, ProviderUnconfigured

log = logging.getLogger("gemini")


@dataclass(frozen=True)
class SamplingConfig:
    temperature: float = 0.7
    top_p: float = 0.8
    top_k: int = 50
    max_output_tokens: int = 3072

    def as_generation_config(self) -> Dict[str, Any]:
        return {
            "temperature": self.temperature,
            "topP": self.top_p,
            "topK": self.top_k,
            "maxOutputTokens": self.max_output_tokens,
        }


class GeminiClient:
    """
    Thin async client for the Gemini ``generateContent`` REST endpoint.

    The HTTP client can be injected (tests pass one built on ``httpx.MockTransport``);
    otherwise a short-lived ``httpx.AsyncClient`` is opened per call.
    """

    def __init__(
        self,
        *,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        base_url: Optional[str] = None,
        request_timeout: Optional[int] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.api_key = settings.GEMINI_API_KEY if api_key is None else api_key
        self.model = model or settings.GEMINI_MODEL
        self.base_url = (base_url or settings.GEMINI_BASE_URL).rstrip("/")
        self.timeout = httpx.Timeout(request_timeout or settings.LLM_REQUEST_TIMEOUT)
        self._http = http_client

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    @property
    def url(self) -> str:
        return f"{self.base_url}/models/{self.model}:generateContent"

    def _headers(self) -> Dict[str, str]:
        return {
            "x-goog-api-key": self.api_key,
            "Content-Type": "application/json",
        }

    async def generate_text(self, prompt: str, *, sampling: Optional[SamplingConfig] = None) -> str:
        """
        Send a single-turn prompt and return the concatenated text of the first candidate.
        """
        if not self.configured:
            raise ProviderUnconfigured()

        payload = {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": (sampling or SamplingConfig()).as_generation_config(),
        }

        async with LLM_SEMAPHORE:
            if self._http is not None:
                resp = await self._http.post(self.url, headers=self._headers(), json=payload, timeout=self.timeout)
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    resp = await client.post(self.url, headers=self._headers(), json=payload)
        resp.raise_for_status()
        try:
            data = resp.json()
        except ValueError as e:
            raise MalformedResponse(raw_excerpt=resp.text[:500]) from e
        if not isinstance(data, dict):
            raise MalformedResponse(raw_excerpt=resp.text[:500])
        text = _candidate_text(data)
        log.debug("generateContent returned %d chars", len(text))
        return text


def _candidate_text(data: Dict[str, Any]) -> str:
    candidates = data.get("candidates") or []
    if not isinstance(candidates, list) or not candidates or not isinstance(candidates[0], dict):
        return ""
    content = candidates[0].get("content")
    parts = (content.get("parts") if isinstance(content, dict) else None) or []
    if not isinstance(parts, list):
        return ""
    return "".join(p["text"] for p in parts if isinstance(p, dict) and isinstance(p.get("text"), str))
