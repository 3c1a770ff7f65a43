from __future__ import annotations
import time
from fastapi import APIRouter, Depends

from kondate.shared.api.deps import get_provider
from kondate.shared.llm.gemini_client import GeminiClient

router = APIRouter(tags=["health"])

@router.get("/health")
def health(provider: GeminiClient = Depends(get_provider)):
    return {"ok": True, "ts": time.time(), "provider_configured": provider.configured}
