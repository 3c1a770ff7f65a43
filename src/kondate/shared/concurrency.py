import asyncio
from kondate.shared.config.settings import settings

LLM_SEMAPHORE = asyncio.Semaphore(settings.LLM_MAX_CONCURRENCY)
