from __future__ import annotations

import asyncio
import logging
import time
from enum import Enum
from typing import List, Optional, Protocol, Sequence, Union

from kondate.features.recipes.domain.models import Recipe, unique_ingredients
from kondate.shared.errors import GenerationFailed, NoIngredientsProvided

log = logging.getLogger("recipes")


class BatchPolicy(str, Enum):
    FAIL_FAST = "fail_fast"
    BEST_EFFORT = "best_effort"


class SlotClient(Protocol):
    async def generate_one(
        self,
        ingredients: Sequence[str],
        household_size: int,
        slot_index: int,
        total_slots: int,
    ) -> Recipe:
        ...


class RecipeOrchestrator:
    """
    Fan-out/fan-in over recipe slots.

    All slots are launched at once and awaited together; results are kept in
    slot order regardless of completion order.

    ``BatchPolicy.FAIL_FAST`` (default): the first failing slot cancels the
    others and the batch raises ``GenerationFailed``; no partial list is returned.
    ``BatchPolicy.BEST_EFFORT`` (opt-in): failed slots are dropped and the
    survivors returned; the batch only fails when every slot failed.
    """

    def __init__(
        self,
        client: SlotClient,
        *,
        policy: Union[BatchPolicy, str] = BatchPolicy.FAIL_FAST,
        slot_timeout: Optional[float] = None,
    ) -> None:
        self.client = client
        self.policy = BatchPolicy(policy)
        self.slot_timeout = slot_timeout

    async def generate_batch(
        self,
        ingredients: Sequence[str],
        household_size: int = 2,
        count: int = 3,
        *,
        policy: Union[BatchPolicy, str, None] = None,
    ) -> List[Recipe]:
        items = unique_ingredients(ingredients or [])
        if not items:
            raise NoIngredientsProvided()
        if count < 1:
            raise ValueError("count must be at least 1")
        policy = BatchPolicy(policy) if policy is not None else self.policy

        started = time.perf_counter()
        log.info("batch start: %d slots, %d ingredients, policy=%s", count, len(items), policy.value)
        tasks = [
            asyncio.create_task(self._run_slot(items, household_size, slot, count))
            for slot in range(1, count + 1)
        ]

        if policy is BatchPolicy.FAIL_FAST:
            try:
                results = await asyncio.gather(*tasks)
            except BaseException:
                for t in tasks:
                    t.cancel()
                await asyncio.gather(*tasks, return_exceptions=True)
                log.warning("batch failed after %.2fs", time.perf_counter() - started)
                raise
            recipes = [r for r in results if r]
        else:
            results = await asyncio.gather(*tasks, return_exceptions=True)
            recipes = []
            for slot, res in enumerate(results, 1):
                if isinstance(res, BaseException):
                    log.warning("slot %d dropped: %s", slot, res)
                elif res:
                    recipes.append(res)
            if not recipes:
                raise GenerationFailed()

        log.info("batch done: %d recipes in %.2fs", len(recipes), time.perf_counter() - started)
        return recipes

    async def _run_slot(self, ingredients: Sequence[str], household_size: int, slot: int, total: int) -> Recipe:
        call = self.client.generate_one(ingredients, household_size, slot, total)
        try:
            if self.slot_timeout:
                return await asyncio.wait_for(call, timeout=self.slot_timeout)
            return await call
        except GenerationFailed:
            raise
        except asyncio.TimeoutError as e:
            log.warning("slot %d timed out after %ss", slot, self.slot_timeout)
            raise GenerationFailed(cause=e) from e
        except Exception as e:
            log.warning("slot %d failed: %s", slot, e)
            raise GenerationFailed(cause=e) from e
