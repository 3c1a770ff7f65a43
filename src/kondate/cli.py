"""
Command-line recipe suggestions.

By default the batch goes through the authenticated relay endpoint, so the
provider key never leaves the server:

  kondate-recipes --ingredients "chicken,onion,egg" --token "$KONDATE_ACCESS_TOKEN"

Operators holding a provider key can call the model directly with
``--transport direct``.
"""
import argparse
import asyncio
import json
import os
import sys
from typing import List, Optional

from kondate.features.recipes.app.orchestrator import BatchPolicy
from kondate.features.recipes.app.use_cases import build_orchestrator, build_transport
from kondate.features.recipes.domain.models import Recipe
from kondate.shared.config.settings import settings
from kondate.shared.errors import KondateError
from kondate.shared.logging.logger import setup_logging


def _positive_int(value: str) -> int:
    n = int(value)
    if n < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {n}")
    return n


async def _run(args: argparse.Namespace) -> List[Recipe]:
    transport = build_transport(args.transport, access_token=args.token, relay_url=args.relay_url)
    orchestrator = build_orchestrator(transport, policy=args.mode)
    ingredients = [s for s in args.ingredients.split(",") if s.strip()]
    return await orchestrator.generate_batch(ingredients, args.members, args.count)


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Suggest recipes from the ingredients you have")
    parser.add_argument("--ingredients", required=True, help="Comma-separated ingredient names")
    parser.add_argument("--members", type=_positive_int, default=2, help="Household size")
    parser.add_argument("--count", type=_positive_int, default=settings.RECIPE_COUNT, help="Number of recipes")
    parser.add_argument("--mode", choices=[p.value for p in BatchPolicy], default=settings.RECIPE_BATCH_POLICY)
    parser.add_argument("--transport", choices=["relay", "direct"], default=settings.RECIPE_TRANSPORT)
    parser.add_argument("--relay-url", default=settings.RECIPE_RELAY_URL)
    parser.add_argument("--token", default=os.getenv("KONDATE_ACCESS_TOKEN"), help="Supabase session token")
    args = parser.parse_args(argv)

    setup_logging()
    try:
        recipes = asyncio.run(_run(args))
    except KondateError as e:
        sys.stderr.write(f"[ERROR] {e.message}\n")
        return 1

    print(json.dumps([r.to_wire() for r in recipes], indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
