from __future__ import annotations

import json
import logging
import re
from typing import Any, List

from kondate.shared.errors import MalformedResponse

log = logging.getLogger("recipes")

_RE_JSON_FENCE = re.compile(r"```json\s*([\s\S]*?)\s*```", re.IGNORECASE)
_RE_ANY_FENCE = re.compile(r"```\s*([\s\S]*?)\s*```")

RAW_EXCERPT_CHARS = 500


def _candidate(text: str) -> str:
    m = _RE_JSON_FENCE.search(text)
    if m:
        return m.group(1)
    m = _RE_ANY_FENCE.search(text)
    if m:
        return m.group(1)
    return text


def extract_recipes(raw_text: str) -> List[Any]:
    """
    Pull the ``recipes`` array out of free-form model output.

    Looks for a ```json fence first, then any ``` fence, then falls back to the
    whole text. Entries are returned as-is; field validation happens later.
    """
    text = raw_text or ""
    excerpt = text[:RAW_EXCERPT_CHARS]
    try:
        parsed = json.loads(_candidate(text).strip())
    except ValueError as e:
        log.error("recipe response is not JSON (%s); raw: %r", e, excerpt)
        raise MalformedResponse(raw_excerpt=excerpt) from e

    recipes = parsed.get("recipes") if isinstance(parsed, dict) else None
    if not isinstance(recipes, list):
        log.error("recipe response has no 'recipes' array; raw: %r", excerpt)
        raise MalformedResponse(raw_excerpt=excerpt)
    return recipes
