# src/kondate/features/recipes/domain/prompts.py
from __future__ import annotations

from typing import Dict, Sequence, Tuple

# Slot 1 -> Japanese, slot 2 -> Western, slot 3 -> Chinese.
GENRES: Dict[str, Tuple[str, ...]] = {
    "en": ("Japanese recipe", "Western recipe", "Chinese recipe"),
    "ja": ("和食のレシピ", "洋食のレシピ", "中華料理のレシピ"),
}

FALLBACK_GENRE: Dict[str, str] = {
    "en": "unique recipe",
    "ja": "ユニークなレシピ",
}

DELIMITER: Dict[str, str] = {
    "en": ", ",
    "ja": "、",
}

RECIPE_JSON_SCHEMA_EN = """```json
{
  "recipes": [
    {
      "name": "Dish name",
      "description": "A short description of the dish (one sentence)",
      "cookingTime": "Cooking time (e.g. 20 min)",
      "difficulty": "Easy",
      "ingredients": ["ingredient 1", "ingredient 2", "seasonings"],
      "steps": [
        "step 1",
        "step 2",
        "step 3"
      ]
    }
  ]
}
```"""

RECIPE_JSON_SCHEMA_JA = """```json
{
  "recipes": [
    {
      "name": "料理名",
      "description": "料理の簡単な説明（1文）",
      "cookingTime": "調理時間（例: 20分）",
      "difficulty": "簡単",
      "ingredients": ["使用する食材1", "使用する食材2", "調味料など"],
      "steps": [
        "手順1",
        "手順2",
        "手順3"
      ]
    }
  ]
}
```"""


def _lang_key(lang: str) -> str:
    return "ja" if (lang or "").lower().startswith("ja") else "en"


def genre_hint(slot_index: int, *, lang: str = "en") -> str:
    """
    Genre hint for a 1-based slot; out-of-range slots get the generic unique-recipe hint.
    """
    key = _lang_key(lang)
    genres = GENRES[key]
    if 1 <= slot_index <= len(genres):
        return genres[slot_index - 1]
    return FALLBACK_GENRE[key]


def build_recipe_prompt(
    ingredients: Sequence[str],
    household_size: int,
    slot_index: int,
    total_slots: int,
    *,
    lang: str = "en",
) -> str:
    """
    Render the generation request for one slot of a batch. Pure and deterministic.
    """
    key = _lang_key(lang)
    ingredient_list = DELIMITER[key].join(ingredients)
    hint = genre_hint(slot_index, lang=key)

    if key == "ja":
        lines = [
            f"あなたは料理の専門家です。以下の食材を使って、{household_size}人分の{hint}を提案してください。",
            "",
            "**利用可能な食材:**",
            ingredient_list,
            "",
            "**重要な条件:**",
            f"- これは{total_slots}個のレシピ提案のうちの{slot_index}番目です",
            f"- {hint}に特化した料理を1つ提案してください",
            "- 他のジャンルとは明確に異なる料理にしてください",
            "- 調理時間は30分以内",
            "- できるだけ多くの食材を使用するが、合わなそうな食材は使用しない",
            "- 実在する一般的な料理名を使用してください",
            "- 基本的な調味料（塩、醤油、砂糖、油など）は家にあるものとして考えてOK",
            "- 手順は3〜5ステップで簡潔に",
            "",
            "**出力形式（必ず以下のJSON形式で出力してください）:**",
            RECIPE_JSON_SCHEMA_JA,
            "",
            "必ずJSON形式で出力してください。余計な説明は不要です。",
        ]
    else:
        lines = [
            f"You are a cooking expert. Using the ingredients below, suggest a {hint} for {household_size} people.",
            "",
            "**Available ingredients:**",
            ingredient_list,
            "",
            "**Important conditions:**",
            f"- This is suggestion {slot_index} of {total_slots}",
            f"- Suggest exactly one dish, specialised as a {hint}",
            "- Make it clearly different from dishes of the other genres",
            "- Cooking time must be 30 minutes or less",
            "- Use as many of the ingredients as possible, but leave out ones that do not fit",
            "- Use the name of a real, commonly known dish",
            "- Assume basic seasonings (salt, soy sauce, sugar, oil, etc.) are available at home",
            "- Keep the steps short: 3 to 5 steps",
            '- "difficulty" must be one of: Easy, Normal, Hard',
            "",
            "**Output format (always output JSON in exactly this shape):**",
            RECIPE_JSON_SCHEMA_EN,
            "",
            "Output only the JSON. Do not add any explanation.",
        ]
    return "\n".join(lines).strip()
