from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Difficulty(str, Enum):
    EASY = "Easy"
    NORMAL = "Normal"
    HARD = "Hard"


_DIFFICULTY_ALIASES = {
    "easy": Difficulty.EASY,
    "normal": Difficulty.NORMAL,
    "medium": Difficulty.NORMAL,
    "hard": Difficulty.HARD,
    "簡単": Difficulty.EASY,
    "普通": Difficulty.NORMAL,
    "難しい": Difficulty.HARD,
}


class Recipe(BaseModel):
    """One generated recipe. Wire format uses camelCase (``cookingTime``)."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    description: str = ""
    cooking_time: str = Field(default="", alias="cookingTime")
    difficulty: Difficulty
    ingredients: List[str] = Field(min_length=1)
    steps: List[str] = Field(min_length=1)

    @field_validator("difficulty", mode="before")
    @classmethod
    def _normalize_difficulty(cls, v):
        if isinstance(v, str):
            return _DIFFICULTY_ALIASES.get(v.strip().lower(), v.strip())
        return v

    def to_wire(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


def unique_ingredients(ingredients: Iterable[str]) -> Tuple[str, ...]:
    """Strip, drop blanks and de-duplicate while keeping first-seen order."""
    seen = dict.fromkeys(s.strip() for s in ingredients if s and s.strip())
    return tuple(seen)


@dataclass(frozen=True)
class GenerationRequest:
    ingredients: Tuple[str, ...]
    household_size: int = 2
    slot_index: int = 1
    total_slots: int = 3

    def __post_init__(self):
        if not self.ingredients:
            raise ValueError("ingredients must not be empty")
        if self.household_size < 1:
            raise ValueError("household_size must be positive")
        if self.slot_index < 1 or self.total_slots < 1:
            raise ValueError("slot_index and total_slots must be positive")

    @classmethod
    def build(
        cls,
        ingredients: Iterable[str],
        household_size: int = 2,
        slot_index: int = 1,
        total_slots: int = 3,
    ) -> "GenerationRequest":
        return cls(
            ingredients=unique_ingredients(ingredients),
            household_size=household_size,
            slot_index=slot_index,
            total_slots=total_slots,
        )
