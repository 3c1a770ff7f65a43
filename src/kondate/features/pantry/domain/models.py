from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict


class MasterIngredient(BaseModel):
    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    id: str
    name: str
    category: str


class PantryIngredient(BaseModel):
    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    id: str
    name: str
    category: str = ""
    has_stock: bool = True
    added_date: Optional[str] = None
    updated_at: Optional[str] = None


class FamilyGroup(BaseModel):
    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    id: str
    group_code: str
    member_count: int
    created_at: Optional[str] = None
