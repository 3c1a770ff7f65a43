from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import List, Literal, Optional


class _MemberCountMixin(BaseModel):
    member_count: Optional[int] = Field(default=None, alias="memberCount")

    @field_validator("member_count")
    @classmethod
    def falsy_means_default(cls, v: Optional[int]) -> Optional[int]:
        # 0 or negative falls back to the default household size
        return v if v and v > 0 else None


class GenerateRecipePayload(_MemberCountMixin):
    model_config = ConfigDict(populate_by_name=True)

    ingredients: List[str] = Field(default_factory=list)
    recipe_index: int = Field(default=1, ge=1, alias="recipeIndex")
    total_recipes: int = Field(default=3, ge=1, alias="totalRecipes")


class RecipeBatchPayload(_MemberCountMixin):
    model_config = ConfigDict(populate_by_name=True)

    ingredients: Optional[List[str]] = None
    count: Optional[int] = Field(default=None, ge=1, le=10)
    mode: Optional[Literal["fail_fast", "best_effort"]] = None
