from pydantic import BaseModel, ConfigDict, Field


class AddIngredientPayload(BaseModel):
    name: str = Field(min_length=1)
    category: str = ""


class MemberCountPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    member_count: int = Field(ge=1, alias="memberCount")
