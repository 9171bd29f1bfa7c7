"""Pydantic models for JSON request bodies."""

from pydantic import BaseModel, ConfigDict, Field


class TextMealRequest(BaseModel):
    """Free-text meal entry; every field is checked by the meal service."""

    model_config = ConfigDict(populate_by_name=True)

    user_id: str | None = Field(default=None, alias="userId")
    meal_type: str | None = Field(default=None, alias="mealType")
    food_description: str | None = Field(default=None, alias="foodDescription")
    notes: str | None = None


class AuthRequest(BaseModel):
    password: str | None = None
