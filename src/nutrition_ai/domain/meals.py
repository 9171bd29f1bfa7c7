"""Domain models for meal records."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from nutrition_ai.domain.nutrition import FoodItem, NutritionProfile

MEAL_TYPES = ("breakfast", "lunch", "dinner", "snack", "meal")
ANALYSIS_METHODS = ("image", "manual", "barcode")

# Fields a partial meal update may overwrite.
MEAL_UPDATE_FIELDS = (
    "mealType",
    "foodItems",
    "totalNutrition",
    "imageUrl",
    "notes",
    "timestamp",
    "confidence",
    "analysisMethod",
)


@dataclass(frozen=True)
class MealRecord:
    """A logged meal with its items and aggregated nutrition."""

    id: UUID | None
    user_id: UUID
    meal_type: str
    food_items: list[FoodItem]
    total_nutrition: NutritionProfile
    image_url: str | None
    notes: str | None
    timestamp: datetime
    confidence: float
    analysis_method: str
