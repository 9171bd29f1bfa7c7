"""Nutrition domain models."""

from dataclasses import dataclass, replace

NUTRIENT_FIELDS = (
    "calories",
    "protein",
    "carbohydrates",
    "fat",
    "fiber",
    "sugar",
    "sodium",
    "cholesterol",
)
MICRONUTRIENT_FIELDS = ("vitamin_c", "calcium", "iron")


@dataclass(frozen=True)
class NutritionProfile:
    """Nutrient content per 100 units of a food (grams by convention).

    Energy is in kcal, sodium/cholesterol and the micronutrients in mg,
    everything else in grams.
    """

    calories: float
    protein: float
    carbohydrates: float
    fat: float
    fiber: float
    sugar: float
    sodium: float
    cholesterol: float
    vitamin_c: float | None = None
    calcium: float | None = None
    iron: float | None = None

    def scaled(self, factor: float) -> "NutritionProfile":
        """Return a copy with every present field multiplied by factor."""
        values: dict[str, float | None] = {
            name: getattr(self, name) * factor for name in NUTRIENT_FIELDS
        }
        for name in MICRONUTRIENT_FIELDS:
            value = getattr(self, name)
            values[name] = value * factor if value is not None else None
        return replace(self, **values)


@dataclass(frozen=True)
class FoodItem:
    """A single food within a meal.

    `nutrition` is the per-100-unit profile; `quantity` is expressed in
    `unit`, so the item's contribution is nutrition * quantity / 100.
    """

    id: str
    name: str
    quantity: float
    unit: str
    nutrition: NutritionProfile
    category: str
    brand: str | None = None
