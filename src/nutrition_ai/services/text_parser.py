"""Free-text meal description parsing for manual entries."""

from types import MappingProxyType
from uuid import uuid4

from nutrition_ai.domain.nutrition import FoodItem, NutritionProfile

# Macros per 100 g; the remaining fields use fixed filler values.
COMMON_FOODS: "MappingProxyType[str, tuple[float, float, float, float]]" = (
    MappingProxyType(
        {
            "rice": (130, 2.7, 28, 0.3),
            "chicken": (165, 31, 0, 3.6),
            "broccoli": (34, 2.8, 7, 0.4),
            "salmon": (208, 22, 0, 12),
            "apple": (52, 0.3, 14, 0.2),
        }
    )
)
DEFAULT_QUANTITY_G = 100.0

MIXED_MEAL_NAME = "Mixed meal"
MIXED_MEAL_QUANTITY_G = 200.0
MIXED_MEAL_PROFILE = NutritionProfile(
    calories=300,
    protein=15,
    carbohydrates=30,
    fat=10,
    fiber=5,
    sugar=8,
    sodium=100,
    cholesterol=20,
)


def parse_food_description(description: str) -> list[FoodItem]:
    """Return the known foods mentioned in a description.

    A food matches when any whitespace-separated token contains its name.
    Quantities, negation and multi-word names are not understood. When
    nothing matches, a single estimated "Mixed meal" item is returned.
    """
    tokens = description.lower().split()
    items: list[FoodItem] = []
    for name, (calories, protein, carbohydrates, fat) in COMMON_FOODS.items():
        if not any(name in token for token in tokens):
            continue
        items.append(
            FoodItem(
                id=f"manual_{uuid4().hex}",
                name=name,
                quantity=DEFAULT_QUANTITY_G,
                unit="g",
                nutrition=NutritionProfile(
                    calories=calories,
                    protein=protein,
                    carbohydrates=carbohydrates,
                    fat=fat,
                    fiber=2,
                    sugar=5,
                    sodium=50,
                    cholesterol=10,
                ),
                category="manual",
            )
        )

    if not items:
        items.append(
            FoodItem(
                id=f"estimated_{uuid4().hex}",
                name=MIXED_MEAL_NAME,
                quantity=MIXED_MEAL_QUANTITY_G,
                unit="g",
                nutrition=MIXED_MEAL_PROFILE,
                category="estimated",
            )
        )
    return items
