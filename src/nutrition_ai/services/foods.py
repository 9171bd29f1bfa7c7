"""Reference nutrition table and label-to-food resolution."""

from types import MappingProxyType

from nutrition_ai.domain.nutrition import NutritionProfile

UNKNOWN_FOOD = "unknown"

# Values per 100 g.
NUTRITION_TABLE: "MappingProxyType[str, NutritionProfile]" = MappingProxyType(
    {
        "rice": NutritionProfile(
            calories=130,
            protein=2.7,
            carbohydrates=28,
            fat=0.3,
            fiber=0.4,
            sugar=0.1,
            sodium=5,
            cholesterol=0,
        ),
        "chicken": NutritionProfile(
            calories=165,
            protein=31,
            carbohydrates=0,
            fat=3.6,
            fiber=0,
            sugar=0,
            sodium=74,
            cholesterol=85,
        ),
        "broccoli": NutritionProfile(
            calories=34,
            protein=2.8,
            carbohydrates=7,
            fat=0.4,
            fiber=2.6,
            sugar=1.5,
            sodium=33,
            cholesterol=0,
        ),
        "salmon": NutritionProfile(
            calories=208,
            protein=22,
            carbohydrates=0,
            fat=12,
            fiber=0,
            sugar=0,
            sodium=59,
            cholesterol=59,
        ),
        "apple": NutritionProfile(
            calories=52,
            protein=0.3,
            carbohydrates=14,
            fat=0.2,
            fiber=2.4,
            sugar=10,
            sodium=1,
            cholesterol=0,
        ),
    }
)

FOOD_CATEGORIES: "MappingProxyType[str, tuple[str, ...]]" = MappingProxyType(
    {
        "dish": ("rice", "pasta", "noodles", "curry", "stir fry"),
        "meat": ("chicken", "beef", "pork", "fish", "salmon", "tuna"),
        "vegetable": ("broccoli", "carrot", "spinach", "tomato", "onion"),
        "fruit": ("apple", "banana", "orange", "strawberry", "grape"),
        "grain": ("bread", "rice", "quinoa", "oats", "wheat"),
        "dairy": ("milk", "cheese", "yogurt", "butter"),
    }
)

# Generic annotations a vision service tends to emit.
LABEL_ALIASES: "MappingProxyType[str, str]" = MappingProxyType(
    {
        "staple food": "rice",
        "produce": "broccoli",
        "animal product": "chicken",
        "seafood": "salmon",
        "poultry": "chicken",
        "citrus": "apple",
        "plant": "broccoli",
    }
)

DEFAULT_PROFILE = NutritionProfile(
    calories=100,
    protein=5,
    carbohydrates=15,
    fat=3,
    fiber=2,
    sugar=5,
    sodium=50,
    cholesterol=10,
)


def resolve_food(label: str) -> str:
    """Map a lowercase label to a NUTRITION_TABLE key, or UNKNOWN_FOOD.

    Tries, in order: an exact key, a category name contained in the label,
    a categorized food contained in the label, then the alias table.
    """
    if label in NUTRITION_TABLE:
        return label

    for category, foods in FOOD_CATEGORIES.items():
        if category not in label:
            continue
        for food in foods:
            if food in NUTRITION_TABLE:
                return food

    for foods in FOOD_CATEGORIES.values():
        for food in foods:
            if food in label and food in NUTRITION_TABLE:
                return food

    for alias, food in LABEL_ALIASES.items():
        if alias in label:
            return food

    return UNKNOWN_FOOD


FOOD_KEYWORDS = (
    "food",
    "dish",
    "meal",
    "cuisine",
    "ingredient",
    "vegetable",
    "fruit",
    "meat",
    "fish",
    "chicken",
    "beef",
    "pork",
    "rice",
    "bread",
    "pasta",
    "salad",
    "soup",
    "dessert",
    "drink",
    "beverage",
    "dairy",
    "grain",
    "protein",
    "carbohydrate",
    "produce",
    "seafood",
    "poultry",
)


def is_food_related(description: str) -> bool:
    """Return True when a lowercase annotation mentions food at all."""
    if any(keyword in description for keyword in FOOD_KEYWORDS):
        return True
    return any(
        food in description for foods in FOOD_CATEGORIES.values() for food in foods
    )
