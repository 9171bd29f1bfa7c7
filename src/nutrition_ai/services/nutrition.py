"""Nutrition aggregation and portion helpers."""

import math
from collections.abc import Iterable
from datetime import UTC
from typing import Protocol

from nutrition_ai.domain.meals import MealRecord
from nutrition_ai.domain.nutrition import NUTRIENT_FIELDS, NutritionProfile
from nutrition_ai.domain.vision import BoundingBox


class Portion(Protocol):
    """Anything carrying a per-100-unit profile and a quantity."""

    @property
    def quantity(self) -> float: ...

    @property
    def nutrition(self) -> NutritionProfile: ...


def round_half_away(value: float, digits: int = 1) -> float:
    """Round half away from zero, e.g. 0.25 -> 0.3 and -0.25 -> -0.3."""
    scale = 10**digits
    rounded = math.copysign(math.floor(abs(value) * scale + 0.5), value) / scale
    return rounded + 0.0


def aggregate_nutrition(items: Iterable[Portion]) -> NutritionProfile:
    """Sum item profiles scaled by quantity / 100, rounded to one decimal.

    Quantities are not validated: zero or negative values flow through the
    sum. Micronutrients are not aggregated.
    """
    totals = dict.fromkeys(NUTRIENT_FIELDS, 0.0)
    for item in items:
        portion = item.nutrition.scaled(item.quantity / 100)
        for name in NUTRIENT_FIELDS:
            totals[name] += getattr(portion, name)
    return NutritionProfile(
        **{name: round_half_away(value) for name, value in totals.items()}
    )


def estimate_portion_size(box: BoundingBox | None) -> float:
    """Guess grams from the share of the frame a detected object covers."""
    if box is None:
        return 100.0
    area = box.width * box.height
    if area < 0.1:
        return 50.0
    if area < 0.3:
        return 100.0
    if area < 0.6:
        return 150.0
    return 200.0


def average_daily_calories(meals: Iterable[MealRecord]) -> int:
    """Average calories over the UTC days that have at least one meal."""
    per_day: dict[str, float] = {}
    for meal in meals:
        day = meal.timestamp.astimezone(UTC).date().isoformat()
        per_day[day] = per_day.get(day, 0.0) + meal.total_nutrition.calories
    if not per_day:
        return 0
    return int(round_half_away(sum(per_day.values()) / len(per_day), digits=0))
