"""Meal recording service."""

import logging
from dataclasses import dataclass, replace
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID

from nutrition_ai.domain.meals import (
    ANALYSIS_METHODS,
    MEAL_TYPES,
    MEAL_UPDATE_FIELDS,
    MealRecord,
)
from nutrition_ai.domain.nutrition import FoodItem
from nutrition_ai.domain.vision import ImageAnalysisResult
from nutrition_ai.errors import NotFoundError, ValidationError
from nutrition_ai.services.nutrition import aggregate_nutrition
from nutrition_ai.services.text_parser import parse_food_description
from nutrition_ai.services.validation import (
    reject_unknown_fields,
    require_choice,
    require_id,
)
from nutrition_ai.services.vision import VisionService

TEXT_ENTRY_CONFIDENCE = 0.7
DEFAULT_MEAL_TYPE = "meal"

_logger = logging.getLogger(__name__)


class MealRepository(Protocol):
    """Persistence interface for meal records."""

    def create_meal(self, meal: MealRecord) -> UUID:
        """Persist a meal and return its generated id."""

    def get_meal(self, meal_id: UUID) -> MealRecord | None:
        """Return a meal by id."""

    def list_user_meals(self, user_id: UUID, limit: int) -> list[MealRecord]:
        """Return a user's meals, newest first."""

    def list_meals_between(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> list[MealRecord]:
        """Return a user's meals within [start, end], newest first."""

    def update_meal(self, meal_id: UUID, updates: dict[str, object]) -> None:
        """Overwrite the given camelCase fields of a meal."""

    def delete_meal(self, meal_id: UUID) -> None:
        """Delete a meal."""


@dataclass
class MealService:
    """Service that assembles meal records from images or text."""

    vision_service: VisionService
    repository: MealRepository

    async def analyze_image(
        self,
        user_id: str | UUID | None,
        image_bytes: bytes | None,
        meal_type: str | None = None,
        notes: str | None = None,
    ) -> tuple[MealRecord, ImageAnalysisResult]:
        """Recognize foods in a photo and save them as a meal."""
        if not image_bytes:
            raise ValidationError("No image file provided", fields=["image"])
        owner = require_id(user_id, "userId", "User ID is required")
        resolved_type = _resolve_meal_type(meal_type)

        analysis = await self.vision_service.analyze(image_bytes)
        food_items = [
            FoodItem(
                id=food.id,
                name=food.name,
                quantity=food.estimated_quantity,
                unit=food.unit,
                nutrition=food.nutrition,
                category="detected",
            )
            for food in analysis.detected_foods
        ]
        meal = MealRecord(
            id=None,
            user_id=owner,
            meal_type=resolved_type,
            food_items=food_items,
            total_nutrition=aggregate_nutrition(food_items),
            image_url=None,
            notes=notes or None,
            timestamp=datetime.now(tz=UTC),
            confidence=analysis.confidence,
            analysis_method="image",
        )
        return self._save(meal), analysis

    def log_text(
        self,
        user_id: str | UUID | None,
        food_description: str | None,
        meal_type: str | None = None,
        notes: str | None = None,
    ) -> MealRecord:
        """Parse a free-text description and save it as a meal."""
        if not user_id or not food_description:
            raise ValidationError(
                "User ID and food description are required",
                fields=[
                    name
                    for name, value in (
                        ("userId", user_id),
                        ("foodDescription", food_description),
                    )
                    if not value
                ],
            )
        owner = require_id(user_id, "userId", "User ID is required")
        resolved_type = _resolve_meal_type(meal_type)

        food_items = parse_food_description(food_description)
        meal = MealRecord(
            id=None,
            user_id=owner,
            meal_type=resolved_type,
            food_items=food_items,
            total_nutrition=aggregate_nutrition(food_items),
            image_url=None,
            notes=notes or food_description,
            timestamp=datetime.now(tz=UTC),
            confidence=TEXT_ENTRY_CONFIDENCE,
            analysis_method="manual",
        )
        return self._save(meal)

    def get_meal(self, meal_id: UUID) -> MealRecord:
        meal = self.repository.get_meal(meal_id)
        if meal is None:
            raise NotFoundError("Meal not found")
        return meal

    def list_user_meals(self, user_id: UUID, limit: int = 50) -> list[MealRecord]:
        return self.repository.list_user_meals(user_id, limit)

    def list_meals_between(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> list[MealRecord]:
        return self.repository.list_meals_between(user_id, start, end)

    def update_meal(self, meal_id: UUID, updates: dict[str, object]) -> MealRecord:
        """Overwrite documented meal fields.

        Enumerated fields are checked; other values are stored as given.
        """
        reject_unknown_fields(updates, MEAL_UPDATE_FIELDS)
        if "mealType" in updates:
            require_choice(updates["mealType"], "mealType", MEAL_TYPES)
        if "analysisMethod" in updates:
            require_choice(
                updates["analysisMethod"], "analysisMethod", ANALYSIS_METHODS
            )
        self.get_meal(meal_id)
        self.repository.update_meal(meal_id, updates)
        return self.get_meal(meal_id)

    def delete_meal(self, meal_id: UUID) -> None:
        self.get_meal(meal_id)
        self.repository.delete_meal(meal_id)

    def _save(self, meal: MealRecord) -> MealRecord:
        meal_id = self.repository.create_meal(meal)
        _logger.info(
            "Saved meal %s for user %s (%s items, method=%s)",
            meal_id,
            meal.user_id,
            len(meal.food_items),
            meal.analysis_method,
        )
        return replace(meal, id=meal_id)


def _resolve_meal_type(meal_type: str | None) -> str:
    if not meal_type:
        return DEFAULT_MEAL_TYPE
    return require_choice(meal_type, "mealType", MEAL_TYPES)
