"""Supabase repository for meal records."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from nutrition_ai.domain.meals import MealRecord
from nutrition_ai.errors import UpstreamError
from nutrition_ai.serialization import (
    food_item_from_document,
    list_value,
    nutrition_from_document,
    parse_datetime,
    to_document,
    to_float,
    to_row_updates,
)
from nutrition_ai.services.meals import MealRepository

_MEAL_COLUMNS = (
    "id, user_id, meal_type, food_items, total_nutrition, image_url, notes, "
    "timestamp, confidence, analysis_method"
)


@dataclass
class SupabaseMealRepository(MealRepository):
    """Supabase implementation for meals.

    Food items and totals are stored as camelCase jsonb documents.
    """

    client: Client

    def create_meal(self, meal: MealRecord) -> UUID:
        response = (
            self.client.table("meals")
            .insert(
                {
                    "user_id": str(meal.user_id),
                    "meal_type": meal.meal_type,
                    "food_items": to_document(meal.food_items),
                    "total_nutrition": to_document(meal.total_nutrition),
                    "image_url": meal.image_url,
                    "notes": meal.notes,
                    "timestamp": meal.timestamp.isoformat(),
                    "confidence": meal.confidence,
                    "analysis_method": meal.analysis_method,
                }
            )
            .execute()
        )
        if not response.data:
            raise UpstreamError("Failed to save meal")
        return UUID(response.data[0]["id"])

    def get_meal(self, meal_id: UUID) -> MealRecord | None:
        response = (
            self.client.table("meals")
            .select(_MEAL_COLUMNS)
            .eq("id", str(meal_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_meal(response.data[0])

    def list_user_meals(self, user_id: UUID, limit: int) -> list[MealRecord]:
        """Return the newest meals for a user."""
        response = (
            self.client.table("meals")
            .select(_MEAL_COLUMNS)
            .eq("user_id", str(user_id))
            .order("timestamp", desc=True)
            .limit(limit)
            .execute()
        )
        return [_parse_meal(row) for row in response.data or []]

    def list_meals_between(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> list[MealRecord]:
        response = (
            self.client.table("meals")
            .select(_MEAL_COLUMNS)
            .eq("user_id", str(user_id))
            .gte("timestamp", start.isoformat())
            .lte("timestamp", end.isoformat())
            .order("timestamp", desc=True)
            .execute()
        )
        return [_parse_meal(row) for row in response.data or []]

    def update_meal(self, meal_id: UUID, updates: dict[str, object]) -> None:
        self.client.table("meals").update(to_row_updates(updates)).eq(
            "id", str(meal_id)
        ).execute()

    def delete_meal(self, meal_id: UUID) -> None:
        self.client.table("meals").delete().eq("id", str(meal_id)).execute()


def _parse_meal(row: dict[str, object]) -> MealRecord:
    return MealRecord(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        meal_type=str(row.get("meal_type") or "meal"),
        food_items=[
            food_item_from_document(item) for item in list_value(row.get("food_items"))
        ],
        total_nutrition=nutrition_from_document(row.get("total_nutrition")),
        image_url=row.get("image_url"),
        notes=row.get("notes"),
        timestamp=parse_datetime(row.get("timestamp")) or datetime.min,
        confidence=to_float(row.get("confidence")),
        analysis_method=str(row.get("analysis_method") or "manual"),
    )
