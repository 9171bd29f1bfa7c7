"""Supabase repository for nutrition goals."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from nutrition_ai.domain.goals import NutritionGoal
from nutrition_ai.errors import UpstreamError
from nutrition_ai.serialization import (
    parse_datetime,
    to_float,
    to_optional_float,
    to_row_updates,
)
from nutrition_ai.services.goals import GoalRepository

_GOAL_COLUMNS = (
    "id, user_id, type, target_weight, target_date, daily_calorie_target, "
    "protein_target, carb_target, fat_target, is_active, created_at, updated_at"
)


@dataclass
class SupabaseGoalRepository(GoalRepository):
    """Supabase implementation for goals."""

    client: Client

    def create_goal(self, goal: NutritionGoal) -> UUID:
        response = (
            self.client.table("goals")
            .insert(
                {
                    "user_id": str(goal.user_id),
                    "type": goal.type,
                    "target_weight": goal.target_weight,
                    "target_date": (
                        goal.target_date.isoformat() if goal.target_date else None
                    ),
                    "daily_calorie_target": goal.daily_calorie_target,
                    "protein_target": goal.protein_target,
                    "carb_target": goal.carb_target,
                    "fat_target": goal.fat_target,
                    "is_active": goal.is_active,
                    "created_at": goal.created_at.isoformat(),
                    "updated_at": goal.updated_at.isoformat(),
                }
            )
            .execute()
        )
        if not response.data:
            raise UpstreamError("Failed to create goal")
        return UUID(response.data[0]["id"])

    def get_goal(self, goal_id: UUID) -> NutritionGoal | None:
        response = (
            self.client.table("goals")
            .select(_GOAL_COLUMNS)
            .eq("id", str(goal_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_goal(response.data[0])

    def list_goals(self, user_id: UUID) -> list[NutritionGoal]:
        response = (
            self.client.table("goals")
            .select(_GOAL_COLUMNS)
            .eq("user_id", str(user_id))
            .order("created_at", desc=True)
            .execute()
        )
        return [_parse_goal(row) for row in response.data or []]

    def get_active_goal(self, user_id: UUID) -> NutritionGoal | None:
        """Return the newest active goal."""
        response = (
            self.client.table("goals")
            .select(_GOAL_COLUMNS)
            .eq("user_id", str(user_id))
            .eq("is_active", True)
            .order("created_at", desc=True)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_goal(response.data[0])

    def update_goal(
        self, goal_id: UUID, updates: dict[str, object], updated_at: datetime
    ) -> None:
        row = to_row_updates(updates)
        row["updated_at"] = updated_at.isoformat()
        self.client.table("goals").update(row).eq("id", str(goal_id)).execute()


def _parse_goal(row: dict[str, object]) -> NutritionGoal:
    created_at = parse_datetime(row.get("created_at")) or datetime.min
    return NutritionGoal(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        type=str(row.get("type") or ""),
        target_weight=to_optional_float(row.get("target_weight")),
        target_date=parse_datetime(row.get("target_date")),
        daily_calorie_target=to_float(row.get("daily_calorie_target")),
        protein_target=to_float(row.get("protein_target")),
        carb_target=to_float(row.get("carb_target")),
        fat_target=to_float(row.get("fat_target")),
        is_active=bool(row.get("is_active")),
        created_at=created_at,
        updated_at=parse_datetime(row.get("updated_at")) or created_at,
    )
