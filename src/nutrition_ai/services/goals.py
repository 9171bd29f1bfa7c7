"""Nutrition goal service."""

from dataclasses import dataclass, replace
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID

from nutrition_ai.domain.goals import (
    GOAL_TYPES,
    GOAL_UPDATE_FIELDS,
    REQUIRED_GOAL_FIELDS,
    NutritionGoal,
)
from nutrition_ai.errors import NotFoundError, ValidationError
from nutrition_ai.serialization import parse_datetime
from nutrition_ai.services.validation import (
    number_field,
    reject_unknown_fields,
    require_choice,
    require_fields,
)


class GoalRepository(Protocol):
    """Persistence interface for nutrition goals."""

    def create_goal(self, goal: NutritionGoal) -> UUID:
        """Persist a goal and return its generated id."""

    def get_goal(self, goal_id: UUID) -> NutritionGoal | None:
        """Return a goal by id."""

    def list_goals(self, user_id: UUID) -> list[NutritionGoal]:
        """Return a user's goals, newest first."""

    def get_active_goal(self, user_id: UUID) -> NutritionGoal | None:
        """Return the newest active goal for a user, if any."""

    def update_goal(
        self, goal_id: UUID, updates: dict[str, object], updated_at: datetime
    ) -> None:
        """Overwrite the given camelCase fields and the update timestamp."""


@dataclass
class GoalService:
    """Service for creating and tracking nutrition goals.

    Nothing here enforces a single active goal per user: creating an active
    goal leaves earlier active goals untouched, and get_active_goal returns
    the newest one.
    """

    repository: GoalRepository

    def create_goal(self, user_id: UUID, payload: dict[str, object]) -> NutritionGoal:
        require_fields(payload, REQUIRED_GOAL_FIELDS)
        goal_type = require_choice(payload["type"], "type", GOAL_TYPES)
        target_date = None
        if payload.get("targetDate"):
            target_date = parse_datetime(payload["targetDate"])
            if target_date is None:
                raise ValidationError(
                    "targetDate must be an ISO date", fields=["targetDate"]
                )
        now = datetime.now(tz=UTC)
        goal = NutritionGoal(
            id=None,
            user_id=user_id,
            type=goal_type,
            target_weight=number_field(payload, "targetWeight"),
            target_date=target_date,
            daily_calorie_target=number_field(payload, "dailyCalorieTarget") or 0.0,
            protein_target=number_field(payload, "proteinTarget") or 0.0,
            carb_target=number_field(payload, "carbTarget") or 0.0,
            fat_target=number_field(payload, "fatTarget") or 0.0,
            is_active=bool(payload.get("isActive", True)),
            created_at=now,
            updated_at=now,
        )
        goal_id = self.repository.create_goal(goal)
        return replace(goal, id=goal_id)

    def list_goals(self, user_id: UUID) -> list[NutritionGoal]:
        return self.repository.list_goals(user_id)

    def get_active_goal(self, user_id: UUID) -> NutritionGoal | None:
        """Return the active goal, or None when the user has none."""
        return self.repository.get_active_goal(user_id)

    def update_goal(self, goal_id: UUID, updates: dict[str, object]) -> NutritionGoal:
        reject_unknown_fields(updates, GOAL_UPDATE_FIELDS)
        if self.repository.get_goal(goal_id) is None:
            raise NotFoundError("Goal not found")
        self.repository.update_goal(goal_id, updates, datetime.now(tz=UTC))
        goal = self.repository.get_goal(goal_id)
        if goal is None:
            raise NotFoundError("Goal not found")
        return goal
