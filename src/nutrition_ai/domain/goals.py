"""Domain models for nutrition goals."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

GOAL_TYPES = (
    "weight_loss",
    "weight_gain",
    "maintenance",
    "muscle_gain",
    "health_improvement",
)
REQUIRED_GOAL_FIELDS = (
    "type",
    "dailyCalorieTarget",
    "proteinTarget",
    "carbTarget",
    "fatTarget",
)
GOAL_UPDATE_FIELDS = (
    "type",
    "targetWeight",
    "targetDate",
    "dailyCalorieTarget",
    "proteinTarget",
    "carbTarget",
    "fatTarget",
    "isActive",
)


@dataclass(frozen=True)
class NutritionGoal:
    """A user's nutrition goal with daily targets."""

    id: UUID | None
    user_id: UUID
    type: str
    target_weight: float | None
    target_date: datetime | None
    daily_calorie_target: float
    protein_target: float
    carb_target: float
    fat_target: float
    is_active: bool
    created_at: datetime
    updated_at: datetime
