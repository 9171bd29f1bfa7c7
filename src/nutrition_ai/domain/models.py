"""Domain models for user profiles."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from nutrition_ai.domain.goals import NutritionGoal
from nutrition_ai.domain.meals import MealRecord

GENDERS = ("male", "female", "other")
ACTIVITY_LEVELS = ("sedentary", "light", "moderate", "active", "very_active")

REQUIRED_PROFILE_FIELDS = (
    "name",
    "age",
    "gender",
    "height",
    "weight",
    "activityLevel",
)
USER_UPDATE_FIELDS = (
    "name",
    "email",
    "age",
    "gender",
    "height",
    "weight",
    "activityLevel",
    "dietaryRestrictions",
    "allergies",
)


@dataclass(frozen=True)
class UserProfile:
    """Represents a user stored in the database.

    Height is in centimetres and weight in kilograms.
    """

    id: UUID | None
    name: str
    email: str | None
    age: int
    gender: str
    height: float
    weight: float
    activity_level: str
    dietary_restrictions: list[str]
    allergies: list[str]
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class UserOverview:
    """Profile plus the last week of activity."""

    profile: UserProfile
    recent_meals: list[MealRecord]
    active_goal: NutritionGoal | None
    total_meals: int
    average_daily_calories: int
