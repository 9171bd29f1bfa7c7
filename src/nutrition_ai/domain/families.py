"""Domain models for family and team sharing."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from nutrition_ai.domain.nutrition import FoodItem

FAMILY_ROLES = ("admin", "member")


@dataclass(frozen=True)
class FamilyMember:
    user_id: UUID
    role: str
    nickname: str
    joined_at: datetime


@dataclass(frozen=True)
class SharedGoal:
    id: str
    title: str
    description: str
    target_date: datetime | None
    participants: list[str]
    progress: float
    created_at: datetime


@dataclass(frozen=True)
class PlannedMeal:
    day: int
    meal_type: str
    food_items: list[FoodItem]
    instructions: str | None = None


@dataclass(frozen=True)
class MealPlan:
    id: str
    name: str
    description: str
    duration: int
    meals: list[PlannedMeal]
    target_users: list[str]
    created_by: str
    created_at: datetime


@dataclass(frozen=True)
class Family:
    """A group of users sharing goals and meal plans."""

    id: UUID | None
    name: str
    admin_user_id: UUID
    members: list[FamilyMember]
    shared_goals: list[SharedGoal]
    meal_plans: list[MealPlan]
    created_at: datetime
    updated_at: datetime

    @property
    def member_ids(self) -> list[str]:
        """Return the ids of every member, admin included."""
        ids = [str(member.user_id) for member in self.members]
        if str(self.admin_user_id) not in ids:
            ids.insert(0, str(self.admin_user_id))
        return ids
