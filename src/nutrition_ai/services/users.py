"""User profile business logic."""

from dataclasses import dataclass, replace
from datetime import UTC, datetime, timedelta
from typing import Protocol
from uuid import UUID

from nutrition_ai.domain.models import (
    ACTIVITY_LEVELS,
    GENDERS,
    REQUIRED_PROFILE_FIELDS,
    USER_UPDATE_FIELDS,
    UserOverview,
    UserProfile,
)
from nutrition_ai.errors import NotFoundError
from nutrition_ai.services.goals import GoalRepository
from nutrition_ai.services.meals import MealRepository
from nutrition_ai.services.nutrition import average_daily_calories
from nutrition_ai.services.validation import (
    number_field,
    reject_unknown_fields,
    require_choice,
    require_fields,
)

RECENT_DAYS = 7


class UserRepository(Protocol):
    """Persistence interface for user profiles."""

    def create_user(self, profile: UserProfile) -> UUID:
        """Persist a profile and return its generated id."""

    def get_user(self, user_id: UUID) -> UserProfile | None:
        """Return the profile for an id, if present."""

    def update_user(
        self, user_id: UUID, updates: dict[str, object], updated_at: datetime
    ) -> None:
        """Overwrite the given camelCase fields and the update timestamp."""


@dataclass
class UserService:
    """Application service for user profiles."""

    repository: UserRepository
    meal_repository: MealRepository
    goal_repository: GoalRepository

    def create_user(self, payload: dict[str, object]) -> UserProfile:
        """Validate a profile payload and create the user."""
        require_fields(payload, REQUIRED_PROFILE_FIELDS)
        now = datetime.now(tz=UTC)
        profile = UserProfile(
            id=None,
            name=str(payload["name"]),
            email=str(payload["email"]) if payload.get("email") else None,
            age=int(number_field(payload, "age") or 0),
            gender=require_choice(payload["gender"], "gender", GENDERS),
            height=number_field(payload, "height") or 0.0,
            weight=number_field(payload, "weight") or 0.0,
            activity_level=require_choice(
                payload["activityLevel"], "activityLevel", ACTIVITY_LEVELS
            ),
            dietary_restrictions=_string_list(payload.get("dietaryRestrictions")),
            allergies=_string_list(payload.get("allergies")),
            created_at=now,
            updated_at=now,
        )
        user_id = self.repository.create_user(profile)
        return replace(profile, id=user_id)

    def get_user(self, user_id: UUID) -> UserProfile:
        profile = self.repository.get_user(user_id)
        if profile is None:
            raise NotFoundError("User not found")
        return profile

    def update_user(self, user_id: UUID, updates: dict[str, object]) -> UserProfile:
        """Overwrite documented profile fields and refresh updatedAt."""
        reject_unknown_fields(updates, USER_UPDATE_FIELDS)
        _check_choices(updates)
        self.get_user(user_id)
        self.repository.update_user(user_id, updates, datetime.now(tz=UTC))
        return self.get_user(user_id)

    def get_overview(self, user_id: UUID) -> UserOverview:
        """Return the profile with the last week of meals and the active goal."""
        profile = self.get_user(user_id)
        now = datetime.now(tz=UTC)
        recent_meals = self.meal_repository.list_meals_between(
            user_id, now - timedelta(days=RECENT_DAYS), now
        )
        return UserOverview(
            profile=profile,
            recent_meals=recent_meals,
            active_goal=self.goal_repository.get_active_goal(user_id),
            total_meals=len(recent_meals),
            average_daily_calories=average_daily_calories(recent_meals),
        )


def _check_choices(payload: dict[str, object]) -> None:
    if "gender" in payload:
        require_choice(payload["gender"], "gender", GENDERS)
    if "activityLevel" in payload:
        require_choice(payload["activityLevel"], "activityLevel", ACTIVITY_LEVELS)


def _string_list(value: object) -> list[str]:
    if isinstance(value, list):
        return [str(entry) for entry in value]
    return []
