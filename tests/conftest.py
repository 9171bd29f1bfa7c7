"""Shared test fixtures."""

import json
from dataclasses import dataclass, field, replace
from datetime import datetime
from uuid import UUID, uuid4

import pytest

from nutrition_ai.config import Settings
from nutrition_ai.containers import AppContainer
from nutrition_ai.domain.families import Family
from nutrition_ai.domain.goals import NutritionGoal
from nutrition_ai.domain.meals import MealRecord
from nutrition_ai.domain.models import UserProfile
from nutrition_ai.domain.progress import ProgressRecord
from nutrition_ai.serialization import to_snake
from nutrition_ai.services.auth import AuthService
from nutrition_ai.services.families import FamilyRepository, FamilyService
from nutrition_ai.services.goals import GoalRepository, GoalService
from nutrition_ai.services.meals import MealRepository, MealService
from nutrition_ai.services.progress import ProgressRepository, ProgressService
from nutrition_ai.services.users import UserRepository, UserService
from nutrition_ai.services.vision import VisionClient, VisionService

RICH_REPLY = """Here is the analysis:
```json
{
  "detected_foods": [
    {
      "name": "Grilled chicken",
      "estimated_weight": 150,
      "nutrition": {
        "calories": 165,
        "protein": 31,
        "carbohydrates": 0,
        "fat": 3.6,
        "fiber": 0,
        "sugar": 0,
        "sodium": 74,
        "cholesterol": 85
      },
      "confidence": 0.9,
      "category": "protein"
    }
  ],
  "total_nutrition": {
    "calories": 247.5,
    "protein": 46.5,
    "carbohydrates": 0,
    "fat": 5.4,
    "fiber": 0,
    "sugar": 0,
    "sodium": 111,
    "cholesterol": 127.5
  },
  "analysis_notes": "Lean protein.",
  "overall_confidence": 0.85
}
```"""

EMPTY_RICH_REPLY = json.dumps({"detected_foods": [], "overall_confidence": 0.2})


def _apply_updates(record, updates: dict[str, object]):  # type: ignore[no-untyped-def]
    return replace(record, **{to_snake(name): value for name, value in updates.items()})


@dataclass
class FakeVisionClient(VisionClient):
    """Fake vision client replaying scripted text replies."""

    replies: list[str] = field(default_factory=lambda: [RICH_REPLY])
    prompts: list[str] = field(default_factory=list)
    image_urls: list[str] = field(default_factory=list)
    error: Exception | None = None

    async def complete(
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        image_data_url: str,
        prompt: str,
    ) -> str:
        self.prompts.append(prompt)
        self.image_urls.append(image_data_url)
        if self.error is not None:
            raise self.error
        if len(self.replies) > 1:
            return self.replies.pop(0)
        return self.replies[0]


@dataclass
class InMemoryMealRepository(MealRepository):
    """In-memory meal repository for tests."""

    meals: dict[UUID, MealRecord] = field(default_factory=dict)

    def create_meal(self, meal: MealRecord) -> UUID:
        meal_id = uuid4()
        self.meals[meal_id] = replace(meal, id=meal_id)
        return meal_id

    def get_meal(self, meal_id: UUID) -> MealRecord | None:
        return self.meals.get(meal_id)

    def list_user_meals(self, user_id: UUID, limit: int) -> list[MealRecord]:
        meals = [meal for meal in self.meals.values() if meal.user_id == user_id]
        return sorted(meals, key=lambda meal: meal.timestamp, reverse=True)[:limit]

    def list_meals_between(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> list[MealRecord]:
        return [
            meal
            for meal in self.list_user_meals(user_id, len(self.meals))
            if start <= meal.timestamp <= end
        ]

    def update_meal(self, meal_id: UUID, updates: dict[str, object]) -> None:
        self.meals[meal_id] = _apply_updates(self.meals[meal_id], updates)

    def delete_meal(self, meal_id: UUID) -> None:
        self.meals.pop(meal_id, None)


@dataclass
class InMemoryUserRepository(UserRepository):
    """In-memory user repository for tests."""

    users: dict[UUID, UserProfile] = field(default_factory=dict)

    def create_user(self, profile: UserProfile) -> UUID:
        user_id = uuid4()
        self.users[user_id] = replace(profile, id=user_id)
        return user_id

    def get_user(self, user_id: UUID) -> UserProfile | None:
        return self.users.get(user_id)

    def update_user(
        self, user_id: UUID, updates: dict[str, object], updated_at: datetime
    ) -> None:
        updated = _apply_updates(self.users[user_id], updates)
        self.users[user_id] = replace(updated, updated_at=updated_at)


@dataclass
class InMemoryGoalRepository(GoalRepository):
    """In-memory goal repository for tests."""

    goals: dict[UUID, NutritionGoal] = field(default_factory=dict)

    def create_goal(self, goal: NutritionGoal) -> UUID:
        goal_id = uuid4()
        self.goals[goal_id] = replace(goal, id=goal_id)
        return goal_id

    def get_goal(self, goal_id: UUID) -> NutritionGoal | None:
        return self.goals.get(goal_id)

    def list_goals(self, user_id: UUID) -> list[NutritionGoal]:
        # Insertion order stands in for creation time.
        goals = [goal for goal in self.goals.values() if goal.user_id == user_id]
        return list(reversed(goals))

    def get_active_goal(self, user_id: UUID) -> NutritionGoal | None:
        for goal in self.list_goals(user_id):
            if goal.is_active:
                return goal
        return None

    def update_goal(
        self, goal_id: UUID, updates: dict[str, object], updated_at: datetime
    ) -> None:
        updated = _apply_updates(self.goals[goal_id], updates)
        self.goals[goal_id] = replace(updated, updated_at=updated_at)


@dataclass
class InMemoryProgressRepository(ProgressRepository):
    """In-memory progress repository for tests."""

    records: dict[UUID, ProgressRecord] = field(default_factory=dict)

    def create_progress(self, record: ProgressRecord) -> UUID:
        record_id = uuid4()
        self.records[record_id] = replace(record, id=record_id)
        return record_id

    def list_progress(self, user_id: UUID) -> list[ProgressRecord]:
        records = [
            record for record in self.records.values() if record.user_id == user_id
        ]
        return sorted(records, key=lambda record: record.date, reverse=True)


@dataclass
class InMemoryFamilyRepository(FamilyRepository):
    """In-memory family repository for tests."""

    families: dict[UUID, Family] = field(default_factory=dict)

    def create_family(self, family: Family) -> UUID:
        family_id = uuid4()
        self.families[family_id] = replace(family, id=family_id)
        return family_id

    def get_family(self, family_id: UUID) -> Family | None:
        return self.families.get(family_id)

    def list_user_families(self, user_id: UUID) -> list[Family]:
        return [
            family
            for family in self.families.values()
            if str(user_id) in family.member_ids
        ]


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key=(
            "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9."
            "eyJyb2xlIjoic2VydmljZV9yb2xlIn0.c2lnbmF0dXJl"
        ),
        openai_api_key="openai-key",
        auth_password="open-sesame",
    )


@pytest.fixture
def vision_client() -> FakeVisionClient:
    return FakeVisionClient()


@pytest.fixture
def meal_repository() -> InMemoryMealRepository:
    return InMemoryMealRepository()


@pytest.fixture
def goal_repository() -> InMemoryGoalRepository:
    return InMemoryGoalRepository()


@pytest.fixture
def user_repository() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def vision_service(
    settings: Settings, vision_client: FakeVisionClient
) -> VisionService:
    return VisionService(
        client=vision_client,
        model=settings.openai_model,
        reasoning_effort=settings.openai_reasoning_effort,
        store=settings.openai_store,
        retry_delay_seconds=0.0,
    )


@pytest.fixture
def meal_service(
    vision_service: VisionService, meal_repository: InMemoryMealRepository
) -> MealService:
    return MealService(vision_service=vision_service, repository=meal_repository)


@pytest.fixture
def user_service(
    user_repository: InMemoryUserRepository,
    meal_repository: InMemoryMealRepository,
    goal_repository: InMemoryGoalRepository,
) -> UserService:
    return UserService(
        repository=user_repository,
        meal_repository=meal_repository,
        goal_repository=goal_repository,
    )


@pytest.fixture
def goal_service(goal_repository: InMemoryGoalRepository) -> GoalService:
    return GoalService(goal_repository)


@pytest.fixture
def container(
    settings: Settings,
    vision_service: VisionService,
    meal_service: MealService,
    user_service: UserService,
    goal_service: GoalService,
) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        auth_service=AuthService(settings.auth_password),
        vision_service=vision_service,
        meal_service=meal_service,
        user_service=user_service,
        goal_service=goal_service,
        progress_service=ProgressService(InMemoryProgressRepository()),
        family_service=FamilyService(InMemoryFamilyRepository()),
        close_resources=close_resources,
    )
