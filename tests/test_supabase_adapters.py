"""Tests for Supabase adapter implementations."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import uuid4

import pytest

from nutrition_ai.adapters.supabase_family_repository import SupabaseFamilyRepository
from nutrition_ai.adapters.supabase_goal_repository import SupabaseGoalRepository
from nutrition_ai.adapters.supabase_meal_repository import SupabaseMealRepository
from nutrition_ai.adapters.supabase_progress_repository import (
    SupabaseProgressRepository,
)
from nutrition_ai.adapters.supabase_user_repository import SupabaseUserRepository
from nutrition_ai.domain.families import Family, FamilyMember
from nutrition_ai.domain.meals import MealRecord
from nutrition_ai.domain.models import UserProfile
from nutrition_ai.domain.progress import ProgressRecord
from nutrition_ai.errors import UpstreamError
from nutrition_ai.services.nutrition import aggregate_nutrition
from nutrition_ai.services.text_parser import parse_food_description


@dataclass
class FakeResponse:
    data: list[dict[str, object]] | None


@dataclass
class FakeTable:
    name: str
    response_queue: dict[str, list[list[dict[str, object]]]] = field(
        default_factory=lambda: {"select": [], "insert": [], "update": [], "delete": []}
    )
    last_payload: object | None = None
    last_filters: list[tuple[str, str, object]] = field(default_factory=list)
    last_order: tuple[str, bool] | None = None

    def queue(self, action: str, data: list[dict[str, object]]) -> None:
        self.response_queue[action].append(data)

    def select(self, *_args) -> "FakeTable":
        self._action = "select"
        return self

    def insert(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "insert"
        self.last_payload = payload
        return self

    def update(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "update"
        self.last_payload = payload
        return self

    def delete(self) -> "FakeTable":
        self._action = "delete"
        return self

    def eq(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append(("eq", column, value))
        return self

    def gte(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append(("gte", column, value))
        return self

    def lte(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append(("lte", column, value))
        return self

    def contains(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append(("contains", column, value))
        return self

    def limit(self, _count: int) -> "FakeTable":
        return self

    def order(self, column: str, desc: bool = False) -> "FakeTable":
        self.last_order = (column, desc)
        return self

    def execute(self) -> FakeResponse:
        action = getattr(self, "_action", "select")
        queue = self.response_queue.get(action, [])
        data = queue.pop(0) if queue else []
        return FakeResponse(data=data)


@dataclass
class FakeSupabaseClient:
    tables: dict[str, FakeTable] = field(default_factory=dict)

    def table(self, name: str) -> FakeTable:
        if name not in self.tables:
            self.tables[name] = FakeTable(name=name)
        return self.tables[name]


def _stored_row(table: FakeTable, row_id: str) -> dict[str, object]:
    assert isinstance(table.last_payload, dict)
    return {"id": row_id, **table.last_payload}


def test_supabase_meal_repository_roundtrip() -> None:
    client = FakeSupabaseClient()
    meals_table = client.table("meals")
    meal_id = str(uuid4())
    items = parse_food_description("rice and chicken")
    meal = MealRecord(
        id=None,
        user_id=uuid4(),
        meal_type="dinner",
        food_items=items,
        total_nutrition=aggregate_nutrition(items),
        image_url=None,
        notes="rice and chicken",
        timestamp=datetime(2024, 5, 1, 18, 30, tzinfo=UTC),
        confidence=0.7,
        analysis_method="manual",
    )
    meals_table.queue("insert", [{"id": meal_id}])

    repository = SupabaseMealRepository(client)
    created_id = repository.create_meal(meal)
    meals_table.queue("select", [_stored_row(meals_table, meal_id)])
    fetched = repository.get_meal(created_id)

    assert str(created_id) == meal_id
    assert fetched is not None
    assert fetched.food_items == meal.food_items
    assert fetched.total_nutrition == meal.total_nutrition
    assert fetched.timestamp == meal.timestamp
    assert fetched.user_id == meal.user_id


def test_supabase_meal_repository_insert_failure() -> None:
    client = FakeSupabaseClient()
    meal = MealRecord(
        id=None,
        user_id=uuid4(),
        meal_type="meal",
        food_items=[],
        total_nutrition=aggregate_nutrition([]),
        image_url=None,
        notes=None,
        timestamp=datetime.now(tz=UTC),
        confidence=0.8,
        analysis_method="image",
    )

    with pytest.raises(UpstreamError):
        SupabaseMealRepository(client).create_meal(meal)


def test_supabase_meal_repository_range_and_update() -> None:
    client = FakeSupabaseClient()
    meals_table = client.table("meals")
    repository = SupabaseMealRepository(client)
    user_id = uuid4()
    start = datetime(2024, 5, 1, tzinfo=UTC)
    end = datetime(2024, 5, 8, tzinfo=UTC)

    assert repository.list_meals_between(user_id, start, end) == []
    assert ("gte", "timestamp", start.isoformat()) in meals_table.last_filters
    assert ("lte", "timestamp", end.isoformat()) in meals_table.last_filters
    assert meals_table.last_order == ("timestamp", True)

    repository.update_meal(uuid4(), {"mealType": "lunch", "notes": "late"})
    assert meals_table.last_payload == {"meal_type": "lunch", "notes": "late"}


def test_supabase_user_repository_roundtrip() -> None:
    client = FakeSupabaseClient()
    users_table = client.table("users")
    user_id = str(uuid4())
    now = datetime.now(tz=UTC)
    profile = UserProfile(
        id=None,
        name="Alex",
        email=None,
        age=34,
        gender="other",
        height=172.0,
        weight=68.5,
        activity_level="moderate",
        dietary_restrictions=["vegetarian"],
        allergies=[],
        created_at=now,
        updated_at=now,
    )
    users_table.queue("insert", [{"id": user_id}])

    repository = SupabaseUserRepository(client)
    created_id = repository.create_user(profile)
    users_table.queue("select", [_stored_row(users_table, user_id)])
    fetched = repository.get_user(created_id)

    assert fetched is not None
    assert fetched.activity_level == "moderate"
    assert fetched.dietary_restrictions == ["vegetarian"]
    assert fetched.created_at == now

    repository.update_user(created_id, {"activityLevel": "active"}, now)
    assert users_table.last_payload == {
        "activity_level": "active",
        "updated_at": now.isoformat(),
    }


def test_supabase_goal_repository_active_goal_empty() -> None:
    client = FakeSupabaseClient()
    goals_table = client.table("goals")
    user_id = uuid4()

    assert SupabaseGoalRepository(client).get_active_goal(user_id) is None
    assert ("eq", "is_active", True) in goals_table.last_filters
    assert goals_table.last_order == ("created_at", True)


def test_supabase_goal_repository_parses_row() -> None:
    client = FakeSupabaseClient()
    goal_id = str(uuid4())
    user_id = str(uuid4())
    client.table("goals").queue(
        "select",
        [
            {
                "id": goal_id,
                "user_id": user_id,
                "type": "maintenance",
                "target_weight": None,
                "target_date": None,
                "daily_calorie_target": 2200,
                "protein_target": 120,
                "carb_target": 250,
                "fat_target": 70,
                "is_active": True,
                "created_at": "2024-05-01T10:00:00+00:00",
                "updated_at": "2024-05-02T10:00:00+00:00",
            }
        ],
    )

    goal = SupabaseGoalRepository(client).get_active_goal(uuid4())

    assert goal is not None
    assert str(goal.id) == goal_id
    assert goal.daily_calorie_target == 2200.0
    assert goal.target_weight is None
    assert goal.updated_at.day == 2


def test_supabase_progress_repository_roundtrip() -> None:
    client = FakeSupabaseClient()
    table = client.table("progress")
    record_id = str(uuid4())
    record = ProgressRecord(
        id=None,
        user_id=uuid4(),
        date=datetime(2024, 4, 1, tzinfo=UTC),
        weight=71.0,
        body_fat_percentage=None,
        muscle_mass=None,
        measurements={"waist": 82.0},
        notes=None,
    )
    table.queue("insert", [{"id": record_id}])

    repository = SupabaseProgressRepository(client)
    repository.create_progress(record)
    table.queue("select", [_stored_row(table, record_id)])
    records = repository.list_progress(record.user_id)

    assert records[0].date == record.date
    assert records[0].measurements == {"waist": 82.0}
    assert table.last_order == ("date", True)


def test_supabase_family_repository_membership_query() -> None:
    client = FakeSupabaseClient()
    table = client.table("families")
    family_id = str(uuid4())
    admin_id = uuid4()
    member_id = uuid4()
    now = datetime.now(tz=UTC)
    family = Family(
        id=None,
        name="Household",
        admin_user_id=admin_id,
        members=[
            FamilyMember(user_id=member_id, role="member", nickname="", joined_at=now)
        ],
        shared_goals=[],
        meal_plans=[],
        created_at=now,
        updated_at=now,
    )
    table.queue("insert", [{"id": family_id}])

    repository = SupabaseFamilyRepository(client)
    repository.create_family(family)
    assert table.last_payload["member_ids"] == [str(admin_id), str(member_id)]

    table.queue("select", [_stored_row(table, family_id)])
    families = repository.list_user_families(member_id)

    assert ("contains", "member_ids", [str(member_id)]) in table.last_filters
    assert families[0].members == family.members
    assert families[0].admin_user_id == admin_id


def test_supabase_readers_ignore_malformed_list_columns() -> None:
    client = FakeSupabaseClient()
    now = datetime.now(tz=UTC).isoformat()
    meal_id = str(uuid4())
    user_id = str(uuid4())
    client.table("meals").queue(
        "select",
        [
            {
                "id": meal_id,
                "user_id": user_id,
                "meal_type": "lunch",
                "food_items": 5,
                "total_nutrition": "oops",
                "timestamp": now,
                "confidence": "nan",
                "analysis_method": "manual",
            }
        ],
    )
    client.table("users").queue(
        "select",
        [
            {
                "id": user_id,
                "name": "Alex",
                "age": "inf",
                "dietary_restrictions": "vegan",
                "allergies": {"nuts": True},
                "created_at": now,
            }
        ],
    )

    meal = SupabaseMealRepository(client).get_meal(uuid4())
    user = SupabaseUserRepository(client).get_user(uuid4())

    assert meal is not None
    assert meal.food_items == []
    assert meal.total_nutrition.calories == 0.0
    assert meal.confidence == 0.0
    assert user is not None
    assert user.age == 0
    assert user.dietary_restrictions == []
    assert user.allergies == []
