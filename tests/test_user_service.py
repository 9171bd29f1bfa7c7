"""Tests for user service."""

from datetime import UTC, datetime, timedelta
from uuid import uuid4

import pytest

from nutrition_ai.errors import NotFoundError, ValidationError

PROFILE = {
    "name": "Ada",
    "email": "ada@example.com",
    "age": 34,
    "gender": "female",
    "height": 168,
    "weight": 62.5,
    "activityLevel": "moderate",
    "dietaryRestrictions": ["vegetarian"],
}


def test_create_user_assigns_id_and_defaults(user_service, user_repository) -> None:
    profile = user_service.create_user(dict(PROFILE))

    assert profile.id in user_repository.users
    assert profile.age == 34
    assert profile.weight == 62.5
    assert profile.activity_level == "moderate"
    assert profile.dietary_restrictions == ["vegetarian"]
    assert profile.allergies == []
    assert profile.created_at == profile.updated_at


def test_create_user_reports_missing_fields_in_order(user_service) -> None:
    payload = {
        key: value for key, value in PROFILE.items() if key not in {"age", "name"}
    }

    with pytest.raises(ValidationError) as exc_info:
        user_service.create_user(payload)

    assert exc_info.value.fields == ["name", "age"]
    assert exc_info.value.message == "Missing required fields: name, age"


def test_create_user_rejects_non_numeric_weight(user_service) -> None:
    with pytest.raises(ValidationError) as exc_info:
        user_service.create_user({**PROFILE, "weight": "heavy"})

    assert exc_info.value.fields == ["weight"]


def test_update_user_refreshes_timestamp(user_service) -> None:
    profile = user_service.create_user(dict(PROFILE))

    updated = user_service.update_user(
        profile.id, {"weight": 61, "allergies": ["nuts"]}
    )

    assert updated.weight == 61
    assert updated.allergies == ["nuts"]
    assert updated.name == "Ada"
    assert updated.updated_at >= profile.updated_at


def test_update_user_rejects_unknown_fields(user_service) -> None:
    profile = user_service.create_user(dict(PROFILE))

    with pytest.raises(ValidationError) as exc_info:
        user_service.update_user(profile.id, {"createdAt": "2020-01-01"})

    assert exc_info.value.fields == ["createdAt"]


def test_missing_user_is_not_found(user_service) -> None:
    with pytest.raises(NotFoundError):
        user_service.get_user(uuid4())
    with pytest.raises(NotFoundError):
        user_service.update_user(uuid4(), {"weight": 60})
    with pytest.raises(NotFoundError):
        user_service.get_overview(uuid4())


def test_overview_covers_last_week(
    user_service, meal_service, meal_repository, goal_service
) -> None:
    profile = user_service.create_user(dict(PROFILE))
    user_id = profile.id
    meal_service.log_text(str(user_id), "apple")
    meal_service.log_text(str(user_id), "rice")
    old = meal_service.log_text(str(user_id), "salmon")
    meal_repository.update_meal(
        old.id, {"timestamp": datetime.now(tz=UTC) - timedelta(days=10)}
    )
    goal = goal_service.create_goal(
        user_id,
        {
            "type": "maintenance",
            "dailyCalorieTarget": 2000,
            "proteinTarget": 100,
            "carbTarget": 250,
            "fatTarget": 70,
        },
    )

    overview = user_service.get_overview(user_id)

    assert overview.profile == profile
    assert overview.total_meals == 2
    assert old.id not in [meal.id for meal in overview.recent_meals]
    assert overview.average_daily_calories == 182
    assert overview.active_goal == goal


def test_overview_without_activity(user_service) -> None:
    profile = user_service.create_user(dict(PROFILE))

    overview = user_service.get_overview(profile.id)

    assert overview.recent_meals == []
    assert overview.total_meals == 0
    assert overview.average_daily_calories == 0
    assert overview.active_goal is None


def test_profile_enumerations_are_enforced(user_service) -> None:
    with pytest.raises(ValidationError) as exc_info:
        user_service.create_user({**PROFILE, "gender": "robot"})
    assert exc_info.value.fields == ["gender"]

    with pytest.raises(ValidationError) as exc_info:
        user_service.create_user({**PROFILE, "activityLevel": "extreme"})
    assert exc_info.value.fields == ["activityLevel"]

    profile = user_service.create_user(dict(PROFILE))
    with pytest.raises(ValidationError) as exc_info:
        user_service.update_user(profile.id, {"activityLevel": "couch"})
    assert exc_info.value.fields == ["activityLevel"]

    updated = user_service.update_user(profile.id, {"activityLevel": "very_active"})
    assert updated.activity_level == "very_active"


def test_create_user_rejects_non_finite_numbers(user_service) -> None:
    with pytest.raises(ValidationError) as exc_info:
        user_service.create_user({**PROFILE, "age": "inf"})

    assert exc_info.value.fields == ["age"]
