"""Family and team sharing service."""

import logging
from dataclasses import dataclass, replace
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID, uuid4

from nutrition_ai.domain.families import (
    FAMILY_ROLES,
    Family,
    FamilyMember,
    MealPlan,
    PlannedMeal,
    SharedGoal,
)
from nutrition_ai.errors import NotFoundError, ValidationError
from nutrition_ai.serialization import (
    food_item_from_document,
    list_value,
    parse_datetime,
    parse_uuid,
    to_float,
    to_optional_float,
)
from nutrition_ai.services.validation import require_fields, require_id

_logger = logging.getLogger(__name__)


class FamilyRepository(Protocol):
    """Persistence interface for family documents."""

    def create_family(self, family: Family) -> UUID:
        """Persist a family and return its generated id."""

    def get_family(self, family_id: UUID) -> Family | None:
        """Return a family by id."""

    def list_user_families(self, user_id: UUID) -> list[Family]:
        """Return the families a user administers or belongs to."""


@dataclass
class FamilyService:
    repository: FamilyRepository

    def create_family(self, payload: dict[str, object]) -> Family:
        """Create a family from a camelCase payload.

        ``members``, ``sharedGoals`` and ``mealPlans`` are optional lists;
        nested ids and timestamps are filled in when absent.
        """
        require_fields(payload, ("name", "adminUserId"))
        admin_id = require_id(
            payload["adminUserId"], "adminUserId", "adminUserId is required"
        )
        now = datetime.now(tz=UTC)
        family = Family(
            id=None,
            name=str(payload["name"]),
            admin_user_id=admin_id,
            members=members_from_documents(_list_field(payload, "members"), now),
            shared_goals=shared_goals_from_documents(
                _list_field(payload, "sharedGoals"), now
            ),
            meal_plans=meal_plans_from_documents(
                _list_field(payload, "mealPlans"), now
            ),
            created_at=now,
            updated_at=now,
        )
        family_id = self.repository.create_family(family)
        _logger.info(
            "Created family %s with %s members", family_id, len(family.member_ids)
        )
        return replace(family, id=family_id)

    def get_family(self, family_id: UUID) -> Family:
        family = self.repository.get_family(family_id)
        if family is None:
            raise NotFoundError("Family not found")
        return family

    def list_user_families(self, user_id: UUID) -> list[Family]:
        return self.repository.list_user_families(user_id)


def members_from_documents(
    documents: list[object], default_time: datetime
) -> list[FamilyMember]:
    members = []
    for document in documents:
        data = document if isinstance(document, dict) else {}
        user_id = parse_uuid(data.get("userId"))
        if user_id is None:
            raise ValidationError(
                "Each member needs a valid userId", fields=["members"]
            )
        role = data.get("role") or "member"
        if role not in FAMILY_ROLES:
            raise ValidationError(
                f"role must be one of: {', '.join(FAMILY_ROLES)}", fields=["members"]
            )
        members.append(
            FamilyMember(
                user_id=user_id,
                role=str(role),
                nickname=str(data.get("nickname") or ""),
                joined_at=parse_datetime(data.get("joinedAt")) or default_time,
            )
        )
    return members


def shared_goals_from_documents(
    documents: list[object], default_time: datetime
) -> list[SharedGoal]:
    goals = []
    for document in documents:
        data = document if isinstance(document, dict) else {}
        goals.append(
            SharedGoal(
                id=str(data.get("id") or uuid4()),
                title=str(data.get("title") or ""),
                description=str(data.get("description") or ""),
                target_date=parse_datetime(data.get("targetDate")),
                participants=[
                    str(user) for user in list_value(data.get("participants"))
                ],
                progress=to_float(data.get("progress")),
                created_at=parse_datetime(data.get("createdAt")) or default_time,
            )
        )
    return goals


def meal_plans_from_documents(
    documents: list[object], default_time: datetime
) -> list[MealPlan]:
    plans = []
    for document in documents:
        data = document if isinstance(document, dict) else {}
        plans.append(
            MealPlan(
                id=str(data.get("id") or uuid4()),
                name=str(data.get("name") or ""),
                description=str(data.get("description") or ""),
                duration=_whole_number(data.get("duration"), "duration"),
                meals=[_planned_meal(meal) for meal in list_value(data.get("meals"))],
                target_users=[
                    str(user) for user in list_value(data.get("targetUsers"))
                ],
                created_by=str(data.get("createdBy") or ""),
                created_at=parse_datetime(data.get("createdAt")) or default_time,
            )
        )
    return plans


def _planned_meal(document: object) -> PlannedMeal:
    data = document if isinstance(document, dict) else {}
    instructions = data.get("instructions")
    return PlannedMeal(
        day=_whole_number(data.get("day"), "day"),
        meal_type=str(data.get("mealType") or "meal"),
        food_items=[
            food_item_from_document(item) for item in list_value(data.get("foodItems"))
        ],
        instructions=str(instructions) if instructions else None,
    )


def _whole_number(value: object, name: str) -> int:
    """Return a meal-plan count; absent is zero, anything non-numeric is rejected."""
    if value is None:
        return 0
    number = to_optional_float(value)
    if number is None:
        raise ValidationError(
            f"Meal plan {name} must be a number", fields=["mealPlans"]
        )
    return int(number)


def _list_field(payload: dict[str, object], field: str) -> list[object]:
    value = payload.get(field)
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValidationError(f"{field} must be a list", fields=[field])
    return value
