"""Supabase repository for families."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from nutrition_ai.domain.families import Family
from nutrition_ai.errors import UpstreamError
from nutrition_ai.serialization import list_value, parse_datetime, to_document
from nutrition_ai.services.families import (
    FamilyRepository,
    meal_plans_from_documents,
    members_from_documents,
    shared_goals_from_documents,
)

_FAMILY_COLUMNS = (
    "id, name, admin_user_id, members, shared_goals, meal_plans, created_at, "
    "updated_at"
)


@dataclass
class SupabaseFamilyRepository(FamilyRepository):
    """Supabase implementation for families.

    Nested members, goals and plans live in jsonb columns; ``member_ids``
    mirrors the member list so membership can be queried with ``contains``.
    """

    client: Client

    def create_family(self, family: Family) -> UUID:
        response = (
            self.client.table("families")
            .insert(
                {
                    "name": family.name,
                    "admin_user_id": str(family.admin_user_id),
                    "member_ids": family.member_ids,
                    "members": to_document(family.members),
                    "shared_goals": to_document(family.shared_goals),
                    "meal_plans": to_document(family.meal_plans),
                    "created_at": family.created_at.isoformat(),
                    "updated_at": family.updated_at.isoformat(),
                }
            )
            .execute()
        )
        if not response.data:
            raise UpstreamError("Failed to create family")
        return UUID(response.data[0]["id"])

    def get_family(self, family_id: UUID) -> Family | None:
        response = (
            self.client.table("families")
            .select(_FAMILY_COLUMNS)
            .eq("id", str(family_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_family(response.data[0])

    def list_user_families(self, user_id: UUID) -> list[Family]:
        response = (
            self.client.table("families")
            .select(_FAMILY_COLUMNS)
            .contains("member_ids", [str(user_id)])
            .order("created_at", desc=True)
            .execute()
        )
        return [_parse_family(row) for row in response.data or []]


def _parse_family(row: dict[str, object]) -> Family:
    created_at = parse_datetime(row.get("created_at")) or datetime.min
    return Family(
        id=UUID(str(row["id"])),
        name=str(row.get("name") or ""),
        admin_user_id=UUID(str(row["admin_user_id"])),
        members=members_from_documents(list_value(row.get("members")), created_at),
        shared_goals=shared_goals_from_documents(
            list_value(row.get("shared_goals")), created_at
        ),
        meal_plans=meal_plans_from_documents(
            list_value(row.get("meal_plans")), created_at
        ),
        created_at=created_at,
        updated_at=parse_datetime(row.get("updated_at")) or created_at,
    )
