"""Supabase-backed user repository."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from nutrition_ai.domain.models import UserProfile
from nutrition_ai.errors import UpstreamError
from nutrition_ai.serialization import (
    list_value,
    parse_datetime,
    to_float,
    to_row_updates,
)
from nutrition_ai.services.users import UserRepository

_USER_COLUMNS = (
    "id, name, email, age, gender, height, weight, activity_level, "
    "dietary_restrictions, allergies, created_at, updated_at"
)


@dataclass
class SupabaseUserRepository(UserRepository):
    """Supabase implementation for user profiles."""

    client: Client

    def create_user(self, profile: UserProfile) -> UUID:
        response = (
            self.client.table("users")
            .insert(
                {
                    "name": profile.name,
                    "email": profile.email,
                    "age": profile.age,
                    "gender": profile.gender,
                    "height": profile.height,
                    "weight": profile.weight,
                    "activity_level": profile.activity_level,
                    "dietary_restrictions": profile.dietary_restrictions,
                    "allergies": profile.allergies,
                    "created_at": profile.created_at.isoformat(),
                    "updated_at": profile.updated_at.isoformat(),
                }
            )
            .execute()
        )
        if not response.data:
            raise UpstreamError("Failed to create user")
        return UUID(response.data[0]["id"])

    def get_user(self, user_id: UUID) -> UserProfile | None:
        """Return the profile for a user id, if present."""
        response = (
            self.client.table("users")
            .select(_USER_COLUMNS)
            .eq("id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        row = response.data[0]
        created_at = parse_datetime(row.get("created_at")) or datetime.min
        return UserProfile(
            id=UUID(str(row["id"])),
            name=str(row.get("name") or ""),
            email=row.get("email"),
            age=int(to_float(row.get("age"))),
            gender=str(row.get("gender") or ""),
            height=to_float(row.get("height")),
            weight=to_float(row.get("weight")),
            activity_level=str(row.get("activity_level") or ""),
            dietary_restrictions=[
                str(entry) for entry in list_value(row.get("dietary_restrictions"))
            ],
            allergies=[str(entry) for entry in list_value(row.get("allergies"))],
            created_at=created_at,
            updated_at=parse_datetime(row.get("updated_at")) or created_at,
        )

    def update_user(
        self, user_id: UUID, updates: dict[str, object], updated_at: datetime
    ) -> None:
        row = to_row_updates(updates)
        row["updated_at"] = updated_at.isoformat()
        self.client.table("users").update(row).eq("id", str(user_id)).execute()
