"""Supabase repository for progress records."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from nutrition_ai.domain.progress import ProgressRecord
from nutrition_ai.errors import UpstreamError
from nutrition_ai.serialization import parse_datetime, to_optional_float
from nutrition_ai.services.progress import ProgressRepository


@dataclass
class SupabaseProgressRepository(ProgressRepository):
    client: Client

    def create_progress(self, record: ProgressRecord) -> UUID:
        response = (
            self.client.table("progress")
            .insert(
                {
                    "user_id": str(record.user_id),
                    "date": record.date.isoformat(),
                    "weight": record.weight,
                    "body_fat_percentage": record.body_fat_percentage,
                    "muscle_mass": record.muscle_mass,
                    "measurements": record.measurements,
                    "notes": record.notes,
                }
            )
            .execute()
        )
        if not response.data:
            raise UpstreamError("Failed to record progress")
        return UUID(response.data[0]["id"])

    def list_progress(self, user_id: UUID) -> list[ProgressRecord]:
        """Return progress rows for a user, newest date first."""
        response = (
            self.client.table("progress")
            .select(
                "id, user_id, date, weight, body_fat_percentage, muscle_mass, "
                "measurements, notes"
            )
            .eq("user_id", str(user_id))
            .order("date", desc=True)
            .execute()
        )
        return [_parse_progress(row) for row in response.data or []]


def _parse_progress(row: dict[str, object]) -> ProgressRecord:
    measurements = row.get("measurements")
    return ProgressRecord(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        date=parse_datetime(row.get("date")) or datetime.min,
        weight=to_optional_float(row.get("weight")),
        body_fat_percentage=to_optional_float(row.get("body_fat_percentage")),
        muscle_mass=to_optional_float(row.get("muscle_mass")),
        measurements=dict(measurements) if isinstance(measurements, dict) else None,
        notes=row.get("notes"),
    )
