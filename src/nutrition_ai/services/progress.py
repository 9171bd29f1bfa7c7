"""Body progress tracking service."""

from dataclasses import dataclass, replace
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID

from nutrition_ai.domain.progress import MEASUREMENT_FIELDS, ProgressRecord
from nutrition_ai.errors import ValidationError
from nutrition_ai.serialization import parse_datetime
from nutrition_ai.services.validation import number_field


class ProgressRepository(Protocol):
    """Persistence interface for progress records."""

    def create_progress(self, record: ProgressRecord) -> UUID:
        """Persist a record and return its generated id."""

    def list_progress(self, user_id: UUID) -> list[ProgressRecord]:
        """Return a user's records, newest date first."""


@dataclass
class ProgressService:
    repository: ProgressRepository

    def record_progress(
        self, user_id: UUID, payload: dict[str, object]
    ) -> ProgressRecord:
        """Store a measurement entry dated now unless a date is given."""
        recorded_on = datetime.now(tz=UTC)
        if payload.get("date"):
            parsed = parse_datetime(payload["date"])
            if parsed is None:
                raise ValidationError("date must be an ISO date", fields=["date"])
            recorded_on = parsed
        notes = payload.get("notes")
        record = ProgressRecord(
            id=None,
            user_id=user_id,
            date=recorded_on,
            weight=number_field(payload, "weight"),
            body_fat_percentage=number_field(payload, "bodyFatPercentage"),
            muscle_mass=number_field(payload, "muscleMass"),
            measurements=_measurements(payload.get("measurements")),
            notes=str(notes) if notes else None,
        )
        record_id = self.repository.create_progress(record)
        return replace(record, id=record_id)

    def list_progress(self, user_id: UUID) -> list[ProgressRecord]:
        return self.repository.list_progress(user_id)


def _measurements(value: object) -> dict[str, float] | None:
    if value is None:
        return None
    if not isinstance(value, dict):
        raise ValidationError("measurements must be an object", fields=["measurements"])
    result: dict[str, float] = {}
    for name in MEASUREMENT_FIELDS:
        number = number_field(value, name)
        if number is not None:
            result[name] = number
    return result
