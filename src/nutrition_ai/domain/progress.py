"""Domain models for body progress tracking."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

MEASUREMENT_FIELDS = ("waist", "chest", "arms", "thighs")


@dataclass(frozen=True)
class ProgressRecord:
    """A dated body measurement entry."""

    id: UUID | None
    user_id: UUID
    date: datetime
    weight: float | None
    body_fat_percentage: float | None
    muscle_mass: float | None
    measurements: dict[str, float] | None
    notes: str | None
