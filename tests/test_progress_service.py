"""Tests for progress service."""

from uuid import uuid4

import pytest

from nutrition_ai.errors import ValidationError
from nutrition_ai.services.progress import ProgressService
from tests.conftest import InMemoryProgressRepository


def test_record_progress_keeps_known_measurements() -> None:
    service = ProgressService(InMemoryProgressRepository())
    user_id = uuid4()

    record = service.record_progress(
        user_id,
        {
            "weight": 71.2,
            "bodyFatPercentage": "18.5",
            "measurements": {"waist": 82, "neck": 38},
            "notes": "Morning weigh-in",
        },
    )

    assert record.id is not None
    assert record.weight == 71.2
    assert record.body_fat_percentage == 18.5
    assert record.measurements == {"waist": 82.0}
    assert record.muscle_mass is None


def test_list_progress_newest_first() -> None:
    service = ProgressService(InMemoryProgressRepository())
    user_id = uuid4()
    service.record_progress(user_id, {"weight": 72, "date": "2024-03-01"})
    service.record_progress(user_id, {"weight": 71, "date": "2024-04-01"})

    records = service.list_progress(user_id)

    assert [record.weight for record in records] == [71, 72]


def test_record_progress_rejects_bad_date() -> None:
    service = ProgressService(InMemoryProgressRepository())

    with pytest.raises(ValidationError) as exc_info:
        service.record_progress(uuid4(), {"date": "yesterday"})

    assert exc_info.value.fields == ["date"]
