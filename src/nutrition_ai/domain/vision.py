"""Models for recognition-service payloads and normalized results."""

import math
from dataclasses import dataclass
from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, BeforeValidator, ConfigDict, field_validator

from nutrition_ai.domain.nutrition import NutritionProfile


def _loose_float(value: object) -> float | None:
    """Coerce finite numbers and numeric strings; anything else counts as missing."""
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip().rstrip("gG").strip()
    elif not isinstance(value, int | float):
        return None
    try:
        number = float(value)
    except (OverflowError, ValueError):
        return None
    return number if math.isfinite(number) else None


def _loose_str(value: object) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


LooseFloat = Annotated[float | None, BeforeValidator(_loose_float)]
LooseStr = Annotated[str | None, BeforeValidator(_loose_str)]


class _LoosePayload(BaseModel):
    model_config = ConfigDict(extra="ignore")


def _objects_only(value: object) -> list[dict[str, object]] | None:
    if not isinstance(value, list):
        return None
    return [entry for entry in value if isinstance(entry, dict)]


def _object_or_none(value: object) -> dict[str, object] | None:
    return value if isinstance(value, dict) else None


class RawNutrition(_LoosePayload):
    """Nutrient values as reported by the model, any of them absent."""

    calories: LooseFloat = None
    protein: LooseFloat = None
    carbohydrates: LooseFloat = None
    fat: LooseFloat = None
    fiber: LooseFloat = None
    sugar: LooseFloat = None
    sodium: LooseFloat = None
    cholesterol: LooseFloat = None


class RawFood(_LoosePayload):
    """One food from a detailed analysis reply."""

    name: LooseStr = None
    estimated_weight: LooseFloat = None
    nutrition: RawNutrition | None = None
    confidence: LooseFloat = None
    category: LooseStr = None

    _nutrition_object = field_validator("nutrition", mode="before")(_object_or_none)


class RecognitionPayload(_LoosePayload):
    """Detailed analysis reply: foods with per-100 g nutrition and totals."""

    detected_foods: list[RawFood] | None = None
    total_nutrition: RawNutrition | None = None
    analysis_notes: LooseStr = None
    overall_confidence: LooseFloat = None

    _foods_list = field_validator("detected_foods", mode="before")(_objects_only)
    _totals_object = field_validator("total_nutrition", mode="before")(
        _object_or_none
    )


class RawLabel(_LoosePayload):
    description: LooseStr = None
    score: LooseFloat = None


class RawBox(_LoosePayload):
    x: LooseFloat = None
    y: LooseFloat = None
    width: LooseFloat = None
    height: LooseFloat = None


class RawObject(_LoosePayload):
    name: LooseStr = None
    score: LooseFloat = None
    box: RawBox | None = None

    _box_object = field_validator("box", mode="before")(_object_or_none)


class LabelPayload(_LoosePayload):
    """Label/object annotation reply with confidence scores."""

    labels: list[RawLabel] | None = None
    objects: list[RawObject] | None = None

    _labels_list = field_validator("labels", mode="before")(_objects_only)
    _objects_list = field_validator("objects", mode="before")(_objects_only)


@dataclass(frozen=True)
class BoundingBox:
    """Normalized (0-1) box around a detected object."""

    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True)
class DetectedFood:
    """A recognized food with every field filled in."""

    id: str
    name: str
    confidence: float
    estimated_quantity: float
    unit: str
    nutrition: NutritionProfile
    category: str
    bounding_box: BoundingBox | None = None

    @property
    def quantity(self) -> float:
        return self.estimated_quantity


@dataclass(frozen=True)
class ImageAnalysisResult:
    """Normalized outcome of one image analysis."""

    detected_foods: list[DetectedFood]
    total_nutrition: NutritionProfile
    confidence: float
    analysis_time: datetime
    analysis_notes: str | None = None
