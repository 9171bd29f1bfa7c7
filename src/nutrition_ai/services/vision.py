"""Meal image recognition through a vision-capable LLM."""

import asyncio
import base64
import json
import logging
import re
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Protocol
from uuid import uuid4

from nutrition_ai.domain.nutrition import NUTRIENT_FIELDS, NutritionProfile
from nutrition_ai.domain.vision import (
    BoundingBox,
    DetectedFood,
    ImageAnalysisResult,
    LabelPayload,
    RawBox,
    RawFood,
    RawNutrition,
    RecognitionPayload,
)
from nutrition_ai.errors import UpstreamError
from nutrition_ai.services.foods import (
    DEFAULT_PROFILE,
    NUTRITION_TABLE,
    UNKNOWN_FOOD,
    is_food_related,
    resolve_food,
)
from nutrition_ai.services.nutrition import aggregate_nutrition, estimate_portion_size

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

_logger = logging.getLogger(__name__)

DEFAULT_CONFIDENCE = 0.8
DEFAULT_QUANTITY_G = 100.0

ANALYSIS_PROMPT = """You are a registered dietitian analysing a photo of a meal.

1. Identify every food and drink in the image, including sauces and oils.
2. Estimate the weight of each item in grams.
3. Give each item's nutrition per 100 g.
4. Give the total nutrition for the whole meal.

Reply with JSON only, in exactly this shape:
```json
{
  "detected_foods": [
    {
      "name": "food name",
      "estimated_weight": 0,
      "nutrition": {
        "calories": 0,
        "protein": 0,
        "carbohydrates": 0,
        "fat": 0,
        "fiber": 0,
        "sugar": 0,
        "sodium": 0,
        "cholesterol": 0
      },
      "confidence": 0.0,
      "category": "protein | carbs | vegetables | fruit | dairy | drink | other"
    }
  ],
  "total_nutrition": {
    "calories": 0,
    "protein": 0,
    "carbohydrates": 0,
    "fat": 0,
    "fiber": 0,
    "sugar": 0,
    "sodium": 0,
    "cholesterol": 0
  },
  "analysis_notes": "short dietitian advice",
  "overall_confidence": 0.0
}
```
Calories are kcal, sodium and cholesterol are mg, everything else is grams.
Lower the confidence when unsure."""

LABEL_PROMPT = """Annotate this photo. List short lowercase labels describing
what it shows and the distinct objects you can locate.

Reply with JSON only, in exactly this shape:
```json
{
  "labels": [{"description": "label", "score": 0.0}],
  "objects": [
    {
      "name": "object",
      "score": 0.0,
      "box": {"x": 0.0, "y": 0.0, "width": 0.0, "height": 0.0}
    }
  ]
}
```
Box coordinates are fractions of the image size."""

_FENCED_JSON = re.compile(r"```json\s*(\{.*?\})\s*```", re.DOTALL)
_ANY_OBJECT = re.compile(r"\{.*\}", re.DOTALL)


class VisionClient(Protocol):
    """Interface for LLM vision calls."""

    async def complete(
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        image_data_url: str,
        prompt: str,
    ) -> str:
        """Return the model's raw text reply for an image and prompt."""


@dataclass
class VisionService:
    """Service that prompts the vision model and normalizes its replies."""

    client: VisionClient
    model: str
    reasoning_effort: str | None = None
    store: bool = False
    retry_attempts: int = 0
    retry_delay_seconds: float = 0.3

    async def analyze(self, image_bytes: bytes) -> ImageAnalysisResult:
        """Recognize foods in an image.

        Runs the detailed analysis first and falls back to plain label
        detection when it finds no foods.
        """
        data_url = _to_data_url(image_bytes)
        raw = await self._request_json(data_url, ANALYSIS_PROMPT, action="analysis")
        result = normalize_analysis(
            RecognitionPayload.model_validate(raw), datetime.now(tz=UTC)
        )
        if result.detected_foods:
            return result

        _logger.info("Detailed analysis found no foods, trying label detection")
        raw = await self._request_json(data_url, LABEL_PROMPT, action="labels")
        return analysis_from_labels(
            LabelPayload.model_validate(raw), datetime.now(tz=UTC)
        )

    async def _request_json(
        self, data_url: str, prompt: str, *, action: str
    ) -> dict[str, object]:
        try:
            text = await self._call_with_retry(
                lambda: self.client.complete(
                    model=self.model,
                    reasoning_effort=self.reasoning_effort,
                    store=self.store,
                    image_data_url=data_url,
                    prompt=prompt,
                ),
                action=action,
            )
        except Exception as exc:
            _logger.exception("Vision %s request failed", action)
            raise UpstreamError("Failed to analyze meal") from exc
        try:
            return extract_json_object(text)
        except ValueError as exc:
            _logger.exception("Vision %s reply had no JSON object: %r", action, text)
            raise UpstreamError("Failed to analyze meal") from exc

    async def _call_with_retry(
        self, func: "Callable[[], Awaitable[str]]", *, action: str
    ) -> str:
        """Call an async function with a bounded retry."""
        attempt = 0
        while True:
            try:
                return await func()
            except Exception as exc:
                attempt += 1
                if attempt > self.retry_attempts:
                    raise
                _logger.warning(
                    "Vision %s failed (attempt %s/%s): %s",
                    action,
                    attempt,
                    self.retry_attempts + 1,
                    exc,
                )
                await asyncio.sleep(self.retry_delay_seconds)


def extract_json_object(text: str) -> dict[str, object]:
    """Pull one JSON object out of a reply that may wrap it in prose."""
    fenced = _FENCED_JSON.search(text)
    if fenced:
        candidate = fenced.group(1)
    elif text.strip().startswith("{"):
        candidate = text.strip()
    else:
        match = _ANY_OBJECT.search(text)
        if match is None:
            raise ValueError("No JSON object found in response")
        candidate = match.group(0)

    try:
        parsed = json.loads(candidate)
    except json.JSONDecodeError as exc:
        raise ValueError("Response JSON could not be parsed") from exc
    if not isinstance(parsed, dict):
        raise ValueError("Response JSON is not an object")
    return parsed


def normalize_analysis(
    payload: RecognitionPayload, analyzed_at: datetime
) -> ImageAnalysisResult:
    """Fill defaults so every food and total field is present."""
    foods = [_normalize_food(food) for food in payload.detected_foods or []]
    totals = _merge_totals(payload.total_nutrition, aggregate_nutrition(foods))
    confidence = payload.overall_confidence
    return ImageAnalysisResult(
        detected_foods=foods,
        total_nutrition=totals,
        confidence=(
            _clamp(confidence) if confidence is not None else DEFAULT_CONFIDENCE
        ),
        analysis_time=analyzed_at,
        analysis_notes=payload.analysis_notes,
    )


def analysis_from_labels(
    payload: LabelPayload, analyzed_at: datetime
) -> ImageAnalysisResult:
    """Resolve label/object annotations against the nutrition table."""
    foods: list[DetectedFood] = []
    for label in payload.labels or []:
        if not is_food_related((label.description or "").lower()):
            continue
        food = _resolved_detection(label.description, label.score, None)
        if food:
            foods.append(food)
    for obj in payload.objects or []:
        food = _resolved_detection(obj.name, obj.score, _to_box(obj.box))
        if food:
            foods.append(food)

    confidence = (
        sum(food.confidence for food in foods) / len(foods)
        if foods
        else DEFAULT_CONFIDENCE
    )
    return ImageAnalysisResult(
        detected_foods=foods,
        total_nutrition=aggregate_nutrition(foods),
        confidence=confidence,
        analysis_time=analyzed_at,
    )


def _normalize_food(food: RawFood) -> DetectedFood:
    reported = food.nutrition or RawNutrition()
    nutrition = NutritionProfile(
        **{
            name: _value_or(getattr(reported, name), getattr(DEFAULT_PROFILE, name))
            for name in NUTRIENT_FIELDS
        }
    )
    return DetectedFood(
        id=f"ai_{uuid4().hex}",
        name=food.name or "Unknown Food",
        confidence=(
            _clamp(food.confidence)
            if food.confidence is not None
            else DEFAULT_CONFIDENCE
        ),
        estimated_quantity=_value_or(food.estimated_weight, DEFAULT_QUANTITY_G),
        unit="g",
        nutrition=nutrition,
        category=food.category or "unknown",
    )


def _merge_totals(
    reported: RawNutrition | None, aggregated: NutritionProfile
) -> NutritionProfile:
    if reported is None:
        return aggregated
    return NutritionProfile(
        **{
            name: _value_or(getattr(reported, name), getattr(aggregated, name))
            for name in NUTRIENT_FIELDS
        }
    )


def _resolved_detection(
    label: str | None, score: float | None, box: BoundingBox | None
) -> DetectedFood | None:
    name = resolve_food((label or "").lower())
    if name == UNKNOWN_FOOD:
        return None
    return DetectedFood(
        id=f"vision_{uuid4().hex}",
        name=name,
        confidence=_clamp(score) if score is not None else 0.0,
        estimated_quantity=estimate_portion_size(box),
        unit="g",
        nutrition=NUTRITION_TABLE.get(name, DEFAULT_PROFILE),
        category="detected",
        bounding_box=box,
    )


def _to_box(raw: RawBox | None) -> BoundingBox | None:
    if raw is None:
        return None
    x = _value_or(raw.x, 0.0)
    y = _value_or(raw.y, 0.0)
    return BoundingBox(
        x=x,
        y=y,
        width=_value_or(raw.width, 1.0 - x),
        height=_value_or(raw.height, 1.0 - y),
    )


def _value_or(value: float | None, default: float) -> float:
    return default if value is None else value


def _clamp(value: float) -> float:
    return min(max(value, 0.0), 1.0)


def _to_data_url(image_bytes: bytes) -> str:
    """Convert bytes to a base64 data URL for image input."""
    mime_type = detect_mime_type(image_bytes)
    encoded = base64.b64encode(image_bytes).decode("utf-8")
    return f"data:{mime_type};base64,{encoded}"


def detect_mime_type(image_bytes: bytes) -> str:
    """Infer a basic image MIME type from file signatures."""
    if image_bytes.startswith(b"\xff\xd8\xff"):
        return "image/jpeg"
    if image_bytes.startswith(b"\x89PNG"):
        return "image/png"
    if image_bytes[:4] == b"RIFF" and image_bytes[8:12] == b"WEBP":
        return "image/webp"
    if image_bytes.startswith(b"GIF"):
        return "image/gif"
    return "image/jpeg"
