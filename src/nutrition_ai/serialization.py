"""Conversion between domain dataclasses and camelCase JSON documents."""

import math
import re
from dataclasses import fields, is_dataclass
from datetime import date, datetime
from uuid import UUID

from nutrition_ai.domain.nutrition import (
    MICRONUTRIENT_FIELDS,
    NUTRIENT_FIELDS,
    FoodItem,
    NutritionProfile,
)

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def to_camel(name: str) -> str:
    """Convert a snake_case name to camelCase."""
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


def to_snake(name: str) -> str:
    """Convert a camelCase name to snake_case."""
    return _CAMEL_BOUNDARY.sub("_", name).lower()


def to_document(value: object) -> object:
    """Return a JSON-ready structure with camelCase keys for dataclasses."""
    if is_dataclass(value) and not isinstance(value, type):
        return {
            to_camel(field.name): to_document(getattr(value, field.name))
            for field in fields(value)
        }
    if isinstance(value, dict):
        return {str(key): to_document(item) for key, item in value.items()}
    if isinstance(value, list | tuple):
        return [to_document(item) for item in value]
    if isinstance(value, datetime | date):
        return value.isoformat()
    if isinstance(value, UUID):
        return str(value)
    return value


def to_optional_float(value: object) -> float | None:
    """Return a finite float, or None for anything else."""
    if isinstance(value, bool):
        return None
    if not isinstance(value, int | float | str):
        return None
    try:
        number = float(value)
    except (OverflowError, ValueError):
        return None
    return number if math.isfinite(number) else None


def to_float(value: object, default: float = 0.0) -> float:
    result = to_optional_float(value)
    return default if result is None else result


def list_value(value: object) -> list[object]:
    """Return a stored list field, treating any other value as empty."""
    return list(value) if isinstance(value, list) else []


def parse_datetime(value: object) -> datetime | None:
    """Parse stored ISO timestamps back into datetimes."""
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if isinstance(value, str) and value:
        try:
            return datetime.fromisoformat(value)
        except ValueError:
            return None
    return None


def parse_uuid(value: object) -> UUID | None:
    if isinstance(value, UUID):
        return value
    if isinstance(value, str) and value:
        try:
            return UUID(value)
        except ValueError:
            return None
    return None


def nutrition_from_document(document: object) -> NutritionProfile:
    """Build a profile from a camelCase document; absent fields become zero."""
    data = document if isinstance(document, dict) else {}
    required = {name: to_float(data.get(name)) for name in NUTRIENT_FIELDS}
    optional = {
        name: to_optional_float(data.get(to_camel(name)))
        for name in MICRONUTRIENT_FIELDS
    }
    return NutritionProfile(**required, **optional)


def food_item_from_document(document: object) -> FoodItem:
    data = document if isinstance(document, dict) else {}
    brand = data.get("brand")
    return FoodItem(
        id=str(data.get("id") or ""),
        name=str(data.get("name") or ""),
        quantity=to_float(data.get("quantity")),
        unit=str(data.get("unit") or "g"),
        nutrition=nutrition_from_document(data.get("nutrition")),
        category=str(data.get("category") or ""),
        brand=str(brand) if brand else None,
    )


def to_row_updates(updates: dict[str, object]) -> dict[str, object]:
    """Rename camelCase update keys to column names, serializing values."""
    return {to_snake(name): to_document(value) for name, value in updates.items()}
