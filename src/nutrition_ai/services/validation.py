"""Request payload checks shared by the record services."""

from collections.abc import Iterable, Mapping
from uuid import UUID

from nutrition_ai.errors import ValidationError
from nutrition_ai.serialization import parse_uuid, to_optional_float


def require_fields(payload: Mapping[str, object], required: Iterable[str]) -> None:
    """Raise when any required field is absent or falsy, naming them in order."""
    missing = [name for name in required if not payload.get(name)]
    if missing:
        raise ValidationError(
            f"Missing required fields: {', '.join(missing)}", fields=missing
        )


def reject_unknown_fields(
    updates: Mapping[str, object], allowed: Iterable[str]
) -> None:
    """Restrict a partial update to the documented fields of a record."""
    allowed_set = set(allowed)
    unknown = [name for name in updates if name not in allowed_set]
    if unknown:
        raise ValidationError(
            f"Unsupported update fields: {', '.join(unknown)}", fields=unknown
        )


def require_id(value: object, field: str, message: str) -> UUID:
    """Return the UUID for a required identifier field."""
    if not value:
        raise ValidationError(message, fields=[field])
    parsed = parse_uuid(value)
    if parsed is None:
        raise ValidationError(f"Invalid {field}", fields=[field])
    return parsed


def require_choice(value: object, field: str, choices: Iterable[str]) -> str:
    options = tuple(choices)
    if value not in options:
        raise ValidationError(
            f"{field} must be one of: {', '.join(options)}", fields=[field]
        )
    return str(value)


def number_field(payload: Mapping[str, object], field: str) -> float | None:
    """Return a numeric field, None when absent, raising when not numeric."""
    value = payload.get(field)
    if value is None:
        return None
    number = to_optional_float(value)
    if number is None:
        raise ValidationError(f"{field} must be a number", fields=[field])
    return number
