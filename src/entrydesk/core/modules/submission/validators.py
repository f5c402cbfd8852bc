"""Parsing and normalization of raw submission values.

Every helper raises ValidationError with a message naming the field.
"""

import math
import re
from datetime import UTC, date, datetime
from enum import StrEnum

from entrydesk.errors import ValidationError

MOBILE_NO_RE = re.compile(r"^[0-9]{10}$")

type RawValue = str | int | float | None


def _clean(raw: RawValue) -> str:
    if raw is None:
        return ""
    return str(raw).strip()


def parse_text(field: str, raw: RawValue, *, required: bool = True, min_length: int = 1) -> str | None:
    value = _clean(raw)
    if not value:
        if required:
            raise ValidationError(f"Required field '{field}' has no value")
        return None
    if len(value) < min_length:
        raise ValidationError(f"Field '{field}' must be at least {min_length} characters")
    return value


def parse_int(
    field: str, raw: RawValue, *, min_value: int | None = None, max_value: int | None = None
) -> int:
    value = _clean(raw)
    if not value:
        raise ValidationError(f"Required field '{field}' has no value")
    try:
        int_value = int(value)
    except ValueError:
        # Accept "12.0" from numeric form inputs, reject "12.5"
        try:
            float_value = float(value)
        except ValueError as e:
            raise ValidationError(f"Invalid {field} format: {value}") from e
        if not float_value.is_integer():
            raise ValidationError(f"Invalid {field} format: {value}")
        int_value = int(float_value)
    _check_range(field, int_value, min_value, max_value)
    return int_value


def parse_float(
    field: str,
    raw: RawValue,
    *,
    required: bool = True,
    min_value: float | None = None,
    max_value: float | None = None,
) -> float | None:
    value = _clean(raw)
    if not value:
        if required:
            raise ValidationError(f"Required field '{field}' has no value")
        return None
    try:
        float_value = float(value)
    except ValueError as e:
        raise ValidationError(f"Invalid {field} format: {value}") from e
    if not math.isfinite(float_value):
        raise ValidationError(f"Invalid {field} format: {value}")
    _check_range(field, float_value, min_value, max_value)
    return float_value


def parse_date(field: str, raw: RawValue) -> datetime:
    """Parse YYYY-MM-DD (or an ISO datetime) into midnight UTC."""
    value = _clean(raw)
    if not value:
        raise ValidationError(f"Required field '{field}' has no value")
    try:
        parsed = date.fromisoformat(value[:10])
    except ValueError as e:
        raise ValidationError(f"Invalid date format for '{field}': {value}") from e
    if parsed > datetime.now(UTC).date():
        raise ValidationError(f"Field '{field}' cannot be in the future")
    return datetime(parsed.year, parsed.month, parsed.day, tzinfo=UTC)


def parse_choice[E: StrEnum](field: str, raw: RawValue, choices: type[E]) -> E:
    """Match a value against enum values case-insensitively."""
    value = _clean(raw)
    for choice in choices:
        if choice.value.lower() == value.lower():
            return choice
    allowed = ", ".join(choice.value for choice in choices)
    raise ValidationError(f"Invalid {field}: '{value}'. Allowed values: {allowed}")


def parse_mobile_no(field: str, raw: RawValue) -> str:
    value = _clean(raw)
    if not MOBILE_NO_RE.fullmatch(value):
        raise ValidationError("Please provide a valid 10-digit mobile number")
    return value


def _check_range(field: str, value: float, min_value: float | None, max_value: float | None) -> None:
    if min_value is not None and value < min_value:
        raise ValidationError(f"Value for field '{field}' is below minimum: {value} < {min_value}")
    if max_value is not None and value > max_value:
        raise ValidationError(f"Value for field '{field}' is above maximum: {value} > {max_value}")


def parse_name(field: str, raw: RawValue) -> str:
    """Participant names are stored upper-case with inner whitespace collapsed."""
    value = _clean(raw)
    if len(value) < 2:
        raise ValidationError(f"Field '{field}' must be at least 2 characters")
    return " ".join(value.split()).upper()
