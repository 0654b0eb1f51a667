from __future__ import annotations

from typing import Any

from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def require_positive_int(value: Any, field_name: str) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be an integer") from None
    if number <= 0:
        raise ValidationError(f"{field_name} must be positive")
    return number


def require_month_year(month: Any, year: Any) -> tuple[int, int]:
    m = require_positive_int(month, "month")
    y = require_positive_int(year, "year")
    if m > 12:
        raise ValidationError("month must be between 1 and 12")
    if y < 1900 or y > 9999:
        raise ValidationError("year is out of range")
    return m, y
