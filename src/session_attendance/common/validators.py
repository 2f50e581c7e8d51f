from __future__ import annotations

import math
from typing import Any

from ..core.constants import COORDINATE_DECIMALS
from ..core.exceptions import ValidationError


def require_non_empty(value: Any, field_name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_min_length(value: Any, field_name: str, min_len: int) -> str:
    if not isinstance(value, str) or len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters")
    return value


def require_email(value: Any) -> str:
    email = require_non_empty(value, "Email").lower()
    local, sep, domain = email.partition("@")
    if not sep or not local or "." not in domain:
        raise ValidationError("Email is not valid")
    return email


def optional_str(value: Any) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError("Expected a string value")
    return value.strip() or None


def _require_number(value: Any, field_name: str) -> float:
    # bool is an int subclass; a JSON true/false is never a coordinate.
    if isinstance(value, bool) or value is None:
        raise ValidationError(f"{field_name} must be a number")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a number")
    if math.isnan(number):
        raise ValidationError(f"{field_name} must be a number")
    return number


def require_latitude(value: Any) -> float:
    lat = _require_number(value, "Latitude")
    if not -90.0 <= lat <= 90.0:
        raise ValidationError("Latitude must be between -90 and 90")
    return round(lat, COORDINATE_DECIMALS)


def require_longitude(value: Any) -> float:
    lon = _require_number(value, "Longitude")
    if not -180.0 <= lon <= 180.0:
        raise ValidationError("Longitude must be between -180 and 180")
    return round(lon, COORDINATE_DECIMALS)
