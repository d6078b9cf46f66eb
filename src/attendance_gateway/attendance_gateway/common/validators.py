from __future__ import annotations

from urllib.parse import urlparse

from ..core.exceptions import ValidationError


def require_non_empty(value, field_name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_hour(value, field_name: str) -> int:
    try:
        hour = int(value)
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"{field_name} must be an integer hour") from exc
    if hour < 0 or hour > 24:
        raise ValidationError(f"{field_name} must be between 0 and 24")
    return hour


def is_valid_http_url(value) -> bool:
    if not isinstance(value, str) or not value.strip():
        return False
    parsed = urlparse(value.strip())
    return parsed.scheme in {"http", "https"} and bool(parsed.hostname)
