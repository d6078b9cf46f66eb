from __future__ import annotations

import re
from datetime import date, datetime, timezone

from ..core.exceptions import ValidationError

_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    if not isinstance(value, str) or not _ISO_DATE.match(value):
        raise ValidationError("Invalid date format. Use YYYY-MM-DD")
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError as exc:
        raise ValidationError(f"Invalid date: {value}") from exc


def parse_record_time(value) -> datetime:
    """Accept a datetime or an ISO-8601 string, return a naive local datetime."""
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, str) and value.strip():
        raw = value.strip()
        if raw.endswith("Z"):
            raw = raw[:-1] + "+00:00"
        try:
            dt = datetime.fromisoformat(raw)
        except ValueError as exc:
            raise ValidationError(f"Invalid recordTime: {value!r}") from exc
    else:
        raise ValidationError("recordTime is required")

    if dt.tzinfo is not None:
        dt = dt.astimezone().replace(tzinfo=None)
    return dt


def now_local() -> datetime:
    """Current local time; device clocks are local, so shift math uses it too."""
    return datetime.now()


def utc_timestamp() -> str:
    """ISO-8601 UTC timestamp with a trailing Z, used in every response."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
