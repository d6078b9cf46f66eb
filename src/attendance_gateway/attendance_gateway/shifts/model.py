from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Mapping, Optional

from ..common.validators import require_hour
from ..core.exceptions import ValidationError

DEFAULT_SHIFT_DESCRIPTION = "Overnight shift (6 PM - 2 AM) with buffer zones"

# env suffix / payload key -> field
_HOUR_FIELDS = (
    ("SHIFT_START_HOUR", "startHour", "start_hour"),
    ("SHIFT_END_HOUR", "endHour", "end_hour"),
    ("CHECKIN_BUFFER_START", "checkInBufferStart", "check_in_buffer_start"),
    ("CHECKIN_BUFFER_END", "checkInBufferEnd", "check_in_buffer_end"),
    ("CHECKOUT_BUFFER_START", "checkOutBufferStart", "check_out_buffer_start"),
    ("CHECKOUT_BUFFER_END", "checkOutBufferEnd", "check_out_buffer_end"),
)


@dataclass(frozen=True)
class ShiftConfig:
    """Domain entity: a device's shift window and the buffer zones around it.

    Check-ins are accepted on the shift date inside
    ``[check_in_buffer_start, check_in_buffer_end)``; check-outs on the day
    after inside ``[check_out_buffer_start, check_out_buffer_end)``.
    """

    start_hour: int = 18
    end_hour: int = 2
    check_in_buffer_start: int = 12
    check_in_buffer_end: int = 24
    check_out_buffer_start: int = 0
    check_out_buffer_end: int = 12
    description: str = DEFAULT_SHIFT_DESCRIPTION
    timezone: str = "local"

    def __post_init__(self):
        for _, key, attr in _HOUR_FIELDS:
            require_hour(getattr(self, attr), key)
        if self.check_in_buffer_start >= self.check_in_buffer_end:
            raise ValidationError("checkInBufferStart must be before checkInBufferEnd")
        if self.check_out_buffer_start >= self.check_out_buffer_end:
            raise ValidationError("checkOutBufferStart must be before checkOutBufferEnd")

    @classmethod
    def from_env(cls, prefix: str, environ: Mapping[str, str]) -> "ShiftConfig":
        key = prefix.upper()
        values: dict = {}
        for suffix, _, attr in _HOUR_FIELDS:
            raw = environ.get(f"{key}_{suffix}")
            if raw:
                values[attr] = require_hour(raw, f"{key}_{suffix}")
        if environ.get(f"{key}_SHIFT_DESCRIPTION"):
            values["description"] = environ[f"{key}_SHIFT_DESCRIPTION"]
        if environ.get(f"{key}_TIMEZONE"):
            values["timezone"] = environ[f"{key}_TIMEZONE"]
        return cls(**values)

    def with_overrides(self, overrides: Optional[Mapping]) -> "ShiftConfig":
        if not overrides:
            return self
        if not isinstance(overrides, Mapping):
            raise ValidationError("shiftConfig must be an object")
        values: dict = {}
        for _, key, attr in _HOUR_FIELDS:
            if overrides.get(key) is not None:
                values[attr] = require_hour(overrides[key], key)
        if overrides.get("description"):
            values["description"] = str(overrides["description"])
        if overrides.get("timezone"):
            values["timezone"] = str(overrides["timezone"])
        return replace(self, **values)

    def to_dict(self) -> dict:
        data = {key: getattr(self, attr) for _, key, attr in _HOUR_FIELDS}
        data["description"] = self.description
        data["timezone"] = self.timezone
        return data
