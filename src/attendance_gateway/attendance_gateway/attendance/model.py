from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence


@dataclass(frozen=True)
class DeviceSelector:
    """Which devices a fleet operation targets. Country takes precedence."""

    country: Optional[str] = None
    device_ids: Optional[Sequence[str]] = None

    @classmethod
    def from_payload(cls, payload: dict | None) -> "DeviceSelector | None":
        payload = payload or {}
        country = payload.get("country")
        device_ids = payload.get("deviceIds")
        if not country and not device_ids:
            return None
        if device_ids is not None and not isinstance(device_ids, (list, tuple)):
            device_ids = [str(device_ids)]
        return cls(
            country=str(country) if country else None,
            device_ids=[str(i) for i in device_ids] if device_ids else None,
        )
