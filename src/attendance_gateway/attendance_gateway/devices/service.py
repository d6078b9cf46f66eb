from __future__ import annotations

from ..common.validators import require_non_empty
from .registry import DeviceRegistry


class DeviceService:
    def __init__(self, registry: DeviceRegistry):
        self._registry = registry

    def get_device_info(self, prefix: str) -> dict:
        return self._registry.require(prefix).to_dict()

    def list_devices(self) -> dict:
        return {
            "data": [d.to_dict() for d in self._registry.list_all()],
            "summary": self._registry.summary(),
        }

    def list_by_country(self, code: str) -> dict:
        country = require_non_empty(code, "Country code").upper()
        devices = self._registry.by_country(country)
        return {
            "data": [d.to_dict() for d in devices],
            "summary": {
                "country": country,
                "count": len(devices),
                "devices": [d.prefix for d in devices],
            },
        }

    def validate_prefix(self, prefix: str) -> dict:
        device = self._registry.get(prefix)
        return {
            "prefix": prefix,
            "isValid": device is not None,
            "device": device.to_public_dict() if device else None,
        }
