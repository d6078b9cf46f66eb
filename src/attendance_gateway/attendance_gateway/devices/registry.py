from __future__ import annotations

from typing import Iterable, Mapping, Optional, Sequence

from ..core.constants import (
    DEFAULT_DEVICE_INPORT,
    DEFAULT_DEVICE_MODEL,
    DEFAULT_DEVICE_TIMEOUT_MS,
    LOCATION_SLOTS,
)
from ..core.exceptions import DeviceNotFoundError
from .model import DeviceConfig


def _unique(values: Iterable[str]) -> list[str]:
    return list(dict.fromkeys(values))


def _require_int(environ: Mapping[str, str], name: str) -> int:
    raw = environ.get(name)
    if raw is None or not str(raw).strip():
        raise ValueError(f"Missing required environment variable: {name}")
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"Environment variable {name} must be a valid integer. Received: {raw}") from exc


def load_devices_from_env(environ: Mapping[str, str]) -> list[DeviceConfig]:
    """Build the device list from ``<PREFIX>_IP`` / ``<PREFIX>_PORT`` style variables.

    ``MB460_*`` describes the legacy single terminal and always maps to ``pk01``.
    """

    devices: list[DeviceConfig] = []

    if environ.get("MB460_IP"):
        devices.append(
            DeviceConfig(
                prefix="pk01",
                name="ZKTeco MB460 (Pakistan Primary)",
                model="MB460",
                ip=environ["MB460_IP"],
                port=_require_int(environ, "MB460_PORT"),
                timeout=_require_int(environ, "MB460_TIMEOUT"),
                inport=str(environ.get("MB460_INPORT") or DEFAULT_DEVICE_INPORT),
                location="Pakistan",
                country="PK",
                description="Primary biometric device in Pakistan",
                password=int(environ.get("MB460_PASSWORD") or 0),
            )
        )

    for prefix, country, location in LOCATION_SLOTS:
        if any(d.prefix == prefix for d in devices):
            continue
        key = prefix.upper()
        ip = environ.get(f"{key}_IP")
        port = environ.get(f"{key}_PORT")
        if not ip or not port:
            continue
        devices.append(
            DeviceConfig(
                prefix=prefix,
                name=environ.get(f"{key}_NAME") or f"ZKTeco Device {key}",
                model=environ.get(f"{key}_MODEL") or DEFAULT_DEVICE_MODEL,
                ip=ip,
                port=_require_int(environ, f"{key}_PORT"),
                timeout=int(environ.get(f"{key}_TIMEOUT") or DEFAULT_DEVICE_TIMEOUT_MS),
                inport=str(environ.get(f"{key}_INPORT") or DEFAULT_DEVICE_INPORT),
                location=location,
                country=country,
                description=environ.get(f"{key}_DESCRIPTION") or f"{location} Device {prefix}",
                password=int(environ.get(f"{key}_PASSWORD") or 0),
            )
        )

    if not devices:
        raise ValueError("No biometric devices configured. Please set at least one device configuration.")
    return devices


class DeviceRegistry:
    """Read-only view over the configured devices."""

    def __init__(self, devices: Sequence[DeviceConfig]):
        self._devices = list(devices)
        self._by_prefix = {d.prefix: d for d in self._devices}

    def __len__(self) -> int:
        return len(self._devices)

    def get(self, prefix: str) -> Optional[DeviceConfig]:
        if not prefix or not isinstance(prefix, str):
            return None
        return self._by_prefix.get(prefix)

    def is_valid(self, prefix: str) -> bool:
        return self.get(prefix) is not None

    def require(self, prefix: str) -> DeviceConfig:
        device = self.get(prefix)
        if device is None:
            raise DeviceNotFoundError(prefix)
        return device

    def list_all(self) -> list[DeviceConfig]:
        return list(self._devices)

    def by_country(self, code: str) -> list[DeviceConfig]:
        if not code or not isinstance(code, str) or not code.strip():
            return []
        upper = code.strip().upper()
        return [d for d in self._devices if d.country == upper]

    def select(self, *, country: str | None = None, device_ids: Sequence[str] | None = None) -> list[DeviceConfig]:
        """Country wins over explicit ids; unknown ids are dropped."""
        if country:
            return self.by_country(country)
        if device_ids is not None:
            return [d for d in (self.get(i) for i in device_ids) if d is not None]
        return self.list_all()

    def summary(self) -> dict:
        countries = _unique(d.country for d in self._devices)
        return {
            "totalDevices": len(self._devices),
            "countries": [
                {
                    "country": c,
                    "count": sum(1 for d in self._devices if d.country == c),
                    "devices": [d.prefix for d in self._devices if d.country == c],
                }
                for c in countries
            ],
            "models": _unique(d.model for d in self._devices),
            "locations": _unique(d.location for d in self._devices),
        }

    def configuration_summary(self) -> dict:
        return {
            "totalDevices": len(self._devices),
            "deviceTypes": _unique(d.model for d in self._devices),
            "countries": _unique(d.country for d in self._devices),
        }
