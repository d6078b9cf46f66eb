from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from datetime import date, datetime
from typing import Optional, Sequence

from ..common.cache import TTLCache
from ..common.datetime_utils import now_local, parse_iso_date
from ..core.exceptions import DomainError, ValidationError
from ..devices.adapter import AdapterFactory
from ..devices.model import AttendanceLog, DeviceConfig
from ..devices.registry import DeviceRegistry
from .model import DeviceSelector

logger = logging.getLogger(__name__)


def unique_employees(logs: Sequence[AttendanceLog]) -> int:
    return len({log.device_user_id for log in logs})


class AttendanceService:
    """Fetches punches from devices and shapes them per device or per fleet."""

    def __init__(
        self,
        registry: DeviceRegistry,
        adapter_factory: AdapterFactory,
        *,
        cache: TTLCache | None = None,
        max_workers: int = 5,
    ):
        self._registry = registry
        self._adapter_factory = adapter_factory
        self._cache = cache or TTLCache(ttl_seconds=0)
        self._max_workers = max(1, int(max_workers))

    def fetch_logs(self, prefix: str) -> list[AttendanceLog]:
        device = self._registry.require(prefix)
        key = f"attendance:{device.prefix}"
        cached = self._cache.get(key)
        if cached is not None:
            return list(cached)

        logs = list(self._adapter_factory(device).get_attendance())
        self._cache.set(key, tuple(logs))
        logger.info("Fetched %s records", len(logs), extra={"device": device.prefix})
        return logs

    def _envelope(self, device: DeviceConfig, logs: Sequence[AttendanceLog], **extra) -> dict:
        data = {
            "deviceId": device.prefix,
            "deviceName": device.name,
            "location": device.location,
            "country": device.country,
            "lastFetch": now_local().isoformat(),
            "recordCount": len(logs),
            "uniqueEmployees": unique_employees(logs),
            "data": [log.to_dict() for log in logs],
        }
        data.update(extra)
        return data

    def get_latest(self, prefix: str) -> dict:
        device = self._registry.require(prefix)
        logs = self.fetch_logs(prefix)
        return {
            "data": self._envelope(device, logs),
            "summary": {
                "totalRecords": len(logs),
                "uniqueEmployees": unique_employees(logs),
            },
        }

    def _filtered(self, prefix: str, start: date, end: date, **extra) -> dict:
        device = self._registry.require(prefix)
        logs = [log for log in self.fetch_logs(prefix) if start <= log.record_time.date() <= end]
        return {
            "data": self._envelope(device, logs, **extra),
            "summary": {
                "totalRecords": len(logs),
                "uniqueEmployees": unique_employees(logs),
                **extra,
            },
        }

    def get_by_date(self, prefix: str, date_str: str) -> dict:
        self._registry.require(prefix)
        day = parse_iso_date(date_str)
        return self._filtered(prefix, day, day, date=day.isoformat())

    def get_by_range(self, prefix: str, start_str: str, end_str: str) -> dict:
        self._registry.require(prefix)
        start = parse_iso_date(start_str)
        end = parse_iso_date(end_str)
        if start > end:
            raise ValidationError("Start date must be before or equal to end date")
        return self._filtered(prefix, start, end, startDate=start.isoformat(), endDate=end.isoformat())

    def get_today(self, prefix: str, *, now: Optional[datetime] = None) -> dict:
        now = now or now_local()
        return self.get_by_date(prefix, now.date().isoformat())

    def get_all_devices(self, selector: DeviceSelector | None = None) -> dict:
        if selector is None:
            devices = self._registry.list_all()
        else:
            devices = self._registry.select(country=selector.country, device_ids=selector.device_ids)
        return self._aggregate(devices)

    def get_by_country(self, code: str) -> dict:
        if not code or not str(code).strip():
            raise ValidationError("Country code is required")
        country = str(code).strip().upper()
        result = self._aggregate(self._registry.by_country(country))
        result["country"] = country
        result["summary"]["country"] = country
        return result

    def _fetch_one(self, device: DeviceConfig) -> dict:
        try:
            logs = self.fetch_logs(device.prefix)
        except DomainError as exc:
            logger.warning("Device fetch failed: %s", exc, extra={"device": device.prefix})
            return {"success": False, "error": str(exc), "deviceName": device.name}
        return {"success": True, "data": self._envelope(device, logs)}

    def _aggregate(self, devices: Sequence[DeviceConfig]) -> dict:
        results: dict[str, dict] = {}
        if devices:
            workers = min(self._max_workers, len(devices))
            with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="attendance") as pool:
                for device, outcome in zip(devices, pool.map(self._fetch_one, devices)):
                    results[device.prefix] = outcome

        ok = [r for r in results.values() if r["success"]]
        employees = set()
        total_records = 0
        for r in ok:
            total_records += r["data"]["recordCount"]
            employees.update(item["deviceUserId"] for item in r["data"]["data"])

        return {
            "devices": results,
            "summary": {
                "totalDevices": len(devices),
                "successfulDevices": len(ok),
                "failedDevices": len(results) - len(ok),
                "totalRecords": total_records,
                "totalUniqueEmployees": len(employees),
            },
        }
